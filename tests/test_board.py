# ==============================================================================
# Файл: tests/test_board.py
# Назначение: Юнит-тесты сетки: каноничные клетки, окно, границы клеток.
# ==============================================================================
import unittest

import sys
from pathlib import Path

sys.path.append(str(Path(__file__).parent.parent))

from geocache_engine.core.errors import ConfigurationError
from geocache_engine.core.types import Cell, LatLng
from geocache_engine.world.board import Board


class TestBoard(unittest.TestCase):
    """Каноничность клеток и геометрия окна."""

    def setUp(self):
        # Ширина клетки 0.5 точно представима в float, без сюрпризов на границах
        self.board = Board(tile_width=0.5, tile_visibility_radius=3)

    def test_canonicalize_returns_same_instance(self):
        a = self.board.canonicalize(4, -7)
        b = self.board.canonicalize(4, -7)
        self.assertIs(a, b)
        self.assertEqual(self.board.known_cells, 1)

    def test_cell_for_point_floors_both_axes(self):
        self.assertEqual(self.board.cell_for_point(LatLng(1.25, 0.75)), Cell(2, 1))
        self.assertEqual(self.board.cell_for_point(LatLng(-0.25, -1.0)), Cell(-1, -2))

    def test_all_paths_give_identical_cell(self):
        direct = self.board.canonicalize(2, 1)
        via_point = self.board.cell_for_point(LatLng(1.1, 0.6))
        via_window = [c for c in self.board.cells_near(LatLng(1.1, 0.6)) if c == direct]
        self.assertIs(direct, via_point)
        self.assertEqual(len(via_window), 1)
        self.assertIs(via_window[0], direct)

    def test_cells_near_is_half_open_square(self):
        cells = self.board.cells_near(LatLng(0.1, 0.1), radius=2)
        self.assertEqual(len(cells), 16)
        self.assertEqual(len(set(cells)), 16)
        offsets = {(c.i, c.j) for c in cells}
        self.assertIn((-2, -2), offsets)
        self.assertIn((1, 1), offsets)
        self.assertNotIn((2, 0), offsets)
        self.assertNotIn((0, 2), offsets)

    def test_cells_near_row_major_order(self):
        cells = self.board.cells_near(LatLng(0.1, 0.1), radius=1)
        self.assertEqual([(c.i, c.j) for c in cells], [(-1, -1), (-1, 0), (0, -1), (0, 0)])

    def test_cells_near_default_radius(self):
        cells = self.board.cells_near(LatLng(0.1, 0.1))
        self.assertEqual(len(cells), (2 * 3) ** 2)

    def test_cell_bounds_contains_its_points(self):
        cell = self.board.cell_for_point(LatLng(1.3, -0.2))
        bounds = self.board.cell_bounds(cell)
        self.assertEqual((bounds.south, bounds.west, bounds.north, bounds.east), (1.0, -0.5, 1.5, 0.0))
        self.assertTrue(bounds.contains(LatLng(1.3, -0.2)))
        self.assertTrue(bounds.contains(self.board.cell_center(cell)))
        self.assertFalse(bounds.contains(LatLng(1.5, -0.2)))

    def test_is_cell_next_to(self):
        c = Cell(0, 0)
        self.assertTrue(Board.is_cell_next_to(c, Cell(1, 0)))
        self.assertTrue(Board.is_cell_next_to(c, Cell(-1, 1)))
        self.assertFalse(Board.is_cell_next_to(c, Cell(0, 0)))
        self.assertFalse(Board.is_cell_next_to(c, Cell(1, 5)))

    def test_invalid_geometry_rejected(self):
        with self.assertRaises(ConfigurationError):
            Board(tile_width=0.0, tile_visibility_radius=3)
        with self.assertRaises(ConfigurationError):
            Board(tile_width=1.0, tile_visibility_radius=0)


if __name__ == '__main__':
    unittest.main()
