# ==============================================================================
# Файл: tests/test_cache_state.py
# Назначение: Тесты тайника, переноса монет, снапшотов и OverrideStore.
# ==============================================================================
import json
import unittest

import sys
from pathlib import Path

sys.path.append(str(Path(__file__).parent.parent))

from geocache_engine.core.errors import DecodeError
from geocache_engine.core.types import Cell, ResourceUnit
from geocache_engine.world.board import Board
from geocache_engine.world.cache_state import (
    CacheState, PlayerInventory, create_baseline, restore, transfer,
)
from geocache_engine.world.generator import CacheGenerator
from geocache_engine.world.override_store import OverrideStore


class TestTransfer(unittest.TestCase):

    def setUp(self):
        self.generator = CacheGenerator("SEED", 1.0, 6)
        self.cell = Cell(3, -2)
        self.cache = create_baseline(self.cell, self.generator)
        self.inventory = PlayerInventory()

    def test_baseline_serials(self):
        count = self.generator.initial_count(self.cell)
        self.assertEqual(len(self.cache), count)
        self.assertEqual(
            list(self.cache),
            [ResourceUnit(self.cell, s) for s in range(count)],
        )
        self.assertEqual(str(self.cache.units[0]), "3:-2#0")

    def test_transfer_is_lifo(self):
        top = self.cache.peek()
        self.assertTrue(transfer(self.cache, self.inventory))
        self.assertEqual(self.inventory.units, (top,))
        self.assertNotIn(top, self.cache.units)

        # Возврат кладет ту же монету обратно наверх
        self.assertTrue(transfer(self.inventory, self.cache))
        self.assertEqual(self.cache.peek(), top)
        self.assertTrue(self.inventory.is_empty())

    def test_empty_transfer_is_noop(self):
        self.assertFalse(transfer(self.inventory, self.cache))
        before = self.cache.units
        while transfer(self.cache, self.inventory):
            pass
        self.assertFalse(transfer(self.cache, self.inventory))
        self.assertEqual(len(self.inventory), len(before))
        self.assertEqual(len(self.cache), 0)

    def test_transfer_to_itself_does_nothing(self):
        units = self.cache.units
        self.assertFalse(transfer(self.cache, self.cache))
        self.assertEqual(self.cache.units, units)


class TestSnapshots(unittest.TestCase):

    def setUp(self):
        self.generator = CacheGenerator("SEED", 1.0, 6)
        self.board = Board(tile_width=1.0, tile_visibility_radius=2)

    def test_restore_keeps_order_and_foreign_units(self):
        cell = self.board.canonicalize(0, 0)
        other = self.board.canonicalize(5, 5)
        cache = CacheState(cell, [ResourceUnit(cell, 0), ResourceUnit(other, 3), ResourceUnit(cell, 1)])

        restored = restore(cache.to_snapshot(), self.board.canonicalize)
        self.assertEqual(restored.units, cache.units)
        self.assertIs(restored.cell, cell)
        self.assertIs(restored.units[1].origin, other)

    def test_malformed_snapshots_raise(self):
        bad = [
            "not json at all",
            "[]",
            json.dumps({"version": "cache_v0", "cell": [0, 0], "units": []}),
            json.dumps({"version": "cache_v1", "cell": [0, 0], "units": "0:0#1"}),
            json.dumps({"version": "cache_v1", "cell": [0, 0], "units": [[0, 0]]}),
            json.dumps({"version": "cache_v1", "cell": [0, 0], "units": [[0, 0, "1"]]}),
            json.dumps({"version": "cache_v1", "cell": [0, 0], "units": [[0, 0, -1]]}),
            json.dumps({"version": "cache_v1", "cell": [0, 0], "units": [[0, 0, 1], [0, 0, 1]]}),
            json.dumps({"version": "cache_v1", "cell": [0], "units": []}),
        ]
        for snapshot in bad:
            with self.subTest(snapshot=snapshot):
                with self.assertRaises(DecodeError):
                    restore(snapshot)

    def test_empty_cache_round_trips(self):
        cell = Cell(1, 1)
        restored = restore(CacheState(cell).to_snapshot())
        self.assertEqual(restored.cell, cell)
        self.assertTrue(restored.is_empty())


class TestOverrideStore(unittest.TestCase):

    def setUp(self):
        self.store = OverrideStore()
        self.generator = CacheGenerator("SEED", 1.0, 6)

    def test_put_overwrites(self):
        cell = Cell(2, 2)
        cache = create_baseline(cell, self.generator)
        inventory = PlayerInventory()

        self.store.put(cell, cache)
        transfer(cache, inventory)
        self.store.put(cell, cache)

        self.assertEqual(len(self.store), 1)
        self.assertEqual(self.store.restore(cell).units, cache.units)

    def test_lookup_is_by_value(self):
        cell = Cell(-4, 9)
        self.store.put(cell, create_baseline(cell, self.generator))
        twin = Cell(-4, 9)
        self.assertIsNot(twin, cell)
        self.assertIn(twin, self.store)
        self.assertEqual(self.store.get(twin), self.store.get(cell))

    def test_absent_and_clear(self):
        self.assertIsNone(self.store.get(Cell(0, 0)))
        self.assertIsNone(self.store.restore(Cell(0, 0)))
        self.store.put(Cell(0, 0), CacheState(Cell(0, 0)))
        self.store.clear()
        self.assertEqual(len(self.store), 0)
        self.assertEqual(self.store.cells(), [])


if __name__ == '__main__':
    unittest.main()
