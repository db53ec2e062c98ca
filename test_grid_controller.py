import unittest

from grid_controller import (
    NO_SELECTION,
    Column,
    GridController,
    GridOptions,
    create_grid,
)
from table_store import TableStore


FIELDS = ("TABLE", "TABLE_NAME")
COLUMNS = [Column("Table", "TABLE"), Column("Name", "TABLE_NAME")]


class DummySurface:
    def __init__(self):
        self.shown = []

    def show(self, table):
        self.shown.append(table)


class GridControllerTests(unittest.TestCase):
    def _grid(self, rows=None, **options):
        store = TableStore(FIELDS)
        if rows:
            store.replace_all(rows)
        selections = []
        clicks = []
        opts = GridOptions(
            on_selection_changed=selections.append,
            on_row_clicked=lambda row, idx: clicks.append((row, idx)),
            **options,
        )
        surface = DummySurface()
        grid = GridController(store, COLUMNS, opts, surface=surface)
        return grid, store, surface, selections, clicks

    def test_initial_render_on_construction(self):
        grid, _, surface, _, _ = self._grid([{"TABLE": "A", "TABLE_NAME": "a"}])
        self.assertEqual(len(surface.shown), 1)
        table = surface.shown[0]
        self.assertEqual(table.headers, ["Table", "Name"])
        self.assertEqual([c.text for c in table.rows[0].cells], ["A", "a"])
        self.assertEqual(grid.get_selected_row_index(), NO_SELECTION)

    def test_each_store_change_rerenders(self):
        grid, store, surface, _, _ = self._grid()
        store.append({"TABLE": "A"})
        store.append({"TABLE": "B"})
        self.assertEqual(len(surface.shown), 3)
        self.assertEqual(len(surface.shown[-1].rows), 2)

    def test_select_row_marks_row_and_notifies(self):
        grid, _, surface, selections, _ = self._grid(
            [{"TABLE": "A"}, {"TABLE": "B"}], selectable=True
        )
        grid.select_row(1)
        self.assertEqual(selections, [1])
        rows = surface.shown[-1].rows
        self.assertEqual([r.selected for r in rows], [False, True])
        self.assertEqual(surface.shown[-1].selected_index, 1)

    def test_selected_presentation_requires_selectable(self):
        grid, _, surface, _, _ = self._grid([{"TABLE": "A"}])
        grid.select_row(0)
        self.assertFalse(surface.shown[-1].rows[0].selected)

    def test_clear_selection(self):
        grid, _, _, selections, _ = self._grid([{"TABLE": "A"}], selectable=True)
        grid.select_row(0)
        grid.clear_selection()
        self.assertEqual(selections, [0, NO_SELECTION])
        self.assertEqual(grid.get_selected_row_index(), NO_SELECTION)

    def test_shrinking_below_selection_resets_once(self):
        grid, store, _, selections, _ = self._grid(
            [{"TABLE": t} for t in "ABC"], selectable=True
        )
        grid.select_row(2)
        store.remove_at(2)
        self.assertEqual(grid.get_selected_row_index(), NO_SELECTION)
        self.assertEqual(selections, [2, NO_SELECTION])
        store.remove_at(0)
        self.assertEqual(selections, [2, NO_SELECTION])

    def test_selection_kept_when_still_valid(self):
        grid, store, _, selections, _ = self._grid(
            [{"TABLE": t} for t in "ABC"], selectable=True
        )
        grid.select_row(1)
        store.remove_at(0)
        self.assertEqual(grid.get_selected_row_index(), 1)
        self.assertEqual(selections, [1])

    def test_clear_store_resets_selection(self):
        grid, store, _, selections, _ = self._grid([{"TABLE": "A"}], selectable=True)
        grid.select_row(0)
        store.clear()
        self.assertEqual(selections, [0, NO_SELECTION])

    def test_activation_selects_then_clicks(self):
        order = []
        store = TableStore(FIELDS)
        store.replace_all([{"TABLE": "A"}, {"TABLE": "B"}])
        grid = GridController(
            store,
            COLUMNS,
            GridOptions(
                clickable=True,
                selectable=True,
                on_selection_changed=lambda idx: order.append(("select", idx)),
                on_row_clicked=lambda row, idx: order.append(("click", row["TABLE"], idx)),
            ),
        )
        grid.table.rows[1].activate()
        self.assertEqual(order, [("select", 1), ("click", "B", 1)])

    def test_clickable_only_does_not_select(self):
        grid, _, surface, selections, clicks = self._grid([{"TABLE": "A"}], clickable=True)
        row = surface.shown[-1].rows[0]
        self.assertTrue(row.interactive)
        row.activate()
        self.assertEqual(selections, [])
        self.assertEqual(clicks, [({"TABLE": "A", "TABLE_NAME": ""}, 0)])

    def test_plain_grid_rows_are_inert(self):
        grid, _, surface, _, clicks = self._grid([{"TABLE": "A"}])
        row = surface.shown[-1].rows[0]
        self.assertFalse(row.interactive)
        self.assertIsNone(row.activate)
        grid.activate_row(0)
        self.assertEqual(clicks, [])

    def test_editable_cell_commit_trims_and_updates(self):
        grid, store, surface, _, _ = self._grid([{"TABLE": "A"}], editable=True)
        cell = surface.shown[-1].rows[0].cells[1]
        self.assertTrue(cell.editable)
        cell.commit("  new name \n")
        self.assertEqual(store.snapshot(), [{"TABLE": "A", "TABLE_NAME": "new name"}])
        self.assertEqual(surface.shown[-1].rows[0].cells[1].text, "new name")

    def test_read_only_cells_have_no_commit(self):
        grid, store, surface, _, _ = self._grid([{"TABLE": "A"}])
        cell = surface.shown[-1].rows[0].cells[0]
        self.assertFalse(cell.editable)
        self.assertIsNone(cell.commit)
        grid.commit_cell(0, "TABLE", "changed")
        self.assertEqual(store.snapshot()[0]["TABLE"], "A")

    def test_close_unsubscribes(self):
        grid, store, surface, _, _ = self._grid()
        grid.close()
        store.append({"TABLE": "A"})
        self.assertEqual(len(surface.shown), 1)


class CreateGridTests(unittest.TestCase):
    def test_factory_builds_owned_store_and_default_columns(self):
        surface = DummySurface()
        grid = create_grid(FIELDS, surface=surface, selectable=True)
        self.assertEqual(grid.store.fields, FIELDS)
        self.assertEqual([c.field for c in grid.columns], list(FIELDS))
        self.assertTrue(grid.selectable)
        self.assertFalse(grid.editable)
        grid.store.append({"TABLE": "A"})
        self.assertEqual(len(surface.shown), 2)

    def test_factory_instances_are_independent(self):
        first = create_grid(FIELDS)
        second = create_grid(FIELDS)
        first.store.append({"TABLE": "A"})
        self.assertEqual(len(second.store), 0)

    def test_columns_accept_tuples(self):
        grid = create_grid(FIELDS, columns=[("Table", "TABLE")])
        self.assertEqual(grid.table.headers, ["Table"])


if __name__ == "__main__":
    unittest.main()
