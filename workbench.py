import logging

from fragment_extractor import FIELD_DESCRIPTOR_FIELDS
from grid_controller import NO_SELECTION, create_grid
from paste_pipeline import PastePipeline
from table_catalog import TABLE_FIELDS, fetch_candidates


logger = logging.getLogger(__name__)


class Workbench:
    """The three grids of a session and the actions that move rows between them.

    search_grid  - candidate tables from the last search (click to pick)
    picked_grid  - tables picked from the search results
    fields_grid  - field descriptors pasted from form markup (select + edit)
    """

    def __init__(self, surfaces=None, fetch=None, search_delay=None, on_selection_changed=None):
        surfaces = surfaces or {}
        self._fetch = fetch or fetch_candidates
        self._search_delay = search_delay

        self.search_grid = create_grid(
            TABLE_FIELDS,
            surface=surfaces.get("search"),
            clickable=True,
            on_row_clicked=self.pick_table,
        )
        self.picked_grid = create_grid(TABLE_FIELDS, surface=surfaces.get("picked"))
        self.fields_grid = create_grid(
            FIELD_DESCRIPTOR_FIELDS,
            surface=surfaces.get("fields"),
            selectable=True,
            editable=True,
            on_selection_changed=on_selection_changed,
        )
        self.paste_pipeline = PastePipeline(self.fields_grid.store)

    @property
    def grids(self):
        return [self.search_grid, self.picked_grid, self.fields_grid]

    # ---------- search ----------
    async def search(self, keyword: str = "") -> int:
        if self._search_delay is None:
            rows = await self._fetch(keyword)
        else:
            rows = await self._fetch(keyword, delay=self._search_delay)
        self.search_grid.store.replace_all(rows)
        return len(rows)

    def pick_table(self, row, index=None) -> bool:
        store = self.picked_grid.store
        table = row.get("TABLE", "")
        if any(item["TABLE"] == table for item in store.snapshot()):
            return False
        store.append(row)
        logger.info("Picked table %s", table)
        return True

    # ---------- field descriptors ----------
    def paste(self, raw_text) -> int:
        return self.paste_pipeline.on_paste(raw_text)

    def add_field_row(self) -> int:
        store = self.fields_grid.store
        store.append({f: "" for f in store.fields})
        last = len(store) - 1
        self.fields_grid.select_row(last)
        return last

    def delete_selected_field(self) -> bool:
        selected = self.fields_grid.get_selected_row_index()
        if selected < 0:
            return False
        self.fields_grid.store.remove_at(selected)
        return True

    def clear_fields(self):
        self.fields_grid.store.clear()
        if self.fields_grid.get_selected_row_index() != NO_SELECTION:
            self.fields_grid.clear_selection()

    def fields_tsv(self) -> str:
        return self.fields_grid.store.to_tsv()

    def close(self):
        for grid in self.grids:
            grid.close()
