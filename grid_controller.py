import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from table_store import TableStore


logger = logging.getLogger(__name__)

NO_SELECTION = -1


@dataclass(frozen=True)
class Column:
    name: str
    field: str


@dataclass
class GridOptions:
    clickable: bool = False
    selectable: bool = False
    editable: bool = False
    on_row_clicked: Optional[Callable[[dict, int], None]] = None
    on_selection_changed: Optional[Callable[[int], None]] = None


@dataclass
class RenderedCell:
    field: str
    text: str
    editable: bool = False
    # called with the edited text when the cell loses focus
    commit: Optional[Callable[[str], None]] = None


@dataclass
class RenderedRow:
    index: int
    record: dict
    cells: list[RenderedCell]
    selected: bool = False
    interactive: bool = False
    activate: Optional[Callable[[], None]] = None


@dataclass
class RenderedTable:
    headers: list[str]
    rows: list[RenderedRow] = field(default_factory=list)
    selected_index: int = NO_SELECTION


class GridController:
    """Binds a TableStore to a column layout and a host surface.

    The controller owns the selection and rebuilds the whole rendered table
    on every store notification. Binding two controllers to one store is a
    caller error: both would keep their own selection over the same rows.
    """

    def __init__(self, store: TableStore, columns, options: GridOptions | None = None, surface: Any = None):
        self.store = store
        self.columns = [c if isinstance(c, Column) else Column(*c) for c in columns]
        self.options = options or GridOptions()
        self.surface = surface
        self.selected_row_index = NO_SELECTION
        self.table: RenderedTable | None = None

        self._subscription = store.subscribe(self._on_store_changed)
        self.render()

    @property
    def clickable(self) -> bool:
        return self.options.clickable

    @property
    def selectable(self) -> bool:
        return self.options.selectable

    @property
    def editable(self) -> bool:
        return self.options.editable

    def _notify_selection(self):
        if self.options.on_selection_changed is not None:
            self.options.on_selection_changed(self.selected_row_index)

    def _on_store_changed(self, rows):
        if self.selected_row_index >= len(rows):
            logger.debug("Selection %d dropped, %d row(s) left", self.selected_row_index, len(rows))
            self.selected_row_index = NO_SELECTION
            self._notify_selection()
        self.render(rows)

    # ---------- selection ----------
    def get_selected_row_index(self) -> int:
        return self.selected_row_index

    def select_row(self, index: int):
        self.selected_row_index = index
        self._notify_selection()
        self.render()

    def clear_selection(self):
        self.selected_row_index = NO_SELECTION
        self._notify_selection()
        self.render()

    # ---------- interaction ----------
    def activate_row(self, index: int, row: dict | None = None):
        """Row click: select first (if selectable), then notify (if clickable)."""
        if not (self.clickable or self.selectable):
            return
        if row is None:
            rows = self.store.snapshot()
            if index < 0 or index >= len(rows):
                return
            row = rows[index]
        if self.selectable:
            self.select_row(index)
        if self.clickable and self.options.on_row_clicked is not None:
            self.options.on_row_clicked(row, index)

    def commit_cell(self, index: int, field_name: str, text):
        if not self.editable:
            return
        text = "" if text is None else str(text)
        self.store.update_cell(index, field_name, text.strip())

    # ---------- rendering ----------
    def render(self, rows=None) -> RenderedTable:
        if rows is None:
            rows = self.store.snapshot()
        interactive = self.clickable or self.selectable

        rendered = []
        for row_index, row in enumerate(rows):
            cells = []
            for column in self.columns:
                commit = None
                if self.editable:
                    commit = (
                        lambda text, i=row_index, f=column.field: self.commit_cell(i, f, text)
                    )
                cells.append(
                    RenderedCell(
                        field=column.field,
                        text=row.get(column.field) or "",
                        editable=self.editable,
                        commit=commit,
                    )
                )
            activate = None
            if interactive:
                activate = lambda i=row_index, r=row: self.activate_row(i, r)
            rendered.append(
                RenderedRow(
                    index=row_index,
                    record=row,
                    cells=cells,
                    selected=self.selectable and row_index == self.selected_row_index,
                    interactive=interactive,
                    activate=activate,
                )
            )

        self.table = RenderedTable(
            headers=[c.name for c in self.columns],
            rows=rendered,
            selected_index=self.selected_row_index,
        )
        if self.surface is not None:
            self.surface.show(self.table)
        return self.table

    def close(self):
        self._subscription.unsubscribe()


def create_grid(fields, columns=None, surface=None, **options) -> GridController:
    """Build a store for `fields` and a controller that owns it."""
    store = TableStore(fields)
    if columns is None:
        columns = [Column(f, f) for f in store.fields]
    return GridController(store, columns, GridOptions(**options), surface=surface)
