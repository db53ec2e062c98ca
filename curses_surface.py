import curses


class CursesGridSurface:
    """Host surface for one grid: keeps the last rendered table and draws it.

    The cursor is keyboard focus only; selection lives in the controller and
    arrives through the rendered rows.
    """

    MAX_COL_WIDTH = 40

    def __init__(self, title=""):
        self.title = title
        self.table = None
        self.curr_row = 0
        self.curr_col = 0
        self.row_offset = 0
        self.col_offset = 0

    def show(self, table):
        self.table = table
        self._clamp()

    # ---------- state ----------
    @property
    def row_count(self):
        return len(self.table.rows) if self.table else 0

    @property
    def col_count(self):
        return len(self.table.headers) if self.table else 0

    def _clamp(self):
        self.curr_row = min(max(0, self.curr_row), max(0, self.row_count - 1))
        self.curr_col = min(max(0, self.curr_col), max(0, self.col_count - 1))

    def current_row(self):
        if not self.row_count:
            return None
        return self.table.rows[self.curr_row]

    def current_cell(self):
        row = self.current_row()
        if row is None or not row.cells:
            return None
        return row.cells[self.curr_col]

    def move_to(self, row):
        self.curr_row = row
        self._clamp()

    # ---------- navigation ----------
    def move_left(self):
        self.curr_col = max(0, self.curr_col - 1)

    def move_right(self):
        self.curr_col = min(max(0, self.col_count - 1), self.curr_col + 1)

    def move_down(self):
        self.curr_row = min(max(0, self.row_count - 1), self.curr_row + 1)

    def move_up(self):
        self.curr_row = max(0, self.curr_row - 1)

    # ---------- rendering ----------
    def column_widths(self):
        if not self.table:
            return []
        widths = []
        for c, header in enumerate(self.table.headers):
            max_len = len(str(header))
            for row in self.table.rows:
                text = row.cells[c].text if c < len(row.cells) else ""
                max_len = max(max_len, len(text.replace("\n", " ")))
            widths.append(min(self.MAX_COL_WIDTH, max_len + 2))
        return widths

    def _visible_cols(self, widths, avail_w):
        if self.curr_col < self.col_offset:
            self.col_offset = self.curr_col
        while True:
            used = 0
            cols = []
            for c in range(self.col_offset, len(widths)):
                if used + widths[c] + 1 > avail_w and cols:
                    break
                used += widths[c] + 1
                cols.append(c)
            if not cols or self.curr_col <= cols[-1] or self.col_offset >= self.curr_col:
                return cols
            self.col_offset += 1

    def draw(self, win, active=False):
        win.erase()
        h, w = win.getmaxyx()
        title_attr = curses.A_BOLD | (curses.A_UNDERLINE if active else 0)
        count = f" ({self.row_count})" if self.table else ""
        try:
            win.addnstr(0, 0, f"{self.title}{count}", w - 1, title_attr)
        except curses.error:
            pass
        if not self.table:
            win.refresh()
            return

        widths = self.column_widths()
        row_w = max(3, len(str(max(self.row_count - 1, 0))) + 1)
        avail_w = max(1, w - (row_w + 1))
        visible_cols = self._visible_cols(widths, avail_w)

        body_h = max(0, h - 2)
        if self.curr_row < self.row_offset:
            self.row_offset = self.curr_row
        elif body_h and self.curr_row >= self.row_offset + body_h:
            self.row_offset = self.curr_row - body_h + 1

        try:
            x = row_w + 1
            for c in visible_cols:
                cw = min(widths[c], max(1, w - x - 1))
                win.addnstr(1, x, str(self.table.headers[c])[:cw].rjust(cw), cw, curses.A_BOLD)
                x += cw + 1

            for y, row in enumerate(self.table.rows[self.row_offset : self.row_offset + body_h]):
                r = self.row_offset + y
                win.addnstr(y + 2, 0, str(r).rjust(row_w), row_w)
                x = row_w + 1
                for c in visible_cols:
                    cw = min(widths[c], max(1, w - x - 1))
                    text = row.cells[c].text.replace("\n", " ")
                    attr = curses.A_NORMAL
                    if row.selected:
                        attr |= curses.A_STANDOUT
                    if active and r == self.curr_row and c == self.curr_col:
                        attr |= curses.A_REVERSE
                    win.addnstr(y + 2, x, text[:cw].rjust(cw), cw, attr)
                    x += cw + 1
        except curses.error:
            pass

        win.refresh()
