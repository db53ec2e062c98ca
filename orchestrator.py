import asyncio
import curses
import logging
import time

import clipboard
from curses_surface import CursesGridSurface
from line_prompt import LinePrompt
from screen_layout import ScreenLayout
from status_bar import render_status
from workbench import Workbench


logger = logging.getLogger(__name__)

HELP_TEXT = (
    "Tab focus | hjkl move | Enter click | / search | p paste | e edit | "
    "a add | d delete | c clear | Esc unselect | y copy | q quit"
)


class Orchestrator:
    GRID_TITLES = ("Tables", "Picked", "Fields")

    def __init__(self, stdscr, config=None, workbench=None):
        self.stdscr = stdscr
        self.config = config or {}
        curses.curs_set(0)
        curses.raw()
        self.stdscr.nodelay(False)
        self.stdscr.timeout(100)

        self.layout = ScreenLayout(stdscr)
        self.surfaces = [CursesGridSurface(title) for title in self.GRID_TITLES]
        self.workbench = workbench or Workbench(
            surfaces=dict(zip(("search", "picked", "fields"), self.surfaces)),
            search_delay=self.config.get("SEARCH_DELAY_SECONDS"),
        )
        self.focus = 0
        self.prompt = LinePrompt(self._set_status)
        self.exit_requested = False

        # ---- status ----
        self.status_msg = None
        self.status_msg_until = 0

    # ---------------- helpers ----------------

    def _set_status(self, msg, seconds=3):
        self.status_msg = msg
        self.status_msg_until = time.time() + seconds

    @property
    def focused_grid(self):
        return self.workbench.grids[self.focus]

    @property
    def focused_surface(self):
        return self.surfaces[self.focus]

    # ---------------- actions ----------------

    def _run_search(self, keyword):
        try:
            count = asyncio.run(self.workbench.search(keyword))
        except Exception as exc:
            logger.warning("Search %r failed: %s", keyword, exc)
            self._set_status(f"Search failed: {exc}", 4)
            return
        self.surfaces[0].move_to(0)
        self._set_status(f"{count} table(s) found", 3)

    def _paste(self):
        try:
            raw = clipboard.read_text(self.config.get("CLIPBOARD_PASTE_COMMAND"))
        except clipboard.ClipboardError as exc:
            self._set_status(str(exc), 3)
            return
        added = self.workbench.paste(raw)
        if added:
            self.focus = 2
            self._set_status(f"Pasted {added} row(s)", 3)
        else:
            self._set_status("No <tr> rows in clipboard", 3)

    def _copy_fields(self):
        try:
            clipboard.write_text(
                self.workbench.fields_tsv(), self.config.get("CLIPBOARD_INTERFACE_COMMAND")
            )
        except clipboard.ClipboardError as exc:
            self._set_status(str(exc), 3)
            return
        self._set_status("Fields copied", 3)

    def _activate_current(self):
        row = self.focused_surface.current_row()
        if row is None or row.activate is None:
            return
        row.activate()

    def _edit_current(self):
        cell = self.focused_surface.current_cell()
        if cell is None or not cell.editable or cell.commit is None:
            self._set_status("Cell is read-only", 2)
            return
        self.prompt.start(cell.field, cell.commit, initial=cell.text, cancel_msg="Edit discarded")

    def handle_key(self, ch):
        if self.prompt.active:
            self.prompt.handle_key(ch)
            return

        surface = self.focused_surface
        if ch in (ord("q"), 3, 24):
            self.exit_requested = True
        elif ch == 9:  # Tab
            self.focus = (self.focus + 1) % len(self.surfaces)
        elif ch in (ord("j"), curses.KEY_DOWN):
            surface.move_down()
        elif ch in (ord("k"), curses.KEY_UP):
            surface.move_up()
        elif ch in (ord("h"), curses.KEY_LEFT):
            surface.move_left()
        elif ch in (ord("l"), curses.KEY_RIGHT):
            surface.move_right()
        elif ch in (10, 13, curses.KEY_ENTER, ord(" ")):
            self._activate_current()
        elif ch == ord("/"):
            self.focus = 0
            self.prompt.start("Search", self._run_search)
        elif ch == ord("p"):
            self._paste()
        elif ch == ord("e"):
            self._edit_current()
        elif ch == ord("a"):
            self.focus = 2
            self.surfaces[2].move_to(self.workbench.add_field_row())
        elif ch == ord("d"):
            if not self.workbench.delete_selected_field():
                self._set_status("No field row selected", 2)
        elif ch == ord("c"):
            self.workbench.clear_fields()
        elif ch == 27:  # Esc
            if self.focused_grid.selectable:
                self.focused_grid.clear_selection()
        elif ch == ord("y"):
            self._copy_fields()
        elif ch == ord("?"):
            self._set_status(HELP_TEXT, 8)

    # ---------------- UI ----------------

    def redraw(self):
        try:
            curses.curs_set(1 if self.prompt.active else 0)
        except curses.error:
            pass

        for idx, (surface, win) in enumerate(zip(self.surfaces, self.layout.grid_wins)):
            surface.draw(win, active=(idx == self.focus))

        sw = self.layout.status_win
        sw.erase()
        _, w = sw.getmaxyx()
        text = render_status(
            {
                "status_msg": self.status_msg,
                "status_until": self.status_msg_until,
                "grid_title": self.GRID_TITLES[self.focus],
                "total_rows": self.focused_surface.row_count,
                "cursor_row": self.focused_surface.curr_row,
                "selected_index": self.focused_grid.get_selected_row_index(),
            },
            w,
        )
        try:
            sw.addnstr(0, 0, text, max(1, w - 1), curses.A_REVERSE)
        except curses.error:
            pass
        sw.refresh()

        pw = self.layout.prompt_win
        if self.prompt.active:
            self.prompt.draw(pw)
        else:
            pw.erase()
            pw.refresh()

    # ---------------- main loop ----------------

    def run(self):
        self.stdscr.clear()
        self.stdscr.refresh()
        self._run_search("")
        self.redraw()

        while not self.exit_requested:
            ch = self.stdscr.getch()
            if ch != -1:
                self.handle_key(ch)
            self.redraw()
