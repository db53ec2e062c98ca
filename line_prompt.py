import curses
from typing import Callable, Optional


class LinePrompt:
    """Single-line input on the prompt row.

    Enter, Tab and arrow-up/down leave the field and submit the buffer;
    Esc discards it.
    """

    LEAVE_KEYS = (10, 13, 9, curses.KEY_UP, curses.KEY_DOWN)

    def __init__(self, set_status_cb: Callable[[str, int], None]):
        self._set_status = set_status_cb

        self.active = False
        self.label = ""
        self.buffer = ""
        self.cursor = 0
        self.hscroll = 0
        self._on_submit: Optional[Callable[[str], None]] = None
        self._cancel_msg = ""

    def start(self, label: str, on_submit: Callable[[str], None], initial: str = "", cancel_msg: str = ""):
        self.active = True
        self.label = label
        self.buffer = initial or ""
        self.cursor = len(self.buffer)
        self.hscroll = 0
        self._on_submit = on_submit
        self._cancel_msg = cancel_msg

    def _reset(self):
        self.active = False
        self.buffer = ""
        self.cursor = 0
        self.hscroll = 0
        self._on_submit = None

    def handle_key(self, ch):
        if not self.active:
            return

        if ch in self.LEAVE_KEYS:
            text = self.buffer
            on_submit = self._on_submit
            self._reset()
            if on_submit is not None:
                on_submit(text)
            return

        if ch == 27:  # Esc
            self._reset()
            if self._cancel_msg:
                self._set_status(self._cancel_msg, 3)
            return

        if ch in (curses.KEY_BACKSPACE, 127, 8):
            if self.cursor > 0:
                self.buffer = self.buffer[: self.cursor - 1] + self.buffer[self.cursor :]
                self.cursor -= 1
            return

        if ch == curses.KEY_LEFT:
            self.cursor = max(0, self.cursor - 1)
            return

        if ch == curses.KEY_RIGHT:
            self.cursor = min(len(self.buffer), self.cursor + 1)
            return

        if ch == curses.KEY_HOME:
            self.cursor = 0
            return

        if ch == curses.KEY_END:
            self.cursor = len(self.buffer)
            return

        if 32 <= ch <= 126:
            self.buffer = self.buffer[: self.cursor] + chr(ch) + self.buffer[self.cursor :]
            self.cursor += 1
            return

    def draw(self, win):
        prompt = f"{self.label}: "
        h, w = win.getmaxyx()
        text_w = max(1, w - len(prompt) - 1)

        if self.cursor < self.hscroll:
            self.hscroll = self.cursor
        elif self.cursor > self.hscroll + text_w:
            self.hscroll = self.cursor - text_w

        visible = self.buffer[self.hscroll : self.hscroll + text_w]

        try:
            win.erase()
            win.addnstr(0, 0, prompt, len(prompt))
            win.addnstr(0, len(prompt), visible, text_w)
            win.move(0, len(prompt) + (self.cursor - self.hscroll))
        except curses.error:
            pass
        win.refresh()
