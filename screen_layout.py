import curses


class ScreenLayout:
    GRID_COUNT = 3

    def __init__(self, stdscr):
        self.stdscr = stdscr
        self.H, self.W = stdscr.getmaxyx()

        # layout: three stacked grids, status bar (1 line), prompt bar (1 line)
        self.status_h = 1
        self.prompt_h = 1

        grids_h = max(self.GRID_COUNT, self.H - self.status_h - self.prompt_h)
        base_h = grids_h // self.GRID_COUNT
        heights = [base_h] * self.GRID_COUNT
        heights[-1] += grids_h - base_h * self.GRID_COUNT

        self.grid_wins = []
        y = 0
        for gh in heights:
            win = curses.newwin(max(1, gh), self.W, y, 0)
            # grids must never own cursor
            win.leaveok(True)
            self.grid_wins.append(win)
            y += gh

        self.status_win = curses.newwin(self.status_h, self.W, y, 0)
        self.status_win.leaveok(True)

        self.prompt_win = curses.newwin(self.prompt_h, self.W, y + self.status_h, 0)
