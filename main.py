import sys
import os
import curses
import logging

import config_paths
from paste_pipeline import parse_paste
from table_store import TableStore
from fragment_extractor import FIELD_DESCRIPTOR_FIELDS

# Make ESC snappy
os.environ.setdefault("ESCDELAY", "25")

try:
    from _version import __version__
except ImportError:
    __version__ = "0.0.0"


USAGE = (
    "fieldgrid - paste form markup, get field definitions\n\n"
    "Usage:\n  fieldgrid\n  fieldgrid --parse [path]\n  fieldgrid -v\n"
)


def parse_to_tsv(raw_text: str) -> str:
    store = TableStore(FIELD_DESCRIPTOR_FIELDS)
    store.replace_all(parse_paste(raw_text))
    return store.to_tsv()


def _read_source(path):
    if path is None or path == "-":
        return sys.stdin.read()
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def main(argv=None):
    args = sys.argv[1:] if argv is None else list(argv)

    if "-v" in args or "-V" in args:
        print(__version__)
        return 0

    if "-h" in args or "--help" in args:
        print(USAGE)
        return 0

    config = config_paths.load_config()
    config_paths.configure_logging(config["LOG_LEVEL"])
    logger = logging.getLogger(__name__)

    if args and args[0] == "--parse":
        path = args[1] if len(args) > 1 else None
        try:
            raw = _read_source(path)
        except OSError as exc:
            print(f"Cannot read {path}: {exc}", file=sys.stderr)
            return 1
        sys.stdout.write(parse_to_tsv(raw))
        return 0

    if args:
        print(USAGE, file=sys.stderr)
        return 2

    from orchestrator import Orchestrator

    def curses_main(stdscr):
        Orchestrator(stdscr, config).run()

    logger.info("Starting fieldgrid %s", __version__)
    curses.wrapper(curses_main)
    return 0


if __name__ == "__main__":
    sys.exit(main())
