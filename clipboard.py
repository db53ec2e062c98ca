import logging
import subprocess


logger = logging.getLogger(__name__)

DEFAULT_COPY_COMMAND = ["wl-copy"]
DEFAULT_PASTE_COMMAND = ["wl-paste", "--no-newline"]


class ClipboardError(RuntimeError):
    pass


def read_text(command=None, timeout: float = 5.0) -> str:
    """Plain-text clipboard payload from the configured paste command."""
    argv = list(command or DEFAULT_PASTE_COMMAND)
    try:
        result = subprocess.run(argv, capture_output=True, text=True, check=True, timeout=timeout)
    except (OSError, subprocess.SubprocessError) as exc:
        logger.warning("Clipboard read via %s failed: %s", argv, exc)
        raise ClipboardError(f"Paste failed: {argv[0]}") from exc
    return result.stdout or ""


def write_text(text: str, command=None, timeout: float = 5.0) -> None:
    argv = list(command or DEFAULT_COPY_COMMAND)
    try:
        subprocess.run(argv, input=text, text=True, check=True, timeout=timeout)
    except (OSError, subprocess.SubprocessError) as exc:
        logger.warning("Clipboard write via %s failed: %s", argv, exc)
        raise ClipboardError(f"Copy failed: {argv[0]}") from exc
