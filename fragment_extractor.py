import logging
import re


logger = logging.getLogger(__name__)

FIELD_DESCRIPTOR_FIELDS = (
    "PASTE_RAW",
    "FIELD_NAME",
    "BIND_NAME",
    "TYPE",
    "DATA_TYPE",
    "REQUIRED",
    "SORT_KEY",
)

_ROW_START = re.compile(r"<tr(?!\w)[^>]*>", re.IGNORECASE)
_ROW_END = re.compile(r"</tr>", re.IGNORECASE)
BIND_PREFIX = "cntrData."
DEFAULT_SORT_KEY = "L"

# priority order, first hit wins
TYPE_MARKERS = (
    ("<sc-text-field", "Text", "String"),
    ("<sc-number-field", "Number", "Number"),
)

_LABEL_TAG = re.compile(r"<sc-label\b[^>]*>", re.IGNORECASE)
_TEXT_FIELD_TAG = re.compile(r"<sc-text-field\b[^>]*>", re.IGNORECASE)
_CUSTOM_TAG = re.compile(r"<sc-(?!label\b)[\w-]+\b[^>]*>", re.IGNORECASE)
_REQUIRED_ATTR = re.compile(
    r"(?<![\w-])required(?![\w-])(?:\s*=\s*(?:\"([^\"]*)\"|'([^']*)'|([^\s>/]+)))?",
    re.IGNORECASE,
)


def extract_fragments(raw_text):
    """Split pasted markup into row fragments, left to right.

    Each fragment runs from a row-start tag to the first row-end tag after it.
    A row without a closing tag runs to the end of the input.
    """
    if not raw_text:
        return []
    text = str(raw_text)
    fragments = []
    pos = 0
    while True:
        start = _ROW_START.search(text, pos)
        if start is None:
            break
        end = _ROW_END.search(text, start.end())
        if end is None:
            fragments.append(text[start.start() :].strip())
            break
        fragments.append(text[start.start() : end.end()].strip())
        pos = end.end()
    logger.debug("Extracted %d fragment(s) from %d chars", len(fragments), len(text))
    return fragments


def extract_attribute(tag: str, name: str) -> str:
    if not tag:
        return ""
    pattern = re.compile(
        rf"(?<![\w-]){re.escape(name)}\s*=\s*(?:\"([^\"]*)\"|'([^']*)')",
        re.IGNORECASE,
    )
    matched = pattern.search(tag)
    if not matched:
        return ""
    if matched.group(1) is not None:
        return matched.group(1)
    return matched.group(2) or ""


def parse_bind_name(value: str) -> str:
    cleaned = (value or "").replace("{{", "").replace("}}", "").strip()
    if cleaned.startswith(BIND_PREFIX):
        cleaned = cleaned[len(BIND_PREFIX) :]
    tokens = [t for t in cleaned.split(".") if t]
    return tokens[-1] if tokens else ""


def classify_type(fragment: str) -> tuple[str, str]:
    lowered = (fragment or "").lower()
    for marker, type_name, data_type in TYPE_MARKERS:
        if marker in lowered:
            return type_name, data_type
    return "", ""


def is_required(input_tag: str) -> bool:
    """True when the input tag carries `required`, bare or with any value but false."""
    for matched in _REQUIRED_ATTR.finditer(input_tag or ""):
        value = next((g for g in matched.groups() if g is not None), None)
        if value is None or value.strip().lower() != "false":
            return True
    return False


def _find_input_tag(fragment: str) -> str:
    matched = _TEXT_FIELD_TAG.search(fragment) or _CUSTOM_TAG.search(fragment)
    return matched.group(0) if matched else ""


def parse_fragment(fragment) -> dict:
    fragment = "" if fragment is None else str(fragment)

    label = _LABEL_TAG.search(fragment)
    field_name = extract_attribute(label.group(0), "text") if label else ""

    input_tag = _find_input_tag(fragment)
    bind_name = parse_bind_name(extract_attribute(input_tag, "value"))

    type_name, data_type = classify_type(fragment)

    return {
        "PASTE_RAW": fragment,
        "FIELD_NAME": field_name,
        "BIND_NAME": bind_name,
        "TYPE": type_name,
        "DATA_TYPE": data_type,
        "REQUIRED": "Y" if is_required(input_tag) else "N",
        "SORT_KEY": DEFAULT_SORT_KEY,
    }
