import logging

from fragment_extractor import extract_fragments, parse_fragment


logger = logging.getLogger(__name__)


def parse_paste(raw_text) -> list[dict]:
    return [parse_fragment(fragment) for fragment in extract_fragments(raw_text)]


class PastePipeline:
    """Feeds plain-text clipboard payloads into a field descriptor store."""

    def __init__(self, store):
        self.store = store

    def on_paste(self, raw_text) -> int:
        descriptors = parse_paste(raw_text)
        for descriptor in descriptors:
            self.store.append(descriptor)
        if descriptors:
            logger.info("Pasted %d field row(s)", len(descriptors))
        return len(descriptors)
