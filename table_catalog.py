import asyncio
import logging

import pandas as pd


logger = logging.getLogger(__name__)

TABLE_FIELDS = ("TABLE", "TABLE_NAME")

DEFAULT_CATALOG = [
    {"TABLE": "TB_CNTR", "TABLE_NAME": "계약 기본"},
    {"TABLE": "TB_BID", "TABLE_NAME": "입찰 기본"},
    {"TABLE": "TB_VENDOR", "TABLE_NAME": "협력사 기본"},
]

SEARCH_DELAY_SECONDS = 0.15


def filter_candidates(catalog, keyword: str = "") -> list[dict]:
    df = pd.DataFrame(list(catalog), columns=list(TABLE_FIELDS), dtype=object).fillna("")
    token = (keyword or "").strip().lower()
    if not token:
        return df.to_dict(orient="records")
    mask = pd.Series(False, index=df.index)
    for col in TABLE_FIELDS:
        mask |= df[col].astype(str).str.lower().str.contains(token, regex=False)
    return df[mask].to_dict(orient="records")


async def fetch_candidates(keyword: str = "", catalog=None, delay: float = SEARCH_DELAY_SECONDS) -> list[dict]:
    """Candidate tables whose TABLE or TABLE_NAME contains `keyword`.

    An empty or blank keyword returns the whole catalog. The delay stands in
    for the latency of a remote lookup.
    """
    if delay and delay > 0:
        await asyncio.sleep(delay)
    rows = filter_candidates(DEFAULT_CATALOG if catalog is None else catalog, keyword)
    logger.debug("Search %r matched %d table(s)", keyword, len(rows))
    return rows
