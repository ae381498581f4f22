import html
import re
from typing import List, Optional

from core.logger import logger

_TAG_RE = re.compile(r"<[^>]+>")


def html_decoded(text: str) -> Optional[str]:
    """Turn HTML-escaped API text into plain text. Returns None if it can't."""
    if not isinstance(text, str):
        return None
    try:
        return html.unescape(_TAG_RE.sub("", text))
    except (TypeError, ValueError) as e:
        logger.warning("HTML decode failed", error=str(e))
        return None


def decode_or_raw(text: str) -> str:
    decoded = html_decoded(text)
    return decoded if decoded is not None else text


def decode_all(texts: List[str]) -> List[str]:
    return [decode_or_raw(t) for t in texts]
