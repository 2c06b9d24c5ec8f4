#!/usr/bin/env python3
"""
Domain tags - canonical representation and storage codec.

In memory a tag set is always a ``List[str]`` in display order. Persisted rows
keep it as a single JSON-encoded text column; ``encode_tags``/``decode_tags``
are the only place that representation is converted.
"""

import json
import logging
from typing import Any, List, Set

logger = logging.getLogger(__name__)


def normalize_tags(value: Any) -> List[str]:
    """
    Coerce any tag payload into a list of strings.

    Accepts lists/tuples, JSON-encoded text, or garbage. Non-string items,
    blank tags and tags that cannot be stored as UTF-8 (lone surrogates) are
    dropped; anything that is not a sequence yields ``[]``.
    """
    if value is None:
        return []

    if isinstance(value, str):
        return decode_tags(value)

    if not isinstance(value, (list, tuple)):
        return []

    tags = []
    for item in value:
        if not isinstance(item, str) or not item.strip():
            continue
        if not is_utf8_text(item):
            logger.debug(f"Dropping tag that is not valid UTF-8: {item!r}")
            continue
        tags.append(item)
    return tags


def is_utf8_text(text: str) -> bool:
    try:
        text.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def tag_key(tag: str) -> str:
    """Comparison key: trimmed and case-folded."""
    return tag.strip().casefold()


def tag_keys(tags: List[str]) -> Set[str]:
    return {tag_key(t) for t in tags}


def encode_tags(tags: Any) -> str:
    """Serialize tags for storage. Always returns a JSON array."""
    return json.dumps(normalize_tags(tags), ensure_ascii=False)


def decode_tags(raw: Any) -> List[str]:
    """Decode a stored tag column; malformed or absent input gives ``[]``."""
    if raw is None:
        return []
    if isinstance(raw, (list, tuple)):
        return normalize_tags(raw)
    if not isinstance(raw, str) or not raw.strip():
        return []

    try:
        decoded = json.loads(raw)
    except (json.JSONDecodeError, ValueError):
        logger.debug(f"Ignoring malformed tag payload: {raw[:80]!r}")
        return []

    if not isinstance(decoded, list):
        return []
    return normalize_tags(decoded)
