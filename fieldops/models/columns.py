# fieldops/models/columns.py
from __future__ import annotations

import json
import logging
from typing import Any, List, Optional

from sqlalchemy import Text
from sqlalchemy.types import TypeDecorator

logger = logging.getLogger(__name__)


def coerce_str_list(value: Any) -> List[str]:
    """
    Normalize a team-member / store-point payload to a list of strings.

    Rows written by older clients hold JSON-encoded text, newer ones a
    native array; a bare scalar is treated as a one-element list.
    """
    if value is None:
        return []
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8")
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return []
        try:
            value = json.loads(text)
        except ValueError:
            logger.warning("Discarding malformed JSON list value: %r", text[:80])
            return []
    if isinstance(value, (list, tuple)):
        return [str(item).strip() for item in value if item is not None and str(item).strip()]
    return [str(value).strip()] if str(value).strip() else []


class JSONStringList(TypeDecorator):
    """Text column holding a JSON array, always surfaced as ``List[str]``."""

    impl = Text
    cache_ok = True

    def process_bind_param(self, value: Any, dialect) -> Optional[str]:
        return json.dumps(coerce_str_list(value))

    def process_result_value(self, value: Any, dialect) -> List[str]:
        return coerce_str_list(value)
