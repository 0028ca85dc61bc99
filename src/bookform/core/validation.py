"""Validation of outgoing book payloads."""

from __future__ import annotations

import math
import re
from collections.abc import Mapping
from typing import Any

TITLE_REQUIRED = "제목은 필수입니다."
AUTHOR_REQUIRED = "저자는 필수입니다."
ISBN_REQUIRED = "ISBN은 필수입니다."
PRICE_INVALID = "가격은 0보다 큰 숫자여야 합니다."
PUBLISH_DATE_INVALID = "출판일 형식이 올바르지 않습니다. (예: 2025-05-07)"

PUBLISH_DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def _is_blank(value: Any) -> bool:
    return value is None or not str(value).strip()


def _is_positive_number(value: Any) -> bool:
    if isinstance(value, bool) or value is None:
        return False
    if isinstance(value, str):
        if "_" in value:
            return False
        try:
            value = float(value)
        except ValueError:
            return False
    if not isinstance(value, (int, float)):
        return False
    return math.isfinite(value) and value > 0


def validate(candidate: Mapping[str, Any]) -> str | None:
    """Return None when the candidate is acceptable, else the first failure.

    Checks run title, author, isbn, price, publish date, stopping at the
    first failure. Detail fields are not checked.
    """
    if _is_blank(candidate.get("title")):
        return TITLE_REQUIRED
    if _is_blank(candidate.get("author")):
        return AUTHOR_REQUIRED
    if _is_blank(candidate.get("isbn")):
        return ISBN_REQUIRED
    if not _is_positive_number(candidate.get("price")):
        return PRICE_INVALID
    publish_date = candidate.get("publishDate")
    if publish_date and not PUBLISH_DATE_PATTERN.fullmatch(str(publish_date)):
        return PUBLISH_DATE_INVALID
    return None
