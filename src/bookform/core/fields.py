"""Mapping between HTML form fields and book record fields."""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .models import BookRecord

DEFAULT_DETAIL_KEY = "detail"


@dataclass(frozen=True)
class FormField:
    name: str  # form field id
    key: str  # JSON key on the record (or on its detail object)
    label: str
    kind: str = "text"  # text | number | date | integer
    detail: bool = False
    attr: str = ""  # BookRecord / BookDetail attribute


FORM_FIELDS: tuple[FormField, ...] = (
    FormField("title", "title", "제목", attr="title"),
    FormField("author", "author", "저자", attr="author"),
    FormField("isbn", "isbn", "ISBN", attr="isbn"),
    FormField("price", "price", "가격", kind="number", attr="price"),
    FormField("publishDate", "publishDate", "출판일", kind="date", attr="publish_date"),
    FormField("publisher", "publisher", "출판사", detail=True, attr="publisher"),
    FormField("language", "language", "언어", detail=True, attr="language"),
    FormField("edition", "edition", "판", detail=True, attr="edition"),
    FormField("pageCount", "pageCount", "페이지 수", kind="integer", detail=True, attr="page_count"),
    FormField("coverImageUrl", "coverImageUrl", "표지 URL", detail=True, attr="cover_image_url"),
    FormField("description", "description", "설명", detail=True, attr="description"),
)


def blank_form() -> dict[str, str]:
    return {f.name: "" for f in FORM_FIELDS}


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def record_to_form(record: BookRecord) -> dict[str, str]:
    """Populate every form field from a record; absent values become empty."""
    values: dict[str, str] = {}
    for f in FORM_FIELDS:
        if f.detail:
            value = getattr(record.detail, f.attr) if record.detail else None
        else:
            value = getattr(record, f.attr)
        values[f.name] = _as_text(value)
    return values


def _coerce_price(raw: str) -> float | int:
    # float() also takes digit separators like "1_000"; the form does not
    if "_" in raw:
        return math.nan
    try:
        number = float(raw)
    except ValueError:
        return math.nan
    if math.isfinite(number) and number.is_integer():
        return int(number)
    return number


def _coerce_page_count(raw: str) -> int | str | None:
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        return raw


def form_to_candidate(
    values: Mapping[str, str], detail_key: str = DEFAULT_DETAIL_KEY
) -> dict[str, Any]:
    """Build the outgoing request body from submitted form values.

    Text is trimmed, price becomes a number (NaN when it does not parse), an
    empty publish date becomes None. Detail values are forwarded unvalidated.
    """
    candidate: dict[str, Any] = {}
    detail: dict[str, Any] = {}
    for f in FORM_FIELDS:
        raw = (values.get(f.name) or "").strip()
        if f.kind == "number":
            value: Any = _coerce_price(raw)
        elif f.kind == "date":
            value = raw or None
        elif f.kind == "integer":
            value = _coerce_page_count(raw)
        else:
            value = raw
        if f.detail:
            detail[f.key] = value
        else:
            candidate[f.key] = value
    candidate[detail_key] = detail
    return candidate
