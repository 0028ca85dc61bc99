"""Project the last successful list fetch into table rows."""

from __future__ import annotations

import math
from collections.abc import Iterable

import structlog

from .client import BookApiError, BookClient, BookTransportError
from .models import BookPage, BookRecord, BookRow

log = structlog.get_logger()

LIST_FAILED = "도서 목록 불러오기 실패"

DEFAULT_LOCALE = "ko-KR"

# (group, decimal) separators for languages that differ from "1,234.5"
_SEPARATORS = {
    "de": (".", ","),
    "es": (".", ","),
    "id": (".", ","),
    "it": (".", ","),
    "nl": (".", ","),
    "pt": (".", ","),
    "tr": (".", ","),
    "fr": ("\u202f", ","),
    "cs": ("\u00a0", ","),
    "pl": ("\u00a0", ","),
    "ru": ("\u00a0", ","),
    "sv": ("\u00a0", ","),
    "uk": ("\u00a0", ","),
    "de-ch": ("\u2019", "."),
}


def preferred_locale(accept_language: str | None) -> str:
    """Pick the highest-weighted tag from an Accept-Language header."""
    best, best_q = DEFAULT_LOCALE, 0.0
    for part in (accept_language or "").split(","):
        tag, _, params = part.strip().partition(";")
        tag = tag.strip()
        if not tag or tag == "*":
            continue
        q = 1.0
        params = params.strip()
        if params.startswith("q="):
            try:
                q = float(params[2:])
            except ValueError:
                continue
        if q > best_q:
            best, best_q = tag, q
    return best


def _separators(locale: str) -> tuple[str, str]:
    tag = locale.lower().replace("_", "-")
    if tag in _SEPARATORS:
        return _SEPARATORS[tag]
    return _SEPARATORS.get(tag.split("-")[0], (",", "."))


def format_price(value: object, locale: str = DEFAULT_LOCALE) -> str:
    """Format a price with the locale's thousands separators.

    15000 -> "15,000" for ko-KR, "15.000" for de-DE.
    """
    if value is None or isinstance(value, bool):
        return ""
    if isinstance(value, str):
        try:
            value = float(value)
        except ValueError:
            return value
    if not isinstance(value, (int, float)) or not math.isfinite(value):
        return str(value)
    if float(value).is_integer():
        text = f"{int(value):,}"
    else:
        text = f"{value:,.3f}".rstrip("0").rstrip(".")
    group, decimal = _separators(locale)
    if (group, decimal) == (",", "."):
        return text
    return "".join(group if c == "," else decimal if c == "." else c for c in text)


def render(records: Iterable[BookRecord], locale: str = DEFAULT_LOCALE) -> list[BookRow]:
    """One row per record, in the order the server sent them."""
    return [
        BookRow(
            id=r.id,
            title=r.title,
            author=r.author,
            isbn=r.isbn,
            price=format_price(r.price, locale),
            publish_date=r.publish_date or "",
            publisher=(r.detail.publisher or "") if r.detail else "",
        )
        for r in records
    ]


class BookList:
    def __init__(self, client: BookClient) -> None:
        self.client = client

    async def refresh(self, page: BookPage) -> bool:
        """Refetch the list; on failure the current rows stay as they are."""
        try:
            records = await self.client.list_books()
        except BookApiError as e:
            log.error("book_list_failed", error=e.message, status=e.status_code)
            page.notice = LIST_FAILED
            return False
        page.rows = render(records, page.locale)
        page.rows_fresh = True
        return True

    async def delete(self, page: BookPage, book_id: int | str, confirmed: bool) -> bool:
        if not confirmed:
            log.debug("book_delete_cancelled", id=book_id)
            return False
        try:
            await self.client.delete_book(book_id)
        except BookTransportError as e:
            page.notice = f"삭제 중 오류: {e.message}"
            return False
        except BookApiError as e:
            page.notice = e.message
            return False
        await self.refresh(page)
        return True
