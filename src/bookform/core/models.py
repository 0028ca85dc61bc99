"""Data models for book records and form state."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

SUBMIT_LABEL_CREATE = "도서 등록"
SUBMIT_LABEL_UPDATE = "도서 수정"


def _text(value: Any) -> str | None:
    """Server text may arrive as a JSON number; keep None as absent."""
    if value is None:
        return None
    return str(value)


@dataclass
class BookDetail:
    publisher: str | None = None
    language: str | None = None
    edition: str | None = None
    cover_image_url: str | None = None
    description: str | None = None
    page_count: int | None = None

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> BookDetail:
        return cls(
            publisher=_text(data.get("publisher")),
            language=_text(data.get("language")),
            edition=_text(data.get("edition")),
            cover_image_url=_text(data.get("coverImageUrl")),
            description=_text(data.get("description")),
            page_count=data.get("pageCount"),
        )


@dataclass
class BookRecord:
    title: str = ""
    author: str = ""
    isbn: str = ""
    price: float | int | None = None
    publish_date: str | None = None
    detail: BookDetail | None = None
    id: int | str | None = None

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> BookRecord:
        """Build a record from a server JSON object, tolerating missing keys."""
        detail = data.get("detail")
        return cls(
            id=data.get("id"),
            title=_text(data.get("title")) or "",
            author=_text(data.get("author")) or "",
            isbn=_text(data.get("isbn")) or "",
            price=data.get("price"),
            publish_date=_text(data.get("publishDate")) or None,
            detail=BookDetail.from_json(detail) if isinstance(detail, dict) else None,
        )


@dataclass(frozen=True)
class FormEditState:
    """Idle when editing_id is None, otherwise EditingRecord(editing_id)."""

    editing_id: int | str | None = None

    @classmethod
    def idle(cls) -> FormEditState:
        return cls()

    @classmethod
    def editing(cls, book_id: int | str) -> FormEditState:
        return cls(editing_id=book_id)

    @property
    def is_editing(self) -> bool:
        return self.editing_id is not None

    @property
    def submit_label(self) -> str:
        return SUBMIT_LABEL_UPDATE if self.is_editing else SUBMIT_LABEL_CREATE

    @property
    def cancel_visible(self) -> bool:
        return self.is_editing


@dataclass
class BookRow:
    """One rendered table row."""

    id: int | str | None
    title: str
    author: str
    isbn: str
    price: str
    publish_date: str
    publisher: str


@dataclass
class BookPage:
    """Everything one browser session sees: the form, its mode and the table."""

    values: dict[str, str]
    state: FormEditState = field(default_factory=FormEditState.idle)
    error: str = ""
    notice: str = ""
    rows: list[BookRow] = field(default_factory=list)
    rows_fresh: bool = False
    locale: str = "ko-KR"
