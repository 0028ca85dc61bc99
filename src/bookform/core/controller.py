"""Form state controller: create, edit and cancel against the remote collection."""

from __future__ import annotations

from collections.abc import Mapping

import structlog

from .client import BookApiError, BookClient, BookTransportError
from .fields import DEFAULT_DETAIL_KEY, blank_form, form_to_candidate, record_to_form
from .listing import BookList
from .models import BookPage, FormEditState
from .validation import validate

log = structlog.get_logger()


def new_page() -> BookPage:
    return BookPage(values=blank_form())


class FormController:
    """Drives one BookPage through Idle -> EditingRecord(id) -> Idle.

    Every transition replaces page.state with a new FormEditState; a failed
    create, update or fetch leaves it untouched.
    """

    def __init__(
        self,
        client: BookClient,
        listing: BookList,
        detail_key: str = DEFAULT_DETAIL_KEY,
    ) -> None:
        self.client = client
        self.listing = listing
        self.detail_key = detail_key

    async def submit(self, page: BookPage, values: Mapping[str, str]) -> bool:
        page.values = {name: values.get(name, "") for name in blank_form()}
        candidate = form_to_candidate(page.values, self.detail_key)

        reason = validate(candidate)
        if reason:
            log.info("book_form_invalid", reason=reason)
            page.error = reason
            return False

        state = page.state
        try:
            if state.is_editing:
                await self.client.update_book(state.editing_id, candidate)
            else:
                await self.client.create_book(candidate)
        except BookTransportError as e:
            page.error = f"서버 통신 오류: {e.message}"
            return False
        except BookApiError as e:
            page.error = e.message
            return False

        self._reset(page)
        await self.listing.refresh(page)
        return True

    async def enter_edit_mode(self, page: BookPage, book_id: int | str) -> bool:
        try:
            record = await self.client.fetch_book(book_id)
        except BookApiError as e:
            log.error("edit_mode_failed", id=book_id, error=e.message)
            page.notice = f"수정 모드 진입 실패: {e.message}"
            return False

        page.values = record_to_form(record)
        page.state = FormEditState.editing(book_id)
        page.error = ""
        log.debug("edit_mode_entered", id=book_id)
        return True

    def cancel(self, page: BookPage) -> None:
        self._reset(page)

    @staticmethod
    def _reset(page: BookPage) -> None:
        page.values = blank_form()
        page.state = FormEditState.idle()
        page.error = ""
