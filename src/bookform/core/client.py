"""Async client for the remote book REST collection."""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

import httpx
import structlog

from .models import BookRecord

log = structlog.get_logger()

_SUCCESS = {
    "list": (200,),
    "create": (200, 201),
    "fetch": (200,),
    "update": (200, 204),
    "delete": (200, 204),
}

_LABELS = {
    "list": "목록 조회",
    "create": "등록",
    "fetch": "도서 조회",
    "update": "수정",
    "delete": "삭제",
}


class BookApiError(Exception):
    """Raised when the backend answers with a non-success status."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class BookTransportError(BookApiError):
    """Raised when the request never produced a usable response."""


def _server_message(resp: httpx.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return ""
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return ""


class BookClient:
    """One request/response exchange per operation; no retries, no caching."""

    def __init__(
        self,
        base_url: str,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    def _url(self, book_id: int | str | None = None) -> str:
        if book_id is None:
            return self.base_url
        segment = str(book_id)
        # ids are a single path segment under the collection
        if segment in ("", ".", ".."):
            log.warning("book_id_rejected", id=segment)
            raise BookApiError(f"잘못된 도서 ID: {segment!r}")
        return f"{self.base_url}/{quote(segment, safe='')}"

    async def _request(
        self, operation: str, method: str, url: str, **kwargs: Any
    ) -> httpx.Response:
        """Send one request and map failures onto BookApiError."""
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self.transport
            ) as client:
                resp = await client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            log.warning("book_api_transport_error", operation=operation, url=url, error=str(e))
            raise BookTransportError(str(e) or type(e).__name__) from e

        if resp.status_code not in _SUCCESS[operation]:
            message = _server_message(resp) or f"{_LABELS[operation]} 실패: {resp.status_code}"
            log.warning(
                "book_api_error",
                operation=operation,
                url=url,
                status=resp.status_code,
                message=message,
            )
            raise BookApiError(message, resp.status_code)
        return resp

    @staticmethod
    def _json(resp: httpx.Response) -> Any:
        try:
            return resp.json()
        except ValueError as e:
            raise BookTransportError(str(e), resp.status_code) from e

    async def list_books(self) -> list[BookRecord]:
        resp = await self._request("list", "GET", self._url())
        data = self._json(resp)
        if not isinstance(data, list):
            raise BookTransportError("목록 응답이 배열이 아닙니다.", resp.status_code)
        log.debug("books_listed", count=len(data))
        return [BookRecord.from_json(item) for item in data if isinstance(item, dict)]

    async def create_book(self, payload: dict[str, Any]) -> BookRecord | None:
        """POST a new record. Any id in the payload is dropped."""
        if "id" in payload:
            log.warning("create_payload_id_dropped", id=payload["id"])
            payload = {k: v for k, v in payload.items() if k != "id"}
        resp = await self._request("create", "POST", self._url(), json=payload)
        log.info("book_created", status=resp.status_code)
        try:
            data = resp.json()
        except ValueError:
            return None
        return BookRecord.from_json(data) if isinstance(data, dict) else None

    async def fetch_book(self, book_id: int | str) -> BookRecord:
        resp = await self._request("fetch", "GET", self._url(book_id))
        data = self._json(resp)
        if not isinstance(data, dict):
            raise BookTransportError("도서 응답이 객체가 아닙니다.", resp.status_code)
        return BookRecord.from_json(data)

    async def update_book(self, book_id: int | str, payload: dict[str, Any]) -> None:
        await self._request("update", "PUT", self._url(book_id), json=payload)
        log.info("book_updated", id=book_id)

    async def delete_book(self, book_id: int | str) -> None:
        await self._request("delete", "DELETE", self._url(book_id))
        log.info("book_deleted", id=book_id)
