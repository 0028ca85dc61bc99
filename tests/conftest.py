from __future__ import annotations

import json

import httpx
import pytest

from bookform.core.client import BookClient

API_BASE = "http://backend.test/api/books"


class FakeBackend:
    """In-memory book collection speaking the REST contract over MockTransport."""

    def __init__(self, books: list[dict] | None = None) -> None:
        self.books: dict[int, dict] = {}
        self.next_id = 1
        self.requests: list[httpx.Request] = []
        self.fail: dict[str, httpx.Response] = {}
        for book in books or []:
            self.add(book)

    def add(self, book: dict) -> dict:
        book = dict(book)
        if "id" not in book:
            book["id"] = self.next_id
        self.next_id = max(self.next_id, book["id"]) + 1
        self.books[book["id"]] = book
        return book

    def calls(self, method: str | None = None) -> list[httpx.Request]:
        return [r for r in self.requests if method is None or r.method == method]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = request.method
        if key in self.fail:
            return self.fail[key]

        parts = request.url.path.rstrip("/").split("/")
        book_id = int(parts[-1]) if parts[-1].isdigit() else None

        if request.method == "GET" and book_id is None:
            return httpx.Response(200, json=list(self.books.values()))
        if request.method == "POST":
            body = json.loads(request.content)
            return httpx.Response(201, json=self.add(body))
        if book_id not in self.books:
            return httpx.Response(404, json={"message": "도서를 찾을 수 없습니다."})
        if request.method == "GET":
            return httpx.Response(200, json=self.books[book_id])
        if request.method == "PUT":
            body = json.loads(request.content)
            self.books[book_id] = {**body, "id": book_id}
            return httpx.Response(204)
        if request.method == "DELETE":
            del self.books[book_id]
            return httpx.Response(204)
        return httpx.Response(405)


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend(
        [
            {
                "id": 1,
                "title": "T",
                "author": "A",
                "isbn": "1",
                "price": 15000,
                "publishDate": "2024-01-02",
                "detail": {"publisher": "Pub", "pageCount": 320},
            }
        ]
    )


@pytest.fixture
def client(backend: FakeBackend) -> BookClient:
    return BookClient(API_BASE, transport=httpx.MockTransport(backend.handler))


@pytest.fixture
def make_client():
    def _make(backend: FakeBackend) -> BookClient:
        return BookClient(API_BASE, transport=httpx.MockTransport(backend.handler))

    return _make


@pytest.fixture
def empty_backend() -> FakeBackend:
    return FakeBackend()
