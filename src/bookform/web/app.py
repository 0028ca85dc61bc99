"""FastAPI front end serving the book form."""

from __future__ import annotations

import os
import time
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone

import structlog
import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse, Response

from ..core.client import BookClient
from ..core.config import load_settings
from ..core.controller import FormController, new_page
from ..core.listing import BookList, preferred_locale
from ..core.models import BookPage
from .pages import render_page

load_dotenv()

log = structlog.get_logger()

settings = load_settings()

SESSION_COOKIE = "bookform_session"
MAX_SESSIONS = 500  # cap total sessions to bound memory
MAX_BODY_BYTES = 50_000  # ~50 KB max form body


@dataclass
class Session:
    page: BookPage
    last_seen: float = field(default_factory=time.time)


# In-memory session store
sessions: dict[str, Session] = {}

book_client = BookClient(settings.api_base, timeout=settings.api_timeout)


def _components() -> tuple[FormController, BookList]:
    listing = BookList(book_client)
    return FormController(book_client, listing, settings.detail_field), listing


def _clean_expired() -> None:
    now = time.time()
    expired = [
        sid for sid, s in sessions.items() if now - s.last_seen > settings.session_ttl
    ]
    for sid in expired:
        sessions.pop(sid, None)


def _get_session(session_id: str | None) -> Session | None:
    if not session_id:
        return None
    session = sessions.get(session_id)
    if not session:
        return None
    if time.time() - session.last_seen > settings.session_ttl:
        sessions.pop(session_id, None)
        return None
    session.last_seen = time.time()
    return session


def _open_session(request: Request) -> tuple[str, Session] | None:
    """Return the caller's session, creating one if needed; None when full."""
    session_id = request.cookies.get(SESSION_COOKIE)
    session = _get_session(session_id)
    locale = preferred_locale(request.headers.get("accept-language"))
    if session and session_id:
        session.page.locale = locale
        return session_id, session

    _clean_expired()
    if len(sessions) >= MAX_SESSIONS:
        log.warning("session_store_full", sessions=len(sessions))
        return None
    session_id = uuid.uuid4().hex
    session = Session(page=new_page())
    session.page.locale = locale
    sessions[session_id] = session
    log.debug("session_created", session=session_id[:8])
    return session_id, session


def _busy() -> JSONResponse:
    return JSONResponse(
        {"error": "Server is busy. Please try again in a few minutes."},
        status_code=503,
    )


def _with_cookie(response: Response, session_id: str) -> Response:
    response.set_cookie(
        SESSION_COOKIE,
        session_id,
        max_age=settings.session_ttl,
        httponly=True,
        samesite="lax",
    )
    return response


def _back_to_index(request: Request, session_id: str) -> Response:
    return _with_cookie(
        RedirectResponse(str(request.url_for("index")), status_code=303), session_id
    )


async def _read_form(request: Request) -> dict[str, str] | None:
    content_length = request.headers.get("content-length")
    if content_length and int(content_length) > MAX_BODY_BYTES:
        return None
    form = await request.form()
    return {key: value for key, value in form.items() if isinstance(value, str)}


app = FastAPI(title="Book Form", docs_url=None, redoc_url=None)


@app.middleware("http")
async def security_headers(request: Request, call_next):
    response = await call_next(request)
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["X-Frame-Options"] = "DENY"
    response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
    return response


@app.get("/health")
async def health():
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": "0.1.0",
        "environment": settings.environment,
        "sessions_active": len(sessions),
        "api_base": settings.api_base,
    }


@app.get("/", response_class=HTMLResponse, name="index")
async def index(request: Request):
    opened = _open_session(request)
    if opened is None:
        return _busy()
    session_id, session = opened
    page = session.page

    _, listing = _components()
    if not page.rows_fresh:
        await listing.refresh(page)
    page.rows_fresh = False

    notice, page.notice = page.notice, ""
    return _with_cookie(HTMLResponse(render_page(page, notice)), session_id)


@app.post("/books")
async def submit_book(request: Request):
    opened = _open_session(request)
    if opened is None:
        return _busy()
    session_id, session = opened

    values = await _read_form(request)
    if values is None:
        return JSONResponse({"error": "Request too large."}, status_code=413)

    controller, _ = _components()
    await controller.submit(session.page, values)
    return _back_to_index(request, session_id)


@app.post("/books/{book_id}/edit")
async def edit_book(request: Request, book_id: str):
    opened = _open_session(request)
    if opened is None:
        return _busy()
    session_id, session = opened

    controller, _ = _components()
    await controller.enter_edit_mode(session.page, book_id)
    return _back_to_index(request, session_id)


@app.post("/books/{book_id}/delete")
async def delete_book(request: Request, book_id: str):
    opened = _open_session(request)
    if opened is None:
        return _busy()
    session_id, session = opened

    values = await _read_form(request)
    if values is None:
        return JSONResponse({"error": "Request too large."}, status_code=413)

    _, listing = _components()
    await listing.delete(session.page, book_id, confirmed=values.get("confirmed") == "1")
    return _back_to_index(request, session_id)


@app.post("/cancel")
async def cancel_edit(request: Request):
    opened = _open_session(request)
    if opened is None:
        return _busy()
    session_id, session = opened

    controller, _ = _components()
    controller.cancel(session.page)
    return _back_to_index(request, session_id)


def main():
    is_dev = settings.environment == "dev"
    uvicorn.run(
        "bookform.web.app:app",
        host=os.environ.get("HOST", "0.0.0.0"),
        port=settings.port,
        reload=is_dev,
    )
