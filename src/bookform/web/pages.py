"""HTML page for the book form and table."""

from __future__ import annotations

import json
from html import escape as html_escape
from urllib.parse import quote

from ..core.fields import FORM_FIELDS, FormField
from ..core.models import BookPage, BookRow

DELETE_CONFIRM = "정말 삭제하시겠습니까?"

_INPUT_TYPES = {"number": "number", "date": "date", "integer": "number"}

_STYLE = """
body { font-family: sans-serif; margin: 2rem; }
form.book-form label { display: inline-block; width: 7rem; }
form.book-form div { margin-bottom: .4rem; }
#formError { color: #b00020; margin-left: 1rem; }
table { border-collapse: collapse; margin-top: 1.5rem; }
th, td { border: 1px solid #ccc; padding: 4px 10px; }
td.price { text-align: right; }
form.inline { display: inline; }
"""


def _render_field(f: FormField, value: str) -> str:
    name = html_escape(f.name)
    label = html_escape(f.label)
    if f.name == "description":
        return (
            f'  <div><label for="{name}">{label}</label>'
            f'<textarea id="{name}" name="{name}">{html_escape(value)}</textarea></div>'
        )
    input_type = _INPUT_TYPES.get(f.kind, "text")
    extra = ' step="any"' if f.kind == "number" else ""
    return (
        f'  <div><label for="{name}">{label}</label>'
        f'<input type="{input_type}" id="{name}" name="{name}"'
        f' value="{html_escape(value)}"{extra} /></div>'
    )


def _render_form(page: BookPage) -> list[str]:
    lines = ['<form id="bookForm" class="book-form" method="post" action="books">']
    for f in FORM_FIELDS:
        lines.append(_render_field(f, page.values.get(f.name, "")))
    lines.append(
        f'  <button type="submit" id="submitBtn">{html_escape(page.state.submit_label)}</button>'
    )
    if page.state.cancel_visible:
        lines.append('  <button type="submit" id="cancelBtn" formaction="cancel">취소</button>')
    error_style = "inline" if page.error else "none"
    lines.append(
        f'  <span id="formError" style="display:{error_style}">{html_escape(page.error)}</span>'
    )
    lines.append("</form>")
    return lines


def _render_row(row: BookRow) -> list[str]:
    book_id = html_escape(quote(str(row.id), safe=""))
    confirm = html_escape(f"return confirm('{DELETE_CONFIRM}')", quote=True)
    return [
        "  <tr>",
        f"    <td>{html_escape(row.title)}</td>",
        f"    <td>{html_escape(row.author)}</td>",
        f"    <td>{html_escape(row.isbn)}</td>",
        f'    <td class="price">{html_escape(row.price)}</td>',
        f"    <td>{html_escape(row.publish_date)}</td>",
        f"    <td>{html_escape(row.publisher)}</td>",
        "    <td>",
        f'      <form class="inline" method="post" action="books/{book_id}/edit">'
        '<button class="edit-btn" type="submit">수정</button></form>',
        f'      <form class="inline" method="post" action="books/{book_id}/delete"'
        f' onsubmit="{confirm}">'
        '<input type="hidden" name="confirmed" value="1" />'
        '<button class="delete-btn" type="submit">삭제</button></form>',
        "    </td>",
        "  </tr>",
    ]


def render_page(page: BookPage, notice: str = "") -> str:
    """Build the full document; notice, if any, is shown once as an alert."""
    lines = [
        "<!DOCTYPE html>",
        '<html lang="ko">',
        "<head>",
        '<meta charset="utf-8" />',
        "<title>도서 관리</title>",
        f"<style>{_STYLE}</style>",
        "</head>",
        "<body>",
        "<h1>도서 관리</h1>",
    ]
    lines.extend(_render_form(page))
    lines.extend(
        [
            "<table>",
            "  <thead><tr><th>제목</th><th>저자</th><th>ISBN</th><th>가격</th>"
            "<th>출판일</th><th>출판사</th><th></th></tr></thead>",
            '  <tbody id="bookTableBody">',
        ]
    )
    for row in page.rows:
        lines.extend(_render_row(row))
    lines.extend(["  </tbody>", "</table>"])
    if notice:
        lines.append(f'<div id="notice" role="alert">{html_escape(notice)}</div>')
        script_text = json.dumps(notice).replace("<", "\\u003c")
        lines.append(f"<script>alert({script_text});</script>")
    lines.extend(["</body>", "</html>"])
    return "\n".join(lines) + "\n"
