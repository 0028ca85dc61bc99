import math

import pytest

from bookform.core.validation import (
    AUTHOR_REQUIRED,
    ISBN_REQUIRED,
    PRICE_INVALID,
    PUBLISH_DATE_INVALID,
    TITLE_REQUIRED,
    validate,
)


def _book(**overrides):
    book = {
        "title": "T",
        "author": "A",
        "isbn": "1",
        "price": 10,
        "publishDate": None,
        "detail": {},
    }
    book.update(overrides)
    return book


def test_well_formed_book_passes():
    assert validate(_book()) is None
    assert validate(_book(publishDate="2025-05-07", price=12.5)) is None


@pytest.mark.parametrize(
    "field, message",
    [("title", TITLE_REQUIRED), ("author", AUTHOR_REQUIRED), ("isbn", ISBN_REQUIRED)],
)
@pytest.mark.parametrize("blank", ["", "   ", None])
def test_blank_required_text(field, message, blank):
    assert validate(_book(**{field: blank})) == message


def test_missing_keys_are_blank():
    assert validate({}) == TITLE_REQUIRED


def test_priority_order():
    assert validate(_book(title="", author="", isbn="", price=-1)) == TITLE_REQUIRED
    assert validate(_book(author="", isbn="", price=-1)) == AUTHOR_REQUIRED
    assert validate(_book(isbn="", price=-1, publishDate="bad")) == ISBN_REQUIRED
    assert validate(_book(price=0, publishDate="bad")) == PRICE_INVALID


@pytest.mark.parametrize(
    "price", [0, -5, -0.01, None, "abc", math.nan, math.inf, -math.inf, True, "", [10]]
)
def test_invalid_price(price):
    assert validate(_book(price=price)) == PRICE_INVALID


def test_numeric_string_price_is_accepted():
    assert validate(_book(price="15000")) is None


@pytest.mark.parametrize(
    "date", ["2025/05/07", "25-05-07", "2025-5-7", "2025-05-07T00:00", "２０２５-05-07"]
)
def test_bad_publish_date(date):
    assert validate(_book(publishDate=date)) == PUBLISH_DATE_INVALID


def test_empty_publish_date_is_ignored():
    assert validate(_book(publishDate="")) is None


def test_detail_fields_are_not_checked():
    detail = {"publisher": "", "pageCount": "many", "coverImageUrl": "not a url"}
    assert validate(_book(detail=detail)) is None


def test_price_string_with_underscores_is_rejected():
    assert validate(_book(price="1_000")) == PRICE_INVALID
