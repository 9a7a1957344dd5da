from datetime import date, datetime, timezone
from uuid import uuid4

import pytest

from app.shared.core.exceptions import ValidationError
from app.shared.utils.helpers import (
    add_months,
    display_name_from,
    parse_optional_uuid,
    parse_uuid,
    safe_int,
    slugify,
    username_base_from,
)


@pytest.mark.parametrize(
    "name, expected",
    [
        ("Electronics", "electronics"),
        ("Home & Garden", "home-&-garden"),
        ("Hot   Drinks", "hot-drinks"),
    ],
)
def test_slugify(name, expected):
    assert slugify(name) == expected


def test_add_months_keeps_day():
    assert add_months(date(2025, 2, 1), 3) == date(2025, 5, 1)


def test_add_months_clamps_to_month_end():
    assert add_months(date(2025, 1, 31), 1) == date(2025, 2, 28)
    assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)


def test_add_months_crosses_year_and_keeps_time():
    start = datetime(2025, 11, 15, 8, 30, tzinfo=timezone.utc)
    assert add_months(start, 3) == datetime(2026, 2, 15, 8, 30, tzinfo=timezone.utc)


def test_parse_uuid_accepts_strings_and_uuids():
    value = uuid4()
    assert parse_uuid(str(value)) == value
    assert parse_uuid(value) is value


def test_parse_uuid_rejects_malformed_ids():
    with pytest.raises(ValidationError) as exc_info:
        parse_uuid("not-an-id", "business")
    assert exc_info.value.status_code == 400
    assert exc_info.value.message == "Invalid business ID format"


def test_parse_optional_uuid_treats_blank_as_missing():
    assert parse_optional_uuid(None) is None
    assert parse_optional_uuid("") is None


@pytest.mark.parametrize("raw, expected", [("5", 5), ("abc", 7), (None, 7), (True, 7)])
def test_safe_int(raw, expected):
    assert safe_int(raw, 7) == expected


def test_federated_name_helpers():
    assert display_name_from("Jane_Doe 42") == "Jane_Doe"
    assert display_name_from("Jane-Doe42") == "Jane Doe"
    assert username_base_from("Jane Doe 42") == "janedoe"
