"""Property-based tests for booking and tour validation invariants."""

import asyncio
from datetime import datetime, timezone
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from tourmarket.core.exceptions import ValidationError
from tourmarket.schemas.booking import CreateBookingRequest
from tourmarket.services.booking_service import REQUIRED_BOOKING_FIELDS, BookingService
from tourmarket.services.tour_service import parse_available_dates

COMPLETE_BOOKING = {
    "user_id": "auth0|traveler",
    "product_id": str(uuid4()),
    "paymentMethod": "card",
    "idTransaccion": "tx-1",
}

# Strategies for generating test data
missing_subsets = st.lists(st.sampled_from(REQUIRED_BOOKING_FIELDS), min_size=1, unique=True)
blank_values = st.sampled_from([None, ""])
aware_datetimes = st.datetimes(
    min_value=datetime(2000, 1, 1), max_value=datetime(2100, 1, 1), timezones=st.just(timezone.utc)
)


@given(missing=missing_subsets, blank=blank_values)
@settings(max_examples=50, deadline=None)
def test_missing_booking_fields_are_all_reported(missing, blank):
    """Any subset of missing required fields is reported exactly, in declaration order."""
    payload = {
        field: (blank if field in missing else value)
        for field, value in COMPLETE_BOOKING.items()
    }
    # Blank strings do not parse as UUIDs
    if payload["product_id"] == "":
        payload["product_id"] = None

    session = AsyncMock()
    service = BookingService(session)

    with pytest.raises(ValidationError) as exc_info:
        asyncio.run(service.create_booking(CreateBookingRequest.model_validate(payload)))

    expected = [field for field in REQUIRED_BOOKING_FIELDS if field in missing]
    assert exc_info.value.extensions["errors"]["missing_fields"] == expected
    session.add.assert_not_called()
    session.commit.assert_not_awaited()


@given(values=st.lists(aware_datetimes, max_size=10))
@settings(max_examples=50, deadline=None)
def test_parsed_dates_are_unique_and_ordered(values):
    """Parsing keeps the first occurrence of every date and drops the rest."""
    parsed = parse_available_dates([value.isoformat() for value in values])

    assert parsed == list(dict.fromkeys(values))
    assert len(set(parsed)) == len(parsed)


@given(literal=st.text(alphabet="bcdeghjklmopqrsuvwxyz ", min_size=1, max_size=20))
@settings(max_examples=50, deadline=None)
def test_non_date_literals_are_named(literal):
    """A literal that is not a date-time is rejected and named in the message."""
    with pytest.raises(ValidationError) as exc_info:
        parse_available_dates(["2025-12-15T09:00:00Z", literal])

    assert str(exc_info.value) == f"The date '{literal}' is not valid."
