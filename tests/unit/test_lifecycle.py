"""Unit tests for booking status transitions."""

import datetime as dt

import pytest

from campsite_booking.models import BookingError, BookingStatus, ErrorCode
from campsite_booking.services import (
    can_transition,
    ensure_transition,
    is_active,
    is_cancelable,
    is_past,
)


class TestTransitions:
    """Tests for the allowed status graph."""

    @pytest.mark.parametrize(
        ("current", "target"),
        [
            (BookingStatus.PENDING, BookingStatus.CONFIRMED),
            (BookingStatus.PENDING, BookingStatus.CANCELED),
            (BookingStatus.CONFIRMED, BookingStatus.CHECKED_IN),
            (BookingStatus.CONFIRMED, BookingStatus.CANCELED),
            (BookingStatus.CONFIRMED, BookingStatus.NO_SHOW),
            (BookingStatus.CHECKED_IN, BookingStatus.CHECKED_OUT),
            (BookingStatus.CHECKED_OUT, BookingStatus.COMPLETED),
            (BookingStatus.CANCELED, BookingStatus.REFUNDED),
        ],
    )
    def test_allowed(self, current: BookingStatus, target: BookingStatus) -> None:
        assert can_transition(current, target) is True
        ensure_transition(current, target)

    @pytest.mark.parametrize(
        ("current", "target"),
        [
            (BookingStatus.PENDING, BookingStatus.CHECKED_IN),
            (BookingStatus.CHECKED_IN, BookingStatus.CANCELED),
            (BookingStatus.COMPLETED, BookingStatus.CANCELED),
            (BookingStatus.NO_SHOW, BookingStatus.CONFIRMED),
            (BookingStatus.REFUNDED, BookingStatus.CONFIRMED),
        ],
    )
    def test_rejected(self, current: BookingStatus, target: BookingStatus) -> None:
        """Disallowed moves raise INVALID_TRANSITION."""
        assert can_transition(current, target) is False

        with pytest.raises(BookingError) as exc_info:
            ensure_transition(current, target)

        assert exc_info.value.code == ErrorCode.INVALID_TRANSITION
        assert exc_info.value.details == {"from": current.value, "to": target.value}

    @pytest.mark.parametrize("status", [BookingStatus.CANCELED, BookingStatus.REFUNDED])
    def test_cancel_twice_is_already_canceled(self, status: BookingStatus) -> None:
        """Cancelling a canceled or refunded booking reports ALREADY_CANCELED."""
        with pytest.raises(BookingError) as exc_info:
            ensure_transition(status, BookingStatus.CANCELED)

        assert exc_info.value.code == ErrorCode.ALREADY_CANCELED

    def test_terminal_statuses_have_no_transitions(self) -> None:
        """Terminal statuses have no outgoing transitions."""
        for status in BookingStatus:
            targets = [t for t in BookingStatus if can_transition(status, t)]
            if status in (
                BookingStatus.COMPLETED,
                BookingStatus.NO_SHOW,
                BookingStatus.REFUNDED,
            ):
                assert targets == []


class TestStatusHelpers:
    """Tests for is_active, is_past and is_cancelable."""

    def test_active_statuses(self) -> None:
        assert is_active(BookingStatus.CONFIRMED)
        assert is_active(BookingStatus.CHECKED_IN)
        assert not is_active(BookingStatus.PENDING)
        assert not is_active(BookingStatus.CANCELED)

    def test_past_statuses(self) -> None:
        assert is_past(BookingStatus.COMPLETED)
        assert is_past(BookingStatus.CHECKED_OUT)
        assert not is_past(BookingStatus.CONFIRMED)

    def test_cancelable_before_check_in(self) -> None:
        now = dt.datetime(2026, 1, 9, 23, 59, tzinfo=dt.UTC)

        assert is_cancelable(BookingStatus.CONFIRMED, dt.date(2026, 1, 10), now)
        assert is_cancelable(BookingStatus.PENDING, dt.date(2026, 1, 10), now)

    def test_not_cancelable_from_check_in(self) -> None:
        """From UTC midnight on the check-in day the booking is locked in."""
        now = dt.datetime(2026, 1, 10, 0, 0, tzinfo=dt.UTC)

        assert not is_cancelable(BookingStatus.CONFIRMED, dt.date(2026, 1, 10), now)

    def test_not_cancelable_when_already_canceled(self) -> None:
        now = dt.datetime(2026, 1, 1, tzinfo=dt.UTC)

        assert not is_cancelable(BookingStatus.CANCELED, dt.date(2026, 1, 10), now)

    def test_naive_now_is_treated_as_utc(self) -> None:
        assert is_cancelable(
            BookingStatus.CONFIRMED, dt.date(2026, 1, 10), dt.datetime(2026, 1, 9, 12, 0)
        )
