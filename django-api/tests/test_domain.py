"""Unit tests for domain primitives.

These test invariants that must hold at construction time.
Run with: pytest tests/test_domain.py -v
"""

from dataclasses import replace
from datetime import datetime, timezone
from decimal import Decimal
from uuid import UUID

import pytest

from univista.domain import Capacity, EventId, EventStatus, Money, TicketCount
from univista.domain.errors import (
    ErrorCode,
    InsufficientInventoryError,
    InvalidTransitionError,
)

NOW = datetime(2026, 10, 1, tzinfo=timezone.utc)


class TestMoney:
    """Tests for Money value object."""

    def test_money_accepts_positive_amount(self):
        assert Money(Decimal("12.50")).amount == Decimal("12.50")

    def test_money_accepts_zero(self):
        assert Money.zero().amount == 0

    def test_money_rejects_negative_amount(self):
        with pytest.raises(ValueError):
            Money(Decimal("-0.01"))

    def test_money_str_format(self):
        assert str(Money(Decimal("7.5"))) == "7.50"

    def test_money_times_count(self):
        assert Money(Decimal("250.00")).times(3) == Money(Decimal("750.00"))


class TestCapacity:
    """Tests for Capacity value object."""

    def test_capacity_accepts_zero(self):
        assert Capacity(0).value == 0

    def test_capacity_rejects_negative_value(self):
        with pytest.raises(ValueError):
            Capacity(-1)

    def test_take_reduces_capacity(self):
        assert Capacity(5).take(TicketCount(3)) == Capacity(2)

    def test_take_cannot_go_below_zero(self):
        with pytest.raises(ValueError):
            Capacity(1).take(TicketCount(2))


class TestTicketCount:
    @pytest.mark.parametrize("value", [0, -2, True, 1.5, "3"])
    def test_rejects_non_positive_or_non_integer(self, value):
        with pytest.raises(ValueError):
            TicketCount(value)


class TestEventId:
    """Tests for EventId value object."""

    def test_from_string_valid_uuid(self):
        value = "8f14e45f-ceea-467f-a8f5-2d3c2b7b0f7c"
        assert EventId.from_string(value).value == UUID(value)

    def test_from_string_invalid_uuid(self):
        with pytest.raises(ValueError):
            EventId.from_string("not-a-uuid")


class TestEventLifecycle:
    @pytest.mark.parametrize(
        "status, terminal",
        [(EventStatus.PENDING, False), (EventStatus.APPROVED, True), (EventStatus.REJECTED, True)],
    )
    def test_only_pending_is_open(self, status, terminal):
        assert status.is_terminal is terminal

    def test_rejection_reason_requires_rejected_status(self, pending_event):
        with pytest.raises(ValueError):
            replace(pending_event, rejection_reason="nope")

    def test_rejected_status_requires_reason(self, pending_event):
        with pytest.raises(ValueError):
            replace(pending_event, status=EventStatus.REJECTED)

    def test_approve_sets_approver_and_clears_reason(self, pending_event):
        approved = pending_event.approve("crew-1", NOW)
        assert approved.status is EventStatus.APPROVED
        assert approved.approved_by == "crew-1"
        assert approved.approved_at == NOW
        assert approved.rejection_reason is None

    def test_approve_can_set_allocation(self, pending_event):
        approved = pending_event.approve("crew-1", NOW, Capacity(40))
        assert approved.available_tickets == Capacity(40)

    def test_approve_is_noop_when_already_approved(self, pending_event):
        approved = pending_event.approve("crew-1", NOW)
        assert approved.approve("crew-2", NOW) is approved

    def test_approve_after_reject_is_refused(self, pending_event):
        rejected = pending_event.reject("crew-1", "Clashes with exams", NOW)
        with pytest.raises(InvalidTransitionError) as exc_info:
            rejected.approve("crew-1", NOW)
        assert exc_info.value.code is ErrorCode.INVALID_TRANSITION

    def test_reject_after_approve_is_refused(self, pending_event):
        approved = pending_event.approve("crew-1", NOW)
        with pytest.raises(InvalidTransitionError):
            approved.reject("crew-1", "Changed my mind", NOW)

    def test_take_tickets_reports_remaining(self, pending_event):
        with pytest.raises(InsufficientInventoryError) as exc_info:
            pending_event.take_tickets(TicketCount(6))
        assert exc_info.value.message == "Only 5 ticket(s) remaining. Cannot book 6."

    def test_free_event_is_priced_at_zero(self, pending_event):
        free = replace(pending_event, has_tickets=False)
        assert free.price_for(TicketCount(3)) == Money.zero()
