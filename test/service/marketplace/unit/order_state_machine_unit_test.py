from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import attrs
import pytest

from src.platform.exception.exceptions import (
    AlreadyUsedError,
    InvalidStateTransitionError,
    NotYetValidError,
    RefundWindowClosedError,
)
from src.service.marketplace.domain.entity.order_entity import days_until_event
from src.service.marketplace.domain.enum.order_status import OrderStatus, RefundStatus
from test.service.marketplace.fixtures import (
    NOW,
    make_confirmed_order,
    make_event,
    make_reserved_order,
)


@pytest.mark.unit
class TestDaysUntilEvent:
    def test_counts_to_midnight_utc_and_rounds_up(self):
        now = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)

        assert days_until_event(date(2026, 3, 9), now) == 8
        assert days_until_event(date(2026, 3, 2), now) == 1
        assert days_until_event(date(2026, 3, 1), now) == 0

    def test_exact_midnight(self):
        now = datetime(2026, 3, 1, 0, 0, tzinfo=timezone.utc)

        assert days_until_event(date(2026, 3, 8), now) == 7


@pytest.mark.unit
class TestReservation:
    def test_reserved_order_holds_price_snapshot(self):
        event = make_event(price='150')

        order = make_reserved_order(event, quantity=3)

        assert order.status == OrderStatus.RESERVED
        assert order.refund_status == RefundStatus.NONE
        assert str(order.total_paid) == '495.00'
        assert order.expires_at == NOW + timedelta(minutes=15)

    def test_confirm_payment(self):
        order = make_reserved_order(make_event())

        confirmed = order.confirm_payment(now=NOW + timedelta(minutes=5))

        assert confirmed.status == OrderStatus.CONFIRMED
        assert confirmed.confirmed_at == NOW + timedelta(minutes=5)
        assert order.status == OrderStatus.RESERVED

    def test_confirm_after_expiry_is_rejected(self):
        order = make_reserved_order(make_event())

        with pytest.raises(InvalidStateTransitionError):
            order.confirm_payment(now=NOW + timedelta(minutes=15))

    def test_confirm_twice_is_rejected(self):
        confirmed = make_confirmed_order(make_event())

        with pytest.raises(InvalidStateTransitionError):
            confirmed.confirm_payment(now=NOW)

    def test_expire_only_when_overdue(self):
        order = make_reserved_order(make_event())

        with pytest.raises(InvalidStateTransitionError):
            order.expire(now=NOW + timedelta(minutes=1))
        assert order.expire(now=NOW + timedelta(minutes=16)).status == OrderStatus.EXPIRED

    def test_cancel_only_from_reserved(self):
        event = make_event()

        assert make_reserved_order(event).cancel(now=NOW).status == OrderStatus.CANCELLED
        with pytest.raises(InvalidStateTransitionError):
            make_confirmed_order(event).cancel(now=NOW)


@pytest.mark.unit
class TestCheckIn:
    def test_check_in_on_event_day(self):
        event = make_event(event_date=NOW.date())
        order = make_confirmed_order(event)

        used = order.check_in(event_date=event.event_date, now=NOW)

        assert used.status == OrderStatus.USED
        assert used.used_at == NOW

    def test_second_check_in_is_already_used(self):
        event = make_event(event_date=NOW.date())
        used = make_confirmed_order(event).check_in(event_date=event.event_date, now=NOW)

        with pytest.raises(AlreadyUsedError):
            used.check_in(event_date=event.event_date, now=NOW)

    def test_before_event_date_is_not_yet_valid(self):
        event = make_event(event_date=(NOW + timedelta(days=2)).date())

        with pytest.raises(NotYetValidError):
            make_confirmed_order(event).check_in(event_date=event.event_date, now=NOW)

    def test_unpaid_order_cannot_check_in(self):
        event = make_event(event_date=NOW.date())

        with pytest.raises(InvalidStateTransitionError):
            make_reserved_order(event).check_in(event_date=event.event_date, now=NOW)


@pytest.mark.unit
class TestRefund:
    @pytest.mark.parametrize('days_away', [8, 7])
    def test_request_inside_window(self, days_away: int):
        event = make_event(event_date=(NOW + timedelta(days=days_away)).date())
        order = make_confirmed_order(event)

        requested = order.request_refund(
            event_date=event.event_date, now=NOW, window_days=7, reason='Cannot attend'
        )

        assert requested.status == OrderStatus.REFUND_REQUESTED
        assert requested.refund_status == RefundStatus.REQUESTED
        assert requested.refund_request_date == NOW

    def test_request_six_days_before_is_closed(self):
        event = make_event(event_date=(NOW + timedelta(days=6)).date())
        order = make_confirmed_order(event)

        with pytest.raises(RefundWindowClosedError, match='6 day'):
            order.request_refund(event_date=event.event_date, now=NOW, window_days=7)

    def test_second_request_is_rejected(self):
        event = make_event(event_date=(NOW + timedelta(days=20)).date())
        requested = make_confirmed_order(event).request_refund(
            event_date=event.event_date, now=NOW, window_days=7
        )

        with pytest.raises(InvalidStateTransitionError):
            requested.request_refund(event_date=event.event_date, now=NOW, window_days=7)

    def test_refund_on_record_closes_the_window(self):
        event = make_event(event_date=(NOW + timedelta(days=20)).date())
        order = attrs.evolve(make_confirmed_order(event), refund_status=RefundStatus.REJECTED)

        with pytest.raises(RefundWindowClosedError, match='20 day'):
            order.request_refund(event_date=event.event_date, now=NOW, window_days=7)

    def test_approval_refunds_ninety_percent(self):
        event = make_event(price='150', event_date=(NOW + timedelta(days=20)).date())
        requested = make_confirmed_order(event, quantity=3).request_refund(
            event_date=event.event_date, now=NOW, window_days=7
        )

        approved = requested.resolve_refund(
            approve=True, now=NOW, processing_fee_rate=Decimal('0.10')
        )

        assert approved.status == OrderStatus.REFUND_APPROVED
        assert approved.refund_status == RefundStatus.APPROVED
        assert str(approved.refund_amount) == '445.50'

    def test_refund_amount_rounded_to_cent(self):
        event = make_event(price='33.33', event_date=(NOW + timedelta(days=20)).date())
        order = make_confirmed_order(event)

        # 36.66 x 0.9 = 32.994
        assert order.total_paid.amount == Decimal('36.66')
        assert order.refundable_amount(Decimal('0.10')).amount == Decimal('32.99')

    def test_rejection_keeps_rejection_reason(self):
        event = make_event(event_date=(NOW + timedelta(days=20)).date())
        requested = make_confirmed_order(event).request_refund(
            event_date=event.event_date, now=NOW, window_days=7
        )

        rejected = requested.resolve_refund(
            approve=False,
            now=NOW,
            processing_fee_rate=Decimal('0.10'),
            rejection_reason='Outside policy',
        )

        assert rejected.status == OrderStatus.REFUND_REJECTED
        assert rejected.refund_amount is None
        assert rejected.refund_rejection_reason == 'Outside policy'

    def test_resolve_without_request_is_rejected(self):
        order = make_confirmed_order(make_event())

        with pytest.raises(InvalidStateTransitionError):
            order.resolve_refund(approve=True, now=NOW, processing_fee_rate=Decimal('0.10'))
