from decimal import Decimal

import pytest

from src.platform.exception.exceptions import InvalidStateTransitionError, ValidationError
from src.service.marketplace.domain.entity.commission_settings_entity import CommissionSettings
from src.service.marketplace.domain.entity.organizer_entity import OrganizerRequest, OrganizerStatus
from src.service.marketplace.domain.enum.approval_status import ApprovalStatus
from src.service.marketplace.domain.value_object.money import Money


def _request() -> OrganizerRequest:
    return OrganizerRequest.submit(
        user_id='user-42',
        organization_name='Sunset Productions',
        contact_email='contact@sunset.example',
        document='12.345.678/0001-90',
    )


@pytest.mark.unit
class TestOrganizerRequest:
    def test_approval_creates_active_organizer(self):
        approved, organizer = _request().approve()

        assert approved.status == ApprovalStatus.APPROVED
        assert approved.reviewed_at is not None
        assert organizer.status == OrganizerStatus.ACTIVE
        assert organizer.user_id == 'user-42'
        assert organizer.total_events == 0
        assert organizer.total_revenue == Money.zero()

    def test_rejection_is_terminal(self):
        rejected = _request().reject(reason='Documents do not match')

        assert rejected.status == ApprovalStatus.REJECTED
        with pytest.raises(InvalidStateTransitionError):
            rejected.approve()

    def test_rejection_requires_reason(self):
        with pytest.raises(ValidationError):
            _request().reject(reason='')

    def test_invalid_email_is_rejected(self):
        with pytest.raises(ValidationError):
            OrganizerRequest.submit(
                user_id='user-42', organization_name='Sunset', contact_email='not-an-email'
            )


@pytest.mark.unit
class TestOrganizer:
    def test_suspend_and_reactivate(self):
        _, organizer = _request().approve()

        suspended = organizer.suspend(reason='Chargebacks')
        assert not suspended.is_active
        with pytest.raises(InvalidStateTransitionError):
            suspended.suspend()

        assert suspended.reactivate().is_active

    def test_totals(self):
        _, organizer = _request().approve()

        organizer = organizer.record_event_created().record_sale(Money.of('450.00'))
        organizer = organizer.record_refund(Money.of('150.00'))

        assert organizer.total_events == 1
        assert organizer.total_revenue == Money.of('300.00')
        assert organizer.record_refund(Money.of('1000')).total_revenue == Money.zero()


@pytest.mark.unit
class TestCommissionSettings:
    def test_category_rate_with_default_fallback(self):
        settings = CommissionSettings.create(
            default_rate=Decimal('5'), category_rates={'Theater': Decimal('4')}
        )

        assert settings.rate_for('theater') == Decimal('4')
        assert settings.rate_for('  THEATER ') == Decimal('4')
        assert settings.rate_for('comedy') == Decimal('5')
        assert settings.rate_for(None) == Decimal('5')

    def test_rate_out_of_range(self):
        with pytest.raises(ValidationError):
            CommissionSettings.create(
                default_rate=Decimal('5'), category_rates={'music': Decimal('101')}
            )
