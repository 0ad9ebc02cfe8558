from enum import StrEnum
from typing import Optional

import attrs

from src.platform.exception.exceptions import ValidationError


class PurchaseChannel(StrEnum):
    DESKTOP = 'desktop'
    MOBILE = 'mobile'
    APP = 'app'


class Gender(StrEnum):
    MALE = 'male'
    FEMALE = 'female'
    OTHER = 'other'


@attrs.define(kw_only=True, frozen=True)
class Buyer:
    """Attendee data captured at checkout, used for exports and demographics"""

    name: str
    email: str
    phone: str = ''
    document: str = ''
    age: Optional[int] = None
    gender: Optional[Gender] = None
    city: str = ''
    state: str = ''
    purchase_channel: PurchaseChannel = PurchaseChannel.DESKTOP

    @classmethod
    def create(
        cls,
        *,
        name: str,
        email: str,
        phone: str = '',
        document: str = '',
        age: Optional[int] = None,
        gender: Optional[Gender] = None,
        city: str = '',
        state: str = '',
        purchase_channel: PurchaseChannel = PurchaseChannel.DESKTOP,
    ) -> 'Buyer':
        if not name or not name.strip():
            raise ValidationError('Buyer name cannot be empty')
        if not email or '@' not in email:
            raise ValidationError('Buyer email is invalid')
        if age is not None and not 0 < age < 130:
            raise ValidationError('Buyer age must be between 1 and 129')

        return cls(
            name=name.strip(),
            email=email.strip(),
            phone=phone,
            document=document,
            age=age,
            gender=gender,
            city=city.strip(),
            state=state.strip(),
            purchase_channel=purchase_channel,
        )

    @property
    def age_group(self) -> Optional[str]:
        if self.age is None or self.age < 18:
            return None
        if self.age <= 25:
            return '18-25'
        if self.age <= 35:
            return '26-35'
        if self.age <= 45:
            return '36-45'
        return '46+'
