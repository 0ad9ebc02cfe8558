#!/usr/bin/env python3
"""
Database Seed Script
Populate demo data through the regular use cases

Features:
1. Approved organizer - request submitted by `init-organizer`, approved by `init-admin`
2. Approved event with two ticket types, ready for checkout
"""

import asyncio
from dataclasses import dataclass
from datetime import date, time, timedelta
from decimal import Decimal

from src.platform.config.di import container
from src.platform.database.orm_db_setting import create_db_and_tables, dispose_engine
from src.service.marketplace.app.command.add_ticket_type_use_case import AddTicketTypeUseCase
from src.service.marketplace.app.command.create_event_use_case import CreateEventUseCase
from src.service.marketplace.app.command.review_event_use_case import ReviewEventUseCase
from src.service.marketplace.app.command.review_organizer_request_use_case import (
    ReviewOrganizerRequestUseCase,
)
from src.service.marketplace.app.command.submit_organizer_request_use_case import (
    SubmitOrganizerRequestUseCase,
)
from src.service.marketplace.domain.entity.caller_entity import Caller
from src.service.marketplace.domain.enum.user_role import UserRole


ADMIN = Caller(user_id='init-admin', role=UserRole.ADMIN)
ORGANIZER = Caller(user_id='init-organizer', role=UserRole.ORGANIZER)


@dataclass
class TicketTypeConfig:
    """Ticket type seed configuration"""
    name: str
    price: Decimal
    total_tickets: int
    allow_half_price: bool = False


TICKET_TYPES = [
    TicketTypeConfig(name='Pista', price=Decimal('150'), total_tickets=250, allow_half_price=True),
    TicketTypeConfig(name='VIP', price=Decimal('400'), total_tickets=50),
]


async def seed_organizer() -> None:
    request = await SubmitOrganizerRequestUseCase(uow=container.unit_of_work()).submit(
        caller=Caller(user_id=ORGANIZER.user_id),
        organization_name='Init Productions',
        contact_email='init@organizer.example',
    )
    _, organizer = await ReviewOrganizerRequestUseCase(uow=container.unit_of_work()).approve(
        request_id=request.id
    )
    print(f'   ✅ Organizer {organizer.organization_name} ({organizer.id})')


async def seed_event() -> None:
    event = await CreateEventUseCase(uow=container.unit_of_work()).create_event(
        caller=ORGANIZER,
        title='Init Summer Festival',
        event_date=date.today() + timedelta(days=60),
        event_time=time(18, 0),
        location='Riverside Park',
        category='music',
        price=Decimal('150'),
        total_tickets=sum(config.total_tickets for config in TICKET_TYPES),
    )
    add_ticket_type = AddTicketTypeUseCase(
        uow=container.unit_of_work(), inventory_lock=container.inventory_lock()
    )
    for config in TICKET_TYPES:
        await add_ticket_type.add_ticket_type(
            caller=ORGANIZER,
            event_id=event.id,
            name=config.name,
            price=config.price,
            total_tickets=config.total_tickets,
            allow_half_price=config.allow_half_price,
        )
    await ReviewEventUseCase(uow=container.unit_of_work()).approve(event_id=event.id)
    print(f'   ✅ Event {event.title} ({event.id}) with {len(TICKET_TYPES)} ticket types')


async def main() -> None:
    print('🌱 Seeding demo data...')
    try:
        await create_db_and_tables()
        await seed_organizer()
        await seed_event()
    finally:
        await dispose_engine()
    print('✅ Seed completed!')


if __name__ == '__main__':
    asyncio.run(main())
