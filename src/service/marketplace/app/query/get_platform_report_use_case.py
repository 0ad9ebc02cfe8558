from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import ForbiddenError
from src.platform.logging.loguru_io import Logger
from src.service.marketplace.domain.entity.caller_entity import Caller
from src.service.marketplace.domain.enum.order_status import PAID_STATUSES, OrderStatus
from src.service.marketplace.domain.sales_report_domain import PlatformReport, SalesReport


class GetPlatformReportUseCase:
    """Revenue and commission across every event, for platform admins"""

    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    @inject
    def depends(cls, uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work])) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def get_report(self, *, caller: Caller) -> PlatformReport:
        if not caller.is_admin:
            raise ForbiddenError('Only admins can see platform revenue')

        async with self.uow:
            events = await self.uow.event_repo.list_events()
            orders = await self.uow.order_repo.list_by_statuses(
                statuses=PAID_STATUSES | {OrderStatus.REFUND_APPROVED}
            )

        report = SalesReport.platform(events=events, orders=orders)
        Logger.base.info(
            f'📊 [REPORT] Platform: {report.tickets_sold} ticket(s), gross {report.gross_revenue}, '
            f'commission {report.platform_commission}'
        )
        return report
