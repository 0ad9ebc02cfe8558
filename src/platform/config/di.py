"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi-sqlalchemy.html
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import Settings
from src.platform.database.orm_db_setting import Database
from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork
from src.service.marketplace.driven_adapter.payout.refund_payout_gateway_impl import (
    MockRefundPayoutGateway,
)
from src.service.marketplace.driven_adapter.state.inventory_lock_impl import InventoryLockImpl


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Database (event-loop-aware engine behind a session provider)
    database = providers.Singleton(Database)

    # One unit of work per use case invocation
    unit_of_work = providers.Factory(SqlAlchemyUnitOfWork, database=database)

    # Keyed inventory locks must be shared process-wide
    inventory_lock = providers.Singleton(
        InventoryLockImpl,
        timeout_seconds=config_service.provided.INVENTORY_LOCK_TIMEOUT_SECONDS,
    )

    # External collaborators
    refund_payout_gateway = providers.Singleton(MockRefundPayoutGateway)


container = Container()


def setup() -> None:
    container.config_service()


def cleanup() -> None:
    container.reset_singletons()
