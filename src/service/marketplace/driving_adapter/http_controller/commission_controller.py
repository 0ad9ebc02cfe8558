from fastapi import APIRouter, Depends

from src.platform.logging.loguru_io import Logger
from src.service.marketplace.app.command.update_commission_settings_use_case import (
    UpdateCommissionSettingsUseCase,
)
from src.service.marketplace.app.query.get_commission_settings_use_case import (
    GetCommissionSettingsUseCase,
)
from src.service.marketplace.domain.entity.caller_entity import Caller
from src.service.marketplace.driving_adapter.http_controller.auth.role_auth import require_admin
from src.service.marketplace.driving_adapter.http_controller.schema.commission_schema import (
    CommissionSettingsRequest,
    CommissionSettingsResponse,
)


router = APIRouter()


@router.get('')
@Logger.io
async def get_commission_settings(
    use_case: GetCommissionSettingsUseCase = Depends(GetCommissionSettingsUseCase.depends),
) -> CommissionSettingsResponse:
    commission_settings = await use_case.get()
    return CommissionSettingsResponse.from_entity(commission_settings)


@router.put('')
@Logger.io
async def update_commission_settings(
    request: CommissionSettingsRequest,
    caller: Caller = Depends(require_admin),
    use_case: UpdateCommissionSettingsUseCase = Depends(UpdateCommissionSettingsUseCase.depends),
) -> CommissionSettingsResponse:
    commission_settings = await use_case.update(
        default_rate=request.default_rate, category_rates=request.category_rates
    )
    return CommissionSettingsResponse.from_entity(commission_settings)
