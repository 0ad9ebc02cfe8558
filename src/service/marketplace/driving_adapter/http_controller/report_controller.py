from fastapi import APIRouter, Depends

from src.platform.logging.loguru_io import Logger
from src.service.marketplace.app.query.get_platform_report_use_case import (
    GetPlatformReportUseCase,
)
from src.service.marketplace.domain.entity.caller_entity import Caller
from src.service.marketplace.driving_adapter.http_controller.auth.role_auth import require_admin
from src.service.marketplace.driving_adapter.http_controller.schema.report_schema import (
    PlatformReportResponse,
)


router = APIRouter()


@router.get('/platform')
@Logger.io
async def get_platform_report(
    caller: Caller = Depends(require_admin),
    use_case: GetPlatformReportUseCase = Depends(GetPlatformReportUseCase.depends),
) -> PlatformReportResponse:
    report = await use_case.get_report(caller=caller)
    return PlatformReportResponse.from_report(report)
