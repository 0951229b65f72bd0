"""
Dashboard router - patient dashboard page and JSON summary endpoints.

Architecture:
    HTTP Request → Router (this file) → PatientService → RecordLoader → record service
                                      → DashboardService → HTML / JSON

Every request is one render cycle: one fetch from the record service, one
aggregation. A failed fetch is not retried; the client reloads to try again.

Dependency Injection:
    Services are injected via FastAPI's Depends() mechanism.
    The DI chain is defined in core/dependencies.py.
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import HTMLResponse

from core.config import Settings
from core.dependencies import get_app_settings, get_dashboard_service, get_patient_service
from core.exceptions import DashboardError
from core.vital_registry import list_vitals
from schemas import DashboardSummaryResponse, VitalDefinitionResponse
from services import PatientService
from services.dashboard import DashboardService
from services.patient_lookup import find_patient

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Dashboard"])


def _resolve_patient_name(patient_name: Optional[str], settings: Settings) -> str:
    return patient_name or settings.dashboard_patient_name


# =============================================================================
# HTML
# =============================================================================

@router.get(
    "/dashboard",
    response_class=HTMLResponse,
    summary="Patient dashboard page",
    description="Fetch the patient records, select one patient by exact name and render the dashboard: "
                "blood pressure chart, vital cards, diagnostic list, profile and lab results."
)
async def get_dashboard(
    patient_name: Optional[str] = Query(None, description="Exact patient name (defaults to DASHBOARD_PATIENT_NAME)", examples=["Jessica Taylor"]),
    settings: Settings = Depends(get_app_settings),
    patient_service: PatientService = Depends(get_patient_service),
    dashboard_service: DashboardService = Depends(get_dashboard_service),
) -> HTMLResponse:
    """
    Render the dashboard page.

    Errors are rendered as pages rather than JSON:
    - 404 Not Found: no record carries the patient name
    - 502 Bad Gateway: record service answered with an error or an unreadable body,
      or the selected record cannot be read
    - 422 Unprocessable Entity: a reading carries an unrecognized level
    - 503 Service Unavailable: record service could not be reached
    """
    name = _resolve_patient_name(patient_name, settings)
    loader = patient_service.new_loader()

    try:
        records = await loader.load()
    except DashboardError:
        return HTMLResponse(
            dashboard_service.render_state_html(loader.state, loader.error),
            status_code=loader.error.status_code if loader.error else 500,
        )

    try:
        record = find_patient(records, name).require()
        html = dashboard_service.render_html(record, settings.dashboard_window_size)
    except DashboardError as e:
        logger.warning(f"Dashboard render failed: {e.detail}", extra={"patient": name})
        return HTMLResponse(dashboard_service.render_error_html(e), status_code=e.status_code)
    return HTMLResponse(html)


# =============================================================================
# JSON
# =============================================================================

@router.get(
    "/api/v1/dashboard/summary",
    response_model=DashboardSummaryResponse,
    summary="Patient dashboard data",
    description="Same data as the dashboard page as JSON: vital averages and statuses, "
                "blood pressure chart series, diagnostic list, profile and lab results."
)
async def get_dashboard_summary(
    patient_name: Optional[str] = Query(None, description="Exact patient name (defaults to DASHBOARD_PATIENT_NAME)", examples=["Jessica Taylor"]),
    settings: Settings = Depends(get_app_settings),
    patient_service: PatientService = Depends(get_patient_service),
    dashboard_service: DashboardService = Depends(get_dashboard_service),
) -> DashboardSummaryResponse:
    """
    Get the dashboard data for one patient.

    Raises (handled by setup_exception_handlers):
    - PatientNotFoundError (404)
    - RecordServiceError (502) / RecordServiceUnavailableError (503)
    - UnknownLevelError (422) for level labels outside the three known ones
    """
    name = _resolve_patient_name(patient_name, settings)
    record = await patient_service.get_patient(name)
    return dashboard_service.build_summary(record, settings.dashboard_window_size)


@router.get(
    "/api/v1/dashboard/vitals",
    response_model=List[VitalDefinitionResponse],
    summary="List vital definitions",
    description="Vital sign definitions from the registry: field paths, titles, units, colors and averaging scope."
)
async def list_vital_definitions() -> List[VitalDefinitionResponse]:
    """Get all vital definitions in registry order."""
    return [
        VitalDefinitionResponse(
            key=vital.key,
            field=vital.field,
            display_name=vital.display_name,
            unit=vital.unit,
            color=vital.color,
            scope=vital.scope,
            decimals=vital.decimals,
        )
        for vital in list_vitals().values()
    ]
