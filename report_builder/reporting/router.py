"""API router for ad-hoc report previews and exports."""

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from report_builder.core.dependencies import CatalogDep
from report_builder.core.exceptions import DatasetNotFoundError, ReportConfigurationError
from report_builder.query.schemas import ReportConfiguration
from report_builder.reporting.schemas import (
    ConfigImportRequest,
    ConfigImportResponse,
    ExportArtifact,
    QueryTextResponse,
    ReportPreview,
)
from report_builder.reporting.service import ReportService

router = APIRouter(prefix="/reports", tags=["reporting"])


# Dependency functions
def get_report_service(catalog: CatalogDep) -> ReportService:
    return ReportService(catalog)


def _to_http_error(error: Exception) -> HTTPException:
    if isinstance(error, DatasetNotFoundError):
        return HTTPException(status_code=404, detail=str(error))
    return HTTPException(status_code=400, detail=str(error))


def _download(artifact: ExportArtifact) -> Response:
    return Response(
        content=artifact.content,
        media_type=artifact.media_type,
        headers={"Content-Disposition": f"attachment; filename={artifact.filename}"},
    )


# ===== PREVIEW ENDPOINTS =====


@router.post("/preview", response_model=ReportPreview)
async def preview_report(
    config: ReportConfiguration, service: ReportService = Depends(get_report_service)
) -> ReportPreview:
    """Run a report configuration and return the result table with its query text."""
    try:
        return await service.preview(config)
    except (DatasetNotFoundError, ReportConfigurationError) as e:
        raise _to_http_error(e)


@router.post("/preview-sql", response_model=QueryTextResponse)
async def preview_report_sql(
    config: ReportConfiguration, service: ReportService = Depends(get_report_service)
) -> QueryTextResponse:
    """Render the display-only query text for a configuration."""
    try:
        return QueryTextResponse(sql=await service.preview_sql(config))
    except DatasetNotFoundError as e:
        raise _to_http_error(e)


# ===== EXPORT ENDPOINTS =====


@router.post("/export-csv")
async def export_to_csv(
    config: ReportConfiguration, service: ReportService = Depends(get_report_service)
) -> Response:
    """Download the previewed result table as CSV."""
    try:
        return _download(await service.export_csv(config))
    except (DatasetNotFoundError, ReportConfigurationError) as e:
        raise _to_http_error(e)


@router.post("/export-xlsx")
async def export_to_xlsx(
    config: ReportConfiguration, service: ReportService = Depends(get_report_service)
) -> Response:
    """Download the previewed result table as an Excel workbook."""
    try:
        return _download(await service.export_xlsx(config))
    except (DatasetNotFoundError, ReportConfigurationError) as e:
        raise _to_http_error(e)


@router.post("/export-config")
async def export_config(
    config: ReportConfiguration, service: ReportService = Depends(get_report_service)
) -> Response:
    """Download the report configuration as a JSON document."""
    try:
        return _download(await service.export_config(config))
    except (DatasetNotFoundError, ReportConfigurationError) as e:
        raise _to_http_error(e)


@router.post("/import-config", response_model=ConfigImportResponse)
async def import_config(
    request: ConfigImportRequest, service: ReportService = Depends(get_report_service)
) -> ConfigImportResponse:
    """Load an exported configuration document and validate it against its dataset."""
    try:
        return await service.import_config(request.document)
    except (DatasetNotFoundError, ReportConfigurationError) as e:
        raise _to_http_error(e)
