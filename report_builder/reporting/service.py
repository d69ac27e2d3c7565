# report_builder/reporting/service.py
"""Report service: previews, query text and export artifacts for ad-hoc reports."""

import logging
from typing import Optional

from pydantic import ValidationError

from report_builder.catalog.registry import CatalogRegistry
from report_builder.catalog.schemas import DatasetDefinition
from report_builder.core.exceptions import ReportConfigurationError
from report_builder.query.builder import QueryTextBuilder
from report_builder.query.engine import QueryEngine
from report_builder.query.schemas import QueryResult, ReportConfiguration
from report_builder.reporting import exporters
from report_builder.reporting.schemas import ConfigImportResponse, ExportArtifact, ReportPreview

logger = logging.getLogger(__name__)


class ReportService:
    """Runs report configurations against the catalog and packages the results."""

    def __init__(
        self,
        catalog: CatalogRegistry,
        engine: Optional[QueryEngine] = None,
        text_builder: Optional[QueryTextBuilder] = None,
    ):
        self.catalog = catalog
        self.engine = engine or QueryEngine()
        self.text_builder = text_builder or QueryTextBuilder()

    # ===== HELPERS =====

    def _get_dataset(self, config: ReportConfiguration) -> DatasetDefinition:
        return self.catalog.get(config.dataset_id)

    @staticmethod
    def table_name(dataset: DatasetDefinition) -> str:
        return dataset.name.replace(" ", "_")

    def _run(self, config: ReportConfiguration) -> QueryResult:
        dataset = self._get_dataset(config)
        result = self.engine.run(config, dataset)
        for warning in result.warnings:
            logger.warning("Report on '%s': %s", config.dataset_id, warning)
        return result

    # ===== PREVIEW =====

    async def preview(self, config: ReportConfiguration) -> ReportPreview:
        """Run the pipeline and render the query text for the same configuration."""
        dataset = self._get_dataset(config)
        result = self._run(config)
        return ReportPreview(
            dataset_id=dataset.id,
            columns=result.table.columns,
            rows=result.table.rows,
            sql=self.text_builder.render(config, self.table_name(dataset)),
            row_count=len(result.table.rows),
            filtered_row_count=result.filtered_row_count,
            warnings=result.warnings,
        )

    async def preview_sql(self, config: ReportConfiguration) -> str:
        dataset = self._get_dataset(config)
        return self.text_builder.render(config, self.table_name(dataset))

    # ===== EXPORTS =====

    async def export_csv(self, config: ReportConfiguration) -> ExportArtifact:
        result = self._run(config)
        csv_text = exporters.to_csv(result.table)
        logger.info(
            "Exported %d rows of '%s' as CSV", len(result.table.rows), config.dataset_id
        )
        return ExportArtifact(
            filename=f"preview-{config.dataset_id}.csv",
            content=csv_text.encode("utf-8"),
            media_type=exporters.CSV_MEDIA_TYPE,
        )

    async def export_xlsx(self, config: ReportConfiguration) -> ExportArtifact:
        dataset = self._get_dataset(config)
        result = self._run(config)
        content = exporters.to_xlsx(result.table, sheet_name=dataset.name)
        logger.info(
            "Exported %d rows of '%s' as XLSX", len(result.table.rows), config.dataset_id
        )
        return ExportArtifact(
            filename=f"preview-{config.dataset_id}.xlsx",
            content=content,
            media_type=exporters.XLSX_MEDIA_TYPE,
        )

    async def export_config(self, config: ReportConfiguration) -> ExportArtifact:
        # Only export configurations that would run
        self.engine.validate(config, self._get_dataset(config))
        return ExportArtifact(
            filename=f"report-config-{config.dataset_id}.json",
            content=exporters.config_to_json(config).encode("utf-8"),
            media_type=exporters.JSON_MEDIA_TYPE,
        )

    async def import_config(self, document: str) -> ConfigImportResponse:
        """Load a config document and check it against its dataset."""
        try:
            config = exporters.config_from_json(document)
        except ValidationError as e:
            raise ReportConfigurationError(f"Invalid configuration document: {e.error_count()} error(s)") from e

        dataset = self._get_dataset(config)
        self.engine.validate(config, dataset)
        return ConfigImportResponse(
            configuration=config,
            warnings=self.engine.collect_warnings(config, dataset),
        )
