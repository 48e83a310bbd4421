import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Optional

from stockdash import data_handler
from stockdash.aggregates import extract_rows, select_grand_total
from stockdash.api import ApiClient, RequestError
from stockdash.normalizers import normalize_rows
from stockdash.schemas import DisplayRow, ReportResult

logger = logging.getLogger(__name__)


class ReportPipeline(ABC):
    """
    Abstract base class for report pipelines (stock, COGS, valuation, ...).
    Follows an Extract -> Transform -> Load (ETL) pattern:
    fetch the payload, normalize its rows, then pick the grand total.
    """

    kind: str
    endpoint: str
    row_type: type[DisplayRow]

    def __init__(self, client: ApiClient, export: bool = False, output_dir: Optional[Path] = None):
        self.client = client
        self.export = export
        self.output_dir = output_dir

    def run(self) -> Optional[ReportResult]:
        """
        Orchestrates the pipeline execution. Returns None when the fetch
        fails; the failure is logged, never raised.
        """
        logger.info(f"🚀 STEP: {self.kind.upper()} REPORT")
        logger.info("-" * 30)

        # --- 1. EXTRACT ---
        try:
            payload = self.extract()
        except RequestError as e:
            logger.error(f"❌ Failed to fetch {self.kind} report: {e}")
            return None

        # --- 2. TRANSFORM ---
        rows = self.transform(payload)

        # --- 3. LOAD ---
        result = self.load(payload, rows)
        logger.info(f"✅ {self.kind.capitalize()} Pipeline Finished ({len(rows)} rows).")
        return result

    def extract(self) -> Any:
        return self.client.get(self.endpoint)

    @abstractmethod
    def transform(self, payload: Any) -> list[DisplayRow]:
        """Maps the raw payload onto typed display rows. Must not raise."""

    def grand_total(self, payload: Any, rows: list[DisplayRow]) -> float:
        return select_grand_total(self.kind, payload, rows)

    def load(self, payload: Any, rows: list[DisplayRow]) -> ReportResult:
        total = self.grand_total(payload, rows)
        logger.info(f"Grand total: {total}")

        if self.export:
            if rows:
                data_handler.save_outputs(rows, self.row_type, f"{self.kind}_report", self.output_dir)
            else:
                logger.warning("No data to save to disk.")

        return ReportResult(kind=self.kind, rows=rows, grand_total=total)


class EnvelopeReportPipeline(ReportPipeline):
    """Reports served as a bare list or a `{rows, ...}` envelope."""

    @staticmethod
    @abstractmethod
    def normalizer(raw, index: int) -> DisplayRow:
        """Per-row normalizer for this report."""

    def transform(self, payload: Any) -> list[DisplayRow]:
        return normalize_rows(extract_rows(payload), self.normalizer)
