import logging
import threading
from typing import Optional

from stockdash.api import ApiClient
from stockdash.pipelines.registry import PIPELINE_REGISTRY
from stockdash.schemas import ReportResult

logger = logging.getLogger(__name__)


class ReportBoard:
    """
    Holds the report currently on display.

    Every fetch is tagged with a token from a monotonically increasing
    counter. A result is only committed if its token is still the latest, so
    a slow response for a report the user already switched away from can't
    overwrite the newer selection.
    """

    def __init__(self, client: ApiClient, export: bool = False):
        self.client = client
        self.export = export
        self.active: Optional[str] = None
        self.result: Optional[ReportResult] = None
        self._latest_token = 0
        self._lock = threading.Lock()

    def select(self, kind: str) -> int:
        if kind not in PIPELINE_REGISTRY:
            raise ValueError(f"Unknown report type: {kind}")
        with self._lock:
            self._latest_token += 1
            self.active = kind
            return self._latest_token

    def commit(self, token: int, result: Optional[ReportResult]) -> bool:
        """Stores `result` unless a newer fetch has started since `token` was issued."""
        with self._lock:
            if token != self._latest_token:
                logger.info(f"Discarding stale response (token {token}, latest {self._latest_token})")
                return False
            # A failed fetch clears the board rather than leaving the old report up
            self.result = result
            return True

    def show(self, kind: str) -> Optional[ReportResult]:
        token = self.select(kind)
        result = PIPELINE_REGISTRY[kind](self.client, export=self.export).run()
        self.commit(token, result)
        return result
