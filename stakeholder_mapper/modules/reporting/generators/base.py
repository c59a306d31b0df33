"""Abstract base class for report generators."""

from abc import ABC, abstractmethod
from datetime import datetime, timezone

from stakeholder_mapper.modules.reporting.schemas import ReportSnapshot

FILENAME_PREFIX = "stakeholder-analysis"


class BaseReportGenerator(ABC):
    """Base class providing shared naming, formatting and branding helpers."""

    FILE_EXTENSION: str
    CONTENT_TYPE: str

    def __init__(self, org_settings: dict | None = None) -> None:
        org = org_settings or {}
        self.org_name: str = org.get("org_name", "StrategAI Tools")
        self.brand_color: str = org.get("brand_color", "#2563EB")
        self.generated_at: str = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M UTC")

    @abstractmethod
    def generate(self, snapshot: ReportSnapshot) -> tuple[bytes, str]:
        """Generate report bytes and content type.

        Returns:
            Tuple of (file_bytes, content_type).
        """

    def filename(self, snapshot: ReportSnapshot) -> str:
        return f"{FILENAME_PREFIX}-{snapshot.date.isoformat()}.{self.FILE_EXTENSION}"

    def _format_score(self, value, scale: int) -> str:
        return f"{value}/{scale}"

    def _format_average(self, value: float) -> str:
        return f"{value:.1f}"
