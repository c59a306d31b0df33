"""Structured report: the snapshot serialized as indented JSON."""

import json

from stakeholder_mapper.modules.reporting.generators.base import BaseReportGenerator
from stakeholder_mapper.modules.reporting.schemas import ReportSnapshot


class JSONReportGenerator(BaseReportGenerator):
    """``{date, stakeholders, analysis, contact}`` as a downloadable file."""

    FILE_EXTENSION = "json"
    CONTENT_TYPE = "application/json"

    def generate(self, snapshot: ReportSnapshot) -> tuple[bytes, str]:
        payload = snapshot.model_dump(mode="json", by_alias=True)
        return json.dumps(payload, indent=2, ensure_ascii=False).encode("utf-8"), self.CONTENT_TYPE
