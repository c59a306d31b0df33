"""Report generators: JSON data file, printable HTML document."""

from stakeholder_mapper.modules.reporting.generators.html_generator import HTMLReportGenerator
from stakeholder_mapper.modules.reporting.generators.json_generator import JSONReportGenerator

__all__ = ["JSONReportGenerator", "HTMLReportGenerator"]
