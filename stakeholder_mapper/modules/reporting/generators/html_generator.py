"""Printable report generator using Jinja2 HTML rendering.

Produces a self-contained HTML document that opens the browser print dialog
on load (print-to-PDF) and closes itself afterwards. No server-side PDF
conversion is done.
"""

from jinja2 import Template

from stakeholder_mapper.modules.reporting.generators.base import BaseReportGenerator
from stakeholder_mapper.modules.reporting.schemas import ReportSnapshot
from stakeholder_mapper.modules.stakeholders.hierarchy import OrgNode, build_hierarchy

HTML_TEMPLATE = Template("""\
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <title>{{ title }}</title>
  <style>
    * { margin: 0; padding: 0; box-sizing: border-box; }
    body { font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', sans-serif; color: #1a1a1a; padding: 40px; }
    .header { background: {{ brand_color }}; color: #fff; padding: 32px; margin: -40px -40px 32px; }
    .header h1 { font-size: 28px; margin-bottom: 8px; }
    .header .meta { font-size: 14px; opacity: 0.85; }
    .section { margin-bottom: 32px; page-break-inside: avoid; }
    .section h2 { font-size: 20px; color: {{ brand_color }}; border-bottom: 2px solid {{ brand_color }}; padding-bottom: 8px; margin-bottom: 16px; }
    table { width: 100%; border-collapse: collapse; margin-bottom: 16px; }
    th { background: {{ brand_color }}; color: #fff; padding: 10px 12px; text-align: left; font-size: 13px; }
    td { padding: 8px 12px; border-bottom: 1px solid #e5e5e5; font-size: 13px; }
    tr:nth-child(even) { background: #f9f9f9; }
    .kv-table td:first-child { font-weight: 600; width: 40%; color: #555; }
    .org-tree, .org-tree ul { list-style: none; }
    .org-tree ul { margin-left: 24px; border-left: 1px dashed #bbb; padding-left: 12px; }
    .org-tree li { padding: 4px 0; font-size: 14px; }
    .org-tree .muted { color: #666; }
    .recommendations li { margin: 0 0 8px 20px; line-height: 1.5; font-size: 14px; }
    .text-content { line-height: 1.6; font-size: 14px; }
    .footer { margin-top: 48px; padding-top: 16px; border-top: 1px solid #ddd; font-size: 12px; color: #888; text-align: center; }
  </style>
</head>
<body>
  <div class="header">
    <h1>{{ title }}</h1>
    <div class="meta">
      {{ org_name }} &bull; Prepared for {{ contact.name }}{% if contact.company %}, {{ contact.company }}{% endif %}
      &bull; {{ contact.email }}
    </div>
  </div>

  <div class="section">
    <h2>Influence Analysis</h2>
    {% if summary %}
    <table class="kv-table">
      {% for key, val in summary %}
      <tr><td>{{ key }}</td><td>{{ val }}</td></tr>
      {% endfor %}
    </table>
    {% else %}
    <div class="text-content">No stakeholders mapped.</div>
    {% endif %}
  </div>

  <div class="section">
    <h2>Organizational Hierarchy</h2>
    {% if org_roots %}
    <ul class="org-tree">
      {% for node in org_roots recursive %}
      <li>
        <strong>{{ node.name }}</strong>
        <span class="muted">{{ node.title }}{% if node.department %} &middot; {{ node.department }}{% endif %}</span>
        {% if node.children %}<ul>{{ loop(node.children) }}</ul>{% endif %}
      </li>
      {% endfor %}
    </ul>
    {% else %}
    <div class="text-content">No reporting lines recorded.</div>
    {% endif %}
  </div>

  <div class="section">
    <h2>Stakeholder Profiles</h2>
    <table>
      <thead><tr>{% for h in profile_headers %}<th>{{ h }}</th>{% endfor %}</tr></thead>
      <tbody>
        {% for row in profiles %}
        <tr>{% for cell in row %}<td>{{ cell }}</td>{% endfor %}</tr>
        {% endfor %}
      </tbody>
    </table>
  </div>

  <div class="section">
    <h2>Strategic Recommendations</h2>
    {% if recommendations %}
    <ul class="recommendations">
      {% for rec in recommendations %}<li>{{ rec }}</li>{% endfor %}
    </ul>
    {% else %}
    <div class="text-content">No recommendations: the map shows no gaps.</div>
    {% endif %}
  </div>

  <div class="footer">
    {{ org_name }} &mdash; Confidential &bull; Generated {{ generated_at }}
  </div>
  {% if auto_print %}
  <script>
    window.addEventListener("afterprint", function () { window.close(); });
    window.addEventListener("load", function () { window.print(); });
  </script>
  {% endif %}
</body>
</html>
""", autoescape=True)

PROFILE_HEADERS = [
    "Name", "Title", "Department", "Influence", "Support",
    "Engagement", "Relationship", "Reports To",
]


class HTMLReportGenerator(BaseReportGenerator):
    """Self-printing HTML report (summary, org chart, profiles, recommendations)."""

    FILE_EXTENSION = "html"
    CONTENT_TYPE = "text/html"

    def __init__(self, org_settings: dict | None = None, auto_print: bool = True) -> None:
        super().__init__(org_settings)
        self.auto_print = auto_print

    def _node_to_context(self, node: OrgNode) -> dict:
        s = node.stakeholder
        return {
            "name": s.name,
            "title": s.title,
            "department": s.department,
            "children": [self._node_to_context(c) for c in node.children],
        }

    def generate(self, snapshot: ReportSnapshot) -> tuple[bytes, str]:
        analysis = snapshot.analysis
        summary = []
        if analysis is not None:
            summary = [
                ("Stakeholders Mapped", str(len(snapshot.stakeholders))),
                ("Average Influence", f"{self._format_average(analysis.avg_influence)}/10"),
                ("High Influence (7+)", f"{analysis.high_influence} stakeholders"),
                ("Average Support", f"{self._format_average(analysis.avg_support)}/10"),
                ("Supporters (6+)", f"{analysis.supporters} stakeholders"),
                ("High-Risk", f"{analysis.risks} stakeholders"),
            ]

        # Rendered from the snapshot, independent of the live org chart view.
        chart = build_hierarchy(snapshot.stakeholders)

        profiles = [
            [
                s.name,
                s.title,
                s.department or "-",
                self._format_score(s.influence, 10),
                self._format_score(s.support, 10),
                self._format_score(s.engagement, 5),
                s.relationship.value.capitalize(),
                s.reports_to or "-",
            ]
            for s in snapshot.stakeholders
        ]

        html = HTML_TEMPLATE.render(
            title=f"Stakeholder Analysis Report - {snapshot.date.isoformat()}",
            org_name=self.org_name,
            brand_color=self.brand_color,
            generated_at=self.generated_at,
            contact=snapshot.contact,
            summary=summary,
            org_roots=[self._node_to_context(n) for n in chart.roots],
            profile_headers=PROFILE_HEADERS,
            profiles=profiles,
            recommendations=list(analysis.recommendations) if analysis else [],
            auto_print=self.auto_print,
        )
        return html.encode("utf-8"), self.CONTENT_TYPE
