"""Org chart builder: reports-to names -> forest of stakeholder nodes.

Names are resolved to ids once, then the forest is built from an id-keyed
parent mapping. Reporting cycles are detected up front and raised as
HierarchyCycleError, so no walk below can loop.

Known limitation: when two stakeholders share a name, reports-to references
resolve to the first one in display order.
"""

from __future__ import annotations

import uuid
from collections import defaultdict
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field

import structlog

from stakeholder_mapper.core.errors import HierarchyCycleError, UnknownParentError
from stakeholder_mapper.modules.stakeholders.schemas import Stakeholder

logger = structlog.get_logger()

INDENT = "  "


@dataclass
class OrgNode:
    stakeholder: Stakeholder
    depth: int
    children: list[OrgNode] = field(default_factory=list)


@dataclass
class OrgChart:
    roots: list[OrgNode]
    # Stakeholders whose reports-to name matches nobody; not rendered.
    orphans: list[Stakeholder] = field(default_factory=list)

    def walk(self) -> Iterator[OrgNode]:
        """Depth-first, pre-order, roots and children in display order."""
        stack = list(reversed(self.roots))
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))


def _find_cycle(parent_of: dict[uuid.UUID, uuid.UUID | None]) -> list[uuid.UUID] | None:
    """Return the ids forming a reporting cycle, or None."""
    settled: set[uuid.UUID] = set()
    for start in parent_of:
        path: list[uuid.UUID] = []
        on_path: set[uuid.UUID] = set()
        node: uuid.UUID | None = start
        while node is not None and node not in settled:
            if node in on_path:
                return path[path.index(node):]
            on_path.add(node)
            path.append(node)
            node = parent_of.get(node)
        settled.update(path)
    return None


def build_hierarchy(stakeholders: Sequence[Stakeholder], strict: bool = False) -> OrgChart:
    """Group stakeholders under the stakeholder their ``reports_to`` names.

    Stakeholders with an empty reports-to are roots. A reports-to naming no
    one drops that stakeholder (and anyone below it) from the chart; with
    ``strict`` it raises UnknownParentError instead.
    """
    by_id = {s.id: s for s in stakeholders}
    id_by_name: dict[str, uuid.UUID] = {}
    for s in stakeholders:
        id_by_name.setdefault(s.name, s.id)

    parent_of: dict[uuid.UUID, uuid.UUID | None] = {}
    orphans: list[Stakeholder] = []
    for s in stakeholders:
        if not s.reports_to:
            parent_of[s.id] = None
            continue
        parent_id = id_by_name.get(s.reports_to)
        if parent_id is None:
            if strict:
                raise UnknownParentError(
                    f"{s.name} reports to '{s.reports_to}', who is not on the map.",
                    detail={"stakeholder_id": str(s.id), "reports_to": s.reports_to},
                )
            orphans.append(s)
            continue
        parent_of[s.id] = parent_id

    cycle = _find_cycle(parent_of)
    if cycle:
        names = [by_id[i].name for i in cycle]
        raise HierarchyCycleError(
            "Reporting cycle detected: " + " -> ".join(names + names[:1]),
            detail={"stakeholders": names},
        )

    children_of: dict[uuid.UUID, list[Stakeholder]] = defaultdict(list)
    root_records: list[Stakeholder] = []
    for s in stakeholders:
        if s.id not in parent_of:
            continue
        parent_id = parent_of[s.id]
        if parent_id is None:
            root_records.append(s)
        else:
            children_of[parent_id].append(s)

    roots = [OrgNode(stakeholder=s, depth=0) for s in root_records]
    stack = list(roots)
    while stack:
        node = stack.pop()
        for child in children_of.get(node.stakeholder.id, []):
            child_node = OrgNode(stakeholder=child, depth=node.depth + 1)
            node.children.append(child_node)
            stack.append(child_node)

    if orphans:
        logger.debug("org_chart_orphans", count=len(orphans))
    return OrgChart(roots=roots, orphans=orphans)


def _label(s: Stakeholder) -> str:
    label = f"{s.name} - {s.title}"
    if s.department:
        label += f" ({s.department})"
    return label


def render_text(chart: OrgChart) -> str:
    """Indented plain-text org chart, two spaces per level."""
    return "\n".join(f"{INDENT * node.depth}{_label(node.stakeholder)}" for node in chart.walk())
