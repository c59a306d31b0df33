"""Tests for the org chart builder and text rendering."""

import pytest

from stakeholder_mapper.core.errors import HierarchyCycleError, UnknownParentError
from stakeholder_mapper.modules.stakeholders.hierarchy import build_hierarchy, render_text


def _names(nodes) -> list[str]:
    return [n.stakeholder.name for n in nodes]


def test_dangling_reference_is_dropped(make_stakeholder):
    records = [
        make_stakeholder(name="A", reports_to=""),
        make_stakeholder(name="B", reports_to="A"),
        make_stakeholder(name="C", reports_to="Z"),
    ]
    chart = build_hierarchy(records)

    assert _names(chart.roots) == ["A"]
    assert _names(chart.roots[0].children) == ["B"]
    assert "C" not in [n.stakeholder.name for n in chart.walk()]
    assert [s.name for s in chart.orphans] == ["C"]


def test_none_and_empty_reports_to_are_roots(make_stakeholder):
    chart = build_hierarchy([
        make_stakeholder(name="A", reports_to=None),
        make_stakeholder(name="B", reports_to=""),
    ])
    assert _names(chart.roots) == ["A", "B"]


def test_depths_and_display_order(make_stakeholder):
    records = [
        make_stakeholder(name="CEO"),
        make_stakeholder(name="CFO", reports_to="CEO"),
        make_stakeholder(name="Controller", reports_to="CFO"),
        make_stakeholder(name="CTO", reports_to="CEO"),
    ]
    chart = build_hierarchy(records)

    walked = [(n.stakeholder.name, n.depth) for n in chart.walk()]
    assert walked == [("CEO", 0), ("CFO", 1), ("Controller", 2), ("CTO", 1)]


def test_reports_of_an_orphan_are_not_rendered(make_stakeholder):
    records = [
        make_stakeholder(name="A"),
        make_stakeholder(name="C", reports_to="Gone"),
        make_stakeholder(name="D", reports_to="C"),
    ]
    chart = build_hierarchy(records)
    assert _names(chart.walk()) == ["A"]


def test_self_reference_raises_cycle(make_stakeholder):
    with pytest.raises(HierarchyCycleError) as exc_info:
        build_hierarchy([make_stakeholder(name="A", reports_to="A")])
    assert exc_info.value.detail == {"stakeholders": ["A"]}


def test_mutual_reference_raises_cycle(make_stakeholder):
    records = [
        make_stakeholder(name="Root"),
        make_stakeholder(name="A", reports_to="B"),
        make_stakeholder(name="B", reports_to="A"),
    ]
    with pytest.raises(HierarchyCycleError) as exc_info:
        build_hierarchy(records)
    assert sorted(exc_info.value.detail["stakeholders"]) == ["A", "B"]
    assert "->" in exc_info.value.message


def test_strict_mode_rejects_unknown_parent(make_stakeholder):
    records = [make_stakeholder(name="A"), make_stakeholder(name="C", reports_to="Z")]
    with pytest.raises(UnknownParentError):
        build_hierarchy(records, strict=True)


def test_duplicate_names_resolve_to_first(make_stakeholder):
    first = make_stakeholder(name="Sam", title="VP Sales")
    second = make_stakeholder(name="Sam", title="VP Ops")
    report = make_stakeholder(name="Kim", reports_to="Sam")
    chart = build_hierarchy([first, second, report])

    assert chart.roots[0].stakeholder.id == first.id
    assert _names(chart.roots[0].children) == ["Kim"]
    assert chart.roots[1].children == []


def test_long_chain_does_not_recurse(make_stakeholder):
    records = [make_stakeholder(name="P0")]
    records += [make_stakeholder(name=f"P{i}", reports_to=f"P{i - 1}") for i in range(1, 3000)]
    chart = build_hierarchy(records)
    assert max(n.depth for n in chart.walk()) == 2999
    assert render_text(chart).count("\n") == 2999


def test_render_text_indents_by_depth(make_stakeholder):
    records = [
        make_stakeholder(name="Ann", title="CEO", department="Executive"),
        make_stakeholder(name="Bob", title="CFO", department="Finance", reports_to="Ann"),
        make_stakeholder(name="Cy", title="Analyst", reports_to="Bob"),
    ]
    assert render_text(build_hierarchy(records)) == (
        "Ann - CEO (Executive)\n"
        "  Bob - CFO (Finance)\n"
        "    Cy - Analyst"
    )


def test_empty_list():
    chart = build_hierarchy([])
    assert chart.roots == []
    assert render_text(chart) == ""
