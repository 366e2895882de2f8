from __future__ import annotations

import pytest

from graph.cache import GraphCache
from graph.engine import DependencyGraphEngine
from models.records import CompatibilityRecord, DependencyEdge


def _engine(
    pairs: list[tuple[str, str]],
    compatibility: list[dict[str, object]] | None = None,
) -> DependencyGraphEngine:
    edges = [{"module_key": src, "depends_on": dst} for src, dst in pairs]
    return DependencyGraphEngine(edges, compatibility or [])


def test_chain_scenario() -> None:
    engine = _engine([("A", "B"), ("B", "C")])

    assert set(engine.get_module_dependencies("A")) == {"B", "C"}
    assert engine.get_installation_order(["A", "B", "C"]) == ["C", "B", "A"]


def test_dependents_are_transitive() -> None:
    engine = _engine([("A", "B"), ("B", "C"), ("D", "C")])

    assert set(engine.get_module_dependents("C")) == {"A", "B", "D"}
    assert engine.get_module_dependents("A") == []


def test_unknown_key_yields_empty_results() -> None:
    engine = _engine([("A", "B")])

    assert engine.get_module_dependencies("nope") == []
    assert engine.get_module_dependents("nope") == []
    assert engine.knows("nope") is False
    assert engine.knows("B") is True


def test_direct_dependency_implies_dependent() -> None:
    engine = _engine([("A", "B"), ("B", "C"), ("C", "D"), ("E", "B")])

    for edge in engine.graph.edges:
        assert edge.from_key in engine.get_module_dependents(edge.to)


def test_dependencies_never_contain_self_without_cycle() -> None:
    engine = _engine([("A", "B"), ("B", "C"), ("A", "C")])

    for key in engine.graph.nodes:
        assert key not in engine.get_module_dependencies(key)


def test_dependencies_contain_self_on_cycle() -> None:
    engine = _engine([("A", "B"), ("B", "A")])

    assert set(engine.get_module_dependencies("A")) == {"A", "B"}


def test_check_compatibility_is_symmetric() -> None:
    engine = _engine(
        [("A", "B")],
        [{"module_a": "A", "module_b": "B", "status": "partial", "score": 0.5}],
    )

    forward = engine.check_compatibility("A", "B")
    backward = engine.check_compatibility("B", "A")

    assert forward is not None
    assert forward == backward
    assert forward.status == "partial"


def test_check_compatibility_has_no_transitivity() -> None:
    engine = _engine(
        [],
        [
            {"module_a": "A", "module_b": "B", "status": "compatible"},
            {"module_a": "B", "module_b": "C", "status": "compatible"},
        ],
    )

    assert engine.check_compatibility("A", "C") is None


def test_installation_order_respects_dependencies_in_subset() -> None:
    engine = _engine(
        [("crm", "core"), ("crm", "contacts"), ("contacts", "core"), ("erp", "crm")]
    )

    order = engine.get_installation_order(["erp", "crm", "contacts", "core"])

    for edge in engine.graph.edges:
        if edge.from_key in order and edge.to in order:
            assert order.index(edge.to) < order.index(edge.from_key)


def test_refresh_rebuilds_from_new_snapshot() -> None:
    engine = _engine([("A", "B")])

    engine.refresh(
        [DependencyEdge(module_key="X", depends_on="Y")],
        [CompatibilityRecord(module_a="X", module_b="Y", status="testing")],
    )

    assert set(engine.graph.nodes) == {"X", "Y"}
    assert engine.check_compatibility("Y", "X") is not None
    assert engine.check_compatibility("A", "B") is None


def test_refresh_logs_cycles(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level("WARNING", logger="graph.engine"):
        engine = _engine([("A", "B"), ("B", "A")])

    assert engine.graph.has_cycles is True
    assert "cycle" in caplog.text


def test_engine_uses_shared_cache() -> None:
    cache = GraphCache()
    edges = [DependencyEdge(module_key="A", depends_on="B")]

    first = DependencyGraphEngine(edges, cache=cache)
    second = DependencyGraphEngine(edges, cache=cache)

    assert first.graph is second.graph
    assert len(cache) == 1


def test_engine_rejects_cache_with_other_core_key() -> None:
    with pytest.raises(ValueError, match="core_key"):
        DependencyGraphEngine(cache=GraphCache(core_key="base"))


def test_malformed_rows_are_skipped(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level("WARNING", logger="graph.engine"):
        engine = DependencyGraphEngine(
            [
                {
                    "module_key": "A",
                    "depends_on": "B",
                    "dependency_type": "recommended",
                },
                {"module_key": "C", "depends_on": "D", "is_active": None},
                {"module_key": "E", "depends_on": "F"},
            ],
            [
                {"module_a": "A", "module_b": "B", "status": "deprecated"},
                {"module_a": "E", "module_b": "F", "status": "compatible"},
            ],
        )

    assert set(engine.graph.nodes) == {"E", "F"}
    assert engine.check_compatibility("A", "B") is None
    assert engine.check_compatibility("F", "E") is not None
    assert "skipping malformed DependencyEdge" in caplog.text
    assert "skipping malformed CompatibilityRecord" in caplog.text
