import pytest

from unigraph.compose.conflicts import EdgeConflict, NodeConflict, merge_spatial_hints
from unigraph.config.settings import CompositionOptions, ConflictResolution
from unigraph.graph.graph_errors import (
    ConflictDetected,
    EdgeValidationFailed,
    NothingToCompose,
)
from unigraph.graph.graph_schema import EdgeData, NodeData, Variant
from unigraph.graph.registry import GraphRegistry
from unigraph.graph.unified_graph import UnifiedGraph


def _people() -> tuple:
    g1 = UnifiedGraph.create("g1", Variant.CONTEXT, "one")
    g1.add_node("n1", NodeData(type_tag="person", attributes={"name": "Alice"}))
    g1.add_node("n2", NodeData(type_tag="person", attributes={"name": "Bob"}))
    g1.add_edge("e1", "n1", "n2", EdgeData(type_tag="knows", attributes={"since": 2019}))

    g2 = UnifiedGraph.create("g2", Variant.CONCEPT, "two")
    g2.add_node("n1", NodeData(type_tag="person", attributes={"role": "Engineer"}))
    g2.add_node("n3", NodeData(type_tag="team", attributes={"name": "Core"}))
    g2.add_edge("e1", "n1", "n3", EdgeData(type_tag="member_of", attributes={"since": 2021}))
    return g1, g2


def test_merge_unions_attributes(composer):
    g1, g2 = _people()

    result = composer.compose(
        [g1, g2], "context", CompositionOptions(conflict_resolution=ConflictResolution.MERGE)
    )

    assert result.variant is Variant.CONTEXT
    assert result.get_node("n1").attributes == {"name": "Alice", "role": "Engineer"}
    assert result.list_nodes() == ["n1", "n2", "n3"]

    source, target, data = result.get_edge("e1")
    assert (source, target) == ("n1", "n3")
    assert data.type_tag == "member_of"
    assert data.attributes == {"since": 2021}


def test_merge_takes_incoming_type_and_value(composer):
    g1 = UnifiedGraph.create("g1", Variant.CONTEXT, "one")
    g1.add_node("n", NodeData(type_tag="draft", spatial_hint=(0.0, 0.0, 0.0), attributes={"v": 1, "a": 1}))
    g2 = UnifiedGraph.create("g2", Variant.CONTEXT, "two")
    g2.add_node("n", NodeData(type_tag="final", spatial_hint=(2.0, 4.0, 6.0), attributes={"v": 2}))

    result = composer.compose(
        [g1, g2], Variant.CONTEXT, CompositionOptions(conflict_resolution="merge")
    )

    node = result.get_node("n")
    assert node.type_tag == "final"
    assert node.attributes == {"v": 2, "a": 1}
    assert node.spatial_hint == (1.0, 2.0, 3.0)


def test_keep_first_keeps_first_graph_exactly(composer):
    g1, g2 = _people()

    result = composer.compose(
        [g1, g2], Variant.CONTEXT, CompositionOptions(conflict_resolution=ConflictResolution.KEEP_FIRST)
    )

    assert result.get_node("n1").attributes == {"name": "Alice"}
    assert result.get_edge("e1")[:2] == ("n1", "n2")


def test_keep_last_overwrites(composer):
    g1, g2 = _people()

    result = composer.compose(
        [g1, g2], Variant.CONTEXT, CompositionOptions(conflict_resolution=ConflictResolution.KEEP_LAST)
    )

    assert result.get_node("n1").attributes == {"role": "Engineer"}
    assert result.get_edge("e1")[:2] == ("n1", "n3")
    assert result.list_nodes() == ["n1", "n2", "n3"]


def test_fail_policy_aborts_with_conflict(composer):
    g1, g2 = _people()
    registry = GraphRegistry()
    composer.registry = registry

    with pytest.raises(ConflictDetected) as excinfo:
        composer.compose(
            [g1, g2], Variant.CONTEXT, CompositionOptions(conflict_resolution=ConflictResolution.FAIL)
        )

    assert excinfo.value.element_id == "n1"
    assert excinfo.value.kind == "node"
    assert excinfo.value.graphs == ("g1", "g2")
    assert len(registry) == 0


def test_fail_is_the_default_policy(composer):
    g1, g2 = _people()

    with pytest.raises(ConflictDetected):
        composer.compose([g1, g2], Variant.CONTEXT)


def test_prefixes_avoid_collisions(composer):
    g1, g2 = _people()
    options = CompositionOptions(id_mappings={"g1": "a/", "g2": "b/"})

    result = composer.compose([g1, g2], Variant.WORKFLOW, options)

    assert result.list_nodes() == ["a/n1", "a/n2", "b/n1", "b/n3"]
    assert result.get_edge("b/e1")[:2] == ("b/n1", "b/n3")
    assert composer.preview_conflicts([g1, g2], id_mappings=options.id_mappings) == []


def test_prefix_on_one_graph_only(composer):
    g1, g2 = _people()

    result = composer.compose([g1, g2], Variant.CONTEXT, CompositionOptions(id_mappings={"g2": "x-"}))

    assert result.list_nodes() == ["n1", "n2", "x-n1", "x-n3"]
    assert result.list_edges() == ["e1", "x-e1"]


def _with_dangling_edge() -> UnifiedGraph:
    graph = UnifiedGraph.create("g5", Variant.CONTEXT, "five")
    graph.add_node("n1", NodeData(type_tag="person"))
    graph.add_node("ghost", NodeData(type_tag="person"))
    graph.add_edge("haunt", "n1", "ghost", EdgeData(type_tag="knows"))
    # Corrupt the store behind the facade so the edge index outlives its endpoint.
    graph._store._graph.remove_node("ghost")
    return graph


def test_dangling_edge_fails_validation(composer):
    g1, _ = _people()
    registry = GraphRegistry()
    composer.registry = registry

    with pytest.raises(EdgeValidationFailed) as excinfo:
        composer.compose(
            [g1, _with_dangling_edge()],
            Variant.CONTEXT,
            CompositionOptions(id_mappings={"g5": "d-"}),
        )

    assert excinfo.value.edge_id == "d-haunt"
    assert excinfo.value.missing == ["d-ghost"]
    assert len(registry) == 0


def test_dangling_edge_omitted_without_validation(composer):
    g1, _ = _people()

    result = composer.compose(
        [g1, _with_dangling_edge()],
        Variant.CONTEXT,
        CompositionOptions(id_mappings={"g5": "d-"}, validate_edges=False),
    )

    assert result.list_edges() == ["e1"]
    assert result.list_nodes() == ["n1", "n2", "d-n1"]


def test_zero_graphs_rejected(composer):
    with pytest.raises(NothingToCompose):
        composer.compose([], Variant.CONTEXT)


def test_preview_conflicts_matches_fail_set(composer):
    g1, g2 = _people()

    conflicts = composer.preview_conflicts([g1, g2])

    assert conflicts == [
        ("n1", NodeConflict("n1", "g1", "g2")),
        ("e1", EdgeConflict("e1", "g1", "g2")),
    ]

    # Resolving the node collision leaves the edge one as the abort reason.
    g2.remove_node("n1")
    g2.add_node("m1", NodeData(type_tag="person"))
    g2.add_edge("e1", "m1", "n3", EdgeData(type_tag="member_of"))

    assert [key for key, _ in composer.preview_conflicts([g1, g2])] == ["e1"]
    with pytest.raises(ConflictDetected) as excinfo:
        composer.compose([g1, g2], Variant.CONTEXT)
    assert excinfo.value.kind == "edge"
    assert excinfo.value.element_id == "e1"


def test_preview_does_not_mutate_inputs(composer):
    g1, g2 = _people()

    composer.preview_conflicts([g1, g2])

    assert g1.list_nodes() == ["n1", "n2"]
    assert g2.list_nodes() == ["n1", "n3"]


def test_three_way_collisions_reported_per_occurrence(composer):
    graphs = []
    for graph_id in ("a", "b", "c"):
        graph = UnifiedGraph.create(graph_id, Variant.CONTEXT, graph_id)
        graph.add_node("shared", NodeData(type_tag="t", attributes={"from": graph_id}))
        graphs.append(graph)

    conflicts = composer.preview_conflicts(graphs)
    assert conflicts == [
        ("shared", NodeConflict("shared", "a", "b")),
        ("shared", NodeConflict("shared", "a", "c")),
    ]

    result = composer.compose(graphs, Variant.CONCEPT, CompositionOptions(conflict_resolution="keep_last"))
    assert result.get_node("shared").attributes == {"from": "c"}


def test_output_is_independent_of_inputs(composer):
    g1, g2 = _people()
    result = composer.compose(
        [g1, g2], Variant.CONTEXT, CompositionOptions(conflict_resolution=ConflictResolution.MERGE)
    )

    g1.remove_node("n1")
    g2.update_metadata(display_name="changed")

    assert result.get_node("n1").attributes == {"name": "Alice", "role": "Engineer"}
    assert result.metadata.attributes["composed_from"] == ["g1", "g2"]


def test_composed_output_is_registered(config):
    from unigraph.compose.composer import CompositionEngine

    registry = GraphRegistry()
    engine = CompositionEngine(config=config, registry=registry)
    g1, g2 = _people()

    result = engine.compose(
        [g1, g2],
        Variant.IPLD,
        CompositionOptions(conflict_resolution="keep_first", graph_id="merged", name="Merged"),
    )

    assert result.graph_id == "merged"
    assert result.name == "Merged"
    assert "merged" in registry


def test_merge_spatial_hints():
    assert merge_spatial_hints(None, (1.0, 1.0, 1.0)) == (1.0, 1.0, 1.0)
    assert merge_spatial_hints((1.0, 1.0, 1.0), None) == (1.0, 1.0, 1.0)
    assert merge_spatial_hints(None, None) is None
    assert merge_spatial_hints((0.0, 2.0, -2.0), (2.0, 0.0, 2.0)) == (1.0, 1.0, 0.0)
