import pytest

from unigraph.graph.graph_errors import DuplicateGraphId, NodeNotFound
from unigraph.graph.graph_schema import EdgeData, NodeData, Variant
from unigraph.graph.registry import GraphRegistry
from unigraph.graph.unified_graph import UnifiedGraph
from unigraph.records import EdgeRecord, GraphRecord, NodeRecord, export_graph, import_graph


def test_export_shape(chain_graph):
    chain_graph.add_node("D", NodeData(type_tag="step", spatial_hint=(1.0, 2.0, 3.0), attributes={"k": [1]}))

    record = export_graph(chain_graph)

    assert record.graph_id == "g-chain"
    assert record.variant_tag is Variant.WORKFLOW
    assert record.name == "chain"
    assert [n.id for n in record.nodes] == ["A", "B", "C", "D"]
    assert record.nodes[3].position == (1.0, 2.0, 3.0)
    assert record.nodes[3].attributes == {"k": [1]}
    assert record.nodes[0].position is None
    assert [(e.id, e.source, e.target) for e in record.edges] == [
        ("A-B", "A", "B"),
        ("B-C", "B", "C"),
    ]


def test_import_rebuilds_graph_from_plain_payload():
    record = GraphRecord.model_validate(
        {
            "graph_id": "imported",
            "variant_tag": "concept",
            "name": "ideas",
            "nodes": [
                {"id": "x", "type_tag": "idea", "position": [0, 1, 2], "attributes": {"w": 0.3}},
                {"id": "y", "type_tag": "idea"},
            ],
            "edges": [{"id": "xy", "source": "x", "target": "y", "type_tag": "relates"}],
        }
    )
    registry = GraphRegistry()

    graph = import_graph(record, registry=registry)

    assert graph.variant is Variant.CONCEPT
    assert graph.get_node("x").spatial_hint == (0.0, 1.0, 2.0)
    assert graph.get_edge("xy")[2] == EdgeData(type_tag="relates", attributes={})
    assert "imported" in registry

    with pytest.raises(DuplicateGraphId):
        import_graph(record, registry=registry)


def test_import_applies_facade_validation():
    record = GraphRecord(
        graph_id="broken",
        variant_tag=Variant.CONTEXT,
        name="broken",
        nodes=[NodeRecord(id="a", type_tag="t")],
        edges=[EdgeRecord(id="e", source="a", target="missing", type_tag="rel")],
    )

    with pytest.raises(NodeNotFound):
        import_graph(record)


def test_export_import_preserves_structure():
    graph = UnifiedGraph.create("dag", Variant.IPLD, "dag")
    graph.add_node("root", NodeData(type_tag="object", attributes={"cid": "bafy1"}))
    graph.add_node("leaf", NodeData(type_tag="object", attributes={"cid": None}))
    graph.add_edge("link", "root", "leaf", EdgeData(type_tag="child", attributes={"idx": 0}))

    restored = import_graph(export_graph(graph))

    assert list(restored.nodes()) == list(graph.nodes())
    assert list(restored.edges()) == list(graph.edges())
