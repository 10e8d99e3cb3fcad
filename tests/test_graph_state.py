"""Tests for the in-memory graph state."""
from __future__ import annotations

import pytest
from dataclasses import FrozenInstanceError

from plantflow.domain.commands import ConnectNodes, DeleteNode, MoveNode
from plantflow.domain.entities import Edge, Node, Position
from plantflow.domain.errors import UnknownKindError, UnknownNodeError, ValidationError


class TestAddNode:
    """Test dropping entities onto the canvas."""

    def test_add_node_applies_schema_defaults(self, state):
        """Test a new node is labelled, coloured and carries empty defaults."""
        node = state.add_node("station", Position(10, 20))

        assert node.id == "station_000001"
        assert node.kind == "station"
        assert node.label == "Station"
        assert node.color == "#FF9800"
        assert node.position == Position(10, 20)
        assert dict(node.values) == {"processing_time": "", "capacity": "", "routing_strategy": ""}
        assert state.nodes == (node,)

    def test_add_node_normalizes_kind(self, state):
        """Test the stored type key is lowercase whatever the caller sent."""
        node = state.add_node("CONVEYOR", Position())
        assert node.kind == "conveyor"
        assert node.id.startswith("conveyor_")

    def test_router_gets_default_routing(self, state):
        """Test a router starts with a routing strategy already chosen."""
        node = state.add_node("router", Position())
        assert node.values["routing_strategy"] == "round_robin"

    def test_unknown_kind_rejected(self, state):
        """Test unknown kinds never enter the graph."""
        with pytest.raises(UnknownKindError):
            state.add_node("robot", Position())
        assert state.nodes == ()

    def test_ids_are_unique(self, registry):
        """Test the default id factory never repeats."""
        from plantflow.domain.graph_state import GraphState

        real = GraphState(registry)
        ids = {real.add_node("source", Position()).id for _ in range(50)}
        assert len(ids) == 50


class TestRemoveNode:
    """Test node deletion."""

    def test_remove_node_cascades_edges(self, state, sample_graph):
        """Test removing a node drops every edge touching it."""
        source, station, drain = sample_graph

        state.remove_node(station.id)

        assert [node.id for node in state.nodes] == [source.id, drain.id]
        assert state.edges == ()

    def test_remove_keeps_unrelated_edges(self, state, sample_graph):
        """Test edges between other nodes survive."""
        source, station, drain = sample_graph
        state.remove_node(drain.id)
        assert [(e.source, e.target) for e in state.edges] == [(source.id, station.id)]

    def test_remove_absent_node_is_noop(self, state, sample_graph):
        """Test deleting an unknown id changes nothing and does not raise."""
        before = state.snapshot()
        state.remove_node("ghost")
        assert state.snapshot() == before


class TestConnect:
    """Test edge creation."""

    def test_connect_appends_edge(self, state, sample_graph):
        """Test connect records source and target."""
        source, _, drain = sample_graph
        edge = state.connect(source.id, drain.id)
        assert edge.id.startswith("edge_")
        assert state.edges[-1] == edge

    def test_duplicate_edges_are_kept(self, state, sample_graph):
        """Test connecting the same pair twice yields two edges."""
        source, station, _ = sample_graph
        state.connect(source.id, station.id)
        pairs = [(e.source, e.target) for e in state.edges]
        assert pairs.count((source.id, station.id)) == 2

    def test_dangling_edge_is_accepted_but_not_valid(self, state, sample_graph):
        """Test edges to missing nodes are stored and filtered on read."""
        source, _, _ = sample_graph
        dangling = state.connect(source.id, "ghost")
        assert dangling in state.edges
        assert dangling not in state.valid_edges()


class TestUpdates:
    """Test position and property updates."""

    def test_update_properties_merges(self, state):
        """Test a partial update leaves other keys untouched."""
        node = state.add_node("station", Position())
        state.update_node_properties(node.id, {"processing_time": "5"})
        updated = state.update_node_properties(node.id, {"capacity": "2"})

        assert updated.values["processing_time"] == "5"
        assert updated.values["capacity"] == "2"
        assert updated.values["routing_strategy"] == ""

    def test_update_properties_unknown_node(self, state):
        """Test updating a missing node raises UnknownNodeError."""
        with pytest.raises(UnknownNodeError, match="ghost"):
            state.update_node_properties("ghost", {"capacity": "1"})

    @pytest.mark.parametrize("key", ["label", "color"])
    def test_update_properties_rejects_display_keys(self, state, key):
        """Test display fields cannot be shadowed by a property value."""
        node = state.add_node("station", Position())
        with pytest.raises(ValidationError, match=key):
            state.update_node_properties(node.id, {"capacity": "2", key: "Lathe"})
        assert state.get_node(node.id) == node

    def test_update_position(self, state):
        """Test moving a node only changes its position."""
        node = state.add_node("drain", Position())
        moved = state.update_node_position(node.id, Position(5.5, -3))
        assert moved.position == Position(5.5, -3)
        assert moved.values == node.values

    def test_update_position_unknown_node(self, state):
        """Test moving a missing node raises UnknownNodeError."""
        with pytest.raises(UnknownNodeError):
            state.update_node_position("ghost", Position())

    def test_repeated_ids_all_updated(self, state):
        """Test every node sharing an imported id receives the change."""
        twin = Node(id="dup", kind="drain", values={"capacity": ""})
        state.replace([twin, twin], [])
        state.update_node_properties("dup", {"capacity": "3"})
        assert [node.values["capacity"] for node in state.nodes] == ["3", "3"]


class TestSnapshots:
    """Test snapshot immutability."""

    def test_snapshot_does_not_follow_later_mutations(self, state, sample_graph):
        """Test earlier snapshots are unaffected by mutations."""
        source, _, _ = sample_graph
        snapshot = state.snapshot()
        state.update_node_properties(source.id, {"interval": "99"})
        state.remove_node(source.id)

        assert snapshot.nodes[0].values["interval"] == "5"
        assert len(snapshot.nodes) == 3

    def test_nodes_are_frozen(self, state):
        """Test nodes and their values cannot be changed in place."""
        node = state.add_node("drain", Position())
        with pytest.raises(FrozenInstanceError):
            node.label = "other"
        with pytest.raises(TypeError):
            node.values["capacity"] = "1"


class TestDispatch:
    """Test central command dispatch."""

    def test_dispatch_delete(self, state, sample_graph):
        """Test Delete removes the node and its edges."""
        _, station, _ = sample_graph
        state.dispatch(DeleteNode(node_id=station.id))
        assert not state.has_node(station.id)
        assert state.edges == ()

    def test_dispatch_move(self, state, sample_graph):
        """Test Move updates the node position."""
        source, _, _ = sample_graph
        state.dispatch(MoveNode(node_id=source.id, position=Position(1, 2)))
        assert state.get_node(source.id).position == Position(1, 2)

    def test_dispatch_connect(self, state, sample_graph):
        """Test Connect adds an edge."""
        source, _, drain = sample_graph
        edge = state.dispatch(ConnectNodes(source_id=source.id, target_id=drain.id))
        assert isinstance(edge, Edge)
        assert edge in state.edges

    def test_dispatch_unsupported(self, state):
        """Test unknown command objects are rejected."""
        with pytest.raises(ValidationError):
            state.dispatch("Delete")
