import pytest

from graph2pipe.core.models import Connection, PipelineGraph, StageData, StageNode
from graph2pipe.core.services.builders.pipeline import build_pipeline, linearize, summarize_pipeline


def node(node_id: str, kind: str) -> StageNode:
    return StageNode(id=node_id, data=StageData(kind=kind))


def edge(source: str, target: str) -> Connection:
    return Connection(id=f"{source}->{target}", source=source, target=target)


class TestLinearize:

    def test_no_start_node_gives_empty_sequence(self):
        nodes = [node("a", "build_npm"), node("b", "deploy")]
        assert linearize(nodes, [edge("a", "b")]) == []

    def test_single_start_without_edges(self):
        start = node("s", "start")
        assert linearize([start], []) == [start]

    @pytest.mark.parametrize("length", [1, 2, 5, 12])
    def test_chain_is_returned_in_order(self, make_chain, length):
        datas = [StageData(kind="start")] + [StageData(kind="build_npm")] * (length - 1)
        graph = make_chain(*datas)
        ordered = linearize(graph.nodes, graph.edges)
        assert [n.id for n in ordered] == [f"n{i}" for i in range(length)]

    def test_chain_order_does_not_depend_on_node_list_order(self):
        nodes = [node("c", "deploy"), node("b", "build_npm"), node("s", "start")]
        edges = [edge("b", "c"), edge("s", "b")]
        assert [n.id for n in linearize(nodes, edges)] == ["s", "b", "c"]

    @pytest.mark.parametrize("k", [1, 2, 3])
    def test_branch_at_position_k_truncates_to_first_k(self, k):
        ids = ["s", "a", "b", "c", "d"]
        nodes = [node("s", "start")] + [node(i, "build_npm") for i in ids[1:]] + [node("x", "deploy")]
        edges = [edge(ids[i], ids[i + 1]) for i in range(len(ids) - 1)]
        # второй исход из k-го узла
        edges.append(edge(ids[k - 1], "x"))
        ordered = linearize(nodes, edges)
        assert [n.id for n in ordered] == ids[:k]

    def test_cycle_stops_without_repeating(self):
        nodes = [node("s", "start"), node("a", "build_npm"), node("b", "deploy")]
        edges = [edge("s", "a"), edge("a", "b"), edge("b", "a")]
        assert [n.id for n in linearize(nodes, edges)] == ["s", "a", "b"]

    def test_self_loop(self):
        nodes = [node("s", "start")]
        assert [n.id for n in linearize(nodes, [edge("s", "s")])] == ["s"]

    def test_dangling_edge_stops(self):
        nodes = [node("s", "start"), node("a", "build_npm")]
        edges = [edge("s", "a"), edge("a", "missing")]
        assert [n.id for n in linearize(nodes, edges)] == ["s", "a"]

    def test_merge_into_node_is_followed(self):
        # два входа в b допустимы, ветвление только по исходящим
        nodes = [node("s", "start"), node("a", "build_npm"), node("b", "deploy"), node("z", "notify_slack")]
        edges = [edge("s", "b"), edge("a", "b"), edge("b", "z")]
        assert [n.id for n in linearize(nodes, edges)] == ["s", "b", "z"]

    def test_first_start_node_wins(self):
        nodes = [node("s1", "start"), node("s2", "start")]
        assert [n.id for n in linearize(nodes, [])] == ["s1"]

    def test_inputs_are_not_mutated(self, make_chain):
        graph = make_chain(StageData(kind="start"), StageData(kind="deploy"))
        before = graph.model_dump()
        linearize(graph.nodes, graph.edges)
        assert graph.model_dump() == before


class TestBuildPipeline:

    def test_warns_without_start(self):
        ordered, logs, warnings = build_pipeline(PipelineGraph(nodes=[node("a", "deploy")]))
        assert ordered == []
        assert logs
        assert any("start" in w for w in warnings)

    def test_branch_warning_and_skipped_nodes(self):
        graph = PipelineGraph(
            nodes=[node("s", "start"), node("a", "build_npm"), node("b", "deploy")],
            edges=[edge("s", "a"), edge("s", "b")],
        )
        ordered, _, warnings = build_pipeline(graph)
        assert [n.id for n in ordered] == ["s"]
        assert any("s" in w and "Ветвления" in w for w in warnings)
        assert any("a, b" in w for w in warnings)

    def test_clean_chain_has_no_warnings(self, make_chain):
        graph = make_chain(StageData(kind="start"), StageData(kind="build_npm"))
        ordered, logs, warnings = build_pipeline(graph)
        assert len(ordered) == 2
        assert warnings == []
        assert "start -> build_npm" in logs[1]


class TestSummarizePipeline:

    def test_summary_of_truncated_graph(self):
        graph = PipelineGraph(
            nodes=[node("s", "start"), node("a", "build_npm"), node("b", "deploy"), node("c", "deploy")],
            edges=[edge("s", "a"), edge("a", "b"), edge("a", "c")],
        )
        ordered = linearize(graph.nodes, graph.edges)
        summary = summarize_pipeline(graph, ordered)
        assert summary.stages_count == 2
        assert summary.stages == ["start", "build_npm"]
        assert summary.unreachable == ["b", "c"]
        assert summary.truncated_by == "branch"
        assert "branch" in summary.description

    def test_summary_of_empty_pipeline(self):
        graph = PipelineGraph(nodes=[node("a", "deploy")])
        summary = summarize_pipeline(graph, [])
        assert summary.stages_count == 0
        assert summary.truncated_by is None
        assert summary.unreachable == ["a"]

    def test_cycle_reason(self):
        graph = PipelineGraph(nodes=[node("s", "start")], edges=[edge("s", "s")])
        summary = summarize_pipeline(graph, linearize(graph.nodes, graph.edges))
        assert summary.truncated_by == "cycle"
