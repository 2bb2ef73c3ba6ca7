import pytest

from graph2pipe.core.models import Position, StageData
from graph2pipe.core.palette import PALETTE, add_stage, initial_graph, label_for, palette_entry
from graph2pipe.core.renders.shell import generate_shell
from graph2pipe.core.stage_scripts import render


class TestLabels:

    @pytest.mark.parametrize(
        "data, label",
        [
            (StageData(kind="start"), "Start"),
            (StageData(kind="prebuild_node", manager="pnpm"), "Prebuild Node (pnpm)"),
            (StageData(kind="prebuild_node"), "Prebuild Node (npm)"),
            (StageData(kind="run_tests", test_type="e2e"), "Run Tests (e2e)"),
            (StageData(kind="deploy", environment="staging"), "Deploy (staging)"),
            (StageData(kind="docker_build"), "Docker Build"),
            (StageData(kind="lint"), "lint"),
        ],
    )
    def test_label_for(self, data, label):
        assert label_for(data) == label


class TestPalette:

    def test_every_entry_renders(self):
        for _, data in PALETTE:
            assert data.kind != "start"
            assert render(data).endswith("\n")

    def test_entry_is_a_copy(self):
        data = palette_entry("deploy")
        data.environment = "production"
        assert palette_entry("deploy").environment == "staging"

    def test_unknown_kind(self):
        assert palette_entry("lint") == StageData(kind="lint")


class TestAddStage:

    def test_initial_graph(self):
        graph = initial_graph()
        assert [n.id for n in graph.nodes] == ["start"]
        assert graph.nodes[0].position == Position(x=50, y=80)
        assert graph.edges == []

    def test_auto_connects_to_last_node(self):
        graph = add_stage(initial_graph(), palette_entry("git_clone"))
        graph = add_stage(graph, palette_entry("build_npm"))
        assert [n.id for n in graph.nodes] == ["start", "git_clone-1", "build_npm-2"]
        assert [(e.id, e.source, e.target, e.label) for e in graph.edges] == [
            ("auto-edge-start-git_clone-1", "start", "git_clone-1", "1"),
            ("auto-edge-git_clone-1-build_npm-2", "git_clone-1", "build_npm-2", "2"),
        ]
        assert graph.nodes[2].position == Position(x=500, y=200)
        assert graph.nodes[1].data.label == "Git Clone"

    def test_built_graph_generates_shell(self):
        graph = add_stage(initial_graph(), palette_entry("git_clone"))
        graph = add_stage(graph, palette_entry("prebuild_node"))
        assert generate_shell(graph.nodes, graph.edges).endswith(
            "git clone -b main https://github.com/user/repo.git\n"
            "# Prebuild Node (npm)\nnpm ci || npm install\n"
        )

    def test_first_node_has_no_edge(self):
        from graph2pipe.core.models import PipelineGraph

        graph = add_stage(PipelineGraph(), StageData(kind="start"))
        assert graph.nodes[0].id == "start-0"
        assert graph.edges == []

    def test_unique_id_on_collision(self):
        graph = add_stage(initial_graph(), StageData(kind="deploy"), node_id="deploy-2")
        graph = add_stage(graph, StageData(kind="deploy"))
        assert graph.nodes[-1].id == "deploy-2-2"

    def test_source_graph_is_not_mutated(self):
        graph = initial_graph()
        add_stage(graph, palette_entry("deploy"), position=Position(x=1, y=2))
        assert len(graph.nodes) == 1
        assert graph.edges == []

    def test_explicit_label_kept(self):
        graph = add_stage(initial_graph(), StageData(kind="deploy", label="Ship it"))
        assert graph.nodes[-1].label == "Ship it"
