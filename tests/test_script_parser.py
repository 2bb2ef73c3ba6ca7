import pytest
import yaml

from graph2pipe.core.models import StageData
from graph2pipe.core.renders.shell import generate_shell
from graph2pipe.core.services.parsers import ScriptParseError
from graph2pipe.core.services.parsers.script import (
    classify_comment,
    comment_to_step,
    extract_comments,
    generate_yaml_from_shell,
    parse_script_to_graph,
)
from graph2pipe.core.services.parsers.workflow import parse_workflow_to_graph


class TestExtractComments:

    def test_keeps_only_meaningful_comments(self):
        text = "#!/bin/bash\n#\n   # Build app  \nnpm run build\n  #\n# Deploy\n"
        assert extract_comments(text) == ["!/bin/bash", "Build app", "Deploy"]

    def test_rejects_non_text(self):
        with pytest.raises(ScriptParseError):
            extract_comments(None)


class TestClassifyComment:

    @pytest.mark.parametrize(
        "comment, kind",
        [
            ("Checkout code", "git_clone"),
            ("Setup Java 17", "prebuild_java"),
            ("Java toolchain", "prebuild_java"),
            ("Setup Python", "prebuild_python"),
            ("Setup Node.js", "prebuild_node"),
            ("Build app", "build_npm"),
            ("Prebuild Node (npm)", "build_npm"),
            ("Run unit tests", "run_tests"),
            ("Deploy to staging", "deploy"),
            ("Execute Pipeline", "prebuild_custom"),
            ("CI/CD Pipeline", "prebuild_custom"),
            ("just a note", "prebuild_custom"),
        ],
    )
    def test_rules(self, comment, kind):
        assert classify_comment(comment).kind == kind

    def test_first_rule_wins(self):
        # checkout идёт раньше build и test
        assert classify_comment("checkout then build and test").kind == "git_clone"
        assert classify_comment("Build tests").kind == "build_npm"

    def test_comment_is_label_and_command(self):
        data = classify_comment("Deploy to production")
        assert data.label == "Deploy to production"
        assert data.command == "Deploy to production"


class TestParseScriptToGraph:

    def test_ids_and_edges(self):
        graph = parse_script_to_graph("# Checkout\n# Build\n# Test\n")
        assert [n.id for n in graph.nodes] == ["shell-step-0", "shell-step-1", "shell-step-2"]
        assert [(e.id, e.source, e.target) for e in graph.edges] == [
            ("shell-edge-0-1", "shell-step-0", "shell-step-1"),
            ("shell-edge-1-2", "shell-step-1", "shell-step-2"),
        ]
        assert [n.kind for n in graph.nodes] == ["git_clone", "build_npm", "run_tests"]

    def test_generated_script_parses_back(self, make_chain, start_data):
        graph = make_chain(
            start_data,
            StageData(kind="git_clone", repo_url="https://x/y.git", branch="main"),
            StageData(kind="prebuild_node", manager="yarn"),
            StageData(kind="deploy", environment="prod", deploy_script="./deploy.sh"),
        )
        parsed = parse_script_to_graph(generate_shell(graph.nodes, graph.edges))
        # git clone не оставляет комментария, заголовок скрипта становится узлами
        assert [n.kind for n in parsed.nodes] == ["prebuild_custom", "prebuild_custom", "build_npm", "deploy"]

    def test_script_without_comments(self):
        assert parse_script_to_graph("npm ci\nnpm test\n").is_empty()

    def test_non_text_gives_empty_graph(self):
        logs = []
        assert parse_script_to_graph(42, logs=logs).is_empty()
        assert any("Error to parse" in line for line in logs)


class TestYamlFromShell:

    SCRIPT = "#!/usr/bin/env sh\n# Checkout code\n# Setup Node.js\n# Run unit tests\n# Deploy to staging\n"

    def test_step_per_comment(self):
        text = generate_yaml_from_shell(self.SCRIPT)
        tree = yaml.safe_load(text)
        assert tree["name"] == "Generated CI/CD Pipeline"
        assert tree["on"] == ["push", "pull_request"]
        steps = tree["jobs"]["pipeline"]["steps"]
        assert [s["name"] for s in steps] == [
            "!/usr/bin/env sh", "Checkout code", "Setup Node.js", "Run unit tests", "Deploy to staging",
        ]
        assert steps[1] == {"name": "Checkout code", "uses": "actions/checkout@v3"}
        assert steps[2]["with"] == {"node-version": "18"}
        assert steps[3]["run"] == '# Run unit tests\necho "Running tests..."'

    def test_multiline_run_is_block_literal(self):
        assert "run: |" in generate_yaml_from_shell("# Build app\n")

    def test_reparses_as_workflow(self):
        graph = parse_workflow_to_graph(generate_yaml_from_shell(self.SCRIPT))
        assert [n.kind for n in graph.nodes] == [
            "prebuild_custom", "git_clone", "prebuild_node", "prebuild_custom", "prebuild_custom",
        ]

    def test_java_step(self):
        assert comment_to_step("Setup Java") == {
            "name": "Setup Java",
            "uses": "actions/setup-java@v3",
            "with": {"distribution": "temurin", "java-version": "17"},
        }

    def test_execute_step(self):
        step = comment_to_step("Execute Pipeline")
        assert step["shell"] == "bash"
        assert "chmod +x gradlew || true" in step["run"]

    def test_no_comments(self):
        assert generate_yaml_from_shell("echo hi\n") == "# Unable to generate YAML from shell."

    def test_non_text(self):
        assert generate_yaml_from_shell(None) == "# Shell parse error: unable to generate YAML."
