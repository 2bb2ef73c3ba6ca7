from typing import Dict, List, Sequence

from graph2pipe.core import config
from graph2pipe.core.models import Connection, StageNode
from graph2pipe.core.renders import shell as shell_render
from graph2pipe.core.services.analyzer.core import detect_languages
from graph2pipe.core.services.builders.pipeline import linearize


SETUP_STEPS: Dict[str, List[str]] = {
    "javascript": [
        "      - name: Setup Node.js",
        f"        uses: {config.SETUP_NODE_ACTION}",
        "        with:",
        f"          node-version: '{config.NODE_VERSION}'",
    ],
    "python": [
        "      - name: Setup Python",
        f"        uses: {config.SETUP_PYTHON_ACTION}",
        "        with:",
        f"          python-version: '{config.PYTHON_VERSION}'",
    ],
    "java": [
        "      - name: Setup Java",
        f"        uses: {config.SETUP_JAVA_ACTION}",
        "        with:",
        f"          distribution: '{config.JAVA_DISTRIBUTION}'",
        f"          java-version: '{config.JAVA_VERSION}'",
    ],
}


def _indent(script: str) -> str:
    return "\n".join(
        config.RUN_INDENT + line if line else "" for line in script.split("\n")
    )


def render(ordered: Sequence[StageNode]) -> str:
    """
    Упорядоченные стадии -> workflow YAML.

    Структура фиксирована: checkout, по одному setup-шагу на каждый
    используемый язык и один шаг `Execute Pipeline`, в `run: |` которого
    лежит полный bash-скрипт.
    """
    if not ordered:
        return config.YAML_PLACEHOLDER

    setup = [
        "\n".join(SETUP_STEPS[lang]) for lang in detect_languages(ordered)
    ]
    script = shell_render.render(ordered)

    header = "\n".join([
        "# Generated CI/CD Pipeline",
        f"name: {config.WORKFLOW_NAME}",
        "on: [push, pull_request]",
        "jobs:",
        f"  {config.WORKFLOW_JOB}:",
        f"    runs-on: {config.RUNS_ON}",
        "    steps:",
        "      - name: Checkout code",
        f"        uses: {config.CHECKOUT_ACTION}",
    ])
    execute = "\n".join([
        "      - name: Execute Pipeline",
        "        shell: bash",
        "        run: |",
    ])
    # при пустом setup остаётся пустая строка, YAML это допускает
    return f"{header}\n" + "\n".join(setup) + f"\n{execute}\n" + _indent(script)


def generate_yaml(nodes: Sequence[StageNode], edges: Sequence[Connection]) -> str:
    return render(linearize(nodes, edges))
