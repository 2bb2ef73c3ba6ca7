from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

import yaml

from graph2pipe.core import config
from graph2pipe.core.models import PipelineGraph, StageData
from graph2pipe.core.services.parsers.exceptions import ScriptParseError
from graph2pipe.core.services.parsers.utils import chain_graph


# Ключевые слова комментариев -> правило. Первое совпадение побеждает,
# поэтому порядок важен ("Prebuild" ловится правилом build).
COMMENT_RULES: List[Tuple[str, Tuple[str, ...]]] = [
    ("checkout", ("Checkout", "checkout")),
    ("java", ("Setup Java", "Java")),
    ("python", ("Setup Python",)),
    ("node", ("Setup Node",)),
    ("build", ("Build", "build")),
    ("test", ("Test", "test")),
    ("deploy", ("Deploy", "deploy")),
    ("execute", ("Execute", "Pipeline")),
]

RULE_KINDS: Dict[Optional[str], str] = {
    "checkout": "git_clone",
    "java": "prebuild_java",
    "python": "prebuild_python",
    "node": "prebuild_node",
    "build": "build_npm",
    "test": "run_tests",
    "deploy": "deploy",
    "execute": "prebuild_custom",
    None: "prebuild_custom",
}


def extract_comments(text: str) -> List[str]:
    """
    Непустые строки-комментарии скрипта без ведущего `#` и пробелов.
    Одиночный `#` комментарием не считается.
    """
    if not isinstance(text, str):
        raise ScriptParseError(reason=f"expected text, got {type(text).__name__}")

    comments: List[str] = []
    for line in text.split("\n"):
        stripped = line.strip()
        if stripped.startswith("#") and len(stripped) > 1:
            comments.append(stripped[1:].strip())
    return comments


def match_comment(comment: str) -> Optional[str]:
    for rule, keywords in COMMENT_RULES:
        if any(keyword in comment for keyword in keywords):
            return rule
    return None


def classify_comment(comment: str) -> StageData:
    """
    Текст комментария -> StageData. Сам комментарий сохраняется
    и как label, и как command.
    """
    kind = RULE_KINDS[match_comment(comment)]
    return StageData(kind=kind, label=comment, command=comment)


def parse_script_to_graph(text: str, logs: Optional[List[str]] = None) -> PipelineGraph:
    """
    Bash-скрипт -> линейный граф (shell-step-0 -> shell-step-1 -> ...).

    Узел создаётся на каждую строку-комментарий. Никогда не бросает
    исключений: при сбое возвращается пустой граф.
    """
    logs = logs if logs is not None else []
    logs.append("Разбираем bash-скрипт по комментариям.")
    try:
        comments = extract_comments(text)
    except ScriptParseError as e:
        logs.append(e.description)
        return PipelineGraph()

    logs.append(f"Найдено комментариев: {len(comments)}")
    datas = [classify_comment(comment) for comment in comments]

    return chain_graph(
        datas,
        node_id=lambda i: f"shell-step-{i}",
        edge_id=lambda i: f"shell-edge-{i - 1}-{i}",
    )


# ---------- bash -> workflow без графа ----------

class _WorkflowDumper(yaml.SafeDumper):
    pass


def _str_presenter(dumper: yaml.SafeDumper, data: str) -> yaml.ScalarNode:
    # многострочные run-блоки пишем как `|`
    if "\n" in data:
        return dumper.represent_scalar("tag:yaml.org,2002:str", data, style="|")
    return dumper.represent_scalar("tag:yaml.org,2002:str", data)


_WorkflowDumper.add_representer(str, _str_presenter)


def comment_to_step(comment: str) -> Dict[str, Any]:
    step: Dict[str, Any] = {"name": comment}
    rule = match_comment(comment)

    if rule == "checkout":
        step["uses"] = config.CHECKOUT_ACTION
    elif rule == "java":
        step["uses"] = config.SETUP_JAVA_ACTION
        step["with"] = {
            "distribution": config.JAVA_DISTRIBUTION,
            "java-version": config.JAVA_VERSION,
        }
    elif rule == "python":
        step["uses"] = config.SETUP_PYTHON_ACTION
        step["with"] = {"python-version": config.PYTHON_VERSION}
    elif rule == "node":
        step["uses"] = config.SETUP_NODE_ACTION
        step["with"] = {"node-version": config.NODE_VERSION}
    elif rule == "build":
        step["run"] = f'# {comment}\necho "Building..."'
    elif rule == "test":
        step["run"] = f'# {comment}\necho "Running tests..."'
    elif rule == "deploy":
        step["run"] = f'# {comment}\necho "Deploying..."'
    elif rule == "execute":
        step["shell"] = "bash"
        step["run"] = '#!/bin/bash\necho "🚀 Starting pipeline..."\nchmod +x gradlew || true'
    else:
        step["run"] = f'# {comment}\necho "Executing: {comment}"'
    return step


def generate_yaml_from_shell(text: str, logs: Optional[List[str]] = None) -> str:
    """
    Bash -> workflow YAML напрямую: каждый комментарий становится шагом.
    """
    logs = logs if logs is not None else []
    try:
        comments = extract_comments(text)
    except ScriptParseError as e:
        logs.append(e.description)
        return config.YAML_FROM_SHELL_ERROR

    if not comments:
        return config.YAML_FROM_SHELL_EMPTY

    workflow = {
        "name": config.CONVERTED_WORKFLOW_NAME,
        "on": ["push", "pull_request"],
        "jobs": {
            config.WORKFLOW_JOB: {
                "runs-on": config.RUNS_ON,
                "steps": [comment_to_step(comment) for comment in comments],
            }
        },
    }
    logs.append(f"Сформировано шагов workflow: {len(comments)}")
    return yaml.dump(
        workflow,
        Dumper=_WorkflowDumper,
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
    )
