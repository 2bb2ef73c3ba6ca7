from __future__ import annotations

from typing import Any, Dict, List, Optional

import yaml

from graph2pipe.core import config
from graph2pipe.core.models import PipelineGraph, StageData
from graph2pipe.core.services.parsers.exceptions import WorkflowParseError
from graph2pipe.core.services.parsers.utils import chain_graph


STEPS_PATH = ("jobs", config.WORKFLOW_JOB, "steps")


def _load_steps(text: str, logs: List[str]) -> List[Any]:
    """
    YAML -> список шагов из jobs.pipeline.steps.

    BaseLoader оставляет все скаляры строками как есть ('18', 'on', 'true'),
    без приведения типов: классификатору нужен исходный текст значений.
    """
    if not isinstance(text, str):
        logs.append(f"Ожидался текст YAML, получен {type(text).__name__}.")
        raise WorkflowParseError(reason="invalid YAML", logs=logs)

    try:
        tree = yaml.load(text, Loader=yaml.BaseLoader)
    except yaml.YAMLError as e:
        logs.append(f"YAML не разобран: {e}")
        raise WorkflowParseError(reason="invalid YAML", logs=logs) from e
    except RecursionError as e:
        # composer PyYAML рекурсивный, глубокая вложенность его роняет
        logs.append("YAML не разобран: слишком глубокая вложенность.")
        raise WorkflowParseError(reason="invalid YAML", logs=logs) from e

    node: Any = tree
    for key in STEPS_PATH:
        if not isinstance(node, dict) or key not in node:
            logs.append(f"Секция {'.'.join(STEPS_PATH)} не найдена (нет ключа {key!r}).")
            raise WorkflowParseError(reason=f"missing {'.'.join(STEPS_PATH)}", logs=logs)
        node = node[key]

    if not isinstance(node, list):
        logs.append(f"{'.'.join(STEPS_PATH)} не является списком.")
        raise WorkflowParseError(reason="steps is not a sequence", logs=logs)

    logs.append(f"Найдено шагов: {len(node)}")
    return node


def flatten_step(step: Dict[str, Any]) -> Dict[str, str]:
    """
    Шаг workflow -> плоская запись key -> str.

    Скалярные значения берутся как есть, скаляры из вложенного `with`
    вливаются в ту же запись (более поздний ключ перезаписывает ранний,
    коллизии никак не разрешаются). Прочие вложенные структуры пропускаются.
    """
    record: Dict[str, str] = {}
    for key, value in step.items():
        if isinstance(value, str):
            record[key] = value
        elif key == "with" and isinstance(value, dict):
            for nested_key, nested_value in value.items():
                if isinstance(nested_value, str):
                    record[nested_key] = nested_value
    return record


def classify_step(step: Dict[str, str]) -> StageData:
    """
    Плоская запись шага -> StageData.

    Это цепочка переопределений, а не таблица приоритетов: сначала kind
    выбирается по `uses`, затем его может перезаписать `shell`, а потом `run`.
    Побеждает последнее сработавшее правило, атрибуты накапливаются.
    """
    uses = step.get("uses", "")
    kind = "prebuild_custom"
    attrs: Dict[str, str] = {}

    if "actions/setup-node" in uses:
        kind = "prebuild_node"
        attrs["manager"] = "npm"
    elif "actions/setup-python" in uses:
        kind = "prebuild_python"
        attrs["lang"] = "python"
    elif "actions/setup-java" in uses:
        kind = "prebuild_java"
        attrs["lang"] = "java"
        if step.get("java-version"):
            attrs["java_version"] = step["java-version"]
        if step.get("distribution"):
            attrs["distribution"] = step["distribution"]
    elif "actions/checkout" in uses:
        kind = "git_clone"
        attrs["repo_url"] = config.DEFAULT_REPO_URL
        attrs["branch"] = config.DEFAULT_BRANCH
    elif any(a in uses for a in ("actions/setup-apt", "actions/setup-yum", "actions/setup-apk")):
        kind = "linux_install"
        attrs["os_pkg"] = "apt"
        if step.get("packages"):
            attrs["packages"] = step["packages"]
    elif any(a in uses for a in ("actions/setup-npm", "actions/setup-yarn", "actions/setup-pnpm")):
        kind = "prebuild_node"
        attrs["manager"] = "npm"
    elif "actions/setup-pip" in uses:
        kind = "prebuild_python"
        attrs["lang"] = "python"
    elif "actions/setup-maven" in uses or "actions/setup-gradle" in uses:
        kind = "prebuild_java"
        attrs["lang"] = "java"
    elif "actions/setup-custom" in uses:
        kind = "prebuild_custom"
        if step.get("script"):
            attrs["script"] = step["script"]

    shell = step.get("shell", "")
    if "bash" in shell:
        kind = "run_tests"
        attrs["test_type"] = "unit"
        attrs["command"] = shell

    run = step.get("run", "")
    if run:
        if "npm ci" in run or "npm install" in run:
            kind = "prebuild_node"
            attrs["manager"] = "npm"
        elif "mvn" in run or "gradle" in run:
            kind = "build_java"
        elif "pip install" in run:
            kind = "prebuild_python"

    return StageData(kind=kind, label=step.get("name") or "Unknown Step", **attrs)


def _records(text: str, logs: List[str]) -> List[Dict[str, str]]:
    records: List[Dict[str, str]] = []
    for index, step in enumerate(_load_steps(text, logs)):
        if not isinstance(step, dict):
            logs.append(f"Шаг {index} не является mapping, пропускаем.")
            continue
        record = flatten_step(step)
        if not record:
            logs.append(f"Шаг {index} без скалярных полей, пропускаем.")
            continue
        records.append(record)
    return records


def parse_workflow_to_graph(text: str, logs: Optional[List[str]] = None) -> PipelineGraph:
    """
    Workflow YAML -> линейный граф (step-0 -> step-1 -> ...).

    Никогда не бросает исключений: любой сбой разбора даёт пустой граф.
    """
    logs = logs if logs is not None else []
    logs.append("Разбираем workflow YAML.")
    try:
        records = _records(text, logs)
    except WorkflowParseError as e:
        logs.append(e.description)
        return PipelineGraph()

    datas = [classify_step(record) for record in records]
    for data in datas:
        logs.append(f"Шаг {data.label!r} -> {data.kind}")

    return chain_graph(
        datas,
        node_id=lambda i: f"step-{i}",
        edge_id=lambda i: f"edge-{i - 1}",
    )


# ---------- workflow -> bash без графа ----------

def convert_step_to_shell(step: Dict[str, str]) -> str:
    name = step.get("name") or "Unnamed step"
    uses = step.get("uses", "")
    run = step.get("run", "")
    shell = step.get("shell", "")

    if "checkout" in uses:
        return "\n".join([
            f"# {name}",
            'echo "📥 Checking out code..."',
            f"git clone {step.get('repoUrl') or config.DEFAULT_REPO_URL} .",
            f"git checkout {step.get('branch') or config.DEFAULT_BRANCH}",
        ])
    if "setup-java" in uses:
        return "\n".join([
            f"# {name}",
            'echo "☕ Setting up Java..."',
            "java -version",
            f"export JAVA_HOME=/usr/lib/jvm/{config.JAVA_DISTRIBUTION}-{config.JAVA_VERSION}-jdk",
            "export PATH=$JAVA_HOME/bin:$PATH",
        ])
    if "setup-node" in uses:
        return "\n".join([
            f"# {name}",
            'echo "🟢 Setting up Node.js..."',
            "node --version",
            "npm --version",
        ])
    if "setup-python" in uses:
        return "\n".join([
            f"# {name}",
            'echo "🐍 Setting up Python..."',
            "python3 --version",
            "pip3 --version",
        ])
    if run:
        return f'# {name}\necho "🚀 Executing: {name}"\n{run}'
    if shell:
        return f'# {name}\necho "💻 Executing with {shell}..."\n# {name} step'
    return f'# {name}\necho "⚡ Executing step: {name}"\n# {name} step'


def generate_shell_from_yaml(text: str, logs: Optional[List[str]] = None) -> str:
    """
    Workflow YAML -> bash напрямую, по блоку на шаг (блоки через пустую строку).
    """
    logs = logs if logs is not None else []
    try:
        records = _records(text, logs)
    except WorkflowParseError as e:
        logs.append(e.description)
        if e.reason == "invalid YAML":
            return config.SHELL_FROM_YAML_ERROR
        return config.SHELL_FROM_YAML_EMPTY

    if not records:
        return config.SHELL_FROM_YAML_EMPTY
    return "\n\n".join(convert_step_to_shell(record) for record in records)
