# core/stage_scripts.py
from __future__ import annotations

import json
from typing import Callable, Dict, List, Optional, Union

from graph2pipe.core.config import SLACK_WEBHOOK_VAR
from graph2pipe.core.models import StageData, StageNode


QUOTES = ("'", '"', "`")


def dequote(text: Optional[str]) -> str:
    """
    Убирает одну пару одинаковых кавычек по краям пользовательского текста.
    Текст вставляется в уже закавыченные shell/YAML-строки, двойное
    экранирование нам не нужно.
    """
    if not text:
        return ""
    s = text.strip()
    for q in QUOTES:
        if s.startswith(q) and s.endswith(q):
            return s[1:-1]
    return s


def language_setup(lang: Optional[str]) -> List[str]:
    """
    Подготовка окружения для общего fallback'а. По умолчанию Node.js.
    """
    if lang == "python":
        return [
            "# Setup Python",
            "python3 --version || true",
            "pip3 install -r requirements.txt || true",
        ]
    if lang == "java":
        return ["# Setup Java", "java -version || true", "mvn -v || true"]
    return ["# Setup Node.js", "node -v || true", "npm ci || npm install"]


# =========
# per-kind
# =========

def make_start_script(data: StageData) -> List[str]:
    return ["#!/bin/bash", "# CI/CD Pipeline", 'echo "🚀 Starting pipeline..."']


def make_git_clone_script(data: StageData) -> List[str]:
    return [f"git clone -b {dequote(data.branch)} {dequote(data.repo_url)}"]


def make_linux_install_script(data: StageData) -> List[str]:
    pkgs = dequote(data.packages)
    if data.os_pkg == "yum":
        return [f"sudo yum install -y {pkgs}"]
    if data.os_pkg == "apk":
        return [f"sudo apk add --no-cache {pkgs}"]
    return [f"sudo apt-get update && sudo apt-get install -y {pkgs}"]


def make_prebuild_node_script(data: StageData) -> List[str]:
    if data.manager == "yarn":
        return ["# Prebuild Node (yarn)", "yarn install --frozen-lockfile || yarn install"]
    if data.manager == "pnpm":
        return ["# Prebuild Node (pnpm)", "pnpm install --frozen-lockfile || pnpm install"]
    return ["# Prebuild Node (npm)", "npm ci || npm install"]


def make_prebuild_python_script(data: StageData) -> List[str]:
    return [
        "# Prebuild Python",
        "python3 -m venv .venv || true",
        ". .venv/bin/activate || true",
        "pip install -r requirements.txt || true",
    ]


def make_prebuild_java_script(data: StageData) -> List[str]:
    return [
        "# Prebuild Java",
        "# Assuming Gradle Wrapper or Maven present",
        "chmod +x gradlew || true",
    ]


def make_prebuild_custom_script(data: StageData) -> List[str]:
    return ["# Prebuild custom", dequote(data.script)]


def make_build_npm_script(data: StageData) -> List[str]:
    return ["# Build NPM", "npm run build"]


def make_build_python_script(data: StageData) -> List[str]:
    return ["# Build Python", "python setup.py build || true"]


def make_build_java_script(data: StageData) -> List[str]:
    return [
        "# Build Java",
        "if [ -f gradlew ]; then",
        "  ./gradlew build",
        "else",
        "  mvn -B package --file pom.xml",
        "fi",
    ]


def make_docker_build_script(data: StageData) -> List[str]:
    return [f"docker build -f {dequote(data.dockerfile)} -t {dequote(data.tag)} ."]


def make_run_tests_script(data: StageData) -> List[str]:
    return [f"# Run {data.test_type or ''} tests", dequote(data.command)]


def make_deploy_script(data: StageData) -> List[str]:
    return [f"# Deploy to {data.environment or ''}", dequote(data.deploy_script)]


def make_notify_slack_script(data: StageData) -> List[str]:
    # компактный JSON без пробелов, не-ASCII как есть
    payload = json.dumps(
        {"channel": data.channel or "", "text": data.message or ""},
        separators=(",", ":"),
        ensure_ascii=False,
    )
    return [
        "# Send Slack notification",
        f"curl -X POST -H 'Content-type: application/json' --data '{payload}' {SLACK_WEBHOOK_VAR}",
    ]


def make_generic_script(data: StageData) -> List[str]:
    """
    Общий fallback для неизвестных/пользовательских kind:
    подготовка окружения по lang + произвольная команда.
    """
    return language_setup(data.lang) + [
        f"# {data.lang or 'generic'} command",
        dequote(data.command),
    ]


STAGE_SCRIPTS: Dict[str, Callable[[StageData], List[str]]] = {
    "start": make_start_script,
    "git_clone": make_git_clone_script,
    "linux_install": make_linux_install_script,
    "prebuild_node": make_prebuild_node_script,
    "prebuild_python": make_prebuild_python_script,
    "prebuild_java": make_prebuild_java_script,
    "prebuild_custom": make_prebuild_custom_script,
    "build_npm": make_build_npm_script,
    "build_python": make_build_python_script,
    "build_java": make_build_java_script,
    "docker_build": make_docker_build_script,
    "run_tests": make_run_tests_script,
    "deploy": make_deploy_script,
    "notify_slack": make_notify_slack_script,
}


def render(stage: Union[StageNode, StageData]) -> str:
    """
    Узел -> bash-сниппет. Каждый сниппет заканчивается переводом строки,
    поэтому при склейке разделители не нужны.
    """
    data = stage.data if isinstance(stage, StageNode) else stage
    make_script = STAGE_SCRIPTS.get(data.kind, make_generic_script)
    return "\n".join(make_script(data)) + "\n"
