from pathlib import Path
import os

"""
Константы генераторов/парсеров и настройки CLI.

Тексты заглушек, шаблон workflow и ссылки на setup-экшены зафиксированы:
их ожидает редактор, менять их нельзя без миграции.
Каталог, куда CLI сохраняет результат, можно переопределить переменной
окружения GRAPH2PIPE_OUTPUT_DIR.
"""

OUTPUT_DIR = Path(os.getenv("GRAPH2PIPE_OUTPUT_DIR", "."))

LOGO = "graph2pipe :: CI/CD graph -> bash / workflow YAML"

# --- заглушки для графа без start-узла ---
SHELL_PLACEHOLDER = "# Add a Start node and connect stages to generate script."
YAML_PLACEHOLDER = "# Add a Start node and connect stages to generate YAML."

# --- фиксированные комментарии при неудачной конвертации ---
SHELL_FROM_YAML_EMPTY = "# Unable to generate shell from YAML."
SHELL_FROM_YAML_ERROR = "# YAML parse error: unable to generate shell."
YAML_FROM_SHELL_EMPTY = "# Unable to generate YAML from shell."
YAML_FROM_SHELL_ERROR = "# Shell parse error: unable to generate YAML."

# --- workflow ---
WORKFLOW_NAME = "ReactFlow CI/CD Pipeline"
CONVERTED_WORKFLOW_NAME = "Generated CI/CD Pipeline"
WORKFLOW_JOB = "pipeline"
RUNS_ON = "ubuntu-latest"
CHECKOUT_ACTION = "actions/checkout@v3"
SETUP_NODE_ACTION = "actions/setup-node@v3"
SETUP_PYTHON_ACTION = "actions/setup-python@v4"
SETUP_JAVA_ACTION = "actions/setup-java@v3"
NODE_VERSION = "18"
PYTHON_VERSION = "3.x"
JAVA_DISTRIBUTION = "temurin"
JAVA_VERSION = "17"
# отступ строк скрипта внутри `run: |`
RUN_INDENT = " " * 10

# --- notify ---
SLACK_WEBHOOK_VAR = "$SLACK_WEBHOOK"

# --- парсеры: значения, которые из workflow восстановить нельзя ---
DEFAULT_REPO_URL = "https://github.com/user/repo.git"
DEFAULT_BRANCH = "main"

# --- раскладка восстановленных узлов (вертикальная цепочка) ---
LAYOUT_X = 100
LAYOUT_Y = 100
LAYOUT_STEP_Y = 150
