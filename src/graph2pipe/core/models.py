from pydantic import BaseModel, ConfigDict, Field
from typing import List, Literal, Dict, Optional, Union, get_args


StageKind = Literal[
    "start",
    "git_clone",
    "linux_install",
    "prebuild_node",
    "prebuild_python",
    "prebuild_java",
    "prebuild_custom",
    "build_npm",
    "build_python",
    "build_java",
    "docker_build",
    "run_tests",
    "deploy",
    "notify_slack",
]

STAGE_KINDS = get_args(StageKind)


class StageData(BaseModel):
    """
    Данные узла-стадии. Атрибуты разрежённые: для каждого kind используются
    только свои поля, остальные рендерер просто игнорирует.

    Имена полей в snake_case, при (де)сериализации используются camelCase-алиасы
    редактора (repoUrl, osPkg, testType, deployScript ...).
    """
    model_config = ConfigDict(populate_by_name=True)

    # Неизвестный kind не ошибка: для него есть общий fallback в рендерере
    kind: Union[StageKind, str]
    label: Optional[str] = None

    # общие
    lang: Optional[str] = None
    command: Optional[str] = None

    # git
    repo_url: Optional[str] = Field(default=None, alias="repoUrl")
    branch: Optional[str] = None

    # linux install
    os_pkg: Optional[str] = Field(default=None, alias="osPkg")
    packages: Optional[str] = None

    # node prebuild
    manager: Optional[str] = None

    # prebuild custom
    script: Optional[str] = None

    # docker
    dockerfile: Optional[str] = None
    tag: Optional[str] = None

    # tests
    test_type: Optional[str] = Field(default=None, alias="testType")

    # deploy
    environment: Optional[str] = None
    deploy_script: Optional[str] = Field(default=None, alias="deployScript")

    # notify
    channel: Optional[str] = None
    message: Optional[str] = None

    # java (восстанавливается парсером workflow)
    java_version: Optional[str] = Field(default=None, alias="javaVersion")
    distribution: Optional[str] = None


class Position(BaseModel):
    x: float = 0
    y: float = 0


class StageNode(BaseModel):
    id: str
    data: StageData
    position: Position = Field(default_factory=Position)
    type: str = "default"

    @property
    def kind(self) -> str:
        return self.data.kind

    @property
    def label(self) -> Optional[str]:
        return self.data.label


class Connection(BaseModel):
    """
    Ребро графа: source -> target. Несколько исходящих рёбер у узла допустимы,
    но такой узел становится точкой ветвления, дальше которой линейризация не идёт.
    """
    id: str
    source: str
    target: str
    label: Optional[str] = None


class PipelineGraph(BaseModel):
    """
    Снимок графа, который редактор передаёт в ядро и получает обратно от парсеров.
    """
    nodes: List[StageNode] = Field(default_factory=list)
    edges: List[Connection] = Field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.nodes


class PipelineSummary(BaseModel):
    stages_count: int
    stages: List[str]
    unreachable: List[str] = Field(default_factory=list)
    # branch / cycle / dangling_edge, None если граф пройден до конца
    truncated_by: Optional[str] = None
    # Короткое текстовое описание для UI
    description: str


class GenerateResponse(BaseModel):
    status: Literal["ok", "empty"]
    ci_templates: Dict[str, str] = {}
    warnings: List[str] = []
    logs: List[str] = []
    pipeline_summary: Optional[PipelineSummary] = None


class ParseResponse(BaseModel):
    status: Literal["ok", "empty"]
    graph: PipelineGraph
    # True, если граф редактора заменён распарсенным
    replaced: bool = False
    warnings: List[str] = []
    logs: List[str] = []
