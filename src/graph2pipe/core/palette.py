from typing import List, Optional, Tuple

from graph2pipe.core.models import Connection, PipelineGraph, Position, StageData, StageNode


# Палитра редактора: подпись + атрибуты по умолчанию для нового узла
PALETTE: List[Tuple[str, StageData]] = [
    ("Git Clone", StageData(kind="git_clone", repo_url="https://github.com/user/repo.git", branch="main")),
    ("Linux Install", StageData(kind="linux_install", os_pkg="apt", packages="git curl")),
    ("Prebuild Node", StageData(kind="prebuild_node", manager="npm")),
    ("Prebuild Python", StageData(kind="prebuild_python")),
    ("Prebuild Java", StageData(kind="prebuild_java")),
    ("Prebuild Custom", StageData(kind="prebuild_custom", script='echo "custom prebuild"')),
    ("Build NPM", StageData(kind="build_npm")),
    ("Build Python", StageData(kind="build_python")),
    ("Build Java", StageData(kind="build_java")),
    ("Docker Build", StageData(kind="docker_build", dockerfile="Dockerfile", tag="myapp:latest")),
    ("Run Tests", StageData(kind="run_tests", test_type="unit", command="npm test")),
    ("Deploy", StageData(kind="deploy", environment="staging", deploy_script="./deploy.sh")),
    ("Notify Slack", StageData(kind="notify_slack", channel="#deployments", message="Deployment completed!")),
]

FIXED_LABELS = {
    "start": "Start",
    "git_clone": "Git Clone",
    "linux_install": "Linux Install",
    "prebuild_python": "Prebuild Python",
    "prebuild_java": "Prebuild Java",
    "prebuild_custom": "Prebuild Custom",
    "build_npm": "Build NPM",
    "build_python": "Build Python",
    "build_java": "Build Java",
    "docker_build": "Docker Build",
    "notify_slack": "Notify Slack",
}


def label_for(data: StageData) -> str:
    """Подпись узла для канваса."""
    if data.kind == "prebuild_node":
        return f"Prebuild Node ({data.manager or 'npm'})"
    if data.kind == "run_tests":
        return f"Run Tests ({data.test_type or ''})"
    if data.kind == "deploy":
        return f"Deploy ({data.environment or ''})"
    return FIXED_LABELS.get(data.kind, data.kind or "Node")


def palette_entry(kind: str) -> StageData:
    for _, data in PALETTE:
        if data.kind == kind:
            return data.model_copy()
    return StageData(kind=kind)


def initial_graph() -> PipelineGraph:
    return PipelineGraph(
        nodes=[
            StageNode(
                id="start",
                position=Position(x=50, y=80),
                data=StageData(kind="start", label="Start"),
            )
        ]
    )


def add_stage(
    graph: PipelineGraph,
    data: StageData,
    position: Optional[Position] = None,
    node_id: Optional[str] = None,
) -> PipelineGraph:
    """
    Возвращает новый граф с добавленным узлом. Если в графе уже есть узлы,
    новый автоматически соединяется с последним добавленным.
    Исходный граф не изменяется.
    """
    count = len(graph.nodes)
    if node_id is None:
        used = {node.id for node in graph.nodes}
        node_id = f"{data.kind}-{count}"
        suffix = 2
        while node_id in used:
            node_id = f"{data.kind}-{count}-{suffix}"
            suffix += 1
    if data.label is None:
        data = data.model_copy(update={"label": label_for(data)})

    node = StageNode(
        id=node_id,
        position=position or Position(x=100 + count * 200, y=200),
        data=data,
    )
    nodes = list(graph.nodes) + [node]
    edges = list(graph.edges)
    if graph.nodes:
        last = graph.nodes[-1]
        edges.append(
            Connection(
                id=f"auto-edge-{last.id}-{node_id}",
                source=last.id,
                target=node_id,
                label=str(count),
            )
        )
    return PipelineGraph(nodes=nodes, edges=edges)
