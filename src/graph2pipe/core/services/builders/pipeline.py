from typing import Dict, List, Optional, Sequence, Tuple

from graph2pipe.core.models import Connection, PipelineGraph, PipelineSummary, StageNode


def _find_start(nodes: Sequence[StageNode]) -> Optional[StageNode]:
    for node in nodes:
        if node.kind == "start":
            return node
    return None


def _outgoing(edges: Sequence[Connection]) -> Dict[str, List[str]]:
    outgoing: Dict[str, List[str]] = {}
    for edge in edges:
        outgoing.setdefault(edge.source, []).append(edge.target)
    return outgoing


def _walk(
    nodes: Sequence[StageNode],
    edges: Sequence[Connection],
) -> Tuple[List[StageNode], Optional[str]]:
    """
    Обход от start по единственным исходящим рёбрам.

    Возвращает (ordered, truncated_by), где truncated_by:
      - None            -> дошли до узла без исходящих рёбер;
      - "branch"        -> у узла больше одного исходящего ребра;
      - "cycle"         -> следующий узел уже посещён;
      - "dangling_edge" -> ребро ведёт в несуществующий узел.
    """
    start = _find_start(nodes)
    if start is None:
        return [], None

    by_id = {node.id: node for node in nodes}
    outgoing = _outgoing(edges)

    ordered: List[StageNode] = []
    visited: set[str] = set()
    cursor = start
    while True:
        ordered.append(cursor)
        visited.add(cursor.id)

        next_ids = outgoing.get(cursor.id, [])
        if not next_ids:
            return ordered, None
        if len(next_ids) != 1:
            return ordered, "branch"

        nxt = by_id.get(next_ids[0])
        if nxt is None:
            return ordered, "dangling_edge"
        if nxt.id in visited:
            return ordered, "cycle"
        cursor = nxt


def linearize(nodes: Sequence[StageNode], edges: Sequence[Connection]) -> List[StageNode]:
    """
    Строгая линейная последовательность стадий, начиная с узла start.

    Поддерживаются только линейные пайплайны: на ветвлении, цикле или
    висячем ребре обход молча обрывается (без ошибки). Входные списки не
    изменяются.
    """
    ordered, _ = _walk(nodes, edges)
    return ordered


def build_pipeline(graph: PipelineGraph) -> Tuple[List[StageNode], List[str], List[str]]:
    """
    Линеаризует граф и собирает логи/варнинги для UI/CLI.

    Возвращает (ordered, logs, warnings).
    """
    logs: List[str] = []
    warnings: List[str] = []
    logs.append(
        f"Строим пайплайн по графу: {len(graph.nodes)} узлов, {len(graph.edges)} рёбер"
    )

    ordered, truncated_by = _walk(graph.nodes, graph.edges)

    if not ordered:
        warnings.append("В графе нет узла start, генерировать нечего.")
        logs.append("Узел start не найден.")
        return ordered, logs, warnings

    logs.append("Порядок стадий: " + " -> ".join(node.kind for node in ordered))

    if truncated_by == "branch":
        warnings.append(
            f"Узел {ordered[-1].id} имеет несколько исходящих связей. "
            "Ветвления не поддерживаются, пайплайн обрезан на этом узле."
        )
    elif truncated_by == "cycle":
        warnings.append(
            f"Обнаружен цикл после узла {ordered[-1].id}, пайплайн обрезан."
        )
    elif truncated_by == "dangling_edge":
        warnings.append(
            f"Связь из узла {ordered[-1].id} ведёт в несуществующий узел, пайплайн обрезан."
        )

    reached = {node.id for node in ordered}
    skipped = [node.id for node in graph.nodes if node.id not in reached]
    if skipped:
        warnings.append(
            "Узлы не попали в пайплайн (не связаны со start или за ветвлением): "
            + ", ".join(skipped)
        )

    logs.append(f"Пайплайн сформирован: {len(ordered)} стадий.")
    return ordered, logs, warnings


def summarize_pipeline(graph: PipelineGraph, ordered: Sequence[StageNode]) -> PipelineSummary:
    """
    Строит краткое резюме пайплайна для ответа API/CLI.
    """
    _, truncated_by = _walk(graph.nodes, graph.edges)
    stages = [node.kind for node in ordered]
    reached = {node.id for node in ordered}
    unreachable = [node.id for node in graph.nodes if node.id not in reached]

    if not stages:
        description = "Пайплайн пустой. Добавьте узел Start и соедините стадии."
    else:
        description = (
            f"Сгенерирован пайплайн из {len(stages)} стадий: {', '.join(stages)}."
        )
        if truncated_by:
            description += f" Обход остановлен ({truncated_by})."

    return PipelineSummary(
        stages_count=len(stages),
        stages=stages,
        unreachable=unreachable,
        truncated_by=truncated_by,
        description=description,
    )
