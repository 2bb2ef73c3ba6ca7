from typing import Callable, List, Sequence

from graph2pipe.core.config import LAYOUT_STEP_Y, LAYOUT_X, LAYOUT_Y
from graph2pipe.core.models import Connection, PipelineGraph, Position, StageData, StageNode


def chain_graph(
    datas: Sequence[StageData],
    node_id: Callable[[int], str],
    edge_id: Callable[[int], str],
) -> PipelineGraph:
    """
    Восстановленные стадии -> строго линейный граф.

    Узлы раскладываются вертикально по индексу, каждый соединён
    с предыдущим одним ребром (label = индекс узла).
    """
    nodes: List[StageNode] = []
    edges: List[Connection] = []

    for index, data in enumerate(datas):
        node = StageNode(
            id=node_id(index),
            position=Position(x=LAYOUT_X, y=LAYOUT_Y + index * LAYOUT_STEP_Y),
            data=data,
        )
        if nodes:
            edges.append(
                Connection(
                    id=edge_id(index),
                    source=nodes[-1].id,
                    target=node.id,
                    label=str(index),
                )
            )
        nodes.append(node)

    return PipelineGraph(nodes=nodes, edges=edges)
