from typing import List

import pytest

from graph2pipe.core.models import Connection, PipelineGraph, StageData, StageNode


START_SNIPPET = '#!/bin/bash\n# CI/CD Pipeline\necho "🚀 Starting pipeline..."\n'


def chain(*datas: StageData) -> PipelineGraph:
    """Linear graph n0 -> n1 -> ... built from stage data in order."""
    nodes: List[StageNode] = [
        StageNode(id=f"n{i}", data=data) for i, data in enumerate(datas)
    ]
    edges = [
        Connection(id=f"e{i}", source=nodes[i - 1].id, target=nodes[i].id)
        for i in range(1, len(nodes))
    ]
    return PipelineGraph(nodes=nodes, edges=edges)


@pytest.fixture
def make_chain():
    return chain


@pytest.fixture
def start_data() -> StageData:
    return StageData(kind="start", label="Start")
