from typing import Sequence

from graph2pipe.core.config import SHELL_PLACEHOLDER
from graph2pipe.core.models import Connection, StageNode
from graph2pipe.core.services.builders.pipeline import linearize
from graph2pipe.core.stage_scripts import render as render_stage


def render(ordered: Sequence[StageNode]) -> str:
    """
    Склеивает сниппеты упорядоченных стадий в bash-скрипт.
    """
    if not ordered:
        return SHELL_PLACEHOLDER
    return "".join(render_stage(stage) for stage in ordered)


def generate_shell(nodes: Sequence[StageNode], edges: Sequence[Connection]) -> str:
    return render(linearize(nodes, edges))
