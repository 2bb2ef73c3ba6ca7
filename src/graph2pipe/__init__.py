from .core.models import (
    STAGE_KINDS,
    Connection,
    PipelineGraph,
    Position,
    StageData,
    StageNode,
)
from .core.services.builders.pipeline import linearize
from .core.stage_scripts import dequote, render
from .core.renders.shell import generate_shell
from .core.renders.workflow import generate_yaml
from .core.services.parsers import (
    parse_workflow_to_graph,
    parse_script_to_graph,
    generate_shell_from_yaml,
    generate_yaml_from_shell,
)
from .core.core import Graph2PipeCore

__all__ = [
    "STAGE_KINDS",
    "Connection",
    "PipelineGraph",
    "Position",
    "StageData",
    "StageNode",
    "linearize",
    "dequote",
    "render",
    "generate_shell",
    "generate_yaml",
    "parse_workflow_to_graph",
    "parse_script_to_graph",
    "generate_shell_from_yaml",
    "generate_yaml_from_shell",
    "Graph2PipeCore",
]
