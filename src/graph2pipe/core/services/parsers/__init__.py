from .workflow import parse_workflow_to_graph, generate_shell_from_yaml
from .script import parse_script_to_graph, generate_yaml_from_shell

from .exceptions import (
    ParserExceptions,
    WorkflowParseError,
    ScriptParseError,
)

__all__ = [
    "parse_workflow_to_graph",
    "parse_script_to_graph",
    "generate_shell_from_yaml",
    "generate_yaml_from_shell",
    "ParserExceptions",
    "WorkflowParseError",
    "ScriptParseError",
]
