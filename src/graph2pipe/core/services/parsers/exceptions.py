from typing import List, Optional

from graph2pipe.exception import Graph2PipeException


class ParserExceptions(Graph2PipeException):
    """
    Базовое исключение разбора текстовых артефактов (workflow / bash).

    Наружу из ядра не выходит: публичные parse-функции превращают его
    в пустой граф, а логи складывают в переданный список.
    """

    def __init__(
        self,
        *args,
        description: str = "Something happend when parse pipeline text",
        logs: Optional[List[str]] = None,
    ) -> None:
        super().__init__(*args, description=description, logs=logs)


class WorkflowParseError(ParserExceptions):
    """
    Workflow YAML не разобрался или в нём нет jobs.pipeline.steps.
    """

    def __init__(
        self,
        reason: str,
        logs: Optional[List[str]] = None,
        *args,
    ) -> None:
        description = f"Error to parse workflow YAML: {reason}"
        super().__init__(*args, description=description, logs=logs)
        self.reason = reason


class ScriptParseError(ParserExceptions):
    """
    Bash-скрипт не удалось разобрать на шаги.
    """

    def __init__(
        self,
        reason: str,
        logs: Optional[List[str]] = None,
        *args,
    ) -> None:
        description = f"Error to parse shell script: {reason}"
        super().__init__(*args, description=description, logs=logs)
        self.reason = reason
