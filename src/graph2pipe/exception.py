from typing import List, Optional


class Graph2PipeException(Exception):
    """
    Базовое исключение graph2pipe.

    description: человекочитаемое описание (CLI показывает его пользователю);
    logs: шаги, накопленные до ошибки.
    """

    def __init__(
        self,
        *args,
        description: str = "Something happend...",
        logs: Optional[List[str]] = None,
    ) -> None:
        super().__init__(*args or (description,))
        self.description = description
        self.logs: List[str] = logs or []


class GraphLoadError(Graph2PipeException):
    """
    Не удалось прочитать или провалидировать JSON-снимок графа.
    """

    def __init__(
        self,
        path: str,
        logs: Optional[List[str]] = None,
        *args,
    ) -> None:
        description = f"Error to load pipeline graph from {path}"
        super().__init__(*args, description=description, logs=logs)
        self.path = path
