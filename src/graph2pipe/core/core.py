from typing import Iterable

from .renders import shell as shell_render, workflow as workflow_render
from .services.builders import pipeline as builder
from .services.parsers import (
    parse_script_to_graph,
    parse_workflow_to_graph,
    generate_shell_from_yaml,
    generate_yaml_from_shell,
)
from .models import GenerateResponse, ParseResponse, PipelineGraph


CI_TYPES = ("shell", "workflow")


class Graph2PipeCore:
    """
    Фасад над чистыми функциями ядра: генерация текстов по графу и обратный
    разбор текста в граф. Копит logs/warnings и отдаёт их в pydantic-ответах.
    Ошибки разбора за пределы фасада не выходят.
    """

    def __init__(self):
        self.logs: list[str] = []
        self.warnings: list[str] = []

    def _reset(self) -> None:
        self.logs = []
        self.warnings = []

    def generate(self, graph: PipelineGraph, ci_types: Iterable[str] = CI_TYPES) -> GenerateResponse:
        self._reset()
        ci_templates: dict[str, str] = {}

        # 1) Линеаризуем граф
        ordered, pipeline_logs, pipeline_warnings = builder.build_pipeline(graph)
        self.logs.extend(pipeline_logs)
        self.warnings.extend(pipeline_warnings)

        # 2) Краткое резюме пайплайна
        pipeline_summary = builder.summarize_pipeline(graph, ordered)

        # 3) Рендерим шаблоны (для пустого пайплайна это заглушки)
        for ci_type in ci_types:
            if ci_type == "shell":
                ci_templates["shell"] = shell_render.render(ordered)
            elif ci_type == "workflow":
                ci_templates["workflow"] = workflow_render.render(ordered)
            else:
                self.warnings.append(
                    f"Неизвестный тип шаблона {ci_type!r}. Доступные: {list(CI_TYPES)}"
                )

        if not ci_templates:
            self.warnings.append(
                "ci_types пустой, шаблоны не сгенерированы. Укажите 'shell' или 'workflow'."
            )

        return GenerateResponse(
            status="ok" if ordered else "empty",
            ci_templates=ci_templates,
            warnings=self.warnings,
            logs=self.logs,
            pipeline_summary=pipeline_summary,
        )

    def _replace(self, current: PipelineGraph, parsed: PipelineGraph) -> ParseResponse:
        if parsed.is_empty():
            self.warnings.append(
                "Из текста не восстановлено ни одного узла, текущий граф оставлен без изменений."
            )
            return ParseResponse(
                status="empty",
                graph=current,
                replaced=False,
                warnings=self.warnings,
                logs=self.logs,
            )

        self.logs.append(
            f"Граф заменён: {len(parsed.nodes)} узлов, {len(parsed.edges)} рёбер."
        )
        return ParseResponse(
            status="ok",
            graph=parsed,
            replaced=True,
            warnings=self.warnings,
            logs=self.logs,
        )

    def update_graph_from_workflow(self, current: PipelineGraph, text: str) -> ParseResponse:
        """
        Разбирает workflow YAML. Граф редактора заменяется целиком, только
        если разбор дал хотя бы один узел.
        """
        self._reset()
        return self._replace(current, parse_workflow_to_graph(text, logs=self.logs))

    def update_graph_from_script(self, current: PipelineGraph, text: str) -> ParseResponse:
        self._reset()
        return self._replace(current, parse_script_to_graph(text, logs=self.logs))

    def convert(self, text: str, to: str) -> str:
        """
        Конвертация между форматами без графа: workflow -> shell, shell -> workflow.
        """
        self._reset()
        if to == "shell":
            return generate_shell_from_yaml(text, logs=self.logs)
        if to == "workflow":
            return generate_yaml_from_shell(text, logs=self.logs)
        raise ValueError(f"Unsupported conversion target: {to}")
