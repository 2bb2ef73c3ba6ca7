import json
from pathlib import Path

import click
from pydantic import ValidationError

from graph2pipe.core import config
from graph2pipe.core.core import Graph2PipeCore, CI_TYPES
from graph2pipe.core.models import PipelineGraph
from graph2pipe.core.palette import PALETTE, label_for
from graph2pipe.exception import Graph2PipeException, GraphLoadError


DEFAULT_NAMES = {"shell": "pipeline.sh", "workflow": "pipeline.yml"}


def load_graph(path: str) -> PipelineGraph:
    logs = [f"Читаем граф из {path}"]
    try:
        raw = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        logs.append(str(e))
        raise GraphLoadError(path=path, logs=logs) from e
    try:
        return PipelineGraph.model_validate_json(raw)
    except ValidationError as e:
        logs.append(str(e))
        raise GraphLoadError(path=path, logs=logs) from e


def read_text(path: str) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise click.ClickException(f"Не удалось прочитать файл '{path}': {e}")


def write_text(output: Path, text: str, what: str) -> None:
    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(text, encoding="utf-8")
    except OSError as e:
        click.echo(f"Не удалось сохранить {what} в файл '{output}': {e}", err=True)
    else:
        click.echo(f"{what} сохранён в файл: {output}", err=True)


def echo_warnings(warnings) -> None:
    for warning in warnings:
        click.echo(f"warning: {warning}", err=True)


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Печатать логи обработки")
@click.pass_context
def main(ctx: click.Context, verbose: bool):
    """CI/CD graph -> bash / workflow YAML и обратно."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


@main.command()
@click.option("--type", "ci_type", default="workflow", type=click.Choice(CI_TYPES), help="Тип артефакта")
@click.option("-o", "--output", default=None, help="Путь к директории, куда сохранить результат")
@click.argument("graph_file")
@click.pass_context
def generate(ctx: click.Context, graph_file: str, ci_type: str, output: str | None):
    """Сгенерировать bash-скрипт или workflow YAML по JSON-графу."""
    click.echo(config.LOGO + "\n", err=True)
    try:
        graph = load_graph(graph_file)
    except Graph2PipeException as e:
        if ctx.obj["verbose"]:
            for line in e.logs:
                click.echo(line, err=True)
        raise click.ClickException(e.description)

    result = Graph2PipeCore().generate(graph, ci_types=[ci_type])
    if ctx.obj["verbose"]:
        for line in result.logs:
            click.echo(line, err=True)
    echo_warnings(result.warnings)

    template = result.ci_templates[ci_type]
    click.echo(template)

    if result.status == "empty":
        raise click.ClickException("В графе нет узла Start, файл не сохранён.")

    out_dir = Path(output) if output is not None else config.OUTPUT_DIR
    write_text(out_dir / DEFAULT_NAMES[ci_type], template, ci_type)


@main.command()
@click.option("--type", "text_type", default="workflow", type=click.Choice(["workflow", "script"]), help="Формат входного текста")
@click.option("-o", "--output", default=None, help="Файл, куда сохранить JSON графа")
@click.argument("text_file")
@click.pass_context
def parse(ctx: click.Context, text_file: str, text_type: str, output: str | None):
    """Восстановить граф из workflow YAML или bash-скрипта."""
    text = read_text(text_file)
    core = Graph2PipeCore()
    if text_type == "workflow":
        result = core.update_graph_from_workflow(PipelineGraph(), text)
    else:
        result = core.update_graph_from_script(PipelineGraph(), text)

    if ctx.obj["verbose"]:
        for line in result.logs:
            click.echo(line, err=True)
    echo_warnings(result.warnings)

    if not result.replaced:
        raise click.ClickException(f"Из '{text_file}' не удалось восстановить граф.")

    payload = json.dumps(
        result.graph.model_dump(by_alias=True, exclude_none=True),
        ensure_ascii=False,
        indent=2,
    )
    click.echo(payload)
    if output:
        write_text(Path(output), payload + "\n", "graph")


@main.command()
@click.option("--to", "target", required=True, type=click.Choice(["shell", "workflow"]), help="Целевой формат")
@click.argument("text_file")
def convert(text_file: str, target: str):
    """Конвертировать workflow YAML в bash или bash в workflow YAML."""
    click.echo(Graph2PipeCore().convert(read_text(text_file), to=target))


@main.command()
def palette():
    """Показать палитру стадий с атрибутами по умолчанию."""
    for name, data in PALETTE:
        attrs = data.model_dump(by_alias=True, exclude_none=True, exclude={"kind"})
        click.echo(f"{data.kind:<16} {label_for(data):<24} {name:<16} {json.dumps(attrs, ensure_ascii=False)}")


if __name__ == "__main__":
    main()
