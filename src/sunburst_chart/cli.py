"""sunburst CLI - aggregate flat category data and render sunburst charts."""

import json
import logging
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from sunburst_chart import __version__
from sunburst_chart.config import (
    PROJECT_CONFIG_NAME,
    VALID_DUPLICATE_PATHS,
    VALID_LABEL_MODES,
    VALID_LEVEL_ORDERS,
    ConfigLoadError,
    ConfigValidationError,
    SunburstConfig,
    generate_config_template_string,
    get_config,
)
from sunburst_chart.viz.models.dataset import DEFAULT_TITLE
from sunburst_chart.viz import (
    DEFAULT_DATASET,
    Dataset,
    DatasetError,
    HierarchyAggregator,
    OutputFormat,
    SunburstTree,
    dataset_from_query,
    load_dataset,
    render_chart,
    render_labels,
)

logger = logging.getLogger(__name__)

console = Console()

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def _fail(message: str) -> None:
    console.print(f"[red]Error:[/red] {escape(message)}")
    raise SystemExit(1)


def _parse_level_order(text: str | None) -> list[int] | None:
    """Parse "1,0" into [1, 0]."""
    if not text:
        return None
    try:
        return [int(part) for part in text.split(",")]
    except ValueError:
        raise click.BadParameter(f"expected comma-separated level indices, got '{text}'")


def _load_input(
    input_path: Path | None,
    data: str | None,
    categories: str | None,
    title: str | None,
    order: str | None,
    config: SunburstConfig,
) -> Dataset:
    """Resolve the dataset from a file, inline JSON arrays or the defaults."""
    if input_path is not None:
        dataset = load_dataset(input_path)
    elif data or categories:
        dataset = dataset_from_query({"data": data, "categories": categories})
    else:
        dataset = DEFAULT_DATASET

    if not title and dataset.title == DEFAULT_TITLE:
        title = config.chart.title
    if title:
        dataset = Dataset(
            values=dataset.values,
            category_levels=dataset.category_levels,
            title=title,
        )

    level_order = _parse_level_order(order)
    if level_order is not None:
        dataset = dataset.reorder_levels(level_order)

    return dataset


def _build_tree(ctx: click.Context, dataset: Dataset) -> SunburstTree:
    chart = ctx.obj["config"].chart
    aggregator = HierarchyAggregator(
        root_label=chart.root_label,
        duplicate_paths=chart.duplicate_paths,
        level_order=chart.level_order,
    )
    return aggregator.aggregate(dataset)


def input_options(f):
    """Options shared by every command that reads a dataset."""
    f = click.argument(
        "input_path",
        required=False,
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
    )(f)
    f = click.option("--data", help="JSON array of values")(f)
    f = click.option("--categories", help="JSON array of category levels")(f)
    f = click.option("--title", help="Chart title")(f)
    f = click.option(
        "--order",
        help="Reorder category levels, e.g. '1,0' puts level 1 next to the root",
    )(f)
    return f


@click.group()
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    envvar="SUNBURST_LOG_LEVEL",
    help="Logging verbosity",
)
@click.option(
    "--config", "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help=f"Config file (default: ./{PROJECT_CONFIG_NAME})",
)
@click.option("--root-label", help="Name of the root node")
@click.option(
    "--duplicates",
    type=click.Choice(VALID_DUPLICATE_PATHS),
    help="What happens when two items share a full category path",
)
@click.option(
    "--level-order",
    type=click.Choice(VALID_LEVEL_ORDERS),
    help="Which category level sits next to the root",
)
@click.pass_context
def main(
    ctx: click.Context,
    log_level: str,
    config_path: Path | None,
    root_label: str | None,
    duplicates: str | None,
    level_order: str | None,
) -> None:
    """sunburst - aggregate flat category data into sunburst charts."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = get_config(config_path)
    except (ConfigLoadError, ConfigValidationError) as e:
        _fail(str(e))

    # CLI flags override every other source
    if root_label:
        config.chart.root_label = root_label
    if duplicates:
        config.chart.duplicate_paths = duplicates
    if level_order:
        config.chart.level_order = level_order

    ctx.ensure_object(dict)
    ctx.obj["config"] = config


@main.command()
def version() -> None:
    """Show version."""
    console.print(f"sunburst-chart {__version__}")


@main.command()
@input_options
@click.option("--mode", "-m", type=click.Choice(VALID_LABEL_MODES), help="Label mode")
@click.option(
    "--format", "-f", "output_format",
    type=click.Choice([f.value for f in OutputFormat]),
    default=OutputFormat.ASCII.value,
    help="Output format",
)
@click.option("--depth", type=int, help="Maximum depth to render")
@click.option(
    "--output", "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write to a file instead of stdout",
)
@click.pass_context
def render(
    ctx: click.Context,
    input_path: Path | None,
    data: str | None,
    categories: str | None,
    title: str | None,
    order: str | None,
    mode: str | None,
    output_format: str,
    depth: int | None,
    output: Path | None,
) -> None:
    """Aggregate a dataset and render the chart.

    INPUT_PATH is a JSON or YAML document with "data" and "categories";
    without it, --data/--categories or the built-in sample dataset are used.
    """
    config = ctx.obj["config"]
    try:
        dataset = _load_input(input_path, data, categories, title, order, config)
        tree = _build_tree(ctx, dataset)
    except DatasetError as e:
        _fail(str(e))

    options = {}
    if output_format == OutputFormat.SVG.value:
        options = {"width": config.chart.width, "height": config.chart.height}

    rendered = render_chart(
        tree,
        format=OutputFormat(output_format),
        label_mode=mode or config.chart.label_mode,
        depth=depth,
        **options,
    )

    if output is not None:
        output.write_text(rendered)
        logger.info(f"Wrote {output_format} chart to {output}")
        console.print(f"[green]Wrote[/green] {output}")
    else:
        click.echo(rendered)


@main.command()
@input_options
@click.option("--mode", "-m", type=click.Choice(VALID_LABEL_MODES), help="Label mode")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def labels(
    ctx: click.Context,
    input_path: Path | None,
    data: str | None,
    categories: str | None,
    title: str | None,
    order: str | None,
    mode: str | None,
    as_json: bool,
) -> None:
    """List the label of every chart segment."""
    config = ctx.obj["config"]
    try:
        dataset = _load_input(input_path, data, categories, title, order, config)
        tree = _build_tree(ctx, dataset)
    except DatasetError as e:
        _fail(str(e))

    mode = mode or config.chart.label_mode
    node_labels = render_labels(tree, mode)

    if as_json:
        click.echo(json.dumps({
            "mode": mode,
            "totalSum": tree.total_sum,
            "labels": [label.to_dict() for label in node_labels],
        }, indent=2))
        return

    table = Table(title=f"{tree.title} ({mode})")
    table.add_column("Segment")
    table.add_column("Depth", justify="right")
    table.add_column("Label", justify="right")
    for label in node_labels:
        table.add_row(" / ".join(label.path), str(label.depth), label.text)
    console.print(table)


@main.command()
@input_options
@click.pass_context
def table(
    ctx: click.Context,
    input_path: Path | None,
    data: str | None,
    categories: str | None,
    title: str | None,
    order: str | None,
) -> None:
    """Show the input dataset as a table (one column per category level)."""
    config = ctx.obj["config"]
    try:
        dataset = _load_input(input_path, data, categories, title, order, config)
    except DatasetError as e:
        _fail(str(e))

    rich_table = Table(title=dataset.title)
    headers = dataset.column_headers()
    for header in headers[:-1]:
        rich_table.add_column(header)
    rich_table.add_column(headers[-1], justify="right")

    for row in dataset.rows():
        rich_table.add_row(*(str(cell) for cell in row))

    console.print(rich_table)


@main.command()
@click.option("--host", help="Bind address")
@click.option("--port", "-p", type=int, help="Port")
@click.pass_context
def serve(ctx: click.Context, host: str | None, port: int | None) -> None:
    """Serve the chart page over HTTP."""
    import uvicorn

    from sunburst_chart.viz.server import create_app

    config = ctx.obj["config"]
    host = host or config.server.host
    port = port or config.server.port

    console.print(f"[green]Serving sunburst chart at[/green] http://{host}:{port}/")
    uvicorn.run(create_app(config), host=host, port=port, log_level="warning")


@main.group("config")
def config_group() -> None:
    """Inspect and create configuration."""
    pass


@config_group.command("show")
@click.pass_context
def config_show(ctx: click.Context) -> None:
    """Show the merged configuration."""
    click.echo(json.dumps(ctx.obj["config"].to_dict(), indent=2))


@config_group.command("init")
@click.option("--force", "-f", is_flag=True, help="Overwrite existing config file")
def config_init(force: bool) -> None:
    """Write a config template to ./.sunburst.json."""
    path = Path.cwd() / PROJECT_CONFIG_NAME
    if path.exists() and not force:
        _fail(f"{path} already exists (use --force to overwrite)")

    path.write_text(generate_config_template_string() + "\n")
    console.print(f"[green]Created config at[/green] {path}")


if __name__ == "__main__":
    main()
