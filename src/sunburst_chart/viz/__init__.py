"""Sunburst Visualization Module.

Provides hierarchy aggregation, label views, radial layout and rendering for
flat (value, category path) datasets.

Public API:
    - build_hierarchy: values + category levels → CategoryNode
    - aggregate_dataset: Dataset → SunburstTree
    - format_label / render_labels: label views for one node / every node
    - render_chart: SunburstTree → str
    - visualize_dataset: Dataset → rendered output (all-in-one)

Example:
    from sunburst_chart.viz import visualize_dataset, OutputFormat, DEFAULT_DATASET

    # Quick visualization
    svg = visualize_dataset(DEFAULT_DATASET, format=OutputFormat.SVG)

    # Step by step
    from sunburst_chart.viz import aggregate_dataset, render_labels, LabelMode

    tree = aggregate_dataset(DEFAULT_DATASET)
    labels = render_labels(tree, LabelMode.PERCENTAGE)
"""

from sunburst_chart.viz.models import (
    DEFAULT_DATASET,
    DEFAULT_ROOT_LABEL,
    CategoryNode,
    Dataset,
    DatasetError,
    DatasetShapeError,
    InvalidValueError,
    SunburstTree,
)
from sunburst_chart.viz.aggregation import (
    DuplicatePathError,
    DuplicatePathPolicy,
    HierarchyAggregator,
    LevelOrder,
    aggregate_dataset,
    build_hierarchy,
)
from sunburst_chart.viz.labels import (
    LabelFormatter,
    LabelMode,
    NodeLabel,
    format_label,
    render_labels,
)
from sunburst_chart.viz.layout import ArcLayout, partition
from sunburst_chart.viz.extraction import (
    DatasetLoadError,
    dataset_from_query,
    load_dataset,
)
from sunburst_chart.viz.renderers import (
    ASCIIRenderer,
    CategoryColorMap,
    JSONRenderer,
    OutputFormat,
    SVGRenderer,
)


def render_chart(
    tree: SunburstTree,
    *,
    format: OutputFormat = OutputFormat.ASCII,
    label_mode: LabelMode | str = LabelMode.VALUE,
    depth: int | None = None,
    **options,
) -> str:
    """Render a SunburstTree to the specified format.

    Args:
        tree: The aggregated tree to render
        format: Output format (ASCII, JSON, SVG)
        label_mode: Label view per node
        depth: Maximum tree depth to render
        **options: Format-specific options

    Returns:
        Rendered output
    """
    format = OutputFormat(format)
    if format == OutputFormat.JSON:
        renderer = JSONRenderer()
    elif format == OutputFormat.SVG:
        renderer = SVGRenderer()
    else:
        renderer = ASCIIRenderer()

    return renderer.render(
        tree,
        label_mode=label_mode,
        depth=depth,
        **options,
    )


def visualize_dataset(
    dataset: Dataset,
    *,
    format: OutputFormat = OutputFormat.ASCII,
    label_mode: LabelMode | str = LabelMode.VALUE,
    root_label: str = DEFAULT_ROOT_LABEL,
    duplicate_paths: DuplicatePathPolicy = DuplicatePathPolicy.OVERWRITE,
    level_order: LevelOrder = LevelOrder.ROOT_FIRST,
    **options,
) -> str:
    """All-in-one function to aggregate and render a dataset.

    Args:
        dataset: The input dataset
        format: Output format
        label_mode: Label view per node
        root_label: Name of the root node
        duplicate_paths: Policy for repeated full category paths
        level_order: Which category level sits next to the root
        **options: Additional renderer options

    Returns:
        Rendered visualization
    """
    tree = aggregate_dataset(
        dataset,
        root_label=root_label,
        duplicate_paths=duplicate_paths,
        level_order=level_order,
    )
    return render_chart(tree, format=format, label_mode=label_mode, **options)


__all__ = [
    # Models
    "CategoryNode",
    "Dataset",
    "SunburstTree",
    "NodeLabel",
    "ArcLayout",
    "DEFAULT_DATASET",
    "DEFAULT_ROOT_LABEL",
    # Errors
    "DatasetError",
    "DatasetShapeError",
    "DatasetLoadError",
    "DuplicatePathError",
    "InvalidValueError",
    # Configuration
    "DuplicatePathPolicy",
    "LevelOrder",
    "LabelMode",
    "OutputFormat",
    # Core
    "HierarchyAggregator",
    "LabelFormatter",
    "CategoryColorMap",
    "build_hierarchy",
    "aggregate_dataset",
    "format_label",
    "render_labels",
    "partition",
    "render_chart",
    "visualize_dataset",
    "dataset_from_query",
    "load_dataset",
]
