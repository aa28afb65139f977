"""SVG sunburst renderer.

Draws one annular wedge per non-root node, colored by category name, with a
rotated label at each wedge's mid-radius and a hover tooltip.
Uses pure SVG without external dependencies.
"""

import math

from sunburst_chart.viz.labels import LabelFormatter, LabelMode
from sunburst_chart.viz.layout.partition import FULL_CIRCLE, ArcLayout, partition
from sunburst_chart.viz.models.tree import SunburstTree
from sunburst_chart.viz.renderers.base import CategoryColorMap, OutputFormat


class SVGRenderer:
    """Renders a SunburstTree as an SVG sunburst."""

    format = OutputFormat.SVG

    # Layout configuration
    WIDTH = 600
    HEIGHT = 600
    TITLE_SPACE = 80
    TEXT_SIZE = 12
    TITLE_SIZE = 24
    STROKE = "#fff"

    def __init__(self) -> None:
        self.formatter = LabelFormatter()

    def render(
        self,
        tree: SunburstTree,
        *,
        label_mode: LabelMode | str = LabelMode.VALUE,
        depth: int | None = None,
        width: int | None = None,
        height: int | None = None,
        colors: CategoryColorMap | None = None,
        **options,
    ) -> str:
        """Render the tree as SVG.

        Args:
            tree: The aggregated tree to render
            label_mode: Label view per wedge
            depth: Maximum depth to render
            width: Chart width (default 600)
            height: Chart height, excluding the title band (default 600)
            colors: Color map to reuse; a fresh one is created per chart
            **options: Additional options

        Returns:
            SVG string
        """
        width = width or self.WIDTH
        height = height or self.HEIGHT
        radius = min(width, height) / 2
        if colors is None:
            colors = CategoryColorMap()

        svg_height = height + self.TITLE_SPACE
        # Breadth-first: colors are assigned ring by ring
        layouts = sorted(
            (
                layout for layout in partition(tree)[1:]
                if depth is None or layout.depth <= depth
            ),
            key=lambda layout: layout.depth,
        )

        svg_parts = [
            self._svg_header(width, svg_height),
            self._svg_styles(),
            f'''<g class="title" transform="translate({width / 2}, 30)">''',
            f'''<text class="chart-title" text-anchor="middle">{self._escape_xml(tree.title)}</text>''',
            "</g>",
            f'''<g class="chart" transform="translate({width / 2}, {height / 2 + self.TITLE_SPACE / 2})">''',
        ]

        # Draw wedges first so labels sit on top
        for layout in layouts:
            if layout.span <= 0:
                continue
            svg_parts.append(
                self._draw_wedge(layout, radius, colors, label_mode, tree.total_sum)
            )

        for layout in layouts:
            if layout.span <= 0:
                continue
            svg_parts.append(
                self._draw_label(layout, radius, label_mode, tree.total_sum)
            )

        svg_parts.append("</g>")
        svg_parts.append("</svg>")

        return "\n".join(svg_parts)

    def _svg_header(self, width: int, height: int) -> str:
        """Generate SVG header."""
        return f'''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 {width} {height}" width="{width}" height="{height}">'''

    def _svg_styles(self) -> str:
        """Generate SVG styles."""
        return f"""<style>
    .wedge {{
        stroke: {self.STROKE};
    }}
    .label-text {{
        font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, sans-serif;
        font-size: {self.TEXT_SIZE}px;
        fill: #000;
        pointer-events: none;
    }}
    .chart-title {{
        font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, sans-serif;
        font-size: {self.TITLE_SIZE}px;
        font-weight: bold;
    }}
</style>"""

    def _draw_wedge(
        self,
        layout: ArcLayout,
        radius: float,
        colors: CategoryColorMap,
        label_mode: LabelMode | str,
        total_sum: float,
    ) -> str:
        """Draw one annular wedge with its tooltip."""
        node = layout.node
        fill = colors.color_for(str(node.name))
        path = self.arc_path(
            layout.x0, layout.x1, layout.y0 * radius, layout.y1 * radius
        )
        tooltip = self.formatter.tooltip(node, label_mode, total_sum)
        return (
            f'''<path class="wedge" d="{path}" fill="{fill}" data-depth="{layout.depth}">'''
            f'''<title>{self._escape_xml(tooltip)}</title></path>'''
        )

    def _draw_label(
        self,
        layout: ArcLayout,
        radius: float,
        label_mode: LabelMode | str,
        total_sum: float,
    ) -> str:
        """Draw a label at the wedge's mid-radius, rotated along its angle."""
        text = self.formatter.label(layout.node, label_mode, total_sum)
        x, y = self._point(layout.mid_angle, layout.mid_radius * radius)
        rotation = math.degrees(layout.mid_angle) - 90
        return (
            f'''<text class="label-text" transform="translate({x:.2f}, {y:.2f}) rotate({rotation:.2f})" '''
            f'''dy="0.35em" text-anchor="middle">{self._escape_xml(text)}</text>'''
        )

    @classmethod
    def arc_path(cls, x0: float, x1: float, inner: float, outer: float) -> str:
        """SVG path data for an annular sector.

        Angles run clockwise from twelve o'clock, in radians.
        """
        if x1 - x0 >= FULL_CIRCLE - 1e-9:
            # A single arc command cannot draw a closed circle
            mid = x0 + math.pi
            return " ".join([
                cls._ring_half(x0, mid, inner, outer),
                cls._ring_half(mid, x1, inner, outer),
            ])
        return cls._ring_half(x0, x1, inner, outer)

    @classmethod
    def _ring_half(cls, x0: float, x1: float, inner: float, outer: float) -> str:
        large_arc = 1 if x1 - x0 > math.pi else 0
        ox0, oy0 = cls._point(x0, outer)
        ox1, oy1 = cls._point(x1, outer)
        parts = [
            f"M {ox0:.2f} {oy0:.2f}",
            f"A {outer:.2f} {outer:.2f} 0 {large_arc} 1 {ox1:.2f} {oy1:.2f}",
        ]
        if inner > 0:
            ix1, iy1 = cls._point(x1, inner)
            ix0, iy0 = cls._point(x0, inner)
            parts.append(f"L {ix1:.2f} {iy1:.2f}")
            parts.append(f"A {inner:.2f} {inner:.2f} 0 {large_arc} 0 {ix0:.2f} {iy0:.2f}")
        else:
            parts.append("L 0 0")
        parts.append("Z")
        return " ".join(parts)

    @staticmethod
    def _point(angle: float, r: float) -> tuple[float, float]:
        return r * math.sin(angle), -r * math.cos(angle)

    def _escape_xml(self, text: str) -> str:
        """Escape XML special characters."""
        return (
            str(text).replace("&", "&amp;")
            .replace("<", "&lt;")
            .replace(">", "&gt;")
            .replace('"', "&quot;")
            .replace("'", "&apos;")
        )
