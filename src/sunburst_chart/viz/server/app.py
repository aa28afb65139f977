# Copyright 2026 Pennyworth Technologies, Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""FastAPI application serving sunburst charts.

Every endpoint reads the dataset from the ``data``, ``categories`` and
``title`` query parameters (URL-encoded JSON) and falls back to the default
dataset. ``mode`` picks the label view.
"""

import html
import logging
from typing import Optional
from urllib.parse import urlencode

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, Response

from sunburst_chart import __version__
from sunburst_chart.config import SunburstConfig
from sunburst_chart.viz.aggregation import HierarchyAggregator
from sunburst_chart.viz.extraction import dataset_from_query
from sunburst_chart.viz.labels import LabelMode, render_labels
from sunburst_chart.viz.models import DatasetError, SunburstTree
from sunburst_chart.viz.renderers import SVGRenderer
from sunburst_chart.viz.server.schemas import LabelsOutput, TreeOutput

logger = logging.getLogger(__name__)

MODE_BUTTONS = (
    (LabelMode.CATEGORY, "Show Categories"),
    (LabelMode.VALUE, "Show Values"),
    (LabelMode.PERCENTAGE, "Show Percentages"),
)


def create_app(config: Optional[SunburstConfig] = None) -> FastAPI:
    """Create the FastAPI application.

    Args:
        config: Chart configuration (defaults if None)

    Returns:
        Configured FastAPI application
    """
    config = config or SunburstConfig()
    chart = config.chart

    app = FastAPI(
        title="Sunburst Chart",
        description="Aggregates flat category data into sunburst charts",
        version=__version__,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    aggregator = HierarchyAggregator(
        root_label=chart.root_label,
        duplicate_paths=chart.duplicate_paths,
        level_order=chart.level_order,
    )

    def _build_tree(
        data: Optional[str],
        categories: Optional[str],
        title: Optional[str],
    ) -> SunburstTree:
        try:
            dataset = dataset_from_query(
                {"data": data, "categories": categories, "title": title}
            )
            tree = aggregator.aggregate(dataset)
        except DatasetError as e:
            logger.warning(f"Rejected dataset: {e}")
            raise HTTPException(status_code=400, detail=str(e))

        if not title and chart.title:
            tree.title = chart.title
        return tree

    def _mode(mode: Optional[str]) -> LabelMode:
        if mode is None:
            return LabelMode(chart.label_mode)
        parsed = LabelMode.parse(mode)
        if parsed is None:
            raise HTTPException(status_code=400, detail=f"Unknown label mode: {mode}")
        return parsed

    @app.get("/", response_class=HTMLResponse)
    async def chart_page(
        data: Optional[str] = Query(None, description="JSON array of values"),
        categories: Optional[str] = Query(None, description="JSON array of category levels"),
        title: Optional[str] = Query(None, description="Chart title"),
        mode: Optional[str] = Query(None, description="Label mode"),
    ):
        """Serve the chart page with label mode buttons."""
        tree = _build_tree(data, categories, title)
        label_mode = _mode(mode)
        svg = SVGRenderer().render(
            tree, label_mode=label_mode, width=chart.width, height=chart.height
        )

        carried = {k: v for k, v in (("data", data), ("categories", categories), ("title", title)) if v}
        buttons = "\n".join(
            f'<a class="mode{" active" if m == label_mode else ""}" '
            f'href="?{html.escape(urlencode({**carried, "mode": m.value}))}">{text}</a>'
            for m, text in MODE_BUTTONS
        )
        return get_inline_page(html.escape(tree.title), svg, buttons)

    @app.get("/sunburst.svg")
    async def chart_svg(
        data: Optional[str] = Query(None),
        categories: Optional[str] = Query(None),
        title: Optional[str] = Query(None),
        mode: Optional[str] = Query(None),
    ):
        """Get the chart as a standalone SVG document."""
        tree = _build_tree(data, categories, title)
        svg = SVGRenderer().render(
            tree, label_mode=_mode(mode), width=chart.width, height=chart.height
        )
        return Response(content=svg, media_type="image/svg+xml")

    @app.get("/api/tree", response_model=TreeOutput)
    async def get_tree(
        data: Optional[str] = Query(None),
        categories: Optional[str] = Query(None),
        title: Optional[str] = Query(None),
    ):
        """Get the aggregated tree."""
        return _build_tree(data, categories, title).to_dict()

    @app.get("/api/labels", response_model=LabelsOutput)
    async def get_labels(
        data: Optional[str] = Query(None),
        categories: Optional[str] = Query(None),
        title: Optional[str] = Query(None),
        mode: Optional[str] = Query(None),
    ):
        """Get the label of every drawn node under a label mode."""
        tree = _build_tree(data, categories, title)
        label_mode = _mode(mode)
        return {
            "mode": label_mode.value,
            "totalSum": tree.total_sum,
            "labels": [label.to_dict() for label in render_labels(tree, label_mode)],
        }

    return app


def get_inline_page(title: str, svg: str, buttons: str) -> str:
    """Return the chart page HTML."""
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <title>{title}</title>
    <style>
        body {{
            font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, sans-serif;
            display: flex;
            flex-direction: column;
            align-items: center;
        }}
        .modes a {{
            display: inline-block;
            margin: 4px;
            padding: 6px 12px;
            border: 1px solid #94a3b8;
            border-radius: 4px;
            color: #1f2937;
            text-decoration: none;
        }}
        .modes a.active {{
            background: #e2e8f0;
        }}
    </style>
</head>
<body>
{svg}
<div class="modes">
{buttons}
</div>
</body>
</html>"""
