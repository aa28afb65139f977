"""HTTP server for sunburst charts."""

from sunburst_chart.viz.server.app import create_app

__all__ = ["create_app"]
