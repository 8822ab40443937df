"""
Export backends for a parsed package set.

An exporter receives the whole linked set at once, since the dependency
graph (who depends on whom) only exists across packages.
"""

from pathlib import Path
from typing import Protocol, runtime_checkable

from status_explorer.exporters.json_export import JSONExporter, build_graph_index
from status_explorer.models.package import Package


@runtime_checkable
class Exporter(Protocol):
    async def export_set(self, packages: list[Package]) -> int:
        """Persist every package and the graph index; returns the package count."""
        ...


def get_exporter(format_name: str, output_dir: str) -> Exporter:
    """Factory function to create an exporter by format name."""
    out = Path(output_dir)
    match format_name:
        case "json":
            return JSONExporter(output_dir=out)
        case _:
            raise ValueError(f"Unknown export format: {format_name!r}. Use 'json'.")


__all__ = ["Exporter", "JSONExporter", "build_graph_index", "get_exporter"]
