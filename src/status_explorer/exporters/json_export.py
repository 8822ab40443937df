"""
JSON export of a linked package set.

Output structure:
    output_dir/
    ├── index.json            package -> synopsis, depends, dependants
    └── packages/
        ├── libws-commons-util-java.json
        └── lsb-release.json

The index lists only installed names, so it can be walked as a graph
without the per-package documents.
"""

import json
import logging
from pathlib import Path

import aiofiles

from status_explorer.models.package import Package

logger = logging.getLogger(__name__)

INDEX_FILENAME = "index.json"
PACKAGES_DIRNAME = "packages"


def build_graph_index(packages: list[Package]) -> dict[str, dict]:
    """Map each package to its synopsis and installed depends/dependants."""
    return {
        package.name: {
            "synopsis": package.description.synopsis,
            "depends": [ref.name for ref in package.depends if ref.installed],
            "dependants": [ref.name for ref in package.dependants],
        }
        for package in packages
    }


class JSONExporter:
    def __init__(self, output_dir: Path):
        self.output_dir = output_dir
        self.packages_dir = output_dir / PACKAGES_DIRNAME

    async def _write_json(self, path: Path, data) -> None:
        async with aiofiles.open(path, "w") as f:
            await f.write(json.dumps(data, indent=2))

    async def export_set(self, packages: list[Package]) -> int:
        self.packages_dir.mkdir(parents=True, exist_ok=True)

        for package in packages:
            await self._write_json(self.packages_dir / f"{package.name}.json", package.to_dict())
            logger.debug(f"[JSON] Wrote {package.name}")

        await self._write_json(self.output_dir / INDEX_FILENAME, build_graph_index(packages))
        logger.info(f"[JSON] Exported {len(packages)} packages and graph index to {self.output_dir}")
        return len(packages)
