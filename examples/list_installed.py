"""
Example: Print installed packages and the packages depending on them.

Usage:
    python examples/list_installed.py /var/lib/dpkg/status
"""

import asyncio
import sys
from pathlib import Path

from status_explorer import PackageRepository
from status_explorer.core.result import Failure


async def main(status_file: Path):
    repository = PackageRepository(status_file)
    result = await repository.list_packages()

    if isinstance(result, Failure):
        print(f"Could not load {status_file}: {result}")
        return 1

    for package in result.value:
        dependants = ", ".join(ref.name for ref in package.dependants) or "-"
        print(f"{package.name}: {package.description.synopsis} [needed by: {dependants}]")
    return 0


if __name__ == "__main__":
    path = Path(sys.argv[1]) if len(sys.argv) > 1 else Path("/var/lib/dpkg/status")
    sys.exit(asyncio.run(main(path)))
