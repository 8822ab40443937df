"""
Status Explorer - Cross-referenced view of installed Debian packages.

Parses a dpkg status file into packages with their descriptions,
dependencies and computed dependants.
"""

__version__ = "1.0.0"


def __getattr__(name: str):
    """Lazy import for heavy dependencies."""
    if name == "PackageRepository":
        from status_explorer.core.repository import PackageRepository

        return PackageRepository
    if name == "Package":
        from status_explorer.models.package import Package

        return Package
    if name == "parse_file":
        from status_explorer.parsers.status import parse_file

        return parse_file
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = ["PackageRepository", "Package", "parse_file", "__version__"]
