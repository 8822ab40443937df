"""
Paragraph parser.

Collects the fields of one status paragraph and assembles the parts of a
package record that later file-level linking needs.
"""

from dataclasses import dataclass, field

from status_explorer.core.result import ErrorKind, Failure, Result, failure, success
from status_explorer.core.util import find_duplicates, is_empty
from status_explorer.models.package import Dependency, Description
from status_explorer.parsers.fields import Field, parse_field


@dataclass(frozen=True)
class Paragraph:
    """A parsed paragraph, before dependency references are resolved."""

    name: str
    description: Description
    depends: list[Dependency] = field(default_factory=list)


def _find_field(fields: list[Field], name: str) -> Field | None:
    return next((f for f in fields if f.name == name), None)


def parse_fields(text: str) -> Result[list[Field]]:
    """Parse fields until the paragraph is consumed; stops at the first failure."""
    fields: list[Field] = []
    rest = text
    while not is_empty(rest):
        result = parse_field(rest)
        if isinstance(result, Failure):
            return result
        parsed, rest = result.value
        fields.append(parsed)
    return success(fields)


def parse_paragraph(text: str) -> Result[Paragraph]:
    """
    Parse one paragraph of a status file.

    Fails on the first malformed field, on repeated field names, and when
    the Package or Description field is missing.
    """
    result = parse_fields(text)
    if isinstance(result, Failure):
        return result
    fields = result.value

    duplicates = find_duplicates(lambda f: f.name, fields)
    if duplicates:
        return failure(f"Duplicate keys found: {', '.join(duplicates)}", ErrorKind.VALIDATION)

    package = _find_field(fields, "Package")
    if package is None:
        return failure(f"Missing Package definition: {text[:80]!r}", ErrorKind.VALIDATION)

    description = _find_field(fields, "Description")
    if description is None:
        return failure(f"Missing Description definition for {package.value}", ErrorKind.VALIDATION)

    depends = _find_field(fields, "Depends")

    return success(
        Paragraph(
            name=package.value,
            description=description.value,
            depends=depends.value if depends is not None else [],
        )
    )
