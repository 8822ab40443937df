"""
Status file parser.

Splits a dpkg status file into paragraphs, parses each of them and links
the result into packages: dependencies are marked installed when a
paragraph of the same file provides them, and every package gets the list
of packages depending on it.

Parsing is all-or-nothing; the first failing paragraph fails the file.
"""

import logging
from collections import defaultdict

from status_explorer.core.result import ErrorKind, Failure, Result, failure, success
from status_explorer.core.util import find_duplicates, is_empty
from status_explorer.models.package import AlternativeReference, Dependency, Package, Reference
from status_explorer.parsers.paragraph import Paragraph, parse_paragraph

logger = logging.getLogger(__name__)

PARAGRAPH_SEPARATOR = "\n\n"


def split_paragraphs(text: str) -> list[str]:
    """Split on blank lines, dropping empty chunks."""
    chunks = (chunk.strip("\n") for chunk in text.split(PARAGRAPH_SEPARATOR))
    return [chunk for chunk in chunks if not is_empty(chunk)]


def build_dependants(paragraphs: list[Paragraph]) -> dict[str, list[str]]:
    """Invert dependency edges: dependency name -> names of its dependants."""
    dependants: dict[str, list[str]] = defaultdict(list)
    for paragraph in paragraphs:
        for dependency in paragraph.depends:
            dependants[dependency.name].append(paragraph.name)
    return dependants


def _resolve(dependency: Dependency, installed: set[str]) -> Reference:
    return Reference(
        name=dependency.name,
        installed=dependency.name in installed,
        alternatives=[
            AlternativeReference(name=alt, installed=alt in installed)
            for alt in dependency.alternatives
        ],
    )


def link_packages(paragraphs: list[Paragraph]) -> list[Package]:
    """Turn sorted paragraphs into packages with resolved references."""
    installed = {p.name for p in paragraphs}
    dependants = build_dependants(paragraphs)

    return [
        Package(
            name=p.name,
            description=p.description,
            depends=[_resolve(dep, installed) for dep in p.depends],
            dependants=[
                Reference(name=name, installed=name in installed)
                for name in dependants.get(p.name, [])
            ],
        )
        for p in paragraphs
    ]


def parse_file(text: str) -> Result[list[Package]]:
    """Parse a whole status file into packages sorted by name."""
    paragraphs: list[Paragraph] = []
    for chunk in split_paragraphs(text):
        result = parse_paragraph(chunk)
        if isinstance(result, Failure):
            logger.debug(f"[STATUS] Paragraph {len(paragraphs) + 1} failed: {result.message}")
            return result
        paragraphs.append(result.value)

    duplicates = find_duplicates(lambda p: p.name, paragraphs)
    if duplicates:
        return failure(f"Duplicate packages found: {', '.join(duplicates)}", ErrorKind.VALIDATION)

    paragraphs.sort(key=lambda p: p.name)
    packages = link_packages(paragraphs)

    logger.info(f"[STATUS] Parsed {len(packages)} packages")
    return success(packages)
