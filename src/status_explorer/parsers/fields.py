"""
Field parsers for dpkg status paragraphs.

Every parser takes the unconsumed remainder of a paragraph, parses a value
from its beginning and returns Success((value, rest)) so the rest can be
fed to the next parser, or a Failure describing what did not match.

Known structural fields get their own grammar:
- Package:     validated package name
- Description: synopsis plus re-flowed extended text
- Depends:     comma separated clauses with '|' alternatives

Every other field is kept as an opaque string, single-line or multiline
depending on whether the next line is a continuation line.
"""

from dataclasses import dataclass
from typing import Callable, TypeVar, Union

from status_explorer.core.result import (
    ErrorKind,
    Failure,
    Result,
    and_then,
    failure,
    map_value,
    success,
)
from status_explorer.core.util import is_empty, trim, uniq_by
from status_explorer.models.package import Dependency, Description

T = TypeVar("T")

ParseResult = Result[tuple[T, str]]
Parser = Callable[[str], ParseResult]

FieldValue = Union[str, Description, list[Dependency]]


@dataclass(frozen=True)
class Field:
    name: str
    value: FieldValue


def _char_range(start: int, end: int) -> set[str]:
    return {chr(code) for code in range(start, end + 1)}


# Printable ASCII except space and ':'
FIELD_NAME_CHARS = _char_range(0x21, 0x39) | _char_range(0x3B, 0x7E)
FIELD_NAME_DISALLOWED_START = {"#", "-"}

ALPHANUMERIC = _char_range(ord("a"), ord("z")) | _char_range(ord("0"), ord("9"))
PACKAGE_NAME_CHARS = ALPHANUMERIC | {"+", "-", "."}

BLANK_LINE_MARKER = " ."
VERBATIM_PREFIX = "  "


def _excerpt(text: str, limit: int = 40) -> str:
    return text if len(text) <= limit else text[:limit] + "..."


def _map_parsed(f: Callable, result: ParseResult) -> ParseResult:
    """Apply f to the parsed value of a (value, rest) result."""
    return map_value(lambda parsed: (f(parsed[0]), parsed[1]), result)


def _take_line(text: str) -> tuple[str, str]:
    """Split off the first raw line; the newline itself is consumed."""
    line, _, rest = text.partition("\n")
    return line, rest


def is_continuation_line(text: str) -> bool:
    return text.startswith(" ")


def parse_until(target: str, text: str, fail_if_no_match: bool = True) -> ParseResult[str]:
    """
    Parse everything before the first occurrence of target.

    When target is missing and fail_if_no_match is False, the trimmed input
    is the value and nothing remains (last line without a newline).
    """
    index = text.find(target)
    if index == -1:
        if fail_if_no_match:
            return failure(f"No match for {target!r} in {_excerpt(text)!r}")
        return success((text.strip(), ""))
    return success((text[:index], text[index + len(target):]))


def parse_line(text: str) -> ParseResult[str]:
    return parse_until("\n", text, fail_if_no_match=False)


def _validate_field_name(parsed: tuple[str, str]) -> ParseResult[str]:
    name, rest = parsed
    if is_empty(name):
        return failure("Field name cannot be empty")
    if name[0] in FIELD_NAME_DISALLOWED_START or not set(name) <= FIELD_NAME_CHARS:
        return failure(f"Invalid field name {name!r}")
    return success((name, rest))


def parse_name(text: str) -> ParseResult[str]:
    """Parse a field name up to and including the ':' separator."""
    return and_then(_validate_field_name, parse_until(":", text))


def parse_simple_value(text: str) -> ParseResult[str]:
    return _map_parsed(trim, parse_line(text))


def parse_multiline_value(text: str) -> ParseResult[list[str]]:
    """
    Parse a value line followed by any continuation lines.

    Lines are returned raw, with their leading continuation space intact,
    so field-specific parsers can interpret indentation.
    """
    line, rest = _take_line(text)
    lines = [line]
    while is_continuation_line(rest):
        line, rest = _take_line(rest)
        lines.append(line)
    return success((lines, rest))


def _reflow(lines: list[str]) -> str:
    """
    Render extended description lines as text.

    Each ' .' line becomes two newlines, a line indented by two or more
    spaces keeps its text after the indentation and ends with a newline,
    and other lines are joined with single spaces.
    """
    pieces: list[str] = []
    paragraph: list[str] = []

    def flush(line_end: str = "") -> None:
        if paragraph:
            pieces.append(" ".join(paragraph) + line_end)
            paragraph.clear()

    for line in lines:
        if line.rstrip() == BLANK_LINE_MARKER:
            flush()
            pieces.append("\n\n")
        elif line.startswith(VERBATIM_PREFIX) and not is_empty(line):
            flush("\n")
            pieces.append(line.lstrip() + "\n")
        elif not is_empty(line):
            paragraph.append(line.strip())
    flush()

    return "".join(pieces).strip("\n")


def _build_description(parsed: tuple[list[str], str]) -> ParseResult[Description]:
    lines, rest = parsed
    if all(is_empty(line) for line in lines):
        return failure("Description was empty")
    description = Description(synopsis=lines[0].strip(), description=_reflow(lines[1:]))
    return success((description, rest))


def parse_description(text: str) -> ParseResult[Description]:
    return and_then(_build_description, parse_multiline_value(text))


def _remove_version(name: str) -> str:
    return name.split(" ")[0]


def _split_dependencies(value: str) -> list[Dependency]:
    dependencies = []
    for clause in value.split(","):
        names = [_remove_version(trim(part)) for part in clause.split("|")]
        names = [name for name in names if name]
        if not names:
            continue
        dependencies.append(Dependency(name=names[0], alternatives=names[1:]))

    return sorted(uniq_by(lambda dep: dep.name, dependencies), key=lambda dep: dep.name)


def parse_dependencies(text: str) -> ParseResult[list[Dependency]]:
    """
    Parse a Depends value such as 'python (>= 2.6), a | b'.

    Version constraints are stripped, clauses deduplicated by name (last
    one wins) and the result sorted by name.
    """
    return _map_parsed(_split_dependencies, parse_simple_value(text))


def is_valid_package_name(name: str) -> bool:
    return len(name) >= 2 and name[0] in ALPHANUMERIC and set(name) <= PACKAGE_NAME_CHARS


def _validate_package_name(parsed: tuple[str, str]) -> ParseResult[str]:
    name, rest = parsed
    if not is_valid_package_name(name):
        return failure(f"Invalid package name {name!r}", ErrorKind.VALIDATION)
    return success((name, rest))


def parse_package_field(text: str) -> ParseResult[str]:
    return and_then(_validate_package_name, parse_simple_value(text))


def _join_lines(lines: list[str]) -> str:
    return "\n".join(trim(line) for line in lines).strip()


def _parse_multiline_text(text: str) -> ParseResult[str]:
    return _map_parsed(_join_lines, parse_multiline_value(text))


def _value_parser(name: str, next_line: str) -> Parser:
    match name:
        case "Description":
            return parse_description
        case "Depends":
            return parse_dependencies
        case "Package":
            return parse_package_field
        case _:
            if is_continuation_line(next_line):
                return _parse_multiline_text
            return parse_simple_value


def parse_field(text: str) -> ParseResult[Field]:
    """Parse one 'Name: value' field, including its continuation lines."""
    name_result = parse_name(text)
    if isinstance(name_result, Failure):
        return name_result

    name, rest = name_result.value
    # Peek at the following line to pick a single or multiline parser
    _, next_line = _take_line(rest)
    parse_value = _value_parser(name, next_line)

    return _map_parsed(lambda value: Field(name=name, value=value), parse_value(rest))
