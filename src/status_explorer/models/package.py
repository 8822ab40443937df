"""
Installed package model.

Defines the records produced by parsing a dpkg status file: the
paragraph-local Dependency and the file-scoped, cross-referenced Package
with its resolved depends and dependants.
"""

from dataclasses import asdict, dataclass, field


@dataclass(frozen=True)
class Description:
    """Synopsis line plus the re-flowed extended description."""

    synopsis: str
    description: str


@dataclass(frozen=True)
class Dependency:
    """One clause of a Depends field: primary name and ordered alternatives."""

    name: str
    alternatives: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class AlternativeReference:
    name: str
    installed: bool


@dataclass(frozen=True)
class Reference:
    """
    A dependency or dependant edge resolved against the parsed file.

    `installed` is true when `name` is a package of the same file.
    Dependant references never carry alternatives.
    """

    name: str
    installed: bool
    alternatives: list[AlternativeReference] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "Reference":
        return cls(
            name=data["name"],
            installed=data["installed"],
            alternatives=[AlternativeReference(**alt) for alt in data.get("alternatives", [])],
        )


@dataclass(frozen=True)
class Package:
    """
    A package installed according to the status file.

    Created once per paragraph by the file parser and never modified.
    """

    name: str
    description: Description
    depends: list[Reference] = field(default_factory=list)
    dependants: list[Reference] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Serialize to JSON-compatible dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "Package":
        """Deserialize from dictionary."""
        return cls(
            name=data["name"],
            description=Description(**data["description"]),
            depends=[Reference.from_dict(ref) for ref in data.get("depends", [])],
            dependants=[Reference.from_dict(ref) for ref in data.get("dependants", [])],
        )
