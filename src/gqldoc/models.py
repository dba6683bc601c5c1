"""Data models for gqldoc.

The schema graph handed to the renderer is built from frozen dataclasses
holding tuples, so nothing in the rendering pipeline can reorder or mutate
the caller's structures.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum


@dataclass(frozen=True)
class TypeRef:
    """Reference to a named type, with its list/non-null wrapping for display."""

    name: str
    display: str = ""

    def __post_init__(self) -> None:
        if not self.display:
            object.__setattr__(self, "display", self.name)

    def __str__(self) -> str:
        return self.display


@dataclass(frozen=True)
class DirectiveArgument:
    """A single argument of an applied directive; value is a printed literal."""

    name: str
    value: str


@dataclass(frozen=True)
class Directive:
    """A metadata annotation (applied directive) attached to a definition."""

    name: str
    arguments: tuple[DirectiveArgument, ...] = ()

    def format_arguments(self) -> str:
        """Render arguments as ``name: value`` pairs."""
        return ", ".join(f"{arg.name}: {arg.value}" for arg in self.arguments)


@dataclass(frozen=True)
class Argument:
    """An argument declared on a field."""

    name: str
    type: TypeRef
    description: str = ""
    default_value: str | None = None
    directives: tuple[Directive, ...] = ()


@dataclass(frozen=True)
class Field:
    """A field of an object, interface, input object or root type.

    Input-object fields never carry arguments but may carry a default value.
    """

    name: str
    type: TypeRef
    description: str = ""
    arguments: tuple[Argument, ...] = ()
    directives: tuple[Directive, ...] = ()
    default_value: str | None = None


@dataclass(frozen=True)
class EnumValue:
    """One value of an enum type."""

    name: str
    description: str = ""
    directives: tuple[Directive, ...] = ()


class EntityKind(str, Enum):
    """Kinds of named definitions that can be documented."""

    OBJECT = "object"
    INTERFACE = "interface"
    UNION = "union"
    ENUM = "enum"
    INPUT_OBJECT = "input_object"
    SCALAR = "scalar"


@dataclass(frozen=True)
class ObjectType:
    """An object type."""

    name: str
    description: str = ""
    fields: tuple[Field, ...] = ()
    interfaces: tuple[str, ...] = ()
    directives: tuple[Directive, ...] = ()

    kind = EntityKind.OBJECT


@dataclass(frozen=True)
class InterfaceType:
    """An interface type; may itself implement other interfaces."""

    name: str
    description: str = ""
    fields: tuple[Field, ...] = ()
    interfaces: tuple[str, ...] = ()
    directives: tuple[Directive, ...] = ()

    kind = EntityKind.INTERFACE


@dataclass(frozen=True)
class UnionType:
    """A union of object types."""

    name: str
    description: str = ""
    members: tuple[str, ...] = ()
    directives: tuple[Directive, ...] = ()

    kind = EntityKind.UNION


@dataclass(frozen=True)
class EnumType:
    """An enum type; values keep declaration order."""

    name: str
    description: str = ""
    values: tuple[EnumValue, ...] = ()
    directives: tuple[Directive, ...] = ()

    kind = EntityKind.ENUM


@dataclass(frozen=True)
class InputObjectType:
    """An input object type."""

    name: str
    description: str = ""
    fields: tuple[Field, ...] = ()
    directives: tuple[Directive, ...] = ()

    kind = EntityKind.INPUT_OBJECT


@dataclass(frozen=True)
class ScalarType:
    """A scalar type."""

    name: str
    description: str = ""
    directives: tuple[Directive, ...] = ()

    kind = EntityKind.SCALAR


Entity = ObjectType | InterfaceType | UnionType | EnumType | InputObjectType | ScalarType


@dataclass(frozen=True)
class Schema:
    """A complete schema: named entities plus the names of the root types."""

    types: Mapping[str, Entity] = field(default_factory=dict)
    query: str | None = None
    mutation: str | None = None
    subscription: str | None = None

    def get(self, name: str) -> Entity | None:
        """Get an entity by name, or None if the schema does not define it."""
        return self.types.get(name)

    def get_object(self, name: str | None) -> ObjectType | None:
        """Get an object type by name, or None if absent or of another kind."""
        if name is None:
            return None
        entity = self.types.get(name)
        return entity if isinstance(entity, ObjectType) else None

    def __iter__(self) -> Iterator[Entity]:
        return iter(self.types.values())

    def __len__(self) -> int:
        return len(self.types)
