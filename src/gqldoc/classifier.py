"""Partition a schema into the ordered groups the document is built from."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum
from typing import TypeVar

from .logger import get_logger
from .models import (
    Entity,
    EnumType,
    Field,
    InputObjectType,
    InterfaceType,
    ObjectType,
    ScalarType,
    Schema,
    UnionType,
)

logger = get_logger(__name__)

RESERVED_PREFIX = "_"
DEFAULT_ROOT_NAMES = ("Query", "Mutation", "Subscription")

_E = TypeVar("_E", bound=Entity)


class Section(Enum):
    """Top-level document sections, in document order."""

    QUERIES = ("Queries", "queries")
    MUTATIONS = ("Mutations", "mutations")
    SUBSCRIPTIONS = ("Subscriptions", "subscriptions")
    OBJECTS = ("Objects", "objects")
    INTERFACES = ("Interfaces", "interfaces")
    ENUMS = ("Enums", "enums")
    UNIONS = ("Unions", "unions")
    INPUT_OBJECTS = ("Input objects", "input-objects")
    SCALARS = ("Scalars", "scalars")

    def __init__(self, title: str, slug: str) -> None:
        self.title = title
        self.slug = slug

    @property
    def anchor(self) -> str:
        """Fixed anchor for the section header."""
        return f"#{self.slug}"


@dataclass(frozen=True)
class RootGroup:
    """A root entity together with its documentable fields, sorted by name."""

    section: Section
    entity: ObjectType
    fields: tuple[Field, ...]

    @property
    def name(self) -> str:
        return self.entity.name


@dataclass(frozen=True)
class ClassifiedSchema:
    """The nine ordered groups of a schema.

    Root groups are None when the root is absent or has nothing documentable;
    kind groups are sorted tuples that may be empty.
    """

    schema: Schema
    query: RootGroup | None = None
    mutation: RootGroup | None = None
    subscription: RootGroup | None = None
    objects: tuple[ObjectType, ...] = ()
    interfaces: tuple[InterfaceType, ...] = ()
    enums: tuple[EnumType, ...] = ()
    unions: tuple[UnionType, ...] = ()
    inputs: tuple[InputObjectType, ...] = ()
    scalars: tuple[ScalarType, ...] = ()

    def roots(self) -> list[RootGroup]:
        """Present root groups in document order."""
        return [root for root in (self.query, self.mutation, self.subscription) if root]

    def kind_groups(self) -> list[tuple[Section, tuple[Entity, ...]]]:
        """All six kind groups in document order, including empty ones."""
        return [
            (Section.OBJECTS, self.objects),
            (Section.INTERFACES, self.interfaces),
            (Section.ENUMS, self.enums),
            (Section.UNIONS, self.unions),
            (Section.INPUT_OBJECTS, self.inputs),
            (Section.SCALARS, self.scalars),
        ]

    def sections(self) -> Iterator[tuple[Section, RootGroup | tuple[Entity, ...]]]:
        """Yield each non-empty section with its content, in document order."""
        for root in self.roots():
            yield root.section, root
        for section, members in self.kind_groups():
            if members:
                yield section, members

    def root_for(self, name: str) -> RootGroup | None:
        """Find the present root group whose entity has the given name."""
        for root in self.roots():
            if root.name == name:
                return root
        return None


def root_names(schema: Schema) -> tuple[str, str, str]:
    """Names of the three root types, with defaults standing in for absent roots."""
    default_query, default_mutation, default_subscription = DEFAULT_ROOT_NAMES
    return (
        schema.query or default_query,
        schema.mutation or default_mutation,
        schema.subscription or default_subscription,
    )


def is_documentable(name: str, reserved_names: Iterable[str] = DEFAULT_ROOT_NAMES) -> bool:
    """Check whether an entity or field name should appear in the document."""
    return bool(name) and name not in reserved_names and not name.startswith(RESERVED_PREFIX)


def _documentable_fields(fields: Iterable[Field], reserved: tuple[str, ...]) -> tuple[Field, ...]:
    kept: list[Field] = []
    for schema_field in fields:
        if is_documentable(schema_field.name, reserved):
            kept.append(schema_field)
        else:
            logger.checks(f"Skipping field {schema_field.name!r}")
    return tuple(sorted(kept, key=lambda f: f.name))


def _root_group(
    schema: Schema, name: str | None, section: Section, reserved: tuple[str, ...]
) -> RootGroup | None:
    entity = schema.get_object(name)
    if entity is None:
        return None
    fields = _documentable_fields(entity.fields, reserved)
    if not fields:
        logger.checks(f"Root {entity.name} has no documentable fields, omitting {section.title}")
        return None
    return RootGroup(section=section, entity=entity, fields=fields)


def _select(schema: Schema, kind: type[_E], reserved: tuple[str, ...]) -> tuple[_E, ...]:
    selected: list[_E] = []
    for entity in schema:
        if not isinstance(entity, kind):
            continue
        if is_documentable(entity.name, reserved):
            selected.append(entity)
        else:
            logger.checks(f"Skipping {entity.kind.value} {entity.name!r}")
    return tuple(sorted(selected, key=lambda e: e.name))


def classify(schema: Schema) -> ClassifiedSchema:
    """Partition a schema into sorted, filtered groups.

    Never fails: a missing root simply produces an absent group.
    """
    reserved = root_names(schema)
    return ClassifiedSchema(
        schema=schema,
        query=_root_group(schema, schema.query, Section.QUERIES, reserved),
        mutation=_root_group(schema, schema.mutation, Section.MUTATIONS, reserved),
        subscription=_root_group(schema, schema.subscription, Section.SUBSCRIPTIONS, reserved),
        objects=_select(schema, ObjectType, reserved),
        interfaces=_select(schema, InterfaceType, reserved),
        enums=_select(schema, EnumType, reserved),
        unions=_select(schema, UnionType, reserved),
        inputs=_select(schema, InputObjectType, reserved),
        scalars=_select(schema, ScalarType, reserved),
    )
