"""Pytest configuration and fixtures for gqldoc tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from gqldoc.config import RenderConfig
from gqldoc.logger import reset_logger
from gqldoc.models import (
    Entity,
    Field,
    InterfaceType,
    ObjectType,
    Schema,
    TypeRef,
)

TESTDATA = Path(__file__).parent / "testdata"


@pytest.fixture(autouse=True)
def clean_logger() -> None:
    """Reset logger state before each test for isolation."""
    reset_logger()


def make_schema(
    *entities: Entity,
    query: str | None = None,
    mutation: str | None = None,
    subscription: str | None = None,
) -> Schema:
    """Build a Schema from entities, keyed by name in the given order.

    Example:
        make_schema(ObjectType(name="Query", fields=(...)), query="Query")
    """
    return Schema(
        types={entity.name: entity for entity in entities},
        query=query,
        mutation=mutation,
        subscription=subscription,
    )


def field(name: str, type_name: str, display: str | None = None, **kwargs: object) -> Field:
    """Shorthand for a Field with a TypeRef."""
    return Field(name=name, type=TypeRef(type_name, display or type_name), **kwargs)  # type: ignore[arg-type]


def plain_config(**kwargs: object) -> RenderConfig:
    """Render config without minification, so output can be compared exactly."""
    return RenderConfig(minify=False, **kwargs)  # type: ignore[arg-type]


@pytest.fixture
def widget_schema() -> Schema:
    """One object Widget implementing one interface Named."""
    widget = ObjectType(
        name="Widget",
        fields=(field("id", "ID"), field("name", "String")),
        interfaces=("Named",),
    )
    named = InterfaceType(name="Named", fields=(field("name", "String"),))
    return make_schema(widget, named)
