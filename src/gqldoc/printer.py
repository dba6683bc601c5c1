"""Reformatted GraphQL output."""

from __future__ import annotations

from typing import TextIO

from graphql import GraphQLSchema, print_schema

from .exceptions import SinkWriteError


def format_graphql(dst: TextIO, schema: GraphQLSchema) -> None:
    """Reformat the schema and write it to ``dst``.

    Raises:
        SinkWriteError: If ``dst`` is closed or refuses the write
    """
    text = print_schema(schema)
    try:
        dst.write(text + "\n")
    except (OSError, ValueError) as e:
        raise SinkWriteError(f"Unable to write schema: {e}") from e
