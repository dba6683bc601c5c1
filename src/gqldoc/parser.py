"""GraphQL schema parsing for gqldoc.

Parsing and validation are done by graphql-core; this module only reads the
files and converts the resulting schema into gqldoc's own models.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Any

from graphql import (
    DocumentNode,
    GraphQLArgument,
    GraphQLEnumType,
    GraphQLError,
    GraphQLField,
    GraphQLInputField,
    GraphQLInputObjectType,
    GraphQLInterfaceType,
    GraphQLNamedType,
    GraphQLObjectType,
    GraphQLScalarType,
    GraphQLSchema,
    GraphQLUnionType,
    Source,
    Undefined,
    assert_valid_schema,
    ast_from_value,
    build_ast_schema,
    get_named_type,
    parse,
    print_ast,
)

from .exceptions import ParseError
from .logger import get_logger
from .models import (
    Argument,
    Directive,
    DirectiveArgument,
    Entity,
    EnumType,
    EnumValue,
    Field,
    InputObjectType,
    InterfaceType,
    ObjectType,
    ScalarType,
    Schema,
    TypeRef,
    UnionType,
)

logger = get_logger(__name__)

SCHEMA_EXTENSIONS = (".gql", ".graphql")


def parse_files(filenames: Sequence[Path | str]) -> GraphQLSchema:
    """Parse GraphQL schema definitions from the named files.

    The returned schema combines all the files, so types may reference types
    defined in another file. There must be at least one file and every file
    must have a .gql or .graphql extension.

    Raises:
        ParseError: If any file is missing, unreadable, has the wrong extension,
            or the combined schema is invalid
    """
    if not filenames:
        raise ParseError("Unable to parse schema: no files provided")

    definitions: list[Any] = []
    for filename in filenames:
        path = Path(filename)
        if path.suffix not in SCHEMA_EXTENSIONS:
            raise ParseError(f"Unable to parse {path}: must have extension .gql or .graphql")
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ParseError(f"Unable to parse {path}: {e}") from e
        try:
            document = parse(Source(text, str(path)))
        except GraphQLError as e:
            raise ParseError(f"Unable to parse {path}: {e}") from e
        logger.checks(f"Parsed {path} ({len(document.definitions)} definitions)")
        definitions.extend(document.definitions)

    try:
        schema = build_ast_schema(DocumentNode(definitions=tuple(definitions)))
        assert_valid_schema(schema)
    except (GraphQLError, TypeError) as e:
        raise ParseError(f"Unable to parse schema: {e}") from e
    return schema


def load_schema(filenames: Sequence[Path | str]) -> Schema:
    """Parse schema files and convert them into a gqldoc Schema."""
    return convert_schema(parse_files(filenames))


def _directives(nodes: Iterable[Any]) -> tuple[Directive, ...]:
    """Collect applied directives from AST nodes (definition plus extensions)."""
    result: list[Directive] = []
    for node in nodes:
        if node is None:
            continue
        for directive in getattr(node, "directives", None) or ():
            arguments = tuple(
                DirectiveArgument(name=arg.name.value, value=print_ast(arg.value))
                for arg in directive.arguments or ()
            )
            result.append(Directive(name=directive.name.value, arguments=arguments))
    return tuple(result)


def _type_ref(graphql_type: Any) -> TypeRef:
    return TypeRef(name=get_named_type(graphql_type).name, display=str(graphql_type))


def _default_value(value: GraphQLArgument | GraphQLInputField) -> str | None:
    node = value.ast_node
    if node is not None and node.default_value is not None:
        return print_ast(node.default_value)
    if value.default_value is Undefined:
        return None
    value_ast = ast_from_value(value.default_value, value.type)
    return print_ast(value_ast) if value_ast is not None else None


def _argument(name: str, arg: GraphQLArgument) -> Argument:
    return Argument(
        name=name,
        type=_type_ref(arg.type),
        description=arg.description or "",
        default_value=_default_value(arg),
        directives=_directives([arg.ast_node]),
    )


def _field(name: str, field: GraphQLField) -> Field:
    return Field(
        name=name,
        type=_type_ref(field.type),
        description=field.description or "",
        arguments=tuple(_argument(arg_name, arg) for arg_name, arg in field.args.items()),
        directives=_directives([field.ast_node]),
    )


def _input_field(name: str, field: GraphQLInputField) -> Field:
    return Field(
        name=name,
        type=_type_ref(field.type),
        description=field.description or "",
        directives=_directives([field.ast_node]),
        default_value=_default_value(field),
    )


def convert_type(named_type: GraphQLNamedType) -> Entity:
    """Convert one graphql-core named type into the matching entity model."""
    description = named_type.description or ""
    directives = _directives([named_type.ast_node, *(named_type.extension_ast_nodes or ())])

    if isinstance(named_type, GraphQLObjectType):
        return ObjectType(
            name=named_type.name,
            description=description,
            fields=tuple(_field(name, f) for name, f in named_type.fields.items()),
            interfaces=tuple(iface.name for iface in named_type.interfaces),
            directives=directives,
        )
    if isinstance(named_type, GraphQLInterfaceType):
        return InterfaceType(
            name=named_type.name,
            description=description,
            fields=tuple(_field(name, f) for name, f in named_type.fields.items()),
            interfaces=tuple(iface.name for iface in named_type.interfaces),
            directives=directives,
        )
    if isinstance(named_type, GraphQLUnionType):
        return UnionType(
            name=named_type.name,
            description=description,
            members=tuple(member.name for member in named_type.types),
            directives=directives,
        )
    if isinstance(named_type, GraphQLEnumType):
        return EnumType(
            name=named_type.name,
            description=description,
            values=tuple(
                EnumValue(
                    name=name,
                    description=value.description or "",
                    directives=_directives([value.ast_node]),
                )
                for name, value in named_type.values.items()
            ),
            directives=directives,
        )
    if isinstance(named_type, GraphQLInputObjectType):
        return InputObjectType(
            name=named_type.name,
            description=description,
            fields=tuple(_input_field(name, f) for name, f in named_type.fields.items()),
            directives=directives,
        )
    if isinstance(named_type, GraphQLScalarType):
        return ScalarType(name=named_type.name, description=description, directives=directives)
    raise TypeError(f"Unsupported GraphQL type: {named_type!r}")


def convert_schema(schema: GraphQLSchema) -> Schema:
    """Convert a graphql-core schema into a gqldoc Schema."""
    types = {name: convert_type(named_type) for name, named_type in schema.type_map.items()}
    return Schema(
        types=types,
        query=schema.query_type.name if schema.query_type else None,
        mutation=schema.mutation_type.name if schema.mutation_type else None,
        subscription=schema.subscription_type.name if schema.subscription_type else None,
    )
