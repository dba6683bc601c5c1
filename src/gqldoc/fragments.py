"""Document fragments for each kind of schema entity.

Every fragment is a plain function of the thing being rendered and a
RenderContext. The context is built once per render and carries the anchor
registry, the schema and the interface implementer index, so fragments can
call each other freely (entity -> field table -> arguments table -> metadata
table) without sharing any state between renders.

Prose (headers, descriptions, lists) is Markdown. Tables are HTML, because
they nest, and go through the context's minifier.
"""

from __future__ import annotations

import html
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass

from .anchors import AnchorNamespace, AnchorRegistry, root_field_key
from .classifier import ClassifiedSchema, RootGroup, Section, is_documentable, root_names
from .config import LayoutConfig, RenderConfig
from .minifier import Minifier, minify_fragment, passthrough
from .models import (
    Argument,
    Directive,
    Entity,
    EnumType,
    Field,
    InputObjectType,
    InterfaceType,
    ObjectType,
    ScalarType,
    Schema,
    TypeRef,
    UnionType,
)
from .text_formatter import format_description, indent, to_inline

CELL_OPEN = "<td>"


@dataclass(frozen=True)
class RenderContext:
    """Everything a fragment may read while rendering one document."""

    schema: Schema
    classified: ClassifiedSchema
    registry: AnchorRegistry
    config: RenderConfig
    implementers: Mapping[str, tuple[str, ...]]
    reserved_names: tuple[str, ...]
    minifier: Minifier = passthrough

    @classmethod
    def create(
        cls,
        classified: ClassifiedSchema,
        registry: AnchorRegistry,
        config: RenderConfig | None = None,
    ) -> RenderContext:
        """Build the context for one render, precomputing the implementer index."""
        config = config or RenderConfig()
        return cls(
            schema=classified.schema,
            classified=classified,
            registry=registry,
            config=config,
            implementers=build_implementer_index(classified.objects),
            reserved_names=root_names(classified.schema),
            minifier=minify_fragment if config.minify else passthrough,
        )

    @property
    def layout(self) -> LayoutConfig:
        return self.config.layout

    def minify(self, fragment: str) -> str:
        return self.minifier(fragment)

    def type_anchor(self, name: str) -> str | None:
        """Anchor a reference to the named type links to, if it is documented.

        Root types link to their section; built-in or filtered types have no
        anchor and are shown without a link.
        """
        root = self.classified.root_for(name)
        if root is not None:
            return self.registry.get(AnchorNamespace.SECTION, root.section.title)
        return self.registry.get(AnchorNamespace.TYPE, name)

    def documentable_fields(self, fields: Iterable[Field]) -> list[Field]:
        return [f for f in fields if is_documentable(f.name, self.reserved_names)]


def build_implementer_index(objects: Iterable[ObjectType]) -> dict[str, tuple[str, ...]]:
    """Map each interface name to the objects implementing it, in object order."""
    index: dict[str, list[str]] = {}
    for obj in objects:
        for interface in obj.interfaces:
            index.setdefault(interface, []).append(obj.name)
    return {name: tuple(implementers) for name, implementers in index.items()}


def _join_blocks(blocks: Iterable[str]) -> str:
    return "\n\n".join(block for block in blocks if block)


def _escape(text: str) -> str:
    return html.escape(text, quote=False)


def _html_type(ref: TypeRef, ctx: RenderContext) -> str:
    label = f"<strong>{_escape(ref.display)}</strong>"
    anchor = ctx.type_anchor(ref.name)
    return f'<a href="{anchor}">{label}</a>' if anchor else label


def markdown_type(ref: TypeRef, ctx: RenderContext) -> str:
    """Markdown link to a type reference, or plain code when it is not documented."""
    anchor = ctx.type_anchor(ref.name)
    return f"[`{ref.display}`]({anchor})" if anchor else f"`{ref.display}`"


def _link_list(title: str, names: Sequence[str], ctx: RenderContext) -> str:
    lines = [f"#### {title}", ""]
    lines.extend(f"- {markdown_type(TypeRef(name), ctx)}" for name in names)
    return "\n".join(lines)


def _table(header: Sequence[str], rows: Iterable[list[str]], ctx: RenderContext) -> str:
    """HTML table; header is a list of column titles, rows are lists of cell lines."""
    lines = ["<table>"]
    if len(header) == 1:
        lines.append(f"\t<thead><tr><th>{header[0]}</th></tr></thead>")
    else:
        lines.extend(["\t<thead>", "\t\t<tr>"])
        lines.extend(f"\t\t\t<th>{title}</th>" for title in header)
        lines.extend(["\t\t</tr>", "\t</thead>"])
    lines.append("\t<tbody>")
    for row in rows:
        lines.append("\t\t<tr>")
        lines.extend(f"\t\t\t{cell}" for cell in row)
        lines.append("\t\t</tr>")
    lines.extend(["\t</tbody>", "</table>"])
    return ctx.minify("\n".join(lines))


def metadata_table(directives: Sequence[Directive], ctx: RenderContext) -> str:
    """Table of directives applied to a definition; empty when there are none."""
    if not directives:
        return ""
    rows = [
        [
            f"<td><code>@{directive.name}</code></td>",
            f"<td>{_escape(directive.format_arguments())}</td>",
        ]
        for directive in directives
    ]
    return _table(["Directive", "Arguments"], rows, ctx)


def _default_line(default_value: str | None) -> str:
    if default_value is None:
        return ""
    return f"Default: <code>{_escape(default_value)}</code>"


def arguments_table(arguments: Sequence[Argument], ctx: RenderContext) -> str:
    """Table of field arguments; empty when the field takes none."""
    if not arguments:
        return ""
    width = ctx.layout.argument_description_width
    rows: list[list[str]] = []
    for arg in arguments:
        parts = [f"<strong>{arg.name}</strong> ({_html_type(arg.type, ctx)})"]
        description = format_description(arg.description, width)
        if description:
            parts.extend(["<br>", description])
        default = _default_line(arg.default_value)
        if default:
            parts.append(f"<br>{default}")
        parts.append(metadata_table(arg.directives, ctx))
        body = "\n".join(part for part in parts if part)
        rows.append([CELL_OPEN, "\t" + indent(4, body), "</td>"])
    return _table(["Arguments"], rows, ctx)


def field_table(
    fields: Sequence[Field], ctx: RenderContext, *, width: int, with_arguments: bool = True
) -> str:
    """Name/description table for object, interface or input-object fields."""
    rows: list[list[str]] = []
    for schema_field in fields:
        type_html = _html_type(schema_field.type, ctx)
        name_cell = f"<td><strong>{schema_field.name}</strong> ({type_html})</td>"
        description = format_description(
            schema_field.description, ctx.layout.budget(width, CELL_OPEN)
        )
        parts = [description]
        default = _default_line(schema_field.default_value)
        if default:
            parts.append(f"<br>{default}" if description else default)
        parts.append(metadata_table(schema_field.directives, ctx))
        if with_arguments:
            parts.append(arguments_table(schema_field.arguments, ctx))
        body = "\n".join(part for part in parts if part)
        rows.append([name_cell, CELL_OPEN + indent(3, body) + "</td>"])
    return _table(["Name", "Description"], rows, ctx)


def _header(entity: Entity, ctx: RenderContext) -> list[str]:
    """Header, description and metadata shared by every entity fragment."""
    anchor = ctx.registry.lookup(AnchorNamespace.TYPE, entity.name)
    return [
        f"### [{entity.name}]({anchor})",
        to_inline(entity.description),
        metadata_table(entity.directives, ctx),
    ]


def _fields_block(
    title: str,
    fields: Sequence[Field],
    ctx: RenderContext,
    *,
    width: int,
    with_arguments: bool = True,
) -> str:
    documented = ctx.documentable_fields(fields)
    if not documented:
        return ""
    table = field_table(documented, ctx, width=width, with_arguments=with_arguments)
    return _join_blocks([f"#### {title}", table])


def object_fragment(entity: ObjectType, ctx: RenderContext) -> str:
    """Object: header, implemented interfaces and field table."""
    blocks = _header(entity, ctx)
    if entity.interfaces:
        blocks.append(_link_list("Implements", entity.interfaces, ctx))
    blocks.append(
        _fields_block("Fields", entity.fields, ctx, width=ctx.layout.field_description_width)
    )
    return _join_blocks(blocks)


def interface_fragment(entity: InterfaceType, ctx: RenderContext) -> str:
    """Interface: header, implementers and field table."""
    blocks = _header(entity, ctx)
    if entity.interfaces:
        blocks.append(_link_list("Implements", entity.interfaces, ctx))
    implementers = ctx.implementers.get(entity.name, ())
    if implementers:
        blocks.append(_link_list("Implemented by", implementers, ctx))
    blocks.append(
        _fields_block("Fields", entity.fields, ctx, width=ctx.layout.field_description_width)
    )
    return _join_blocks(blocks)


def union_fragment(entity: UnionType, ctx: RenderContext) -> str:
    blocks = _header(entity, ctx)
    if entity.members:
        blocks.append(_link_list("Possible types", entity.members, ctx))
    return _join_blocks(blocks)


def enum_fragment(entity: EnumType, ctx: RenderContext) -> str:
    """Enum values are listed in declaration order."""
    blocks = _header(entity, ctx)
    if entity.values:
        blocks.append("#### Values")
    width = ctx.layout.enum_value_description_width
    for value in entity.values:
        blocks.append(f"**{value.name}**")
        blocks.append(format_description(value.description, width))
        blocks.append(metadata_table(value.directives, ctx))
    return _join_blocks(blocks)


def input_fragment(entity: InputObjectType, ctx: RenderContext) -> str:
    blocks = _header(entity, ctx)
    blocks.append(
        _fields_block(
            "Input fields",
            entity.fields,
            ctx,
            width=ctx.layout.input_field_description_width,
            with_arguments=False,
        )
    )
    return _join_blocks(blocks)


def scalar_fragment(entity: ScalarType, ctx: RenderContext) -> str:
    return _join_blocks(_header(entity, ctx))


def entity_fragment(entity: Entity, ctx: RenderContext) -> str:
    """Render any entity with the fragment for its kind."""
    if isinstance(entity, ObjectType):
        return object_fragment(entity, ctx)
    if isinstance(entity, InterfaceType):
        return interface_fragment(entity, ctx)
    if isinstance(entity, UnionType):
        return union_fragment(entity, ctx)
    if isinstance(entity, EnumType):
        return enum_fragment(entity, ctx)
    if isinstance(entity, InputObjectType):
        return input_fragment(entity, ctx)
    if isinstance(entity, ScalarType):
        return scalar_fragment(entity, ctx)
    raise TypeError(f"Cannot render {type(entity).__name__}")


def _input_list(arguments: Sequence[Argument], ctx: RenderContext) -> str:
    lines = ["#### Input fields", ""]
    for arg in arguments:
        label = f"- **{arg.name}** ({markdown_type(arg.type, ctx)})"
        description = format_description(
            arg.description, ctx.layout.budget(ctx.layout.mutation_input_width, label + ": ")
        )
        if description:
            # Continuation lines stay inside the list item.
            description = description.replace("\n", "\n  ")
        lines.append(f"{label}: {description}" if description else label)
    return "\n".join(lines)


def _return_fields(ref: TypeRef, ctx: RenderContext) -> str:
    """Field table of a mutation's return type; empty if it has no fields to show."""
    entity = ctx.schema.get(ref.name)
    if not isinstance(entity, (ObjectType, InterfaceType)):
        return ""
    return _fields_block(
        "Return fields", entity.fields, ctx, width=ctx.layout.field_description_width
    )


def root_field_fragment(root: RootGroup, root_field: Field, ctx: RenderContext) -> str:
    """One query, mutation or subscription."""
    anchor = ctx.registry.lookup(
        AnchorNamespace.FIELD, root_field_key(root.name, root_field.name)
    )
    blocks = [
        f"### [{root_field.name}]({anchor})",
        to_inline(root_field.description),
        metadata_table(root_field.directives, ctx),
        f"**Type:** {markdown_type(root_field.type, ctx)}",
    ]
    if root.section is Section.MUTATIONS:
        if root_field.arguments:
            blocks.append(_input_list(root_field.arguments, ctx))
        blocks.append(_return_fields(root_field.type, ctx))
    else:
        blocks.append(arguments_table(root_field.arguments, ctx))
    return _join_blocks(blocks)


def root_fragment(root: RootGroup, ctx: RenderContext) -> str:
    """All fields of a root type, in name order."""
    return _join_blocks(root_field_fragment(root, f, ctx) for f in root.fields)
