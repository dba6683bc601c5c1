"""Assemble the complete Markdown document for a schema."""

from __future__ import annotations

from typing import TYPE_CHECKING, TextIO

from .anchors import AnchorNamespace, AnchorRegistry, build_anchor_registry, root_field_key
from .classifier import ClassifiedSchema, RootGroup, Section, classify
from .exceptions import SinkWriteError
from .fragments import RenderContext, entity_fragment, root_fragment
from .logger import get_logger
from .text_formatter import to_inline

if TYPE_CHECKING:
    from .config import RenderConfig
    from .models import Entity, Schema

logger = get_logger(__name__)


class DocumentGenerator:
    """Generate one Markdown document from a classified schema.

    Sections are emitted in a fixed order: title, table of contents, then the
    root sections and the kind sections. A section whose group is empty
    appears neither in the table of contents nor in the body.
    """

    def __init__(
        self,
        classified: ClassifiedSchema,
        registry: AnchorRegistry,
        config: RenderConfig | None = None,
    ):
        self.classified = classified
        self.registry = registry
        self.ctx = RenderContext.create(classified, registry, config)
        self.config = self.ctx.config

    def generate(self) -> str:
        """Generate the complete document."""
        sections = list(self.classified.sections())

        blocks = [self._generate_title()]
        if self.config.toc and sections:
            blocks.append(self._generate_toc(sections))
        for section, content in sections:
            blocks.append(self._generate_section(section, content))
            logger.changes(f"Rendered {section.title} ({_member_count(content)} entries)")

        return "\n\n".join(block for block in blocks if block) + "\n"

    def _generate_title(self) -> str:
        lines = [f"# {self.config.title}"]
        if self.config.description:
            lines.extend(["", to_inline(self.config.description)])
        return "\n".join(lines)

    def _section_anchor(self, section: Section) -> str:
        return self.registry.lookup(AnchorNamespace.SECTION, section.title)

    def _generate_toc(self, sections: list[tuple[Section, RootGroup | tuple[Entity, ...]]]) -> str:
        """Table of contents built from the registry and group membership."""
        lines = ["## Table of Contents", ""]
        for section, content in sections:
            lines.append(f"- [{section.title}]({self._section_anchor(section)})")
            if isinstance(content, RootGroup):
                for root_field in content.fields:
                    anchor = self.registry.lookup(
                        AnchorNamespace.FIELD, root_field_key(content.name, root_field.name)
                    )
                    lines.append(f"  - [{root_field.name}]({anchor})")
            else:
                for entity in content:
                    anchor = self.registry.lookup(AnchorNamespace.TYPE, entity.name)
                    lines.append(f"  - [{entity.name}]({anchor})")
        return "\n".join(lines)

    def _generate_section(
        self, section: Section, content: RootGroup | tuple[Entity, ...]
    ) -> str:
        header = f"## [{section.title}]({self._section_anchor(section)})"
        if isinstance(content, RootGroup):
            body = root_fragment(content, self.ctx)
        else:
            body = "\n\n".join(entity_fragment(entity, self.ctx) for entity in content)
        return f"{header}\n\n{body}"


def _member_count(content: RootGroup | tuple[Entity, ...]) -> int:
    return len(content.fields) if isinstance(content, RootGroup) else len(content)


def render(
    classified: ClassifiedSchema,
    registry: AnchorRegistry,
    config: RenderConfig | None = None,
) -> str:
    """Render a classified schema with a fully populated anchor registry."""
    return DocumentGenerator(classified, registry, config).generate()


def render_schema(schema: Schema, config: RenderConfig | None = None) -> str:
    """Classify a schema, assign its anchors and render the document."""
    classified = classify(schema)
    registry = build_anchor_registry(classified)
    logger.changes(f"Registered {len(registry)} anchors")
    return render(classified, registry, config)


def format_markdown(dst: TextIO, schema: Schema, config: RenderConfig | None = None) -> None:
    """Render the schema as Markdown and write it to ``dst``.

    The document is built completely before anything is written, so a render
    failure writes nothing.

    Raises:
        SinkWriteError: If ``dst`` is closed or refuses the write
    """
    document = render_schema(schema, config)
    try:
        dst.write(document)
    except (OSError, ValueError) as e:
        raise SinkWriteError(f"Unable to write document: {e}") from e
