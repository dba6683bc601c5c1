"""gqldoc - documentation generator for GraphQL schemas."""

from gqldoc.anchors import AnchorNamespace, AnchorRegistry, build_anchor_registry
from gqldoc.classifier import ClassifiedSchema, classify
from gqldoc.config import RenderConfig
from gqldoc.document import format_markdown, render, render_schema
from gqldoc.parser import load_schema, parse_files
from gqldoc.printer import format_graphql

__all__ = [
    "AnchorNamespace",
    "AnchorRegistry",
    "ClassifiedSchema",
    "RenderConfig",
    "build_anchor_registry",
    "classify",
    "format_graphql",
    "format_markdown",
    "load_schema",
    "parse_files",
    "render",
    "render_schema",
]
