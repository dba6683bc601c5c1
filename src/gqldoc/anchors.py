"""Collision-safe in-document anchors.

Anchors follow the usual Markdown heading convention: the first heading with
a given slug gets the bare slug, later ones get ``-1``, ``-2``, and so on.
Because the suffix depends on registration order, anchors are registered in
exactly the order the document renders them.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from .exceptions import AnchorLookupError
from .logger import get_logger

if TYPE_CHECKING:
    from .classifier import ClassifiedSchema

logger = get_logger(__name__)


class AnchorNamespace(str, Enum):
    """Independent partitions of the anchor keyspace."""

    TYPE = "type"
    FIELD = "field"
    SECTION = "section"


def normalize_anchor_key(name: str) -> str:
    """Convert a name to its anchor slug.

    Lowercase, spaces become hyphens, and anything other than letters, digits,
    hyphens and underscores is dropped.
    """
    slug = name.strip().lower().replace(" ", "-")
    return "".join(c for c in slug if c.isalnum() or c in "-_")


class AnchorRegistry:
    """Maps (namespace, name) to a unique anchor string such as ``#widget``."""

    def __init__(self) -> None:
        self._anchors: dict[tuple[AnchorNamespace, str], str] = {}
        self._counts: dict[tuple[AnchorNamespace, str], int] = {}

    def register(
        self,
        name: str,
        namespace: AnchorNamespace,
        anchor: str | None = None,
        *,
        key: str | None = None,
    ) -> str:
        """Assign an anchor to a name and return it.

        Args:
            name: Display name the anchor is derived from
            namespace: Partition the anchor belongs to
            anchor: Explicit anchor (e.g. ``#queries``) to use instead of the name
            key: Lookup key, when it differs from the display name

        Returns:
            The anchor, with a numeric suffix if its slug was seen before
        """
        base = anchor.lstrip("#") if anchor else normalize_anchor_key(name)
        count_key = (namespace, base)
        seen = self._counts.get(count_key, 0)
        self._counts[count_key] = seen + 1

        result = f"#{base}-{seen}" if seen else f"#{base}"
        if seen:
            logger.changes(f"Anchor for {namespace.value} {name!r} disambiguated as {result}")

        lookup_key = (namespace, key if key is not None else name)
        self._anchors.setdefault(lookup_key, result)
        logger.debug(f"Registered {namespace.value}:{lookup_key[1]} -> {result}")
        return result

    def lookup(self, namespace: AnchorNamespace, name: str) -> str:
        """Get the anchor registered for a name.

        Raises:
            AnchorLookupError: If the name was never registered in the namespace
        """
        try:
            return self._anchors[(namespace, name)]
        except KeyError:
            raise AnchorLookupError(
                f"No anchor registered for {namespace.value} {name!r}"
            ) from None

    def get(self, namespace: AnchorNamespace, name: str) -> str | None:
        """Get the anchor registered for a name, or None."""
        return self._anchors.get((namespace, name))

    def __contains__(self, item: tuple[AnchorNamespace, str]) -> bool:
        return item in self._anchors

    def __len__(self) -> int:
        return len(self._anchors)

    def anchors(self, namespace: AnchorNamespace | None = None) -> list[str]:
        """All registered anchors, optionally limited to one namespace, in order."""
        return [
            anchor
            for (ns, _name), anchor in self._anchors.items()
            if namespace is None or ns is namespace
        ]


def root_field_key(root_name: str, field_name: str) -> str:
    """Lookup key for a root field, qualified so roots sharing a field name stay apart."""
    return f"{root_name}.{field_name}"


def build_anchor_registry(classified: ClassifiedSchema) -> AnchorRegistry:
    """Register every section, root field and entity in render order.

    Empty groups register nothing, so they never consume a slug.
    """
    registry = AnchorRegistry()

    for root in classified.roots():
        registry.register(root.section.title, AnchorNamespace.SECTION, root.section.anchor)
        for root_field in root.fields:
            registry.register(
                root_field.name,
                AnchorNamespace.FIELD,
                key=root_field_key(root.name, root_field.name),
            )

    for section, members in classified.kind_groups():
        if not members:
            continue
        registry.register(section.title, AnchorNamespace.SECTION, section.anchor)
        for entity in members:
            registry.register(entity.name, AnchorNamespace.TYPE)

    return registry
