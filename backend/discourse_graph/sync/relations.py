"""
Relation synchronizer - records discourse relations in frontmatter.

A relation between two documents is stored as a list of wiki links under the
relation type's id in BOTH documents' frontmatter::

    # EVD - Tide gauge data.md, "supports" has id relation_V1StGXR8_Z5jdHi6B-myT
    ---
    nodeTypeId: node_Uakgb_J5m9g-0JDMbcJqL
    relation_V1StGXR8_Z5jdHi6B-myT:
      - "[[CLM - Tides are lunar]]"
    ---

The reverse direction is written under the same key rather than under the
complement, so the claim also carries ``relation_V1StGXR8_Z5jdHi6B-myT``.

Links are compared after normalisation (brackets stripped, resolved to the
canonical link text), so re-linking an existing pair changes nothing.
"""

import logging
import re
from dataclasses import dataclass
from typing import Any, List, Optional

from discourse_graph.domain.registry import get_relation_type_by_id
from discourse_graph.domain.types import Settings
from discourse_graph.ir.errors import PartialSyncFailure, SyncError, UnknownRelationType

from .host import LinkResolver, Metadata, MetadataStore

logger = logging.getLogger(__name__)

SOURCE_TO_TARGET = "source->target"
TARGET_TO_SOURCE = "target->source"

_LINK_DECORATION_RE = re.compile(r"^\[\[|\]\]$")


@dataclass
class LinkResult:
    relation_type_id: str
    source_added: bool = False
    target_added: bool = False
    already_existed: bool = False
    error: Optional[UnknownRelationType] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        return {
            "ok": self.ok,
            "relation_type_id": self.relation_type_id,
            "source_added": self.source_added,
            "target_added": self.target_added,
            "already_existed": self.already_existed,
            "error": str(self.error) if self.error else None,
        }


def strip_link_decoration(link: str) -> str:
    return _LINK_DECORATION_RE.sub("", link.strip())


def normalize_link(link: Any, relative_to: str, resolver: LinkResolver) -> str:
    """Reduce a link to the canonical text of the document it resolves to."""
    clean = strip_link_decoration(str(link))
    target = resolver.resolve_link_target(clean, relative_to)
    if target is None:
        return clean
    return resolver.canonical_link_text(target, relative_to)


async def append_link(
    store: MetadataStore,
    resolver: LinkResolver,
    doc: str,
    other: str,
    key: str,
) -> bool:
    """
    Add a link to `other` under `key` in `doc`'s metadata unless already present.

    Returns True when the link was added.
    """
    added = False

    def mutate(metadata: Metadata) -> None:
        nonlocal added
        index = resolver.snapshot()
        existing = metadata.get(key)
        existing_links: List[Any] = list(existing) if isinstance(existing, list) else []

        link_to_add = f"[[{index.canonical_link_text(other, doc)}]]"
        normalized_existing = {normalize_link(link, doc, index) for link in existing_links}
        if normalize_link(link_to_add, doc, index) in normalized_existing:
            added = False
            return

        metadata[key] = existing_links + [link_to_add]
        added = True

    await store.write_metadata(doc, mutate)
    return added


async def link_relation(
    source: str,
    target: str,
    relation_type_id: str,
    settings: Settings,
    store: MetadataStore,
    resolver: LinkResolver,
) -> LinkResult:
    """
    Link `source` and `target` under `relation_type_id` in both documents.

    An unknown relation type is logged and reported on the result. A failure
    writing the source raises SyncError (nothing was written); a failure
    writing the target after the source succeeded raises PartialSyncFailure
    naming the direction still missing, which `retry_direction` can apply.
    """
    relation_type = get_relation_type_by_id(settings, relation_type_id)
    if relation_type is None:
        error = UnknownRelationType(relation_type_id)
        logger.error("[Relations] %s", error)
        return LinkResult(relation_type_id=relation_type_id, error=error)

    key = relation_type.id
    try:
        source_added = await append_link(store, resolver, source, target, key)
    except Exception as e:
        logger.error("[Relations] writing %s link to %s failed: %s", SOURCE_TO_TARGET, source, e)
        raise SyncError(
            f"Relation '{key}': writing {SOURCE_TO_TARGET} link to '{source}' failed ({e})",
            document=source,
            direction=SOURCE_TO_TARGET,
            relation_type_id=key,
        ) from e

    try:
        target_added = await append_link(store, resolver, target, source, key)
    except Exception as e:
        logger.error("[Relations] writing %s link to %s failed: %s", TARGET_TO_SOURCE, target, e)
        raise PartialSyncFailure(
            document=target,
            direction=TARGET_TO_SOURCE,
            relation_type_id=key,
            cause=e,
        ) from e

    result = LinkResult(
        relation_type_id=key,
        source_added=source_added,
        target_added=target_added,
        already_existed=not source_added and not target_added,
    )
    logger.info(
        "[Relations] %s %s %s (source_added=%s, target_added=%s)",
        source, relation_type.label, target, source_added, target_added,
    )
    return result


async def retry_direction(
    failure: PartialSyncFailure,
    source: str,
    target: str,
    store: MetadataStore,
    resolver: LinkResolver,
) -> bool:
    """Apply only the direction a PartialSyncFailure reports as missing."""
    if failure.direction == SOURCE_TO_TARGET:
        return await append_link(store, resolver, source, target, failure.relation_type_id)
    if failure.direction == TARGET_TO_SOURCE:
        return await append_link(store, resolver, target, source, failure.relation_type_id)
    raise ValueError(f"Unknown direction '{failure.direction}'")
