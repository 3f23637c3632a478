"""
MarkdownVault - a directory of markdown documents with YAML frontmatter.

Implements both host interfaces on plain files so the synchronizer can run
outside an editor. Documents are addressed by their vault-relative POSIX
path, e.g. ``"Discourse Nodes/CLM - Tides are lunar.md"``.
"""

import asyncio
import logging
import os
import posixpath
import weakref
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import yaml

from .host import LinkResolver, Metadata, MetadataMutator, MetadataStore

logger = logging.getLogger(__name__)

FRONTMATTER_DELIMITER = "---"


def split_frontmatter(text: str) -> Tuple[Metadata, str]:
    """Split a document into (frontmatter mapping, body)."""
    lines = text.split("\n")
    if not lines or lines[0].strip() != FRONTMATTER_DELIMITER:
        return {}, text

    for i in range(1, len(lines)):
        if lines[i].strip() == FRONTMATTER_DELIMITER:
            raw = "\n".join(lines[1:i])
            body = "\n".join(lines[i + 1:])
            data = yaml.safe_load(raw) if raw.strip() else {}
            if not isinstance(data, dict):
                logger.warning("[Vault] frontmatter is not a mapping, ignoring it")
                data = {}
            return data, body

    return {}, text


def join_frontmatter(metadata: Metadata, body: str) -> str:
    if not metadata:
        return body
    dumped = yaml.safe_dump(metadata, default_flow_style=False, sort_keys=False, allow_unicode=True)
    return f"{FRONTMATTER_DELIMITER}\n{dumped}{FRONTMATTER_DELIMITER}\n{body}"


def _link_name(doc: str) -> str:
    base = posixpath.basename(doc)
    return base[:-3] if base.endswith(".md") else base


class LinkIndex(LinkResolver):
    """Link lookups against one listing of the vault's documents."""

    def __init__(self, documents: List[str]):
        self.documents = set(documents)
        self._by_name: Dict[str, List[str]] = {}
        for doc in sorted(self.documents):
            self._by_name.setdefault(_link_name(doc), []).append(doc)
            base = posixpath.basename(doc)
            if base != _link_name(doc):
                self._by_name.setdefault(base, []).append(doc)

    def resolve_link_target(self, raw_link: str, relative_to: str) -> Optional[str]:
        target = raw_link.split("|", 1)[0].split("#", 1)[0].strip()
        if not target:
            return None

        folder = posixpath.dirname(relative_to)
        candidates = [target, f"{target}.md"]
        if folder:
            candidates += [posixpath.join(folder, target), posixpath.join(folder, f"{target}.md")]
        for candidate in candidates:
            normalized = posixpath.normpath(candidate)
            if normalized in self.documents:
                return normalized

        matches = self._by_name.get(posixpath.basename(target), [])
        if not matches:
            return None
        # Prefer a document next to the linking one.
        same_folder = [d for d in matches if posixpath.dirname(d) == folder]
        return (same_folder or matches)[0]

    def canonical_link_text(self, doc: str, relative_to: str) -> str:
        name = _link_name(doc)
        same_name = [d for d in self._by_name.get(name, []) if _link_name(d) == name]
        if len(same_name) <= 1:
            return name
        return doc[:-3] if doc.endswith(".md") else doc


class MarkdownVault(MetadataStore, LinkResolver):
    def __init__(self, root: str):
        self.root = Path(root)
        # Locks live only while a write holds or awaits them.
        self._locks: "weakref.WeakValueDictionary[str, asyncio.Lock]" = weakref.WeakValueDictionary()

    # ---- documents ----

    def path_of(self, doc: str) -> Path:
        return self.root / doc

    def exists(self, doc: str) -> bool:
        return self.path_of(doc).is_file()

    def list_documents(self) -> List[str]:
        if not self.root.exists():
            return []
        docs = [
            p.relative_to(self.root).as_posix()
            for p in self.root.rglob("*")
            if p.is_file() and not any(part.startswith(".") for part in p.relative_to(self.root).parts)
        ]
        return sorted(docs)

    def read_text(self, doc: str) -> str:
        return self.path_of(doc).read_text(encoding="utf-8")

    def create_document(self, doc: str, metadata: Optional[Metadata] = None, body: str = "") -> str:
        path = self.path_of(doc)
        if path.exists():
            raise FileExistsError(f"{doc} already exists")
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(join_frontmatter(metadata or {}, body), encoding="utf-8")
        logger.debug("[Vault] created %s", doc)
        return doc

    # ---- metadata ----

    # ---- metadata ----

    def _lock(self, doc: str) -> asyncio.Lock:
        lock = self._locks.get(doc)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[doc] = lock
        return lock

    async def read_metadata(self, doc: str) -> Metadata:
        metadata, _ = split_frontmatter(self.read_text(doc))
        return metadata

    async def write_metadata(self, doc: str, mutator: MetadataMutator) -> None:
        async with self._lock(doc):
            metadata, body = split_frontmatter(self.read_text(doc))
            mutator(metadata)
            self.path_of(doc).write_text(join_frontmatter(metadata, body), encoding="utf-8")

    # ---- links ----

    def snapshot(self) -> LinkIndex:
        return LinkIndex(self.list_documents())

    def resolve_link_target(self, raw_link: str, relative_to: str) -> Optional[str]:
        return self.snapshot().resolve_link_target(raw_link, relative_to)

    def canonical_link_text(self, doc: str, relative_to: str) -> str:
        return self.snapshot().canonical_link_text(doc, relative_to)

    def __repr__(self) -> str:
        return f"MarkdownVault({os.fspath(self.root)!r})"
