"""
Node creation - turns a piece of text into a discourse node document.

The text is placed into the node type's title format, checked for characters
that cannot appear in file names, and written to the configured nodes folder
with ``nodeTypeId`` in its frontmatter. A document that already answers to
the title is returned instead of creating a duplicate.

When the node type names a template, the template document from the
templates folder supplies the starting frontmatter and body.
"""

import logging
import posixpath
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from discourse_graph.domain.types import DiscourseNodeType, Settings
from discourse_graph.format.expression import format_node_name
from discourse_graph.format.validation import check_invalid_chars

from .host import Metadata
from .vault import MarkdownVault, split_frontmatter

logger = logging.getLogger(__name__)


@dataclass
class NodeCreation:
    title: Optional[str]
    doc: Optional[str] = None
    created: bool = False
    template_applied: bool = False
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        return {
            "ok": self.ok,
            "title": self.title,
            "doc": self.doc,
            "created": self.created,
            "template_applied": self.template_applied,
            "error": self.error,
        }


def _folder_path(folder: str, file_name: str) -> str:
    folder = folder.strip().strip("/")
    return posixpath.join(folder, file_name) if folder else file_name


def node_document_path(settings: Settings, title: str) -> str:
    return _folder_path(settings.nodes_folder_path, f"{title}.md")


def merge_frontmatter(template: Dict[str, Any], current: Dict[str, Any]) -> Dict[str, Any]:
    """
    Template frontmatter overlaid with the node's own values.

    Lists are concatenated without duplicates and mappings merge recursively;
    for anything else the node's value wins.
    """
    result = dict(template)
    for key, current_value in current.items():
        template_value = result.get(key)
        if key not in result:
            result[key] = current_value
        elif isinstance(template_value, list) and isinstance(current_value, list):
            merged = []
            for item in template_value + current_value:
                if item not in merged:
                    merged.append(item)
            result[key] = merged
        elif isinstance(template_value, dict) and isinstance(current_value, dict):
            result[key] = merge_frontmatter(template_value, current_value)
        else:
            result[key] = current_value
    return result


def load_template(vault: MarkdownVault, settings: Settings, template_name: str) -> Optional[Tuple[Metadata, str]]:
    """Frontmatter and body of a template document, or None when unavailable."""
    if not settings.templates_folder_path.strip():
        logger.warning("[Nodes] template '%s' requested but no templates folder is configured", template_name)
        return None

    path = _folder_path(settings.templates_folder_path, f"{template_name}.md")
    if not vault.exists(path):
        logger.warning("[Nodes] template file not found: %s", path)
        return None
    return split_frontmatter(vault.read_text(path))


def create_discourse_node(
    vault: MarkdownVault,
    settings: Settings,
    node_type: DiscourseNodeType,
    text: str,
) -> NodeCreation:
    title = format_node_name(text, node_type.format)
    if title is None:
        error = f"Node type '{node_type.name}' has an invalid format '{node_type.format}'"
        logger.warning("[Nodes] %s", error)
        return NodeCreation(title=None, error=error)

    chars = check_invalid_chars(title)
    if not chars.is_valid:
        logger.warning("[Nodes] rejected title %r: %s", title, chars.error)
        return NodeCreation(title=title, error=chars.error)

    existing = vault.snapshot().resolve_link_target(title, "")
    if existing is not None:
        logger.info("[Nodes] %s already exists at %s", title, existing)
        return NodeCreation(title=title, doc=existing, created=False)

    metadata: Metadata = {"nodeTypeId": node_type.id}
    body = ""
    template_applied = False
    if node_type.template and node_type.template.strip():
        template = load_template(vault, settings, node_type.template.strip())
        if template is not None:
            template_metadata, template_body = template
            metadata = merge_frontmatter(template_metadata, metadata)
            body = template_body if template_body.strip() else ""
            template_applied = True

    doc = vault.create_document(node_document_path(settings, title), metadata, body)
    logger.info("[Nodes] created %s node %s", node_type.name, doc)
    return NodeCreation(title=title, doc=doc, created=True, template_applied=template_applied)
