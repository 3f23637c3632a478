from discourse_graph.sync.documents import get_first_image_src, get_node_type_id
from discourse_graph.sync.host import LinkResolver, MetadataStore
from discourse_graph.sync.nodes import NodeCreation, create_discourse_node, node_document_path
from discourse_graph.sync.relations import (
    SOURCE_TO_TARGET,
    TARGET_TO_SOURCE,
    LinkResult,
    append_link,
    link_relation,
    normalize_link,
    retry_direction,
    strip_link_decoration,
)
from discourse_graph.sync.vault import MarkdownVault, join_frontmatter, split_frontmatter

__all__ = [
    "SOURCE_TO_TARGET",
    "TARGET_TO_SOURCE",
    "LinkResolver",
    "LinkResult",
    "MarkdownVault",
    "MetadataStore",
    "NodeCreation",
    "append_link",
    "create_discourse_node",
    "get_first_image_src",
    "get_node_type_id",
    "join_frontmatter",
    "link_relation",
    "node_document_path",
    "normalize_link",
    "retry_direction",
    "split_frontmatter",
    "strip_link_decoration",
]
