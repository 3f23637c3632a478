import secrets
import string

from .types import DiscourseNodeType, DiscourseRelation, DiscourseRelationType, Settings

_UID_ALPHABET = string.ascii_letters + string.digits + "_-"
_UID_LENGTH = 21


def generate_uid(prefix: str = "dg") -> str:
    """Return a prefixed, url-safe random id such as ``node_V1StGXR8_Z5jdHi6B-myT``."""
    suffix = "".join(secrets.choice(_UID_ALPHABET) for _ in range(_UID_LENGTH))
    return f"{prefix}_{suffix}"


DEFAULT_NODE_TYPES = {
    "Question": {"name": "Question", "format": "QUE - {content}"},
    "Claim": {"name": "Claim", "format": "CLM - {content}"},
    "Evidence": {"name": "Evidence", "format": "EVD - {content}"},
}

DEFAULT_RELATION_TYPES = {
    "supports": {"label": "supports", "complement": "is supported by"},
    "opposes": {"label": "opposes", "complement": "is opposed by"},
    "informs": {"label": "informs", "complement": "is informed by"},
}

# (source node type, destination node type, relation type)
DEFAULT_DISCOURSE_RELATIONS = [
    ("Evidence", "Question", "informs"),
    ("Evidence", "Claim", "supports"),
    ("Evidence", "Claim", "opposes"),
]


def default_settings() -> Settings:
    """Build a fresh settings object with newly generated ids."""
    node_types = {
        key: DiscourseNodeType(id=generate_uid("node"), **fields)
        for key, fields in DEFAULT_NODE_TYPES.items()
    }
    relation_types = {
        key: DiscourseRelationType(id=generate_uid("relation"), **fields)
        for key, fields in DEFAULT_RELATION_TYPES.items()
    }
    relations = [
        DiscourseRelation(
            source_id=node_types[src].id,
            destination_id=node_types[dst].id,
            relationship_type_id=relation_types[rel].id,
        )
        for src, dst, rel in DEFAULT_DISCOURSE_RELATIONS
    ]
    return Settings(
        node_types=list(node_types.values()),
        relation_types=list(relation_types.values()),
        discourse_relations=relations,
        show_ids_in_frontmatter=True,
        nodes_folder_path="Discourse Nodes",
    )
