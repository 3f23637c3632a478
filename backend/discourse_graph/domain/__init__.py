from .defaults import default_settings, generate_uid
from .registry import (
    get_available_relation_types,
    get_compatible_node_types,
    get_node_type_by_id,
    get_node_type_by_name,
    get_relation_type_by_id,
    get_relation_type_by_label,
    is_relation_allowed,
)
from .settings_loader import SettingsLoader
from .types import (
    DiscourseNodeType,
    DiscourseRelation,
    DiscourseRelationType,
    RelationTypeOption,
    Settings,
)

__all__ = [
    "DiscourseNodeType",
    "DiscourseRelation",
    "DiscourseRelationType",
    "RelationTypeOption",
    "Settings",
    "SettingsLoader",
    "default_settings",
    "generate_uid",
    "get_available_relation_types",
    "get_compatible_node_types",
    "get_node_type_by_id",
    "get_node_type_by_name",
    "get_relation_type_by_id",
    "get_relation_type_by_label",
    "is_relation_allowed",
]
