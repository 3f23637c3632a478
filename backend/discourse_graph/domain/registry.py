"""
Type registry - read-only lookups over a Settings object.

Every function takes the settings explicitly and scans its lists on each
call, so edits made through the settings UI are visible immediately.
"""

import logging
from typing import List, Optional

from .types import DiscourseNodeType, DiscourseRelationType, RelationTypeOption, Settings

logger = logging.getLogger(__name__)


def get_node_type_by_id(settings: Settings, node_type_id: Optional[str]) -> Optional[DiscourseNodeType]:
    if not node_type_id:
        return None
    for node_type in settings.node_types:
        if node_type.id == node_type_id:
            return node_type
    logger.debug("[Registry] node type '%s' not found", node_type_id)
    return None


def get_relation_type_by_id(settings: Settings, relation_type_id: Optional[str]) -> Optional[DiscourseRelationType]:
    if not relation_type_id:
        return None
    for relation_type in settings.relation_types:
        if relation_type.id == relation_type_id:
            return relation_type
    logger.debug("[Registry] relation type '%s' not found", relation_type_id)
    return None


def get_node_type_by_name(settings: Settings, name: str) -> Optional[DiscourseNodeType]:
    return next((n for n in settings.node_types if n.name == name), None)


def get_relation_type_by_label(settings: Settings, label: str) -> Optional[DiscourseRelationType]:
    return next((r for r in settings.relation_types if r.label == label), None)


def get_available_relation_types(settings: Settings, node_type_id: Optional[str]) -> List[RelationTypeOption]:
    """
    Relation types a document of `node_type_id` can take part in.

    The option label is the relation's own label when the node type is the
    source of the discourse relation and its complement when it is the
    destination.
    """
    if not node_type_id:
        return []

    options: List[RelationTypeOption] = []
    seen = set()
    for relation in settings.discourse_relations:
        if node_type_id not in (relation.source_id, relation.destination_id):
            continue

        relation_type = get_relation_type_by_id(settings, relation.relationship_type_id)
        if relation_type is None:
            continue

        is_source = relation.source_id == node_type_id
        key = (relation_type.id, is_source)
        if key in seen:
            continue
        seen.add(key)
        options.append(
            RelationTypeOption(
                id=relation_type.id,
                label=relation_type.label if is_source else relation_type.complement,
                is_source=is_source,
            )
        )
    return options


def get_compatible_node_types(
    settings: Settings, node_type_id: Optional[str], relation_type_id: Optional[str]
) -> List[DiscourseNodeType]:
    """Node types found at the other end of `relation_type_id` edges touching `node_type_id`."""
    if not node_type_id or not relation_type_id:
        return []

    compatible: List[DiscourseNodeType] = []
    for relation in settings.discourse_relations:
        if relation.relationship_type_id != relation_type_id:
            continue
        if relation.source_id == node_type_id:
            other_id = relation.destination_id
        elif relation.destination_id == node_type_id:
            other_id = relation.source_id
        else:
            continue
        other = get_node_type_by_id(settings, other_id)
        if other is not None:
            compatible.append(other)
    return compatible


def is_relation_allowed(
    settings: Settings, source_type_id: str, target_type_id: str, relation_type_id: str
) -> bool:
    """True when a discourse relation allows the pair in either orientation."""
    pair = {source_type_id, target_type_id}
    return any(
        r.relationship_type_id == relation_type_id and {r.source_id, r.destination_id} == pair
        for r in settings.discourse_relations
    )
