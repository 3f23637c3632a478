"""
Node type validation.

Checks run when a node type is created or edited in settings. They return a
ValidationResult instead of raising; `ensure_valid_format` is the raising
variant used where an invalid format must block a save.
"""

import re
from typing import Dict, List, Tuple

from discourse_graph.domain.types import DiscourseNodeType
from discourse_graph.ir.errors import InvalidFormat
from discourse_graph.ir.validation import ValidationResult

from .expression import PLACEHOLDER_RE

LINK_BRACKETS = ("[[", "]]")
INVALID_FILENAME_CHARS_RE = re.compile(r"[#^\[\]|]")
CONTENT_PLACEHOLDER = "{content}"


def validate_node_format(format: str) -> ValidationResult:
    """Validate a title format. Any format accepted here compiles."""
    if not format:
        return ValidationResult.invalid("Format cannot be empty", level="format")

    if any(b in format for b in LINK_BRACKETS):
        return ValidationResult.invalid(
            "Format should not contain double brackets [[ or ]]", level="format"
        )

    if not PLACEHOLDER_RE.search(format):
        return ValidationResult.invalid(
            "Format must contain at least one variable in {varName} format", level="format"
        )

    return ValidationResult.success()


def ensure_valid_format(format: str) -> str:
    result = validate_node_format(format)
    if not result.is_valid:
        raise InvalidFormat(format, result.error)
    return format


def check_invalid_chars(text: str) -> ValidationResult:
    match = INVALID_FILENAME_CHARS_RE.search(text)
    if match:
        return ValidationResult.invalid(
            f"Node contains invalid character: {match.group(0)}. "
            "Characters #, ^, [, ], | cannot be used in filenames."
        )
    return ValidationResult.success()


def validate_node_type_format(
    format: str,
    current: DiscourseNodeType,
    all_nodes: List[DiscourseNodeType],
) -> ValidationResult:
    """Stricter settings-level check: requires {content} and a unique format."""
    if not format:
        return ValidationResult.invalid("Format cannot be empty", object_id=current.id)

    if any(b in format for b in LINK_BRACKETS):
        return ValidationResult.invalid(
            "Format should not contain double brackets [[ or ]]", object_id=current.id
        )

    if CONTENT_PLACEHOLDER not in format:
        return ValidationResult.invalid(
            'Format must include the placeholder "{content}"', object_id=current.id
        )

    chars = check_invalid_chars(format)
    if not chars.is_valid:
        return chars

    if any(n.format == format for n in all_nodes if n.id != current.id):
        return ValidationResult.invalid(
            "Format must be unique across all node types", object_id=current.id
        )

    return ValidationResult.success()


def validate_node_name(
    name: str,
    current: DiscourseNodeType,
    all_nodes: List[DiscourseNodeType],
) -> ValidationResult:
    if not name or not name.strip():
        return ValidationResult.invalid("Name is required", object_id=current.id)

    if any(n.name == name for n in all_nodes if n.id != current.id):
        return ValidationResult.invalid("Name must be unique", object_id=current.id)

    return ValidationResult.success()


def validate_all_node_types(node_types: List[DiscourseNodeType]) -> Tuple[bool, Dict[int, str]]:
    """Validate every node type; returns (has_errors, {index: first error})."""
    error_map: Dict[int, str] = {}

    for index, node_type in enumerate(node_types):
        if not node_type.name or not node_type.format:
            error_map[index] = "Name and format are required"
            continue

        format_result = validate_node_type_format(node_type.format, node_type, node_types)
        if not format_result.is_valid:
            error_map[index] = format_result.error or "Invalid format"
            continue

        name_result = validate_node_name(node_type.name, node_type, node_types)
        if not name_result.is_valid:
            error_map[index] = name_result.error or "Invalid name"

    return bool(error_map), error_map
