"""
Title format engine: compiling, matching and validating node title formats.
"""

from discourse_graph.format.expression import (
    FormatMatcher,
    compile_format,
    extract_content_from_title,
    format_node_name,
)
from discourse_graph.format.validation import (
    check_invalid_chars,
    ensure_valid_format,
    validate_all_node_types,
    validate_node_format,
    validate_node_name,
    validate_node_type_format,
)

__all__ = [
    "FormatMatcher",
    "check_invalid_chars",
    "compile_format",
    "ensure_valid_format",
    "extract_content_from_title",
    "format_node_name",
    "validate_all_node_types",
    "validate_node_format",
    "validate_node_name",
    "validate_node_type_format",
]
