from discourse_graph.canvas.migrations import (
    CURRENT_SHAPE_VERSION,
    DISCOURSE_NODE_MIGRATIONS,
    SEQUENCE_ID,
    Migration,
    MigrationOutcome,
    MigrationSequence,
    add_size_and_font_family,
    is_discourse_node_shape,
    migrate_canvas,
    migrate_shape,
)
from discourse_graph.canvas.shapes import create_discourse_node_shape, refresh_shape_size

__all__ = [
    "CURRENT_SHAPE_VERSION",
    "DISCOURSE_NODE_MIGRATIONS",
    "SEQUENCE_ID",
    "Migration",
    "MigrationOutcome",
    "MigrationSequence",
    "add_size_and_font_family",
    "create_discourse_node_shape",
    "is_discourse_node_shape",
    "migrate_canvas",
    "migrate_shape",
    "refresh_shape_size",
]
