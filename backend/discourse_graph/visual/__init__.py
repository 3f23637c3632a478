from discourse_graph.visual.colors import get_all_node_colors, get_contrast_color, get_node_tag_colors
from discourse_graph.visual.measurement import (
    ImageSize,
    MeasurementAdapter,
    PillowMeasurementAdapter,
    TextExtent,
)
from discourse_graph.visual.sizing import NodeSize, compute_size

__all__ = [
    "ImageSize",
    "MeasurementAdapter",
    "NodeSize",
    "PillowMeasurementAdapter",
    "TextExtent",
    "compute_size",
    "get_all_node_colors",
    "get_contrast_color",
    "get_node_tag_colors",
]
