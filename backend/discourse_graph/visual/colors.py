from typing import Dict, List, Tuple

from discourse_graph.domain.types import DiscourseNodeType
from discourse_graph.visual.node_style import NODE_COLOR_PALETTE

_PALETTE_KEYS = list(NODE_COLOR_PALETTE)


def get_contrast_color(bg_color: str) -> str:
    """Black or white text, whichever reads better on `bg_color` (#rrggbb)."""
    hex_value = bg_color.replace("#", "")
    if len(hex_value) != 6:
        return "#000000"

    try:
        r = int(hex_value[0:2], 16)
        g = int(hex_value[2:4], 16)
        b = int(hex_value[4:6], 16)
    except ValueError:
        return "#000000"

    luminance = (0.299 * r + 0.587 * g + 0.114 * b) / 255
    return "#000000" if luminance > 0.5 else "#ffffff"


def get_node_tag_colors(node_type: DiscourseNodeType, node_index: int) -> Dict[str, str]:
    safe_index = node_index if 0 <= node_index < len(_PALETTE_KEYS) else 0
    palette_color = NODE_COLOR_PALETTE[_PALETTE_KEYS[safe_index]]

    background = node_type.color or palette_color
    return {"background_color": background, "text_color": get_contrast_color(background)}


def get_all_node_colors(node_types: List[DiscourseNodeType]) -> List[Tuple[DiscourseNodeType, Dict[str, str]]]:
    return [(node_type, get_node_tag_colors(node_type, i)) for i, node_type in enumerate(node_types)]
