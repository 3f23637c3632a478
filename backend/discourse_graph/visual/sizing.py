import logging
from dataclasses import dataclass
from typing import Optional

from discourse_graph.domain.registry import get_node_type_by_id
from discourse_graph.domain.types import Settings
from discourse_graph.ir.errors import MeasurementFailure
from discourse_graph.visual.measurement import MeasurementAdapter
from discourse_graph.visual.node_style import (
    BASE_PADDING,
    DEFAULT_FONT_FAMILY,
    DEFAULT_SIZE,
    EXTRA_BOTTOM_SPACING,
    IMAGE_GAP,
    MAX_IMAGE_HEIGHT,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NodeSize:
    w: float
    h: float

    def to_dict(self) -> dict:
        return {"w": self.w, "h": self.h}


async def compute_size(
    title: str,
    node_type_id: Optional[str],
    settings: Settings,
    adapter: MeasurementAdapter,
    image_src: Optional[str] = None,
    size: str = DEFAULT_SIZE,
    font_family: str = DEFAULT_FONT_FAMILY,
) -> NodeSize:
    """
    Compute the width and height of a discourse node shape.

    The title and the node type name are measured through `adapter`. When an
    image is given and the node type shows key images, the image is placed
    above the text at the node's width, capped at MAX_IMAGE_HEIGHT; a capped
    image widens the node so it keeps its aspect ratio. Image failures fall
    back to the text-only size.

    Nothing is cached: every call measures again.
    """
    node_type = get_node_type_by_id(settings, node_type_id)
    if node_type is None and node_type_id:
        logger.warning("[NodeSize] unknown node type '%s', measuring without a subtitle", node_type_id)
    node_type_name = node_type.name if node_type else ""

    text = adapter.measure_text(title, node_type_name, size, font_family)
    w, text_height = text.w, text.h
    text_only = NodeSize(w=w, h=text_height + EXTRA_BOTTOM_SPACING)

    if not image_src or node_type is None or not node_type.key_image:
        return text_only

    try:
        image = await adapter.load_image(image_src)
    except MeasurementFailure as e:
        logger.warning("[NodeSize] failed to load image %s: %s", image_src, e)
        return text_only
    except Exception as e:
        logger.error("[NodeSize] measurement adapter raised on %s: %r", image_src, e)
        return text_only

    if image.width <= 0 or image.height <= 0:
        logger.warning("[NodeSize] image %s has no usable dimensions", image_src)
        return text_only

    aspect_ratio = image.width / image.height
    effective_width = w + BASE_PADDING
    image_height = min(effective_width / aspect_ratio, MAX_IMAGE_HEIGHT)

    final_width = w
    if image_height == MAX_IMAGE_HEIGHT:
        min_width_for_image = MAX_IMAGE_HEIGHT * aspect_ratio + BASE_PADDING
        if min_width_for_image > w:
            final_width = min_width_for_image

    return NodeSize(
        w=final_width,
        h=text_height + image_height + IMAGE_GAP + EXTRA_BOTTOM_SPACING,
    )
