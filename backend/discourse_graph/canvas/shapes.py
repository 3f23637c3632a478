import logging
from typing import Any, Dict, Optional

from discourse_graph.canvas.migrations import CURRENT_SHAPE_VERSION, SHAPE_TYPE
from discourse_graph.domain.defaults import generate_uid
from discourse_graph.domain.types import Settings
from discourse_graph.visual.measurement import MeasurementAdapter
from discourse_graph.visual.node_style import DEFAULT_FONT_FAMILY, DEFAULT_SIZE
from discourse_graph.visual.sizing import compute_size

logger = logging.getLogger(__name__)

# Dimensions within this many pixels of the stored size are not rewritten.
RESIZE_TOLERANCE = 1


async def create_discourse_node_shape(
    title: str,
    node_type_id: str,
    settings: Settings,
    adapter: MeasurementAdapter,
    src: Optional[str] = None,
    image_src: Optional[str] = None,
    x: float = 0,
    y: float = 0,
    size: str = DEFAULT_SIZE,
    font_family: str = DEFAULT_FONT_FAMILY,
    shape_id: Optional[str] = None,
) -> Dict[str, Any]:
    """Build a discourse-node shape record sized for its content."""
    node_size = await compute_size(
        title,
        node_type_id,
        settings,
        adapter,
        image_src=image_src,
        size=size,
        font_family=font_family,
    )

    props: Dict[str, Any] = {
        "w": node_size.w,
        "h": node_size.h,
        "src": src,
        "title": title,
        "nodeTypeId": node_type_id,
        "size": size,
        "fontFamily": font_family,
    }
    if image_src:
        props["imageSrc"] = image_src

    return {
        "id": shape_id or f"shape:{generate_uid('node')}",
        "typeName": "shape",
        "type": SHAPE_TYPE,
        "x": x,
        "y": y,
        "rotation": 0,
        "props": props,
        "meta": {"schemaVersion": CURRENT_SHAPE_VERSION},
    }


async def refresh_shape_size(
    shape: Dict[str, Any],
    settings: Settings,
    adapter: MeasurementAdapter,
) -> bool:
    """
    Recompute a shape's dimensions from its current props, in place.

    Returns True when `w` or `h` moved by more than RESIZE_TOLERANCE and the
    record was updated.
    """
    props = shape.setdefault("props", {})
    node_size = await compute_size(
        props.get("title") or "",
        props.get("nodeTypeId"),
        settings,
        adapter,
        image_src=props.get("imageSrc"),
        size=props.get("size") or DEFAULT_SIZE,
        font_family=props.get("fontFamily") or DEFAULT_FONT_FAMILY,
    )

    if (
        abs((props.get("w") or 0) - node_size.w) > RESIZE_TOLERANCE
        or abs((props.get("h") or 0) - node_size.h) > RESIZE_TOLERANCE
    ):
        props["w"] = node_size.w
        props["h"] = node_size.h
        logger.debug("[Shapes] resized %s to %sx%s", shape.get("id"), node_size.w, node_size.h)
        return True
    return False
