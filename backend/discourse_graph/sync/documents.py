import logging
import posixpath
import re
from typing import Optional

from discourse_graph.visual.node_style import IMAGE_EXTENSIONS

from .host import Metadata
from .vault import MarkdownVault

logger = logging.getLogger(__name__)

# ![alt](target) or ![[target]]
IMAGE_REF_RE = re.compile(r"!\[([^\]]*)\]\(([^)]+)\)|!\[\[([^\]]+)\]\]")
EXTERNAL_URL_RE = re.compile(r"^https?://", re.IGNORECASE)


def get_node_type_id(metadata: Optional[Metadata]) -> Optional[str]:
    if not metadata:
        return None
    node_type_id = metadata.get("nodeTypeId")
    return node_type_id if isinstance(node_type_id, str) else None


def _normalize_link_target(target: str) -> str:
    without_title = re.sub(r'\s+"[^"]*"\s*$', "", target)
    unwrapped = re.sub(r"^<(.+)>$", r"\1", without_title)
    return unwrapped.split("|", 1)[0].split("#", 1)[0].strip()


def get_first_image_src(vault: MarkdownVault, doc: str) -> Optional[str]:
    """
    First image referenced in `doc`, in document order.

    External URLs are returned as written; internal references are returned
    as the vault path of the image file they resolve to.
    """
    try:
        content = vault.read_text(doc)
    except OSError as e:
        logger.warning("[Documents] cannot read %s: %s", doc, e)
        return None

    index = vault.snapshot()
    for match in IMAGE_REF_RE.finditer(content):
        target = (match.group(2) or match.group(3) or "").strip()
        if match.group(2) and EXTERNAL_URL_RE.match(target):
            return target

        resolved = index.resolve_link_target(_normalize_link_target(target), doc)
        if resolved is None:
            continue
        extension = posixpath.splitext(resolved)[1].lstrip(".").lower()
        if extension in IMAGE_EXTENSIONS:
            return resolved

    return None
