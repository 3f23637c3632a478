from pydantic import BaseModel
from typing import Any, Dict, List, Optional


class FormatRequest(BaseModel):
    format: str


class FormatValidationResponse(BaseModel):
    is_valid: bool
    error: Optional[str] = None


class ExtractContentRequest(BaseModel):
    format: str
    title: str


class ExtractContentResponse(BaseModel):
    content: str


class NodeCreateRequest(BaseModel):
    node_type_id: str
    text: str


class NodeCreateResponse(BaseModel):
    ok: bool
    title: Optional[str] = None
    doc: Optional[str] = None   # vault path of the node document
    created: bool = False
    template_applied: bool = False
    error: Optional[str] = None


class NodeSizeRequest(BaseModel):
    title: str
    node_type_id: str
    image_src: Optional[str] = None
    size: str = "s"
    font_family: str = "draw"


class NodeSizeResponse(BaseModel):
    w: float
    h: float


class MigrateRequest(BaseModel):
    """A canvas snapshot: ``schema`` plus ``records`` or ``store``."""
    snapshot: Dict[str, Any]


class LinkRelationRequest(BaseModel):
    source: str   # vault path of the source document
    target: str   # vault path of the target document
    relation_type_id: str


class LinkRelationResponse(BaseModel):
    ok: bool
    relation_type_id: str
    source_added: bool = False
    target_added: bool = False
    already_existed: bool = False
    error: Optional[str] = None


class RelationTypeOptionsResponse(BaseModel):
    options: List[Dict[str, Any]] = []
