import logging
from functools import lru_cache

from fastapi import APIRouter, Depends, HTTPException

from discourse_graph.canvas.migrations import migrate_canvas
from discourse_graph.config import VAULT_PATH
from discourse_graph.domain.registry import get_available_relation_types, get_node_type_by_id
from discourse_graph.domain.settings_loader import SettingsLoader
from discourse_graph.domain.types import Settings
from discourse_graph.format.expression import extract_content_from_title
from discourse_graph.format.validation import validate_node_format
from discourse_graph.ir.errors import PartialSyncFailure, SyncError, UnknownNodeType
from discourse_graph.schemas import (
    ExtractContentRequest,
    ExtractContentResponse,
    FormatRequest,
    FormatValidationResponse,
    LinkRelationRequest,
    LinkRelationResponse,
    MigrateRequest,
    NodeCreateRequest,
    NodeCreateResponse,
    NodeSizeRequest,
    NodeSizeResponse,
    RelationTypeOptionsResponse,
)
from discourse_graph.sync.nodes import create_discourse_node
from discourse_graph.sync.relations import link_relation
from discourse_graph.sync.vault import MarkdownVault
from discourse_graph.visual.measurement import MeasurementAdapter, PillowMeasurementAdapter
from discourse_graph.visual.sizing import compute_size

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="",
    tags=["discourse-graph"],
)


# ---- dependencies ----

@lru_cache
def get_settings() -> Settings:
    return SettingsLoader().load()


@lru_cache
def get_vault() -> MarkdownVault:
    return MarkdownVault(VAULT_PATH)


@lru_cache
def get_measurement_adapter() -> MeasurementAdapter:
    return PillowMeasurementAdapter(vault_root=VAULT_PATH)


# ---- registry ----

@router.get("/node-types")
def list_node_types(settings: Settings = Depends(get_settings)):
    return [n.model_dump(by_alias=True, exclude_none=True) for n in settings.node_types]


@router.get("/relation-types")
def list_relation_types(settings: Settings = Depends(get_settings)):
    return [r.model_dump() for r in settings.relation_types]


@router.get("/node-types/{node_type_id}/relation-types", response_model=RelationTypeOptionsResponse)
def list_available_relation_types(node_type_id: str, settings: Settings = Depends(get_settings)):
    if get_node_type_by_id(settings, node_type_id) is None:
        raise HTTPException(status_code=404, detail=str(UnknownNodeType(node_type_id)))
    options = get_available_relation_types(settings, node_type_id)
    return RelationTypeOptionsResponse(options=[o.model_dump() for o in options])


# ---- formats ----

@router.post("/formats/validate", response_model=FormatValidationResponse)
def validate_format(req: FormatRequest):
    result = validate_node_format(req.format)
    return FormatValidationResponse(**result.to_dict())


@router.post("/formats/extract", response_model=ExtractContentResponse)
def extract_content(req: ExtractContentRequest):
    return ExtractContentResponse(content=extract_content_from_title(req.format, req.title))


# ---- nodes ----

@router.post("/nodes", response_model=NodeCreateResponse)
def create_node(
    req: NodeCreateRequest,
    settings: Settings = Depends(get_settings),
    vault: MarkdownVault = Depends(get_vault),
):
    node_type = get_node_type_by_id(settings, req.node_type_id)
    if node_type is None:
        raise HTTPException(status_code=404, detail=str(UnknownNodeType(req.node_type_id)))

    result = create_discourse_node(vault, settings, node_type, req.text)
    if not result.ok:
        raise HTTPException(status_code=422, detail=result.error)
    return NodeCreateResponse(**result.to_dict())


# ---- canvas ----

@router.post("/nodes/size", response_model=NodeSizeResponse)
async def node_size(
    req: NodeSizeRequest,
    settings: Settings = Depends(get_settings),
    adapter: MeasurementAdapter = Depends(get_measurement_adapter),
):
    size = await compute_size(
        req.title,
        req.node_type_id,
        settings,
        adapter,
        image_src=req.image_src,
        size=req.size,
        font_family=req.font_family,
    )
    return NodeSizeResponse(w=size.w, h=size.h)


@router.post("/shapes/migrate")
def migrate_shapes(req: MigrateRequest):
    return migrate_canvas(req.snapshot)


# ---- relations ----

@router.post("/relations/link", response_model=LinkRelationResponse)
async def link(
    req: LinkRelationRequest,
    settings: Settings = Depends(get_settings),
    vault: MarkdownVault = Depends(get_vault),
):
    for doc in (req.source, req.target):
        if not vault.exists(doc):
            raise HTTPException(status_code=404, detail=f"Document '{doc}' not found")

    try:
        result = await link_relation(req.source, req.target, req.relation_type_id, settings, vault, vault)
    except PartialSyncFailure as e:
        raise HTTPException(
            status_code=409,
            detail={"message": str(e), "direction": e.direction, "document": e.document},
        )
    except SyncError as e:
        raise HTTPException(
            status_code=500,
            detail={"message": str(e), "direction": e.direction, "document": e.document},
        )

    if not result.ok:
        raise HTTPException(status_code=404, detail=str(result.error))
    return LinkRelationResponse(**result.to_dict())
