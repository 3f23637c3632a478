from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional

# ---- Type definitions ----
# Field aliases keep the camelCase keys used in persisted settings files.


class DiscourseNodeType(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    format: str  # e.g. "CLM - {content}"
    template: Optional[str] = None
    description: Optional[str] = None
    shortcut: Optional[str] = None
    color: Optional[str] = None
    tag: Optional[str] = None
    key_image: bool = Field(default=False, alias="keyImage")


class DiscourseRelationType(BaseModel):
    id: str
    label: str       # "supports"
    complement: str  # "is supported by"
    color: str = ""


class DiscourseRelation(BaseModel):
    """Which relation type is legal between two node types."""

    model_config = ConfigDict(populate_by_name=True)

    source_id: str = Field(alias="sourceId")
    destination_id: str = Field(alias="destinationId")
    relationship_type_id: str = Field(alias="relationshipTypeId")


class RelationTypeOption(BaseModel):
    id: str
    label: str
    is_source: bool


# ---- Root settings ----

class Settings(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    node_types: List[DiscourseNodeType] = Field(default_factory=list, alias="nodeTypes")
    relation_types: List[DiscourseRelationType] = Field(default_factory=list, alias="relationTypes")
    discourse_relations: List[DiscourseRelation] = Field(default_factory=list, alias="discourseRelations")

    show_ids_in_frontmatter: bool = Field(default=True, alias="showIdsInFrontmatter")
    nodes_folder_path: str = Field(default="", alias="nodesFolderPath")
    canvas_folder_path: str = Field(default="Discourse Canvas", alias="canvasFolderPath")
    canvas_attachments_folder_path: str = Field(
        default="attachments", alias="canvasAttachmentsFolderPath"
    )
    node_tag_hotkey: str = Field(default="", alias="nodeTagHotkey")
    # Folder holding node templates; blank disables templates.
    templates_folder_path: str = Field(default="", alias="templatesFolderPath")

    def to_persisted(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)
