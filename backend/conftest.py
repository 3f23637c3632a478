import pytest

from discourse_graph.domain.types import (
    DiscourseNodeType,
    DiscourseRelation,
    DiscourseRelationType,
    Settings,
)
from discourse_graph.sync.vault import MarkdownVault
from discourse_graph.visual.measurement import MeasurementAdapter, TextExtent


class FakeMeasurementAdapter(MeasurementAdapter):
    """Deterministic measurer: 10px per title character, fixed height."""

    def __init__(self, text_height=60.0, image=None, image_error=None):
        self.text_height = text_height
        self.image = image
        self.image_error = image_error
        self.text_calls = []
        self.image_calls = []

    def measure_text(self, title, subtitle, size, font_family):
        self.text_calls.append((title, subtitle, size, font_family))
        return TextExtent(w=min(max(10.0 * len(title), 160.0), 400.0), h=self.text_height)

    async def load_image(self, src):
        self.image_calls.append(src)
        if self.image_error is not None:
            raise self.image_error
        return self.image


@pytest.fixture
def settings():
    return Settings(
        node_types=[
            DiscourseNodeType(id="question", name="Question", format="QUE - {content}"),
            DiscourseNodeType(id="claim", name="Claim", format="CLM - {content}"),
            DiscourseNodeType(id="evidence", name="Evidence", format="EVD - {content}", key_image=True),
        ],
        relation_types=[
            DiscourseRelationType(id="supports", label="supports", complement="is supported by"),
            DiscourseRelationType(id="opposes", label="opposes", complement="is opposed by"),
            DiscourseRelationType(id="informs", label="informs", complement="is informed by"),
        ],
        discourse_relations=[
            DiscourseRelation(source_id="evidence", destination_id="question", relationship_type_id="informs"),
            DiscourseRelation(source_id="evidence", destination_id="claim", relationship_type_id="supports"),
            DiscourseRelation(source_id="evidence", destination_id="claim", relationship_type_id="opposes"),
        ],
        nodes_folder_path="Discourse Nodes",
    )


@pytest.fixture
def make_adapter():
    return FakeMeasurementAdapter


@pytest.fixture
def vault(tmp_path):
    vault = MarkdownVault(str(tmp_path))
    vault.create_document("Discourse Nodes/EVD - Tide gauge data.md", {"nodeTypeId": "evidence"}, "Measurements.\n")
    vault.create_document("Discourse Nodes/CLM - Tides are lunar.md", {"nodeTypeId": "claim"}, "The moon.\n")
    vault.create_document("Discourse Nodes/QUE - What drives tides.md", {"nodeTypeId": "question"}, "")
    return vault
