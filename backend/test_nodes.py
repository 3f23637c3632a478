import pytest

from discourse_graph.domain.types import DiscourseNodeType
from discourse_graph.sync import create_discourse_node, get_node_type_id
from discourse_graph.sync.nodes import merge_frontmatter


def node_type(settings, node_type_id):
    return next(n for n in settings.node_types if n.id == node_type_id)


@pytest.mark.asyncio
async def test_creates_formatted_node_in_nodes_folder(settings, vault):
    result = create_discourse_node(vault, settings, node_type(settings, "claim"), "  Tides follow\n  the moon ")

    assert result.ok and result.created
    assert result.title == "CLM - Tides follow the moon"
    assert result.doc == "Discourse Nodes/CLM - Tides follow the moon.md"
    assert get_node_type_id(await vault.read_metadata(result.doc)) == "claim"


def test_creates_node_at_vault_root_without_folder(settings, vault):
    settings.nodes_folder_path = "  "
    result = create_discourse_node(vault, settings, node_type(settings, "question"), "Why two tides a day")

    assert result.doc == "QUE - Why two tides a day.md"
    assert vault.exists(result.doc)


@pytest.mark.parametrize("text", ["Tides #physics", "Tides [[moon]]", "Tides ^ref", "A | B"])
def test_rejects_filename_unsafe_titles(settings, vault, text):
    before = vault.list_documents()
    result = create_discourse_node(vault, settings, node_type(settings, "claim"), text)

    assert not result.ok
    assert "invalid character" in result.error
    assert result.doc is None
    assert vault.list_documents() == before


def test_returns_existing_node_instead_of_duplicate(settings, vault):
    before = vault.list_documents()
    result = create_discourse_node(vault, settings, node_type(settings, "claim"), "Tides are lunar")

    assert result.ok
    assert not result.created
    assert result.doc == "Discourse Nodes/CLM - Tides are lunar.md"
    assert vault.list_documents() == before


def test_existing_node_elsewhere_in_vault_is_found(settings, vault):
    vault.create_document("Archive/EVD - Old gauge logs.md", {"nodeTypeId": "evidence"})
    result = create_discourse_node(vault, settings, node_type(settings, "evidence"), "Old gauge logs")

    assert result.doc == "Archive/EVD - Old gauge logs.md"
    assert not result.created


def test_broken_node_type_format(settings, vault):
    broken = DiscourseNodeType(id="broken", name="Broken", format="no placeholder")
    result = create_discourse_node(vault, settings, broken, "anything")

    assert not result.ok
    assert result.title is None
    assert "invalid format" in result.error


def test_template_supplies_frontmatter_and_body(settings, vault):
    settings.templates_folder_path = "Templates"
    vault.create_document(
        "Templates/Claim.md",
        {"nodeTypeId": "template-placeholder", "tags": ["claim", "draft"], "status": "open"},
        "## Evidence\n\n## Notes\n",
    )
    claim = node_type(settings, "claim").model_copy(update={"template": "Claim"})

    result = create_discourse_node(vault, settings, claim, "Spring tides are larger")

    assert result.created and result.template_applied
    text = vault.read_text(result.doc)
    assert text.endswith("---\n## Evidence\n\n## Notes\n")
    assert text.startswith("---\nnodeTypeId: claim\ntags:\n")


def test_missing_template_still_creates_node(settings, vault):
    claim = node_type(settings, "claim").model_copy(update={"template": "Nope"})
    result = create_discourse_node(vault, settings, claim, "Neap tides are smaller")

    assert result.created
    assert not result.template_applied
    assert vault.read_text(result.doc) == "---\nnodeTypeId: claim\n---\n"


def test_merge_frontmatter():
    merged = merge_frontmatter(
        {"tags": ["a", "b"], "meta": {"x": 1, "y": 2}, "status": "open", "nodeTypeId": "t"},
        {"tags": ["b", "c"], "meta": {"y": 3}, "nodeTypeId": "claim", "extra": True},
    )
    assert merged == {
        "tags": ["a", "b", "c"],
        "meta": {"x": 1, "y": 3},
        "status": "open",
        "nodeTypeId": "claim",
        "extra": True,
    }
