"""Registry lookups, defaults and the settings file loader."""

import json
import re

import pydantic
import pytest
import yaml

from discourse_graph.domain import (
    SettingsLoader,
    default_settings,
    generate_uid,
    get_available_relation_types,
    get_compatible_node_types,
    get_node_type_by_id,
    get_node_type_by_name,
    get_relation_type_by_id,
    get_relation_type_by_label,
    is_relation_allowed,
)
from discourse_graph.domain.types import DiscourseRelation, Settings


def test_lookup_by_id(settings):
    assert get_node_type_by_id(settings, "claim").name == "Claim"
    assert get_relation_type_by_id(settings, "supports").complement == "is supported by"


def test_unknown_ids_resolve_to_none(settings):
    assert get_node_type_by_id(settings, "gone") is None
    assert get_node_type_by_id(settings, None) is None
    assert get_relation_type_by_id(settings, "gone") is None
    assert get_relation_type_by_id(settings, "") is None


def test_lookups_see_settings_edits(settings):
    settings.node_types[0].name = "Open Question"
    assert get_node_type_by_id(settings, "question").name == "Open Question"
    assert get_node_type_by_name(settings, "Open Question").id == "question"
    assert get_relation_type_by_label(settings, "opposes").id == "opposes"


def test_available_relation_types_for_source(settings):
    options = get_available_relation_types(settings, "evidence")
    assert [(o.id, o.label, o.is_source) for o in options] == [
        ("informs", "informs", True),
        ("supports", "supports", True),
        ("opposes", "opposes", True),
    ]


def test_available_relation_types_for_destination_use_complement(settings):
    options = get_available_relation_types(settings, "claim")
    assert [(o.id, o.label, o.is_source) for o in options] == [
        ("supports", "is supported by", False),
        ("opposes", "is opposed by", False),
    ]


def test_available_relation_types_skip_unknown_relation_types(settings):
    settings.discourse_relations.append(
        DiscourseRelation(source_id="claim", destination_id="question", relationship_type_id="gone")
    )
    assert [o.id for o in get_available_relation_types(settings, "question")] == ["informs"]
    assert get_available_relation_types(settings, None) == []


def test_compatible_node_types(settings):
    assert [n.id for n in get_compatible_node_types(settings, "evidence", "supports")] == ["claim"]
    assert [n.id for n in get_compatible_node_types(settings, "claim", "supports")] == ["evidence"]
    assert get_compatible_node_types(settings, "question", "supports") == []


def test_is_relation_allowed_in_either_orientation(settings):
    assert is_relation_allowed(settings, "evidence", "claim", "supports")
    assert is_relation_allowed(settings, "claim", "evidence", "supports")
    assert not is_relation_allowed(settings, "question", "claim", "supports")


def test_generate_uid():
    uid = generate_uid("node")
    assert re.fullmatch(r"node_[A-Za-z0-9_-]{21}", uid)
    assert generate_uid() != generate_uid()


def test_default_settings():
    settings = default_settings()
    assert [n.format for n in settings.node_types] == ["QUE - {content}", "CLM - {content}", "EVD - {content}"]
    assert [r.label for r in settings.relation_types] == ["supports", "opposes", "informs"]
    assert settings.nodes_folder_path == "Discourse Nodes"

    evidence = get_node_type_by_name(settings, "Evidence")
    claim = get_node_type_by_name(settings, "Claim")
    supports = get_relation_type_by_label(settings, "supports")
    assert is_relation_allowed(settings, evidence.id, claim.id, supports.id)
    assert len(settings.discourse_relations) == 3


# ---- loader ----

def test_loader_falls_back_to_defaults(tmp_path):
    settings = SettingsLoader(str(tmp_path / "missing.yaml")).load()
    assert [n.name for n in settings.node_types] == ["Question", "Claim", "Evidence"]


def test_loader_reads_camel_case_yaml(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text(
        yaml.safe_dump(
            {
                "nodeTypes": [{"id": "n1", "name": "Claim", "format": "CLM - {content}", "keyImage": True}],
                "relationTypes": [{"id": "r1", "label": "supports", "complement": "is supported by", "color": "#000"}],
                "discourseRelations": [{"sourceId": "n1", "destinationId": "n1", "relationshipTypeId": "r1"}],
                "nodesFolderPath": "Nodes",
            }
        )
    )

    settings = SettingsLoader(str(path)).load()

    assert settings.node_types[0].key_image is True
    assert settings.discourse_relations[0].relationship_type_id == "r1"
    assert settings.nodes_folder_path == "Nodes"


@pytest.mark.parametrize("filename", ["settings.yaml", "nested/settings.json"])
def test_loader_round_trips(tmp_path, settings, filename):
    loader = SettingsLoader(str(tmp_path / filename))
    loader.save(settings)

    assert loader.load() == settings


def test_saved_json_uses_persisted_keys(tmp_path, settings):
    path = tmp_path / "settings.json"
    SettingsLoader(str(path)).save(settings)

    data = json.loads(path.read_text())
    assert "nodeTypes" in data and "discourseRelations" in data
    assert data["nodeTypes"][2]["keyImage"] is True
    assert data["discourseRelations"][0]["sourceId"] == "evidence"


def test_loader_rejects_malformed_settings(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text("nodeTypes:\n  - name: Missing id\n")
    with pytest.raises(pydantic.ValidationError):
        SettingsLoader(str(path)).load()


def test_settings_accept_empty_document():
    assert Settings.model_validate({}).node_types == []
