"""Title format engine: compiling, extracting and validating formats."""

import pytest

from discourse_graph.domain.types import DiscourseNodeType
from discourse_graph.format import (
    check_invalid_chars,
    compile_format,
    ensure_valid_format,
    extract_content_from_title,
    format_node_name,
    validate_all_node_types,
    validate_node_format,
    validate_node_name,
    validate_node_type_format,
)
from discourse_graph.ir.errors import InvalidFormat


FORMATS = [
    "QUE - {content}",
    "CLM - {content}",
    "{content} (EVD)",
    "[EVD] {content}",
    "Note: {title}!",
    "a.b*c+? {content} $^",
]


@pytest.mark.parametrize("format", ["", "no placeholder", "{}", "{123}", "{ content }"])
def test_formats_without_placeholder_are_invalid(format):
    result = validate_node_format(format)
    assert not result.is_valid
    assert result.error


def test_double_brackets_are_rejected():
    assert validate_node_format("[[{content}]]").error == "Format should not contain double brackets [[ or ]]"
    assert not validate_node_format("CLM ]] {content}").is_valid


@pytest.mark.parametrize("format", FORMATS)
def test_valid_formats_compile(format):
    assert validate_node_format(format).is_valid
    compile_format(format)


@pytest.mark.parametrize("format", FORMATS)
def test_content_round_trips_through_format(format):
    matcher = compile_format(format)
    title = matcher.render("Tides are driven by the moon")
    assert extract_content_from_title(format, title) == "Tides are driven by the moon"


def test_extract_trims_content():
    assert extract_content_from_title("CLM - {content}", "CLM -   spaced out  ") == "spaced out"


def test_extract_returns_title_when_format_empty_or_unmatched():
    assert extract_content_from_title("", "CLM - x") == "CLM - x"
    assert extract_content_from_title("QUE - {content}", "CLM - x") == "CLM - x"
    assert extract_content_from_title("no placeholder", "CLM - x") == "CLM - x"


def test_extract_returns_title_when_capture_is_empty():
    assert extract_content_from_title("CLM - {content}", "CLM - ") == "CLM - "


def test_extract_uses_first_placeholder():
    assert extract_content_from_title("{content} by {author}", "Tides by Newton") == "Tides"


def test_extract_spans_newlines():
    assert extract_content_from_title("QUE - {content}", "QUE - line one\nline two") == "line one\nline two"


def test_compile_rejects_missing_placeholder():
    with pytest.raises(InvalidFormat):
        compile_format("plain")
    with pytest.raises(InvalidFormat):
        compile_format("")


def test_ensure_valid_format_raises_with_message():
    with pytest.raises(InvalidFormat, match="double brackets"):
        ensure_valid_format("[[{content}]]")
    assert ensure_valid_format("QUE - {content}") == "QUE - {content}"


def test_format_node_name_collapses_newlines():
    assert format_node_name("  first line\n   second line ", "CLM - {content}") == "CLM - first line second line"
    assert format_node_name("text", "plain") is None


def test_format_node_name_drops_extra_placeholders():
    assert format_node_name("Tides", "{content} by {author}") == "Tides by "


# ---- node type level checks ----

@pytest.fixture
def node_types():
    return [
        DiscourseNodeType(id="q", name="Question", format="QUE - {content}"),
        DiscourseNodeType(id="c", name="Claim", format="CLM - {content}"),
    ]


def test_node_type_format_requires_content_placeholder(node_types):
    result = validate_node_type_format("CLM - {title}", node_types[1], node_types)
    assert result.error == 'Format must include the placeholder "{content}"'


def test_node_type_format_must_be_unique(node_types):
    result = validate_node_type_format("QUE - {content}", node_types[1], node_types)
    assert result.error == "Format must be unique across all node types"
    assert validate_node_type_format("CLM - {content}", node_types[1], node_types).is_valid


def test_node_type_format_rejects_filename_chars(node_types):
    result = validate_node_type_format("CLM # {content}", node_types[1], node_types)
    assert "invalid character: #" in result.error


@pytest.mark.parametrize("char", ["#", "^", "[", "]", "|"])
def test_check_invalid_chars(char):
    assert not check_invalid_chars(f"a{char}b").is_valid
    assert check_invalid_chars("a - b").is_valid


def test_node_name_required_and_unique(node_types):
    assert validate_node_name("  ", node_types[0], node_types).error == "Name is required"
    assert validate_node_name("Claim", node_types[0], node_types).error == "Name must be unique"
    assert validate_node_name("Question", node_types[0], node_types).is_valid


def test_validate_all_node_types(node_types):
    node_types.append(DiscourseNodeType(id="e", name="Claim", format="EVD - {content}"))
    node_types.append(DiscourseNodeType(id="x", name="", format="X - {content}"))

    has_errors, errors = validate_all_node_types(node_types)

    assert has_errors
    assert errors == {
        1: "Name must be unique",
        2: "Name must be unique",
        3: "Name and format are required",
    }
