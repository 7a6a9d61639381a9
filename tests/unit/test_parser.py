"""Tests for the description parser."""

import pytest

from flurry_ui.blueprint.parser import BlueprintParser, parse_blueprint
from flurry_ui.core import LRUCache, MalformedElement, ValidationError
from flurry_ui.elements import HandlerRef


@pytest.mark.unit
def test_parse_login_form(login_source):
    """Test parsing a nested description."""
    forest = parse_blueprint(login_source)

    assert len(forest) == 1
    column = forest[0]
    assert column.keyword == "column"
    assert column.attributes.names() == ["padding", "gap"]
    assert column.attributes.find("padding").value == 16
    assert [child.keyword for child in column.children] == ["text", "button"]

    text, button = column.children
    assert text.arguments == ("Login",)
    assert text.children is None
    assert button.attributes.find("on_click").value == HandlerRef(name="submit")
    assert button.children[0].arguments == ("Sign In",)


@pytest.mark.unit
def test_parse_children_block_presence():
    """Test an empty block is kept apart from a missing block."""
    with_block, without_block = parse_blueprint("column(){ } column()")

    assert with_block.children == ()
    assert without_block.children is None


@pytest.mark.unit
def test_parse_records_locations():
    """Test occurrences and attributes carry source positions."""
    forest = parse_blueprint('row() {\n    input(on_input = on_change)\n}')

    nested = forest[0].children[0]
    assert (nested.location.line, nested.location.column) == (2, 5)
    attr = nested.attributes.find("on_input")
    assert (attr.location.line, attr.location.column) == (2, 11)


@pytest.mark.unit
def test_parse_literal_values():
    """Test number, float, boolean and string values."""
    occurrence = parse_blueprint('row(padding = 1.5, gap = -2, hidden = true, id = "main")')[0]

    table = occurrence.attributes
    assert table.find("padding").value == 1.5
    assert table.find("gap").value == -2
    assert table.find("hidden").value is True
    assert table.find("id").value == "main"


@pytest.mark.unit
def test_parse_dotted_handler_name():
    """Test dotted names become a single handler reference."""
    occurrence = parse_blueprint("button(on_click = ui.submit) { }")[0]

    assert occurrence.attributes.find("on_click").value == HandlerRef(name="ui.submit")


@pytest.mark.unit
def test_parse_trailing_comma():
    """Test a trailing comma in the argument list is accepted."""
    occurrence = parse_blueprint("column(padding = 4, gap = 2,) { }")[0]

    assert occurrence.attributes.names() == ["padding", "gap"]


@pytest.mark.unit
def test_parse_keeps_duplicates_in_order():
    """Test repeated attributes are all kept, first one first."""
    occurrence = parse_blueprint("column(gap = 1, gap = 2) { }")[0]

    assert occurrence.attributes.find("gap").value == 1
    assert [attr.value for attr in occurrence.attributes.duplicates()] == [2]


@pytest.mark.unit
@pytest.mark.parametrize(
    "source, message",
    [
        ("column(padding 16)", "expected literal or 'name = value'"),
        ("column(", "found end of input"),
        ("column(padding = )", "expected attribute value"),
        ('column(){ text("a")', "unclosed children block"),
        ("(", "expected element keyword"),
        ("column", "expected '\\(' after 'column'"),
        ("column(gap = 1 padding = 2)", "expected ',' or '\\)'"),
        ("button(on_click = ui.)", "expected name after '.'"),
    ],
)
def test_parse_errors(source, message):
    """Test malformed input is rejected with a diagnostic."""
    with pytest.raises(MalformedElement, match=message):
        parse_blueprint(source)


@pytest.mark.unit
def test_parse_error_location():
    """Test parse errors point at the offending token."""
    with pytest.raises(MalformedElement) as exc:
        parse_blueprint("column(\n    padding 16)")

    assert exc.value.location.line == 2
    assert exc.value.location.column == 5
    assert exc.value.keyword == "column"


@pytest.mark.unit
def test_parse_depth_limit():
    """Test nesting beyond the limit is rejected."""
    parser = BlueprintParser(max_depth=2)

    parser.parse("column(){ row(){ } }")
    with pytest.raises(ValidationError, match="nesting depth 3"):
        parser.parse("column(){ row(){ column(){ } } }")


@pytest.mark.unit
def test_parse_size_limit():
    """Test oversized sources are rejected before tokenizing."""
    parser = BlueprintParser(max_source_length=16)

    with pytest.raises(ValidationError, match="exceeds maximum 16 bytes"):
        parser.parse('column(){ text("a long label") }')


@pytest.mark.unit
def test_parse_cache_hit(login_source):
    """Test repeated sources are served from the cache."""
    cache = LRUCache(max_size=4)
    parser = BlueprintParser(cache=cache)

    first = parser.parse(login_source)
    second = parser.parse(login_source)

    assert second is first
    assert cache.stats.hits == 1
    assert cache.stats.misses == 1


@pytest.mark.unit
def test_parse_empty_document():
    """Test an empty document has no elements."""
    assert parse_blueprint("// nothing here\n") == ()


@pytest.mark.unit
def test_parse_shared_cache_respects_depth_limit():
    """Test parsers with different depth limits do not share cached forests."""
    cache = LRUCache(max_size=4)
    source = "column(){ row(){ column(){ } } }"

    assert len(BlueprintParser(cache=cache).parse(source)) == 1
    with pytest.raises(ValidationError, match="nesting depth 3 exceeds maximum 2"):
        BlueprintParser(max_depth=2, cache=cache).parse(source)


@pytest.mark.unit
@pytest.mark.parametrize(
    "number",
    [
        "1" + "0" * 5000,
        "9" * 400 + ".5",
    ],
)
def test_parse_number_too_large(number):
    """Test oversized number literals are malformed, not a raw ValueError."""
    with pytest.raises(MalformedElement, match="number literal too large") as exc:
        parse_blueprint(f"column(padding = {number})")

    assert exc.value.keyword == "column"
    assert (exc.value.location.line, exc.value.location.column) == (1, 18)
