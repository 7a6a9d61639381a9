"""Tree compiler tests."""

import pytest
from hypothesis import given, strategies as st
from returns.pipeline import is_successful

from flurry_ui import (
    Button,
    Column,
    Common,
    DuplicateAttribute,
    HandlerRef,
    Input,
    Layout,
    MalformedElement,
    OnClick,
    Row,
    Text,
    TreeCompiler,
    UiNode,
    UnknownElementKind,
    UnrecognizedAttribute,
    ValidationError,
    compile_forest,
    compile_ui,
    try_compile,
    ui,
)
from flurry_ui.blueprint.syntax import AttributeTable, Occurrence
from flurry_ui.core.config import Settings


def f(*args):
    return "clicked"


def texts(node):
    return [child.element.content for child in node.children]


# ============================================================================
# Tree construction
# ============================================================================


@pytest.mark.unit
def test_compile_column_with_text():
    """Test layout attributes and a text child."""
    root = compile_ui('column(padding=16, gap=8){ text("Login") }')

    assert isinstance(root.element, Column)
    assert root.element.layout == Layout(padding=16, gap=8)
    assert len(root.children) == 1

    child = root.children[0]
    assert child.element == Text(content="Login", common=Common(id=None, disabled=False, hidden=False))
    assert child.children == ()


@pytest.mark.unit
def test_compile_button_with_handler():
    """Test a click handler is wrapped and the label kept as child."""
    root = compile_ui('button(on_click=f){ text("Sign In") }', {"f": f})

    assert isinstance(root.element, Button)
    assert root.element.on_click == OnClick(handler=f)
    assert root.element.common == Common()
    assert texts(root) == ["Sign In"]


@pytest.mark.unit
def test_compile_input_without_attributes():
    """Test an input with no handler compiles to on_input None."""
    root = compile_ui("input()")

    assert isinstance(root.element, Input)
    assert root.element.on_input is None
    assert root.children == ()


@pytest.mark.unit
def test_compile_empty_column():
    """Test defaults fill in missing layout attributes."""
    root = compile_ui("column(){ }")

    assert root.element.layout == Layout(padding=0, gap=0)
    assert root.children == ()


@pytest.mark.unit
def test_compile_optional_children_block():
    """Test containers may omit the children block."""
    assert compile_ui("row(gap = 4)") == compile_ui("row(gap = 4) { }")
    assert compile_ui("button()").element.on_click is None


@pytest.mark.unit
def test_compile_login_form(login_source, handlers):
    """Test a nested description end to end."""
    root = compile_ui(login_source, handlers)

    assert [node.kind for node in root.walk()] == ["column", "text", "button", "text"]
    button = root.children[1].element
    assert button.on_click() == "submitted"


@pytest.mark.unit
def test_compile_preserves_child_order():
    """Test children appear in source order."""
    root = compile_ui('row(){ text("a") text("b") }')

    assert isinstance(root.element, Row)
    assert texts(root) == ["a", "b"]


@pytest.mark.unit
def test_compile_attribute_order_independent():
    """Test attribute order does not change the tree."""
    assert compile_ui("column(gap=8, padding=16){}") == compile_ui("column(padding=16, gap=8){}")


@pytest.mark.unit
def test_compile_deterministic(login_source, handlers):
    """Test identical input gives structurally equal trees."""
    assert compile_ui(login_source, handlers) == compile_ui(login_source, handlers)


@pytest.mark.unit
def test_compile_float_spacing():
    """Test decimal spacing values are kept."""
    root = compile_ui("column(padding = 1.5, gap = 0.25) { }")

    assert root.element.layout == Layout(padding=1.5, gap=0.25)


# ============================================================================
# Handlers
# ============================================================================


@pytest.mark.unit
def test_unresolved_handler_reference():
    """Test handler names stay opaque without a handler mapping."""
    root = compile_ui("input(on_input = on_change)")

    assert root.element.on_input.handler == HandlerRef(name="on_change")


@pytest.mark.unit
def test_missing_handler():
    """Test a name absent from the mapping is rejected."""
    with pytest.raises(MalformedElement, match="no handler named 'save'") as exc:
        compile_ui("button(on_click = save) { }", {"submit": f})

    assert exc.value.attribute == "on_click"
    assert exc.value.location.column == 8


@pytest.mark.unit
def test_literal_handler_rejected():
    """Test a string literal cannot stand in for a handler."""
    with pytest.raises(MalformedElement, match="expects a handler reference"):
        compile_ui('button(on_click = "submit") { }')


@pytest.mark.unit
def test_ui_keyword_handlers():
    """Test handlers passed as keyword arguments."""
    root = ui('button(on_click = submit) { text("Go") }', submit=f)

    assert root.element.on_click.handler is f


@pytest.mark.unit
def test_ui_handler_named_source():
    """Test any handler name can be passed as a keyword argument."""
    root = ui("button(on_click = source) { }", source=f)

    assert root.element.on_click.handler is f


# ============================================================================
# Failures
# ============================================================================


@pytest.mark.unit
def test_unknown_element_kind():
    """Test unknown keywords abort compilation."""
    with pytest.raises(UnknownElementKind) as exc:
        compile_ui("box(){ }")

    assert exc.value.keyword == "box"


@pytest.mark.unit
def test_unknown_nested_element_kind():
    """Test an unknown keyword deep in the tree aborts the whole compile."""
    with pytest.raises(UnknownElementKind) as exc:
        compile_ui('column(){\n  text("ok")\n  box()\n}')

    assert (exc.value.location.line, exc.value.location.column) == (3, 3)


@pytest.mark.unit
def test_children_on_leaf():
    """Test a children block on a leaf kind is malformed."""
    with pytest.raises(MalformedElement, match="does not accept a children block"):
        compile_ui('input(){ text("x") }')

    with pytest.raises(MalformedElement, match="does not accept a children block"):
        compile_ui('text("a") { }')


@pytest.mark.unit
def test_children_on_leaf_reported_before_attributes():
    """Test the structural error wins over a bad attribute value."""
    with pytest.raises(MalformedElement, match="does not accept a children block") as exc:
        compile_ui('input(on_input = 42) { text("x") }')

    assert exc.value.attribute is None


@pytest.mark.unit
@pytest.mark.parametrize(
    "source, message",
    [
        ("text()", "exactly one literal argument, got 0"),
        ('text("a", "b")', "exactly one literal argument, got 2"),
        ("text(42)", "must be a str literal, got int"),
        ('column("x") { }', "takes no positional arguments"),
        ("input(true)", "takes no positional arguments"),
    ],
)
def test_literal_argument_rules(source, message):
    """Test the positional literal rules."""
    with pytest.raises(MalformedElement, match=message):
        compile_ui(source)


@pytest.mark.unit
def test_wrong_value_type():
    """Test values of the wrong type are rejected, not coerced."""
    with pytest.raises(MalformedElement, match="invalid value for 'padding'") as exc:
        compile_ui('column(\n  padding = "wide"\n) { }')

    assert exc.value.attribute == "padding"
    assert exc.value.location.line == 2


@pytest.mark.unit
def test_root_count():
    """Test compile_ui needs exactly one top-level element."""
    with pytest.raises(MalformedElement, match="found 2"):
        compile_ui('text("a") text("b")')

    with pytest.raises(MalformedElement, match="found 0"):
        compile_ui("")


@pytest.mark.unit
def test_compile_forest_multiple_roots():
    """Test every top-level element becomes a root."""
    forest = compile_forest('text("a") input() row() { }')

    assert [node.kind for node in forest] == ["text", "input", "row"]


@pytest.mark.unit
def test_unsupported_source_type():
    """Test sources that are not descriptions are a caller error."""
    with pytest.raises(TypeError):
        compile_ui(42)


# ============================================================================
# Lenient and strict attribute handling
# ============================================================================


@pytest.mark.unit
def test_lenient_unknown_attribute():
    """Test unrecognized attributes are ignored by default."""
    assert compile_ui("column(colour = 3, gap = 2) { }") == compile_ui("column(gap = 2) { }")
    assert compile_ui('text("a", id = "x")').element.common.id is None


@pytest.mark.unit
def test_lenient_duplicate_attribute():
    """Test the first of repeated attributes wins by default."""
    root = compile_ui("column(gap = 1, gap = 2) { }")

    assert root.element.layout.gap == 1


@pytest.mark.unit
def test_strict_unknown_attribute():
    """Test strict mode reports unrecognized attributes."""
    with pytest.raises(UnrecognizedAttribute, match="'column' has no attribute 'colour'") as exc:
        compile_ui("column(colour = 3) { }", strict=True)

    assert exc.value.attribute == "colour"
    assert isinstance(exc.value, MalformedElement)


@pytest.mark.unit
def test_strict_duplicate_attribute():
    """Test strict mode reports repeated attributes."""
    with pytest.raises(DuplicateAttribute, match="'gap' given more than once") as exc:
        compile_ui("column(gap = 1, gap = 2) { }", strict=True)

    assert exc.value.location.column == 17


@pytest.mark.unit
def test_strict_from_settings():
    """Test strict mode can be switched on through settings."""
    compiler = TreeCompiler(settings=Settings(strict_attributes=True))

    with pytest.raises(UnrecognizedAttribute):
        compiler.compile("row(padding = 1, margin = 2) { }")


# ============================================================================
# Other inputs and results
# ============================================================================


@pytest.mark.unit
def test_compile_occurrences():
    """Test hand-built occurrences compile like parsed ones."""
    occurrence = Occurrence(
        keyword="button",
        attributes=AttributeTable.from_pairs([("on_click", f)]),
        children=(Occurrence(keyword="text", arguments=("Go",)),),
    )

    assert compile_ui(occurrence) == compile_ui('button(on_click = f) { text("Go") }', {"f": f})


@pytest.mark.unit
def test_compiler_reuses_parse_cache(compiler, login_source):
    """Test a compiler instance parses each source once."""
    first = compiler.compile(login_source)
    second = compiler.compile(login_source)

    assert first == second
    assert compiler.parser.cache.stats.hits == 1


@pytest.mark.unit
def test_compiler_depth_limit():
    """Test deeply nested input is refused."""
    compiler = TreeCompiler(settings=Settings(max_depth=2))

    with pytest.raises(ValidationError):
        compiler.compile("column(){ row(){ column(){ } } }")


@pytest.mark.unit
def test_try_compile_success():
    """Test Result form on success."""
    result = try_compile("input()")

    assert is_successful(result)
    assert result.unwrap() == UiNode(element=Input())


@pytest.mark.unit
def test_try_compile_failure():
    """Test Result form carries a diagnostic."""
    result = try_compile("column(){\n  box()\n}")

    assert not is_successful(result)
    diagnostic = result.failure()
    assert diagnostic.kind == "UnknownElementKind"
    assert diagnostic.keyword == "box"
    assert (diagnostic.line, diagnostic.column) == (2, 3)


@pytest.mark.unit
def test_try_compile_oversized_number():
    """Test an oversized number literal still yields a diagnostic."""
    result = try_compile("column(padding = 1" + "0" * 5000 + ")")

    assert not is_successful(result)
    assert result.failure().kind == "MalformedElement"
    assert "number literal too large" in result.failure().message


# ============================================================================
# Properties
# ============================================================================


spacing = st.one_of(
    st.integers(min_value=-1000, max_value=1000),
    st.integers(min_value=0, max_value=4000).map(lambda n: n / 4),
)


@given(padding=spacing, gap=spacing, swap=st.booleans())
def test_layout_attributes_property(padding, gap, swap):
    """Property test: any spacing values compile, in either order."""
    pairs = [f"padding = {padding!r}", f"gap = {gap!r}"]
    if swap:
        pairs.reverse()

    root = compile_ui(f"column({', '.join(pairs)}) {{ }}")

    assert root.element.layout == Layout(padding=padding, gap=gap)


@given(st.lists(st.text(alphabet="abcxyz ", max_size=8), max_size=6))
def test_child_order_property(labels):
    """Property test: children keep source order."""
    body = " ".join(f'text("{label}")' for label in labels)

    root = compile_ui(f"row() {{ {body} }}")

    assert texts(root) == labels
