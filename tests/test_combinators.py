"""Tests for each, within, group, safe and if_."""

import pytest

from htmlcraft import RenderTypeError, Scope, get_path, h


@pytest.fixture
def context():
    return {
        "rootValue": "bla1",
        "collection": [
            {"val": "test1"},
            {"val": "test2", "internal": [{"val": "test3"}]},
        ],
    }


# =============================================================================
# h.safe
# =============================================================================


def test_safe_disables_escaping():
    """Content inside safe is never escaped."""
    assert h("div", h.safe("&&"))() == "<div>&&</div>"


def test_safe_reaches_prebuilt_nested_nodes():
    """Already built elements below safe are rendered unescaped too."""
    tree = h("div", h.safe(h("span", get_path("bla"), "&"), "&"))
    assert tree({"bla": "&&"}) == "<div><span>&&&</span>&</div>"


def test_escaping_resumes_outside_safe():
    """Siblings of a safe block are still escaped."""
    assert h("div", h.safe("<b>"), "<b>")() == "<div><b>&lt;b&gt;</div>"


# =============================================================================
# h.each
# =============================================================================


def test_each_iterates_collection(context):
    """Content renders once per entry."""
    tree = h("div", h.each("collection", h("a", get_path("entry.val"))))
    assert tree(context) == "<div><a>test1</a><a>test2</a></div>"


def test_each_preserves_parent(context):
    """parent points at the outer context."""
    tree = h("div", h.each("collection", h("a", get_path("entry.val"), get_path("parent.rootValue"))))
    assert tree(context) == "<div><a>test1bla1</a><a>test2bla1</a></div>"


def test_each_preserves_root_on_all_levels(context):
    """$root is the outermost context however deep the nesting."""
    tree = h(
        "div",
        h.each(
            "collection",
            h("a", h.each("entry.internal", h("i", get_path("entry.val"), get_path("$root.rootValue")))),
        ),
    )
    assert tree(context) == "<div><a></a><a><i>test3bla1</i></a></div>"


def test_each_root_is_outermost_context(context):
    """The innermost scope's $root is the very object passed in."""
    seen = []

    def capture(ctx):
        seen.append(ctx["$root"])
        return ""

    h.each("collection", h.each("entry.internal", capture))(context)
    assert seen == [context]


def test_each_index():
    """index counts from zero."""
    tree = h("ol", h.each("items", h("li", get_path("index"), ":", get_path("entry"))))
    assert tree({"items": ["a", "b"]}) == "<ol><li>0:a</li><li>1:b</li></ol>"


@pytest.mark.parametrize("ctx", [{}, {"items": None}, {"items": []}])
def test_each_over_missing_collection_renders_nothing(ctx):
    """Absent or empty collections render an empty string."""
    assert h.each("items", h("li"))(ctx) == ""


def test_each_accepts_functions_and_mappings():
    """The collection may come from a function; mappings iterate their values."""
    tree = h.each(lambda ctx: {"x": 1, "y": 2}, get_path("entry"))
    assert tree() == "12"


@pytest.mark.parametrize("value", [5, 2.5, "abc", object()])
def test_each_rejects_non_iterables(value):
    """A truthy collection that cannot be iterated is a type error."""
    with pytest.raises(RenderTypeError, match=rf"each\(\) expects an iterable, got {type(value).__name__}"):
        h.each("items", "x")({"items": value})


def test_each_scope_is_a_scope(context):
    """Iteration contexts are immutable scopes."""
    kinds = []
    h.each("collection", lambda ctx: kinds.append(type(ctx)))(context)
    assert kinds == [Scope, Scope]


# =============================================================================
# h.within
# =============================================================================


def test_within_shifts_context():
    """Content sees the selected sub-mapping."""
    tree = h("div", h.within("user", h("b", get_path("name"))))
    assert tree({"user": {"name": "ann"}}) == "<div><b>ann</b></div>"


def test_within_attaches_root_and_parent():
    """$root and $parent are reachable from the shifted scope."""
    ctx = {"site": "S", "user": {"name": "ann", "meta": {"age": 3}}}
    tree = h.within(
        "user",
        h.within("meta", get_path("age"), get_path("$parent.name"), get_path("$root.site")),
    )
    assert tree(ctx) == "3annS"


def test_within_is_a_copy():
    """The shifted scope does not alias the original mapping."""
    user = {"name": "ann"}
    scopes = []
    h.within("user", lambda ctx: scopes.append(ctx))({"user": user})
    user["name"] = "bob"
    assert scopes[0]["name"] == "ann"


def test_within_missing_mapping_gives_empty_scope():
    """A missing sub-context renders against an empty scope."""
    assert h.within("nope", get_path("name"), "x")({}) == "x"


def test_within_rejects_non_mappings():
    """Non-mapping sub-contexts are a type error."""
    with pytest.raises(RenderTypeError, match="expects a mapping"):
        h.within("name", "x")({"name": "ann"})


# =============================================================================
# h.group
# =============================================================================


def test_group_concatenates():
    """Group renders its arguments without wrapping markup."""
    assert h.group(h("div", "test1"), h("div", "test2"))() == "<div>test1</div><div>test2</div>"


def test_group_uses_same_context():
    """Group does not shift the context."""
    assert h.group(get_path("a"), get_path("b"))({"a": 1, "b": 2}) == "12"


# =============================================================================
# h.if_
# =============================================================================


def test_if_picks_branch():
    """Truthy condition renders the first branch, falsy the second."""
    assert h.if_(get_path("bla"), h("div"), h("span"))({"bla": True}) == "<div></div>"
    assert h.if_(get_path("bla"), h("div"), h("span"))({"bla": False}) == "<span></span>"


def test_if_with_function_and_path():
    """Conditions may be functions of context or dotted paths."""
    assert h.if_(lambda ctx: ctx["bla"], h("div"), h("span"))({"bla": True}) == "<div></div>"
    assert h.if_("bla", "yes", "no")({"bla": 0}) == "no"


def test_if_without_else_renders_nothing():
    """A missing else-branch renders nothing."""
    assert h.if_("bla", h("div"))({}) == ""


def test_if_with_matcher():
    """Mapping conditions are declarative matchers."""
    tree = h.if_({"user.role": "admin"}, "admin", "guest")
    assert tree({"user": {"role": "admin"}}) == "admin"
    assert tree({"user": {"role": "user"}}) == "guest"


# =============================================================================
# Node calling convention
# =============================================================================


def test_nested_combinator_call_returns_empty():
    """Combinators called with a buffer append to it and return ""."""
    buffer = []
    assert h.group("a", "b")({}, buffer) == ""
    assert buffer == ["a", "b"]


def test_top_level_without_context():
    """Calling without context renders against an empty mapping."""
    assert h.group("&")() == "&amp;"
