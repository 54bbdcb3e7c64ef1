import dataclasses

import pytest

from htmlkit.tokens import (
    CloseTag,
    Comment,
    DocType,
    OpenTag,
    Span,
    TagAttr,
    Text,
    TokenStream,
    WithSpan,
)


def test_span_as_range_matches_bounds():
    span = Span(3, 9)
    r = span.as_range()
    assert r.start == span.start
    assert r.stop == span.end
    assert list(Span(2, 5).as_range()) == [2, 3, 4]


def test_span_is_immutable():
    span = Span(0, 1)
    with pytest.raises(dataclasses.FrozenInstanceError):
        span.start = 5  # type: ignore[misc]
    assert span.start == 0
    assert span.end == 1
    assert span == Span(0, 1)


def test_tag_attr_equality_and_default_value():
    assert TagAttr("attr") == TagAttr("attr", None)
    assert TagAttr("attr1", "value1") != TagAttr("attr1", "value2")
    assert TagAttr("attr").value is None


def test_tag_attr_str_contains_parts():
    with_value = str(TagAttr("src", "test"))
    assert "src" in with_value and '"test"' in with_value
    bare = str(TagAttr("attr1"))
    assert "attr1" in bare
    assert "value" not in bare


def test_open_tag_attrs_are_tuple():
    tag = OpenTag("tag", [TagAttr("a"), TagAttr("b", "c")], True)
    assert tag.attrs == (TagAttr("a"), TagAttr("b", "c"))
    assert tag == OpenTag("tag", (TagAttr("a"), TagAttr("b", "c")), True)
    assert OpenTag("tag").attrs == ()
    assert OpenTag("tag").self_closing is False


def test_open_tag_str():
    tag = OpenTag("img", (TagAttr("src", "test"),), True)
    text = str(tag)
    assert text.startswith("OpenTag(name=img, attrs=")
    assert str(TagAttr("src", "test")) in text
    assert text.endswith("self_closing=true)")
    assert str(OpenTag("p")).endswith("self_closing=false)")


def test_simple_token_strs():
    assert str(DocType()) == "DocType"
    assert str(CloseTag("div")) == "CloseTag(name=div)"
    assert str(Text("abc")).endswith("(abc)")
    assert str(Comment("note")).startswith("Comment(")


def test_tokens_of_different_kinds_differ():
    assert Text("x") != Comment("x")
    assert DocType() == DocType()
    assert CloseTag("a") == CloseTag("a")


def test_with_span_str_includes_value_and_span():
    item = WithSpan(CloseTag("tag"), Span(0, 5))
    text = str(item)
    assert text.startswith(str(CloseTag("tag")))
    assert text.endswith("(span=(0, 5))")


def test_token_stream_append_and_access():
    stream = TokenStream()
    assert len(stream) == 0
    stream.append(Text("before"), Span(0, 5))
    stream.append(CloseTag("tag"), (6, 11))
    assert len(stream) == 2
    assert stream[0] == WithSpan(Text("before"), Span(0, 5))
    assert stream[1].span == Span(6, 11)
    assert stream[-1].value == CloseTag("tag")


def test_token_stream_iteration_order():
    stream = TokenStream()
    values = [Text("a"), DocType(), Comment("c")]
    for pos, value in enumerate(values):
        stream.append(value, Span(pos, pos))
    assert [item.value for item in stream] == values
    assert [item.span.start for item in stream] == [0, 1, 2]


def test_token_stream_equality_with_list():
    stream = TokenStream()
    stream.append(DocType(), Span(0, 9))
    assert stream == [WithSpan(DocType(), Span(0, 9))]
    other = TokenStream([WithSpan(DocType(), Span(0, 9))])
    assert stream == other


def test_token_stream_index_error():
    with pytest.raises(IndexError):
        TokenStream()[0]


def test_token_stream_str_lists_each_token():
    stream = TokenStream()
    stream.append(Text("a"), Span(0, 0))
    stream.append(CloseTag("b"), Span(1, 4))
    text = str(stream)
    lines = text.split("\n")
    assert lines[0] == "["
    assert lines[-1] == "]"
    assert lines[1] == f"    <{stream[0]}>,"
    assert lines[2] == f"    <{stream[1]}>"