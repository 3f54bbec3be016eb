from __future__ import annotations

import pytest

from stitcher.core.stitching.attributes import parse_attributes, scan_open_tag


def test_double_and_single_quoted_values():
    attrs = parse_attributes("""<card title="Hello" kind='wide'>""", "card")
    assert attrs == {"title": "Hello", "kind": "wide"}


def test_values_are_kept_verbatim():
    attrs = parse_attributes('<card title="a &amp; b" count="3">', "card")
    assert attrs["title"] == "a &amp; b"
    assert attrs["count"] == "3"


def test_bare_and_unquoted_attributes():
    attrs = parse_attributes("<card hidden size=10>", "card")
    assert attrs == {"hidden": "", "size": "10"}


def test_no_attributes():
    assert parse_attributes("<card>", "card") == {}


def test_whitespace_around_equals_and_newlines():
    attrs = parse_attributes('<card\n    title = "x"\n    id="y">', "card")
    assert attrs == {"title": "x", "id": "y"}


def test_quoted_gt_does_not_end_tag():
    text = '<card expr="a > b">inner</card>'
    attrs, end = scan_open_tag(text, 0, "card")
    assert attrs == {"expr": "a > b"}
    assert text[end:].startswith("inner")


def test_self_closing_slash_is_ignored():
    assert parse_attributes('<card a="1"/>', "card") == {"a": "1"}


def test_scan_respects_stop():
    text = "<card a='1' </card>"
    assert scan_open_tag(text, 0, "card", stop=text.index("</card>")) is None


def test_unterminated_tag_raises():
    with pytest.raises(ValueError):
        parse_attributes('<card a="1"', "card")
