from __future__ import annotations

import pytest

from stitcher.core.exceptions import MalformedPartialError
from stitcher.core.stitching.buffer import (
    FileBuffer,
    indent_lines,
    leading_indent,
    locate_partial,
    substitute,
)
from stitcher.core.stitching.models import CandidateFile


class TestLocatePartial:
    def test_not_found_returns_none(self):
        assert locate_partial("<p>hello</p>", "nav") is None

    def test_span_attributes_and_inner(self):
        text = 'before <nav active="home" lang="en">Menu</nav> after'
        occ = locate_partial(text, "nav")
        assert occ is not None
        assert text[occ.start : occ.end] == '<nav active="home" lang="en">Menu</nav>'
        assert occ.parameters == {"active": "home", "lang": "en", "inner": "Menu"}
        assert occ.inner == "Menu"
        assert occ.indent == ""

    def test_inner_is_verbatim_including_markup(self):
        text = "<card>\n  <b>bold</b> &amp;\n</card>"
        occ = locate_partial(text, "card")
        assert occ.parameters["inner"] == "\n  <b>bold</b> &amp;\n"

    def test_indent_captures_spaces_and_tabs_in_order(self):
        text = "<div>\n\t  <nav></nav>\n</div>"
        occ = locate_partial(text, "nav")
        assert occ.indent == "\t  "

    def test_indent_stops_at_non_whitespace(self):
        text = "x  <nav></nav>"
        assert locate_partial(text, "nav").indent == "  "
        assert locate_partial("<nav></nav>", "nav").indent == ""

    def test_search_starts_at_offset(self):
        text = '<nav id="1"></nav><nav id="2"></nav>'
        first = locate_partial(text, "nav")
        second = locate_partial(text, "nav", first.end)
        assert first.parameters["id"] == "1"
        assert second.parameters["id"] == "2"
        assert second.start == first.end
        assert locate_partial(text, "nav", second.end) is None

    def test_missing_close_tag_raises(self):
        with pytest.raises(MalformedPartialError) as excinfo:
            locate_partial("<p><frag></p>", "frag", file="/src/index.html")
        err = excinfo.value
        assert err.tag == "frag"
        assert err.file == "/src/index.html"
        assert "</frag>" in str(err)

    def test_unterminated_open_tag_raises(self):
        with pytest.raises(MalformedPartialError):
            locate_partial('<frag title="x </frag>', "frag")

    def test_inner_key_overrides_attribute(self):
        occ = locate_partial('<frag inner="attr">body</frag>', "frag")
        assert occ.parameters["inner"] == "body"


class TestSubstitute:
    def test_replaces_every_occurrence(self):
        assert substitute("${a}-${a}", "a", "X") == "X-X"

    def test_leaves_other_placeholders(self):
        assert substitute("${a} ${unset}", "a", "1") == "1 ${unset}"

    def test_single_pass_does_not_expand_value(self):
        assert substitute("${a}", "a", "${b}") == "${b}"

    def test_no_escaping(self):
        assert substitute("<p>${v}</p>", "v", "<b>&</b>") == "<p><b>&</b></p>"


def test_indent_lines_skips_first_line():
    assert indent_lines("line1\nline2\nline3", "    ") == "line1\n    line2\n    line3"
    assert indent_lines("a\nb", "") == "a\nb"


def test_leading_indent_at_start_of_text():
    assert leading_indent("   x", 3) == "   "
    assert leading_indent("x", 0) == ""


def test_file_buffer_reads_indents_and_substitutes(tmp_path):
    path = tmp_path / "card.html"
    path.write_text("<h1>${title}</h1>\n<p>${inner}</p>", encoding="utf-8")
    buf = FileBuffer.read(CandidateFile.from_path(path))
    buf.indent("  ")
    buf.substitute_all({"title": "Hi", "inner": "Body"})
    assert buf.text == "<h1>Hi</h1>\n  <p>Body</p>"
    assert buf.source == str(path.resolve())
    assert len(buf) == len(buf.text)
    assert buf.span(4, 6) == "Hi"


def test_substitute_all_applies_keys_in_order():
    buf = FileBuffer("<h1>${title}</h1>")
    buf.substitute_all({"title": "${inner}", "inner": "BODY"})
    assert buf.text == "<h1>BODY</h1>"

    buf = FileBuffer("<h1>${title}</h1>")
    buf.substitute_all({"inner": "BODY", "title": "${inner}"})
    assert buf.text == "<h1>${inner}</h1>"
