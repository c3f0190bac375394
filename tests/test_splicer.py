import pytest

from snipsync.core.diagnostics import DiagnosticKind
from snipsync.core.overlay import Features
from snipsync.core.splicer import find_placeholders, splice_region, splice_target

from conftest import make_origin, make_snippet


class TestSpliceRegion:

    def test_replaces_lines_strictly_between_markers(self):
        lines = ["intro", "START", "old", "END", "outro"]

        assert splice_region(lines, 2, 4, ["new1", "new2"]) == ("intro", "START", "new1", "new2", "END", "outro")

    def test_empty_region(self):
        lines = ["START", "END"]

        assert splice_region(lines, 1, 2, ["body"]) == ("START", "body", "END")

    def test_empty_body_removes_content(self):
        lines = ["START", "a", "b", "END"]

        assert splice_region(lines, 1, 4, []) == ("START", "END")

    def test_markers_at_file_edges(self):
        lines = ["START", "x", "y", "z", "END"]

        result = splice_region(lines, 1, 5, ["only"])

        assert result[0] == "START"
        assert result[-1] == "END"
        assert result == ("START", "only", "END")

    def test_input_is_not_modified(self):
        lines = ["START", "old", "END"]

        splice_region(lines, 1, 3, ["new"])

        assert lines == ["START", "old", "END"]

    @pytest.mark.parametrize("start,end", [(0, 2), (2, 2), (3, 2), (1, 4)])
    def test_invalid_window(self, start, end):
        with pytest.raises(ValueError):
            splice_region(["a", "b", "c"], start, end, [])


class TestFindPlaceholders:

    def test_positions_are_one_based_marker_lines(self, grammar, diagnostics):
        lines = [
            "# Doc",
            "<!--SNIPSTART demo -->",
            "old",
            "<!--SNIPEND-->",
        ]

        [placeholder] = find_placeholders(lines, grammar, diagnostics)

        assert placeholder.id == "demo"
        assert placeholder.start_line_index == 2
        assert placeholder.end_line_index == 4
        assert placeholder.body_length == 1
        assert placeholder.inline_config is None

    def test_inline_config_is_parsed(self, grammar, diagnostics):
        lines = ['<!--SNIPSTART demo {"highlights": "2"} -->', "<!--SNIPEND-->"]

        [placeholder] = find_placeholders(lines, grammar, diagnostics)

        assert placeholder.inline_config == {"highlights": "2"}

    def test_nested_start_discards_outer_region(self, grammar, diagnostics):
        lines = [
            "<!--SNIPSTART outer -->",
            "<!--SNIPSTART inner -->",
            "<!--SNIPEND-->",
            "<!--SNIPEND-->",
        ]

        placeholders = find_placeholders(lines, grammar, diagnostics, "doc.md")

        assert [(p.id, p.start_line_index, p.end_line_index) for p in placeholders] == [("inner", 2, 3)]
        [diagnostic] = diagnostics.of_kind(DiagnosticKind.NESTED_PLACEHOLDER)
        assert diagnostic.location == "doc.md:2"

    def test_unterminated_placeholder_is_ignored(self, grammar, diagnostics):
        assert find_placeholders(["<!--SNIPSTART demo -->", "text"], grammar, diagnostics) == []

    def test_malformed_start_is_reported(self, grammar, diagnostics):
        lines = ["<!--SNIPSTART -->", "<!--SNIPEND-->"]

        assert find_placeholders(lines, grammar, diagnostics) == []
        assert len(diagnostics.of_kind(DiagnosticKind.MALFORMED_MARKER)) == 1


class TestSpliceTarget:

    def test_end_to_end_single_placeholder(self, grammar, diagnostics):
        snippet = make_snippet("demo", ["x", "y"], extension="go", origin=make_origin(
            path="main.go", owner="o", repo="r"
        ))
        lines = ["<!--SNIPSTART demo -->", "", "<!--SNIPEND-->"]

        result = splice_target(lines, {"demo": snippet}, Features(), grammar, diagnostics)

        assert result == (
            "<!--SNIPSTART demo -->",
            "[main.go](https://github.com/o/r/blob/master/main.go)",
            "```go",
            "x",
            "y",
            "```",
            "<!--SNIPEND-->",
        )
        assert diagnostics.total == 0

    def test_multiple_placeholders_keep_surrounding_text(self, grammar, diagnostics):
        snippets = {
            "a": make_snippet("a", ["alpha1", "alpha2", "alpha3"]),
            "b": make_snippet("b", ["beta"]),
        }
        defaults = Features(enable_source_link=False, enable_code_block=False)
        lines = [
            "top",
            "<!--SNIPSTART a -->",
            "<!--SNIPEND-->",
            "middle",
            "<!--SNIPSTART b -->",
            "stale",
            "stale",
            "<!--SNIPEND-->",
            "bottom",
        ]

        result = splice_target(lines, snippets, defaults, grammar, diagnostics)

        assert result == (
            "top",
            "<!--SNIPSTART a -->",
            "alpha1",
            "alpha2",
            "alpha3",
            "<!--SNIPEND-->",
            "middle",
            "<!--SNIPSTART b -->",
            "beta",
            "<!--SNIPEND-->",
            "bottom",
        )

    def test_same_snippet_in_two_placeholders(self, grammar, diagnostics):
        snippets = {"a": make_snippet("a", ["body"])}
        defaults = Features(enable_source_link=False, enable_code_block=False)
        lines = ["<!--SNIPSTART a -->", "<!--SNIPEND-->", "<!--SNIPSTART a -->", "<!--SNIPEND-->"]

        result = splice_target(lines, snippets, defaults, grammar, diagnostics)

        assert result == ("<!--SNIPSTART a -->", "body", "<!--SNIPEND-->",
                          "<!--SNIPSTART a -->", "body", "<!--SNIPEND-->")

    def test_splicing_twice_is_stable(self, grammar, diagnostics):
        snippets = {"a": make_snippet("a", ["one", "two"]), "b": make_snippet("b", ["three"])}
        lines = [
            "# Title",
            "<!--SNIPSTART a -->",
            "<!--SNIPEND-->",
            '<!--SNIPSTART b {"select": ["1"], "highlights": "1"} -->',
            "<!--SNIPEND-->",
        ]

        once = splice_target(lines, snippets, Features(), grammar, diagnostics)
        twice = splice_target(once, snippets, Features(), grammar, diagnostics)

        assert twice == once

    def test_unresolved_placeholder_left_untouched(self, grammar, diagnostics):
        lines = ["<!--SNIPSTART missing -->", "keep me", "<!--SNIPEND-->"]

        result = splice_target(lines, {}, Features(), grammar, diagnostics, "doc.md")

        assert result == tuple(lines)
        [diagnostic] = diagnostics.of_kind(DiagnosticKind.UNRESOLVED_SNIPPET_REFERENCE)
        assert diagnostic.location == "doc.md:1"

    def test_unresolved_does_not_block_other_placeholders(self, grammar, diagnostics):
        snippets = {"a": make_snippet("a", ["body"])}
        defaults = Features(enable_source_link=False, enable_code_block=False)
        lines = [
            "<!--SNIPSTART missing -->",
            "<!--SNIPEND-->",
            "<!--SNIPSTART a -->",
            "<!--SNIPEND-->",
        ]

        result = splice_target(lines, snippets, defaults, grammar, diagnostics)

        assert result[-3:] == ("<!--SNIPSTART a -->", "body", "<!--SNIPEND-->")

    def test_inline_config_overrides_global_defaults(self, grammar, diagnostics):
        snippets = {"a": make_snippet("a", ["body"])}
        defaults = Features(enable_source_link=True, enable_code_block=True)
        lines = ['<!--SNIPSTART a {"enable_source_link": false} -->', "<!--SNIPEND-->"]

        result = splice_target(lines, snippets, defaults, grammar, diagnostics)

        assert result[1:-1] == ("```ts", "body", "```")

    def test_invalid_inline_config_falls_back_to_defaults(self, grammar, diagnostics):
        snippets = {"a": make_snippet("a", ["body"])}
        defaults = Features(enable_source_link=False, enable_code_block=False)
        lines = ["<!--SNIPSTART a {broken -->", "<!--SNIPEND-->"]

        result = splice_target(lines, snippets, defaults, grammar, diagnostics)

        assert result == ("<!--SNIPSTART a {broken -->", "body", "<!--SNIPEND-->")
        assert len(diagnostics.of_kind(DiagnosticKind.INVALID_INLINE_CONFIG)) == 1

    def test_bad_inline_value_falls_back_to_defaults(self, grammar, diagnostics):
        snippets = {"a": make_snippet("a", ["body"])}
        defaults = Features(enable_source_link=False, enable_code_block=False)
        lines = ['<!--SNIPSTART a {"select": ["9-1"]} -->', "<!--SNIPEND-->"]

        result = splice_target(lines, snippets, defaults, grammar, diagnostics)

        assert result[1] == "body"
        assert len(diagnostics.of_kind(DiagnosticKind.INVALID_INLINE_CONFIG)) == 1

    def test_file_without_placeholders_is_unchanged(self, grammar, diagnostics):
        lines = ["just", "text"]

        assert splice_target(lines, {"a": make_snippet("a", ["x"])}, Features(), grammar, diagnostics) == ("just", "text")
