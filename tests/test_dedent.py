from snipsync.core.dedent import dedent_lines, dedent_placeholder_bodies


def test_dedents_code_between_fences(grammar):
    lines = [
        "<!--SNIPSTART a -->",
        "```go",
        "    func main() {",
        "        run()",
        "    }",
        "```",
        "<!--SNIPEND-->",
    ]

    assert dedent_lines(lines, grammar) == [
        "<!--SNIPSTART a -->",
        "```go",
        "func main() {",
        "    run()",
        "}",
        "```",
        "<!--SNIPEND-->",
    ]


def test_blocks_are_dedented_independently(grammar):
    lines = ["  a", "  b", "```", "        c", "```"]

    assert dedent_lines(lines, grammar) == ["a", "b", "```", "c", "```"]


def test_blank_lines_do_not_block_dedent(grammar):
    lines = ["```", "    x", "", "    y", "```"]

    assert dedent_lines(lines, grammar) == ["```", "x", "", "y", "```"]


def test_unindented_text_unchanged(grammar):
    lines = ["# Title", "", "Some prose."]

    assert dedent_lines(lines, grammar) == lines


class TestPlaceholderBodies:

    def test_only_placeholder_bodies_are_dedented(self, grammar):
        lines = [
            "1. Install:",
            "   ```bash",
            "   npm install",
            "   ```",
            "  <!--SNIPSTART a -->",
            "```go",
            "    run()",
            "```",
            "  <!--SNIPEND-->",
            "   Then run it.",
        ]

        assert dedent_placeholder_bodies(lines, grammar) == [
            "1. Install:",
            "   ```bash",
            "   npm install",
            "   ```",
            "  <!--SNIPSTART a -->",
            "```go",
            "run()",
            "```",
            "  <!--SNIPEND-->",
            "   Then run it.",
        ]

    def test_file_without_placeholders_unchanged(self, grammar):
        lines = ["  - item", "    ```", "    code", "    ```", "   "]

        assert dedent_placeholder_bodies(lines, grammar) == lines

    def test_unterminated_region_unchanged(self, grammar):
        lines = ["<!--SNIPSTART a -->", "    code"]

        assert dedent_placeholder_bodies(lines, grammar) == lines

    def test_nested_start_leaves_outer_body_alone(self, grammar):
        lines = [
            "<!--SNIPSTART outer -->",
            "    outer",
            "<!--SNIPSTART inner -->",
            "    inner",
            "<!--SNIPEND-->",
        ]

        assert dedent_placeholder_bodies(lines, grammar) == [
            "<!--SNIPSTART outer -->",
            "    outer",
            "<!--SNIPSTART inner -->",
            "inner",
            "<!--SNIPEND-->",
        ]
