"""Tests for docstring extraction."""

import re

from basic_code_intel.languages.comments import (
    C_STYLE,
    LEADING_AT_SYMBOL_PATTERN,
    LISP_STYLE,
    PYTHON_STYLE,
    SHELL_STYLE,
)
from basic_code_intel.languages.types import DocPlacement, LineCommentStyle
from basic_code_intel.search.docstrings import find_docstring


def _source(*lines: str) -> str:
    """Build file text with a leading empty line and an indented trailer."""
    return "\n".join(["", *lines, "        "])


class TestPythonDocstrings:
    """Docstrings below the definition line."""

    def test_no_comment_style_finds_nothing(self) -> None:
        text = _source("        def foo():", '            """docstring"""', "            pass")
        assert find_docstring(1, text, ()) is None

    def test_one_line_block(self) -> None:
        text = _source("        def foo():", '            """docstring"""', "            pass")
        assert find_docstring(1, text, (PYTHON_STYLE,)) == "docstring"

    def test_multi_line_block(self) -> None:
        text = _source(
            "        def foo():",
            '            """docstring1',
            '            docstring2"""',
            "            pass",
        )
        assert find_docstring(1, text, (PYTHON_STYLE,)) == "docstring1\ndocstring2"

    def test_multi_line_block_with_closing_line(self) -> None:
        text = _source(
            "        def foo():",
            '            """docstring1',
            "            docstring2",
            '            """',
            "            pass",
        )
        assert find_docstring(1, text, (PYTHON_STYLE,)) == "docstring1\ndocstring2\n"

    def test_multi_line_block_with_opening_and_closing_lines(self) -> None:
        text = _source(
            "        def foo():",
            '            """',
            "            docstring1",
            "            docstring2",
            '            """',
            "            pass",
        )
        assert find_docstring(1, text, (PYTHON_STYLE,)) == "\ndocstring1\ndocstring2\n"

    def test_line_comment_below_definition(self) -> None:
        text = "def foo():\n    # computes foo\n    # twice\n    return 1\n"
        assert find_docstring(0, text, (PYTHON_STYLE,)) == "computes foo\ntwice"


class TestCStyleDocstrings:
    """Docstrings above the definition line."""

    def test_single_line_comment(self) -> None:
        text = _source("        // docstring", "        const foo;")
        assert find_docstring(2, text, (C_STYLE,)) == "docstring"

    def test_run_of_line_comments(self) -> None:
        text = _source("        // docstring1", "        // docstring2", "        const foo;")
        assert find_docstring(3, text, (C_STYLE,)) == "docstring1\ndocstring2"

    def test_block_with_closing_line(self) -> None:
        text = _source(
            "        /* docstring1",
            "         * docstring2",
            "         */",
            "        const foo;",
        )
        assert find_docstring(4, text, (C_STYLE,)) == "docstring1\ndocstring2\n"

    def test_block_closed_on_last_text_line(self) -> None:
        text = _source("        /* docstring1", "         * docstring2 */", "        const foo;")
        assert find_docstring(3, text, (C_STYLE,)) == "docstring1\ndocstring2 "

    def test_block_without_spaces(self) -> None:
        text = _source("        /** docstring1", "        *docstring2*/", "        const foo;")
        assert find_docstring(3, text, (C_STYLE,)) == " docstring1\ndocstring2"

    def test_ignores_annotations_between_docs_and_definition(self) -> None:
        text = _source(
            "        /**",
            "         * docstring",
            "         */",
            "        @Annotation",
            "        public void FizzBuzz()",
        )
        found = find_docstring(5, text, (C_STYLE,), LEADING_AT_SYMBOL_PATTERN)
        assert found == "\ndocstring\n"

    def test_same_line_trailing_comment(self) -> None:
        assert find_docstring(0, "int x = 1; // the answer", (C_STYLE,)) == "the answer"

    def test_same_line_comment_after_closing_token(self) -> None:
        assert find_docstring(0, "foo();// the answer", (C_STYLE,)) == "the answer"
        assert find_docstring(0, "} // the end", (C_STYLE,)) == "the end"
        assert find_docstring(0, "struct S {}// a struct", (C_STYLE,)) == "a struct"

    def test_url_in_string_is_not_a_comment(self) -> None:
        text = 'const u = "http://example.com";'
        assert find_docstring(0, text, (C_STYLE,)) is None

    def test_no_docs(self) -> None:
        text = "int a;\n\nint b;"
        assert find_docstring(2, text, (C_STYLE,)) is None


class TestOtherStyles:
    """Less common comment conventions."""

    def test_shell_comments_above(self) -> None:
        text = "# Prints a greeting\ngreet() {\n  echo hi\n}"
        assert find_docstring(1, text, (SHELL_STYLE,)) == "Prints a greeting"

    def test_lisp_docstring_below(self) -> None:
        text = '(defn greet\n  "Prints a greeting"\n  [name])'
        assert find_docstring(0, text, (LISP_STYLE,)) == "Prints a greeting"

    def test_first_matching_style_wins(self) -> None:
        dash = LineCommentStyle(line=re.compile(r"--\s?"), placement=DocPlacement.ABOVE)
        text = "-- dashes\nfoo = 1"
        assert find_docstring(1, text, (SHELL_STYLE, dash)) == "dashes"
