"""Built-in language profiles.

Language identifiers follow the editor conventions for known languages;
the set of languages covers the most active languages on GitHub. Adding a
language means adding an entry here, nothing in the engine changes.
"""

from __future__ import annotations

import re

from basic_code_intel.languages.comments import (
    C_STYLE,
    DOC_SLASH_PATTERN,
    HASH_PATTERN,
    LEADING_ASTERISK_PATTERN,
    LEADING_AT_SYMBOL_PATTERN,
    LISP_STYLE,
    PYTHON_STYLE,
    SHELL_STYLE,
    TRIPLE_SLASH_PATTERN,
    c_style_with_line,
)
from basic_code_intel.languages.filters import (
    filter_cpp_definitions,
    filter_go_definitions,
    filter_java_definitions,
    filter_python_definitions,
    filter_typescript_definitions,
)
from basic_code_intel.languages.types import (
    BlockComment,
    BlockCommentStyle,
    DocPlacement,
    LanguageProfile,
    LineAndBlockCommentStyle,
    LineCommentStyle,
)

__all__ = ["BUILTIN_PROFILES", "identifier_pattern"]


def identifier_pattern(extra_chars: str) -> re.Pattern[str]:
    """Return an identifier pattern of alphanumerics, underscore and extras.

    Args:
        extra_chars: Additional characters, already escaped for a character class.

    """
    return re.compile(rf"[A-Za-z0-9_{extra_chars}]")


_RUBY_IDENTIFIER = identifier_pattern("!?")

BUILTIN_PROFILES: tuple[LanguageProfile, ...] = (
    LanguageProfile(
        language_id="cpp",
        display_name="C++",
        file_extensions=("c", "cc", "cpp", "cxx", "hh", "h", "hpp", "ino", "m"),
        comment_styles=(C_STYLE,),
        filter_definitions=filter_cpp_definitions,
    ),
    LanguageProfile(
        language_id="cuda",
        display_name="CUDA",
        file_extensions=("cu", "cuh"),
        comment_styles=(C_STYLE,),
        filter_definitions=filter_cpp_definitions,
    ),
    LanguageProfile(
        language_id="go",
        display_name="Go",
        file_extensions=("go",),
        comment_styles=(LineCommentStyle(line=re.compile(r"//\s?")),),
        filter_definitions=filter_go_definitions,
    ),
    LanguageProfile(
        language_id="java",
        display_name="Java",
        file_extensions=("java",),
        comment_styles=(C_STYLE,),
        docstring_ignore=LEADING_AT_SYMBOL_PATTERN,
        filter_definitions=filter_java_definitions,
    ),
    LanguageProfile(
        language_id="python",
        display_name="Python",
        file_extensions=("py",),
        comment_styles=(PYTHON_STYLE,),
        filter_definitions=filter_python_definitions,
    ),
    LanguageProfile(
        language_id="typescript",
        display_name="TypeScript",
        file_extensions=("ts", "tsx", "js", "jsx"),
        comment_styles=(C_STYLE,),
        filter_definitions=filter_typescript_definitions,
    ),
    LanguageProfile(
        language_id="ruby",
        display_name="Ruby",
        file_extensions=(
            "rb",
            "builder",
            "eye",
            "fcgi",
            "gemspec",
            "god",
            "jbuilder",
            "mspec",
            "pluginspec",
            "podspec",
            "rabl",
            "rake",
            "rbuild",
            "rbw",
            "rbx",
            "ru",
            "ruby",
            "spec",
            "thor",
            "watchr",
        ),
        comment_styles=(SHELL_STYLE,),
        identifier_pattern=_RUBY_IDENTIFIER,
    ),
    LanguageProfile(
        language_id="php",
        display_name="PHP",
        file_extensions=("php", "phtml", "php3", "php4", "php5", "php6", "php7", "phps"),
        comment_styles=(C_STYLE,),
    ),
    LanguageProfile(
        language_id="csharp",
        display_name="C#",
        file_extensions=("cs", "csx"),
        comment_styles=(c_style_with_line(DOC_SLASH_PATTERN),),
    ),
    LanguageProfile(
        language_id="shell",
        display_name="Shell",
        file_extensions=("sh", "bash", "zsh"),
        comment_styles=(SHELL_STYLE,),
    ),
    LanguageProfile(
        language_id="scala",
        display_name="Scala",
        file_extensions=("sbt", "sc", "scala"),
        comment_styles=(C_STYLE,),
        docstring_ignore=LEADING_AT_SYMBOL_PATTERN,
    ),
    LanguageProfile(
        language_id="swift",
        display_name="Swift",
        file_extensions=("swift",),
        comment_styles=(c_style_with_line(DOC_SLASH_PATTERN),),
        docstring_ignore=LEADING_AT_SYMBOL_PATTERN,
    ),
    LanguageProfile(
        language_id="rust",
        display_name="Rust",
        file_extensions=("rs", "rs.in"),
        comment_styles=(c_style_with_line(re.compile(r"///?!?\s?")),),
        docstring_ignore=re.compile(r"^#"),
    ),
    LanguageProfile(
        language_id="kotlin",
        display_name="Kotlin",
        file_extensions=("kt", "ktm", "kts"),
        comment_styles=(C_STYLE,),
    ),
    LanguageProfile(
        language_id="elixir",
        display_name="Elixir",
        file_extensions=("ex", "exs"),
        comment_styles=(
            LineAndBlockCommentStyle(
                line=PYTHON_STYLE.line,
                block=PYTHON_STYLE.block,
                placement=DocPlacement.ABOVE,
            ),
        ),
        identifier_pattern=_RUBY_IDENTIFIER,
        docstring_ignore=LEADING_AT_SYMBOL_PATTERN,
    ),
    LanguageProfile(
        language_id="perl",
        display_name="Perl",
        file_extensions=("pl", "al", "cgi", "fcgi", "perl", "ph", "plx", "pm", "pod", "psgi", "t"),
        comment_styles=(LineCommentStyle(line=HASH_PATTERN),),
    ),
    LanguageProfile(
        language_id="lua",
        display_name="Lua",
        file_extensions=("lua", "fcgi", "nse", "pd_lua", "rbxs", "wlua"),
        comment_styles=(
            LineAndBlockCommentStyle(
                line=re.compile(r"---?\s?"),
                block=BlockComment(start=re.compile(r"--\[\["), end=re.compile(r"\]\]")),
            ),
        ),
    ),
    LanguageProfile(
        language_id="clojure",
        display_name="Clojure",
        file_extensions=("clj", "cljs", "cljx"),
        comment_styles=(LISP_STYLE,),
        identifier_pattern=identifier_pattern(r"\-!?+*<>="),
    ),
    LanguageProfile(
        language_id="haskell",
        display_name="Haskell",
        file_extensions=("hs", "hsc"),
        comment_styles=(
            LineAndBlockCommentStyle(
                line=re.compile(r"--\s?\|?\s?"),
                block=BlockComment(start=re.compile(r"\{-"), end=re.compile(r"-\}")),
            ),
        ),
        identifier_pattern=identifier_pattern("'"),
        docstring_ignore=re.compile(r"INLINE|^#"),
    ),
    LanguageProfile(
        language_id="powershell",
        display_name="PowerShell",
        file_extensions=("ps1", "psd1", "psm1"),
        comment_styles=(
            BlockCommentStyle(
                block=BlockComment(start=re.compile(r"<#"), end=re.compile(r"#>")),
                placement=DocPlacement.BELOW,
            ),
        ),
        identifier_pattern=identifier_pattern("?"),
        docstring_ignore=re.compile(r"\{"),
    ),
    LanguageProfile(
        language_id="lisp",
        display_name="Lisp",
        file_extensions=("lisp", "asd", "cl", "lsp", "l", "ny", "podsl", "sexp", "el"),
        comment_styles=(LISP_STYLE,),
        identifier_pattern=_RUBY_IDENTIFIER,
    ),
    LanguageProfile(
        language_id="erlang",
        display_name="Erlang",
        file_extensions=("erl",),
        comment_styles=(LineCommentStyle(line=re.compile(r"%%\s?")),),
        docstring_ignore=re.compile(r"-spec"),
    ),
    LanguageProfile(
        language_id="dart",
        display_name="Dart",
        file_extensions=("dart",),
        comment_styles=(LineCommentStyle(line=TRIPLE_SLASH_PATTERN),),
    ),
    LanguageProfile(
        language_id="ocaml",
        display_name="OCaml",
        file_extensions=("ml", "eliom", "eliomi", "ml4", "mli", "mll", "mly", "re"),
        comment_styles=(
            BlockCommentStyle(
                block=BlockComment(
                    start=re.compile(r"\(\*\*?"),
                    end=re.compile(r"\*\)"),
                    line_noise=LEADING_ASTERISK_PATTERN,
                ),
            ),
        ),
    ),
    LanguageProfile(
        language_id="r",
        display_name="R",
        file_extensions=("r", "R", "rd", "rsx"),
        comment_styles=(LineCommentStyle(line=re.compile(r"#'?\s?")),),
        identifier_pattern=identifier_pattern(r"\."),
    ),
    LanguageProfile(
        language_id="pascal",
        display_name="Pascal",
        file_extensions=("p", "pas", "pp"),
        # (* traditional *) and { customary } comments
        comment_styles=(
            BlockCommentStyle(
                block=BlockComment(
                    start=re.compile(r"(\{|\(\*)\s?"),
                    end=re.compile(r"(\}|\*\))"),
                ),
            ),
        ),
    ),
    LanguageProfile(
        language_id="verilog",
        display_name="Verilog",
        file_extensions=("sv", "svh", "svi", "v"),
        comment_styles=(C_STYLE,),
    ),
    LanguageProfile(
        language_id="vhdl",
        display_name="VHDL",
        file_extensions=("vhd", "vhdl"),
        comment_styles=(LineCommentStyle(line=re.compile(r"--+\s?")),),
    ),
    LanguageProfile(
        language_id="graphql",
        display_name="GraphQL",
        file_extensions=("graphql",),
        comment_styles=(SHELL_STYLE,),
    ),
    LanguageProfile(
        language_id="groovy",
        display_name="Groovy",
        file_extensions=("groovy",),
        comment_styles=(C_STYLE,),
    ),
)
