"""
Syntax highlighting for commands printed by the smart-shell CLI.

  Flags   (-m, --verbose)     grey
  Strings ("...", '...')      green
  Variables ($VAR, ${VAR})    yellow
  Separators (|, &&, ||, ;)   cyan
  Numbers                     purple

Uses Pygments for lexing and prompt_toolkit for rendering.
"""

from pygments import lex
from pygments.lexer import RegexLexer
from pygments.style import Style as PygmentsStyle
from pygments.token import (
    Name,
    Number,
    Operator,
    Punctuation,
    String,
    Token,
)
from prompt_toolkit import print_formatted_text
from prompt_toolkit.formatted_text import FormattedText, PygmentsTokens
from prompt_toolkit.styles import merge_styles, Style as PTStyle
from prompt_toolkit.styles.pygments import style_from_pygments_cls


class CommandLexer(RegexLexer):
    """
    Lexer for single-line commands, tuned to the separators the translator
    understands.
    """

    name = "SmartShellCommand"
    aliases = ["smartshell"]

    tokens = {
        "root": [
            # ── strings ──
            (r'"(?:\\.|[^"\\])*"', String.Double),
            (r"'[^']*'", String.Single),

            # ── shell variables ──
            (r"\$\{[^}]+\}", Name.Variable),
            (r"\$[A-Za-z_]\w*", Name.Variable),

            # ── flags ──
            (r"--[A-Za-z0-9][\w-]*", Name.Tag),
            (r"(?<=\s)-[A-Za-z0-9]+", Name.Tag),
            # Windows-style switches: /s /q
            (r"(?<=\s)/[A-Za-z?]\b", Name.Tag),

            # ── separators ──
            (r"&&|\|\||\|", Operator),
            (r";", Punctuation),

            # ── numbers ──
            (r"\b\d+\b", Number.Integer),

            # ── catch-all ──
            (r"\S+", Token.Text),
            (r"\s+", Token.Text),
        ],
    }


class SmartShellStyle(PygmentsStyle):
    """Pygments colour theme for command highlighting."""

    default_style = ""
    styles = {
        Token.Text:        "",
        String.Double:     "#a6e22e",
        String.Single:     "#a6e22e",
        Name.Variable:     "#e6db74",
        Name.Tag:          "#888888",
        Operator:          "#66d9ef",
        Punctuation:       "#66d9ef",
        Number.Integer:    "#ae81ff",
    }


LABEL_STYLE = {
    "label":  "#00d7d7 bold",
    "arrow":  "#6a6a6a",
}


def _style():
    return merge_styles([
        style_from_pygments_cls(SmartShellStyle),
        PTStyle.from_dict(LABEL_STYLE),
    ])


def print_command(label: str, command: str) -> None:
    """Print ``label: command`` with the command highlighted."""
    print_formatted_text(FormattedText([("class:label", label), ("class:arrow", ": ")]),
                         end="", style=_style())
    # lex() ends the stream with a newline of its own
    print_formatted_text(PygmentsTokens(list(lex(command, CommandLexer()))), end="", style=_style())


def print_translation(os_name: str, original: str, translated: str) -> None:
    """Print an original/translated pair for *os_name*."""
    print_command("original", original)
    print_command(f"{os_name:>8}", translated)
