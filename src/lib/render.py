"""
Render a highlighted document outside the editor

Used by the command line front end: the same pattern table and theme that
drive the editor feed a Pygments formatter, or a plain span listing.
"""

from typing import List, Optional, Union

from pygments import highlight
from pygments.formatters import HtmlFormatter, Terminal256Formatter

from ..models.language import Language
from ..models.tokens import HighlightSpan
from .lexer import NeonLexer
from .patterns import rules_get
from .theme import Theme
from .tokenizer import Tokenizer

RENDER_FORMATS = ("terminal", "html", "spans")


def spans_describe(text: str, spans: List[HighlightSpan]) -> str:
    """
    One line per span: "start-end token 'text'".

    Example:
        0-4 keyword 'func'
        14-24 comment '// comment'
    """
    return "\n".join(
        f"{span.start}-{span.end} {span.token.value} {span.text_get(text)!r}" for span in spans
    )


def document_render(
    text: str,
    language: Union[Language, str, None],
    theme: Theme,
    fmt: str = "terminal",
    tokenizer: Optional[Tokenizer] = None,
) -> str:
    """
    Render text with the pattern table of `language` and colours of `theme`.

    Args:
        text: Document text
        language: Language or identifier string
        theme: Resolved theme
        fmt: "terminal" (256-colour ANSI), "html" (inline-styled full
             document) or "spans" (plain listing)
        tokenizer: Tokenizer to use (default: a fresh one)

    Returns:
        Rendered string

    Raises:
        ValueError: For an unknown format
    """
    tokenizer = tokenizer or Tokenizer()

    if fmt == "spans":
        return spans_describe(text, tokenizer.spans_compute(text, rules_get(language)))

    lexer = NeonLexer(language=language, tokenizer=tokenizer)
    style = theme.pygmentsStyle_make()
    if fmt == "terminal":
        return highlight(text, lexer, Terminal256Formatter(style=style))
    if fmt == "html":
        return highlight(text, lexer, HtmlFormatter(style=style, noclasses=True, full=True))
    raise ValueError(f"Unknown render format '{fmt}' (expected one of {', '.join(RENDER_FORMATS)})")
