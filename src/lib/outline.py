"""
Document outline (sidebar table of contents)

Scans a document line by line and keeps the lines that look like
declarations or headings for its language. Each entry records its 1-based
line number so the sidebar can call EditorSession.line_goto() on it.
"""

import re
from dataclasses import dataclass
from typing import Callable, Dict, List, Union

from ..models.language import Language, language_resolve


@dataclass(frozen=True)
class OutlineEntry:
    """
    One table-of-contents line

    Attributes:
        text: The declaration line, stripped of surrounding whitespace
        line: 1-based line number
    """
    text: str
    line: int

    @property
    def label(self) -> str:
        return f"{self.text} (Line {self.line})"


_C_RETURN_TYPES = ("void ", "int ", "float ", "double ", "char ")
_SHELL_FUNCTION = re.compile(r'^(?:function\s+[A-Za-z_][\w-]*|[A-Za-z_][\w-]*\s*\(\s*\))')


def _prefixed(*prefixes: str) -> Callable[[str], bool]:
    return lambda line: line.startswith(prefixes)


def _c_function(line: str) -> bool:
    return "(" in line and ";" not in line and (line.startswith(_C_RETURN_TYPES) or "{" in line)


def _heading(line: str) -> bool:
    return line.startswith("#") or line.startswith("<h")


OUTLINE_RULES: Dict[Language, Callable[[str], bool]] = {
    Language.SWIFT: _prefixed("func ", "struct ", "class ", "enum "),
    Language.PYTHON: _prefixed("def ", "class ", "async def "),
    Language.JAVASCRIPT: _prefixed("function ", "class ", "async function "),
    Language.C: _c_function,
    Language.CPP: _c_function,
    Language.HTML: _heading,
    Language.CSS: _heading,
    Language.JSON: _heading,
    Language.MARKDOWN: _heading,
    Language.BASH: lambda line: bool(_SHELL_FUNCTION.match(line)),
    Language.ZSH: lambda line: bool(_SHELL_FUNCTION.match(line)),
}


def outline_build(text: str, language: Union[Language, str, None]) -> List[OutlineEntry]:
    """
    Build the outline of a document.

    Args:
        text: Document text
        language: Language or identifier string

    Returns:
        Entries in document order; empty for empty text or languages
        without outline rules

    Example:
        >>> outline_build("import os\\n\\ndef main():\\n    pass\\n", "python")
        [OutlineEntry(text='def main():', line=3)]
    """
    resolved = language_resolve(language)
    accept = OUTLINE_RULES.get(resolved) if resolved is not None else None
    if accept is None or not text:
        return []

    entries: List[OutlineEntry] = []
    for index, raw in enumerate(text.split("\n")):
        stripped = raw.strip()
        if stripped and accept(stripped):
            entries.append(OutlineEntry(text=stripped, line=index + 1))
    return entries
