"""
Language identifiers and file-extension detection

A document has exactly one active Language. Names are the lowercase
identifiers the editor stores per tab ("swift", "python", ...).
"""

from enum import Enum
from pathlib import Path
from typing import Dict, Optional, Union


class Language(Enum):
    """Languages known to the pattern table (plaintext has no rules)"""
    SWIFT = "swift"
    PYTHON = "python"
    JAVASCRIPT = "javascript"
    HTML = "html"
    CSS = "css"
    C = "c"
    CPP = "cpp"
    JSON = "json"
    MARKDOWN = "markdown"
    BASH = "bash"
    ZSH = "zsh"
    PLAINTEXT = "plaintext"


# Extension (without dot, lowercase) -> Language
EXTENSION_MAP: Dict[str, Language] = {
    "swift": Language.SWIFT,
    "py": Language.PYTHON,
    "pyw": Language.PYTHON,
    "pyi": Language.PYTHON,
    "js": Language.JAVASCRIPT,
    "mjs": Language.JAVASCRIPT,
    "cjs": Language.JAVASCRIPT,
    "html": Language.HTML,
    "htm": Language.HTML,
    "css": Language.CSS,
    "c": Language.C,
    "h": Language.C,
    "cpp": Language.CPP,
    "cc": Language.CPP,
    "cxx": Language.CPP,
    "hpp": Language.CPP,
    "json": Language.JSON,
    "md": Language.MARKDOWN,
    "markdown": Language.MARKDOWN,
    "sh": Language.BASH,
    "bash": Language.BASH,
    "zsh": Language.ZSH,
}

# Dotfiles whose name alone identifies the shell dialect
FILENAME_MAP: Dict[str, Language] = {
    ".bashrc": Language.BASH,
    ".bash_profile": Language.BASH,
    ".profile": Language.BASH,
    ".zshrc": Language.ZSH,
    ".zprofile": Language.ZSH,
    ".zshenv": Language.ZSH,
}


def language_resolve(language: Union["Language", str, None]) -> Optional[Language]:
    """
    Turn a Language or its string identifier into a Language.

    Args:
        language: Language member, identifier string (case-insensitive), or None

    Returns:
        The Language, or None if the identifier is unknown

    Example:
        >>> language_resolve("Python")
        <Language.PYTHON: 'python'>
        >>> language_resolve("cobol") is None
        True
    """
    if isinstance(language, Language):
        return language
    if not language:
        return None
    try:
        return Language(language.strip().lower())
    except ValueError:
        return None


def language_detect(path: Union[str, Path, None], default: Language = Language.PLAINTEXT) -> Language:
    """
    Pick a language from a file path.

    Args:
        path: File path (only the name is inspected)
        default: Returned when neither name nor extension is recognised

    Returns:
        Detected Language
    """
    if not path:
        return default
    name = Path(path).name.lower()
    if name in FILENAME_MAP:
        return FILENAME_MAP[name]
    suffix = Path(name).suffix.lstrip(".")
    return EXTENSION_MAP.get(suffix, default)
