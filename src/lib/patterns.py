"""
Pattern table: per-language ordered highlighting rules

Each language owns an ordered list of PatternRule(pattern, token). Rules are
matched independently over the whole text; when two matches overlap, the
rule that comes later in the list wins. Broad rules (keywords, numbers,
operators) therefore come first and rules that must dominate (strings,
comments, doc marks inside comments) come last.

Patterns use the Python `re` dialect and are compiled with re.MULTILINE, so
^ and $ anchor at line boundaries.

Example:
    >>> rules = rules_get("python")
    >>> rules[0].token
    <TokenClass.KEYWORD: 'keyword'>
    >>> patterns_get("cobol", theme)
    []
"""

import re
from functools import lru_cache
from typing import Dict, List, Optional, Pattern, Tuple, Union

from ..models.language import Language, language_resolve
from ..models.tokens import PatternRule, TokenClass
from .log import LOG
from .theme import Theme


K = TokenClass

NUMBER = r'\b([0-9]+(\.[0-9]+)?)\b'
C_COMMENT = r'//.*|/\*([^*]|(\*+[^*/]))*\*+/'


def _rules(*pairs: Tuple[str, TokenClass]) -> List[PatternRule]:
    return [PatternRule(pattern, token) for pattern, token in pairs]


SWIFT_RULES = _rules(
    # Keywords (extended to include `import`)
    (r'\b(func|struct|class|enum|protocol|extension|if|else|for|while|switch|case|default|'
     r'guard|defer|throw|try|catch|return|init|deinit|import)\b', K.KEYWORD),
    # Preprocessor statements
    (r'^#(if|elseif|else|endif|warning|error|available)\b.*$', K.KEYWORD),
    (r'\b(var|let)\b', K.VARIABLE),
    (r'\b(String|Int|Double|Bool)\b', K.TYPE),
    # Attributes like @available, @MainActor
    (r'@\w+', K.ATTRIBUTE),
    (r'\bbody\b', K.PROPERTY),
    # Regex literals and their components
    (r'[|*+?]', K.META),
    (r'\[[^\]\n]*\]', K.PROPERTY),
    (r'\(\?<([A-Za-z_][A-Za-z0-9_]*)>', K.DEFINITION),
    (r'/[^/*\s][^/\n]*/', K.BUILTIN),
    (NUMBER, K.NUMBER),
    # URLs
    (r"https?://[A-Za-z0-9._~:/?#@!$&'()*+,;=%-]+", K.ATOM),
    (r"file://[A-Za-z0-9._~:/?#@!$&'()*+,;=%-]+", K.ATOM),
    # Strings and characters
    (r'"[^"\n]*"', K.STRING),
    (r"'(?:[^'\\\n]|\\.)*'", K.STRING),
    # Comments (single and multi-line) and documentation blocks
    (r'//.*', K.COMMENT),
    (r'/\*([^*]|(\*+[^*/]))*\*+/', K.COMMENT),
    (r'^[ \t]*(///).*$', K.COMMENT),
    (r'/\*\*([\s\S]*?)\*+/', K.COMMENT),
    # Documentation keywords and marks inside comments
    (r'-\s*(Parameter|Parameters|Returns|Throws|Note|Warning|See\salso)\s*:', K.META),
    (r'//\s*(MARK|TODO|FIXME)\s*:.*$', K.META),
)

PYTHON_RULES = _rules(
    (r'\b(def|class|if|elif|else|for|while|try|except|finally|with|as|import|from|return|'
     r'yield|lambda|pass|break|continue|raise|in|is|not|and|or|global|nonlocal|async|await|'
     r'del|assert|match|case)\b', K.KEYWORD),
    (r'\b(int|str|float|bool|list|dict|set|tuple|bytes|object)\b', K.TYPE),
    (r'\b(print|len|range|open|enumerate|zip|map|filter|sorted|isinstance|super|type|'
     r'getattr|setattr|hasattr|min|max|sum|any|all|iter|next|repr)\b', K.BUILTIN),
    (r'\b(True|False|None)\b', K.ATOM),
    (r'\b(self|cls)\b', K.VARIABLE),
    (r'(?<=\bdef )[A-Za-z_]\w*', K.DEFINITION),
    (r'(?<=\bclass )[A-Za-z_]\w*', K.DEFINITION),
    (r'^[ \t]*@[\w.]+', K.ATTRIBUTE),
    (r'\b__\w+__\b', K.META),
    (NUMBER, K.NUMBER),
    (r'"""[\s\S]*?"""|\'\'\'[\s\S]*?\'\'\'', K.STRING),
    (r'"[^"\n]*"|\'[^\'\n]*\'', K.STRING),
    (r'#.*', K.COMMENT),
)

JAVASCRIPT_RULES = _rules(
    (r'\b(function|var|let|const|if|else|for|while|do|try|catch|finally|return|new|class|'
     r'extends|import|export|from|default|switch|case|break|continue|throw|typeof|'
     r'instanceof|async|await|yield|of|in|delete)\b', K.KEYWORD),
    (r'\b(Number|String|Boolean|Object|Array|Map|Set|Promise|Symbol|Date|RegExp|Error)\b', K.TYPE),
    (r'\b(console|window|document|JSON|Math)\b', K.BUILTIN),
    (r'\b(true|false|null|undefined|NaN|Infinity)\b', K.ATOM),
    (r'\b(this|super)\b', K.VARIABLE),
    (r'(?<=\bfunction )[A-Za-z_$][\w$]*', K.DEFINITION),
    (r'(?<=\.)[A-Za-z_$][\w$]*', K.PROPERTY),
    (NUMBER, K.NUMBER),
    (r'"[^"\n]*"|\'[^\'\n]*\'|`[^`]*`', K.STRING),
    (C_COMMENT, K.COMMENT),
)

HTML_RULES = _rules(
    (r'<[^>]+>', K.TAG),
    (r'(?<=\s)[A-Za-z_:][\w:.-]*(?==)', K.ATTRIBUTE),
    (r'(?<==)"[^"]*"|(?<==)\'[^\']*\'', K.STRING),
    (r'&[A-Za-z0-9#]+;', K.ATOM),
    (r'<!DOCTYPE[^>]*>', K.META),
    (r'<!--[\s\S]*?-->', K.COMMENT),
)

CSS_RULES = _rules(
    (r'\b([a-zA-Z-]+\s*:\s*[^;{}]+;)', K.PROPERTY),
    (r'@[\w-]+', K.META),
    (r'#[0-9a-fA-F]{3,8}\b', K.ATOM),
    (r'\b[0-9]+(\.[0-9]+)?(px|em|rem|%|vh|vw|pt|s|ms|deg)?\b', K.NUMBER),
    (r'"[^"\n]*"|\'[^\'\n]*\'', K.STRING),
    (r'/\*[\s\S]*?\*/', K.COMMENT),
)

C_RULES = _rules(
    (r'\b(int|float|double|char|void|if|else|for|while|do|switch|case|return|break|'
     r'continue|struct|union|enum|typedef|static|const|extern|sizeof|goto|default)\b', K.KEYWORD),
    (r'\b(int|float|double|char|long|short|unsigned|signed|size_t|bool)\b', K.TYPE),
    (r'\b(NULL|true|false)\b', K.ATOM),
    (NUMBER, K.NUMBER),
    (r'^[ \t]*#[ \t]*\w+', K.META),
    (r'"[^"\n]*"', K.STRING),
    (r"'(?:[^'\\\n]|\\.)'", K.STRING),
    (C_COMMENT, K.COMMENT),
)

CPP_RULES = _rules(
    (r'\b(class|namespace|template|typename|public|private|protected|virtual|override|'
     r'new|delete|using|try|catch|throw|auto|constexpr|nullptr|this|operator|friend|'
     r'explicit|inline|noexcept)\b', K.KEYWORD),
    (r'\bstd::\w+', K.BUILTIN),
) + C_RULES

JSON_RULES = _rules(
    (NUMBER, K.NUMBER),
    (r'\b(true|false|null)\b', K.KEYWORD),
    (r'"[^"\n]*"', K.STRING),
    (r'"[^"\n]+"\s*:', K.PROPERTY),
)

MARKDOWN_RULES = _rules(
    (r'^#{1,6}[ \t]*[^#\n]+', K.KEYWORD),
    (r'^[ \t]*(?:[-*+]|\d+\.)(?=[ \t])', K.META),
    (r'^>.*$', K.COMMENT),
    (r'\*\*[^*\n]+\*\*', K.DEFINITION),
    (r'_[^_\n]+_', K.DEFINITION),
    (r'\[[^\]\n]+\]\([^)\n]+\)', K.ATOM),
    (r'`[^`\n]+`', K.STRING),
    (r'^```[\s\S]*?^```', K.STRING),
)

_SHELL_KEYWORDS = (
    r'\b(if|then|else|elif|fi|for|while|until|do|done|case|esac|in|function|select|'
    r'return|exit|local|export|readonly)\b'
)
_SHELL_BUILTINS = (
    r'\b(echo|printf|read|cd|pwd|source|alias|unalias|unset|set|shift|test|eval|exec|'
    r'trap|declare|typeset|let|wait|kill|getopts)\b'
)


def _shell_rules(extra: Tuple[Tuple[str, TokenClass], ...] = ()) -> List[PatternRule]:
    return _rules(
        (_SHELL_KEYWORDS, K.KEYWORD),
        (_SHELL_BUILTINS, K.BUILTIN),
        *extra,
        (r'^[ \t]*(?:function[ \t]+)?[A-Za-z_][\w-]*[ \t]*\(\)', K.DEFINITION),
        (r'\$\{[^}\n]*\}|\$[A-Za-z_]\w*|\$[0-9#?@*$!-]', K.VARIABLE),
        (r'(?<![\w-])--?[A-Za-z][\w-]*', K.ATTRIBUTE),
        (r'\b[0-9]+\b', K.NUMBER),
        (r'"(?:[^"\\]|\\.)*"|\'[^\']*\'', K.STRING),
        (r'(?<![\w$#{])#.*', K.COMMENT),
        (r'\A#!.*$', K.META),
    )


BASH_RULES = _shell_rules()

ZSH_RULES = _shell_rules((
    (r'\b(setopt|unsetopt|autoload|zmodload|bindkey|zstyle|compdef|emulate|zparseopts|'
     r'repeat|foreach|end)\b', K.BUILTIN),
    (r'\b(typeset|integer|float)\b', K.TYPE),
))


RULES: Dict[Language, List[PatternRule]] = {
    Language.SWIFT: SWIFT_RULES,
    Language.PYTHON: PYTHON_RULES,
    Language.JAVASCRIPT: JAVASCRIPT_RULES,
    Language.HTML: HTML_RULES,
    Language.CSS: CSS_RULES,
    Language.C: C_RULES,
    Language.CPP: CPP_RULES,
    Language.JSON: JSON_RULES,
    Language.MARKDOWN: MARKDOWN_RULES,
    Language.BASH: BASH_RULES,
    Language.ZSH: ZSH_RULES,
}


def languages_supported() -> List[Language]:
    """Languages that have a non-empty pattern table"""
    return list(RULES)


def rules_get(language: Union[Language, str, None]) -> List[PatternRule]:
    """
    Ordered rule list for a language.

    Args:
        language: Language or identifier string

    Returns:
        A new list of PatternRule; empty for unknown languages and plaintext
    """
    resolved = language_resolve(language)
    if resolved is None:
        return []
    return list(RULES.get(resolved, []))


def patterns_get(language: Union[Language, str, None], theme: Theme) -> List[Tuple[str, str]]:
    """
    Ordered (pattern, colour) pairs for a language under a theme.

    Args:
        language: Language or identifier string
        theme: Resolved theme supplying the colours

    Returns:
        List of (regex source, "#rrggbb"); empty for unknown languages

    Example:
        >>> pattern, color = patterns_get("json", theme)[1]
        >>> pattern, color
        ('\\b(true|false|null)\\b', '#fb00ba')
    """
    return [(rule.pattern, theme.color_for(rule.token)) for rule in rules_get(language)]


@lru_cache(maxsize=512)
def pattern_compile(pattern: str) -> Optional[Pattern[str]]:
    """
    Compile a rule pattern with multi-line anchoring.

    Args:
        pattern: Regex source

    Returns:
        Compiled pattern, or None when the pattern is malformed. The failure
        is logged; callers skip the rule and carry on.
    """
    try:
        return re.compile(pattern, re.MULTILINE)
    except re.error as e:
        LOG(f"Skipping malformed pattern {pattern!r}: {e}", level=1)
        return None


def rule_compile(rule: PatternRule) -> Optional[Pattern[str]]:
    """Compile a PatternRule (cached); None if its pattern is malformed"""
    return pattern_compile(rule.pattern)
