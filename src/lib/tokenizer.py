"""
Tokenizer: run a language's pattern table over a text snapshot

For every rule, in table order, every non-empty match anywhere in the text
becomes one HighlightSpan. Spans from different rules may overlap; whoever
paints them applies them in list order, so the later rule wins. This is
not a longest-match or mutually exclusive tokenization.

The tokenizer is pure: it reads an immutable string and returns a list.
It never touches a live document, which is what lets it run on a worker
thread without locks.
"""

import re
from typing import Iterator, List, Optional, Protocol, Sequence, Tuple

from ..config import appsettings, AppSettings
from ..models.snapshot import Snapshot, TokenizeResult
from ..models.tokens import HighlightSpan, PatternRule, TokenClass
from .log import LOG
from .patterns import rules_get, rule_compile


class Matcher(Protocol):
    """Finds (start, end) ranges of one rule in a text"""

    def ranges_find(self, text: str) -> Iterator[Tuple[int, int]]:
        ...


class RegexMatcher:
    """
    Matcher backed by a compiled `re` pattern

    Example:
        >>> matcher = RegexMatcher(re.compile(r"\\d+"))
        >>> list(matcher.ranges_find("a1 b22"))
        [(1, 2), (4, 6)]
    """

    def __init__(self, compiled: "re.Pattern[str]") -> None:
        self.compiled = compiled

    def ranges_find(self, text: str) -> Iterator[Tuple[int, int]]:
        for match in self.compiled.finditer(text):
            start, end = match.span()
            if end > start:
                yield start, end


class Tokenizer:
    """
    Computes highlight spans for a snapshot

    Attributes:
        settings: Source of the size threshold (max_highlight_length)
    """

    def __init__(self, settings: Optional[AppSettings] = None) -> None:
        self.settings = settings or appsettings

    def matcher_make(self, rule: PatternRule) -> Optional[Matcher]:
        """
        Build the matcher for one rule.

        Returns:
            A Matcher, or None when the rule's pattern does not compile
        """
        compiled = rule_compile(rule)
        if compiled is None:
            return None
        return RegexMatcher(compiled)

    def spans_compute(self, text: str, rules: Sequence[PatternRule]) -> List[HighlightSpan]:
        """
        Match every rule over the whole text.

        Args:
            text: Snapshot text
            rules: Ordered rules

        Returns:
            Spans in rule order, then in match order within a rule. Empty
            text gives an empty list.
        """
        return self.rules_run(text, rules)[0]

    def rules_run(self, text: str, rules: Sequence[PatternRule]) -> Tuple[List[HighlightSpan], int]:
        """
        Match every rule, counting the ones that had to be skipped.

        A rule whose pattern is malformed, or whose matching raises, is
        skipped on its own; the other rules still produce spans.

        Returns:
            (spans, skipped rule count)
        """
        spans: List[HighlightSpan] = []
        skipped = 0
        if not text:
            return spans, skipped

        for rule in rules:
            matcher = self.matcher_make(rule)
            if matcher is None:
                skipped += 1
                continue
            try:
                found = [HighlightSpan(start, end, rule.token) for start, end in matcher.ranges_find(text)]
            except (re.error, RecursionError, ValueError) as e:
                LOG(f"Rule {rule.pattern!r} failed while matching: {e}", level=1)
                skipped += 1
                continue
            spans.extend(found)

        LOG(f"Matched {len(rules) - skipped} rules, {len(spans)} spans", level=3)
        return spans, skipped

    def snapshot_tokenize(self, snapshot: Snapshot) -> TokenizeResult:
        """
        Tokenize a captured snapshot, honouring the size threshold.

        Args:
            snapshot: Immutable document capture

        Returns:
            TokenizeResult; bypassed=True with no spans when the text is
            longer than settings.max_highlight_length
        """
        if self.settings.length_exceedsLimit(snapshot.text):
            LOG(
                f"Skipping highlight: {len(snapshot.text)} characters exceeds "
                f"{self.settings.max_highlight_length}",
                level=2,
            )
            return TokenizeResult(spans=[], bypassed=True)

        spans, skipped = self.rules_run(snapshot.text, rules_get(snapshot.language))
        return TokenizeResult(spans=spans, bypassed=False, skipped_rules=skipped)


def spans_segment(
    text_length: int, spans: Sequence[HighlightSpan]
) -> List[Tuple[int, int, Optional[TokenClass]]]:
    """
    Flatten overlapping spans into consecutive runs, later spans winning.

    This is the visual result of painting `spans` in order over a base
    colour: every offset takes the token of the last span covering it, or
    None where no span applies.

    Args:
        text_length: Length of the text the spans belong to
        spans: Spans in application order

    Returns:
        List of (start, end, token-or-None) runs covering [0, text_length)

    Example:
        Spans [(0, 6, STRING), (2, 4, KEYWORD)] over length 8 give
        [(0, 2, STRING), (2, 4, KEYWORD), (4, 6, STRING), (6, 8, None)]
    """
    if text_length <= 0:
        return []

    owner: List[Optional[TokenClass]] = [None] * text_length
    for span in spans:
        start = max(0, span.start)
        end = min(text_length, span.end)
        if end > start:
            owner[start:end] = [span.token] * (end - start)

    runs: List[Tuple[int, int, Optional[TokenClass]]] = []
    run_start = 0
    for index in range(1, text_length + 1):
        if index == text_length or owner[index] is not owner[run_start]:
            runs.append((run_start, index, owner[run_start]))
            run_start = index
    return runs
