"""
Ordered pattern cascades.

An extractor is an ordered list of matchers. Each matcher looks at the
normalized text and either returns a value or None; the first value wins.
"""

import re
from typing import Callable, Iterable, List, Optional, Pattern, Sequence, Tuple, Union

Matcher = Callable[[str], Optional[str]]


def first_match_indexed(text: str, matchers: Sequence[Matcher]) -> Tuple[Optional[str], Optional[int]]:
    """
    Run matchers in order and return the first non-empty result.

    Args:
        text: Normalized text to search in
        matchers: Matchers to try, highest priority first

    Returns:
        Tuple of the first successful value and the index of the matcher
        that produced it, or (None, None)
    """
    for index, matcher in enumerate(matchers):
        value = matcher(text)
        if value:
            return value, index
    return None, None


def pattern_matcher(pattern: Union[str, Pattern], flags: int = 0, group: int = 1,
                    transform: Optional[Callable[[re.Match], Optional[str]]] = None,
                    accept: Optional[Callable[[str], bool]] = None) -> Matcher:
    """
    Build a matcher from a regular expression.

    Occurrences are tried left to right. An occurrence rejected by ``accept``
    (or turned into None by ``transform``) does not stop the search; the next
    occurrence of the same pattern is tried.

    Args:
        pattern: Regular expression or compiled pattern
        flags: Regex flags used when compiling a string pattern
        group: Capture group returned when no transform is given
        transform: Optional function building the value from the match
        accept: Optional predicate the value must satisfy

    Returns:
        Matcher function
    """
    compiled = re.compile(pattern, flags) if isinstance(pattern, str) else pattern

    def matcher(text: str) -> Optional[str]:
        for match in compiled.finditer(text):
            if transform is not None:
                value = transform(match)
            else:
                value = match.group(group)
            if value is None:
                continue
            value = value.strip()
            if not value:
                continue
            if accept is not None and not accept(value):
                continue
            return value
        return None

    return matcher


def boundary_lookahead(boundaries: Iterable[str], stop_patterns: Iterable[str] = ()) -> str:
    """
    Build a lookahead that stops at any boundary word, stop pattern or end of text.

    Boundary words are escaped and word-bounded; stop patterns are raw regex.
    """
    alternatives: List[str] = [r'\b' + re.escape(word) + r'\b' for word in boundaries]
    alternatives.extend(stop_patterns)
    alternatives.append(r'$')
    return r'(?=\s*(?:' + '|'.join(alternatives) + r'))'


def capture_until_boundary(text: str, label: str, boundaries: Iterable[str],
                           stop_patterns: Iterable[str] = ()) -> Optional[str]:
    """
    Capture the text following a label up to the next known boundary.

    Args:
        text: Normalized text
        label: Regular expression for the label (e.g. ``Address``)
        boundaries: Label words that end the captured block
        stop_patterns: Extra regular expressions that end the block

    Returns:
        Captured text, or None when the label is absent or nothing follows it
    """
    pattern = re.compile(
        r'\b(?:' + label + r')\s*[:\-]?\s*(.*?)' + boundary_lookahead(boundaries, stop_patterns),
        re.IGNORECASE
    )
    match = pattern.search(text)
    if not match:
        return None
    captured = match.group(1).strip()
    return captured or None


def boundary_matcher(label: str, boundaries: Iterable[str],
                     stop_patterns: Iterable[str] = ()) -> Matcher:
    """Matcher form of capture_until_boundary."""
    boundaries = tuple(boundaries)
    stop_patterns = tuple(stop_patterns)

    def matcher(text: str) -> Optional[str]:
        return capture_until_boundary(text, label, boundaries, stop_patterns)

    return matcher
