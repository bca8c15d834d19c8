"""Small text helpers shared by the matchers."""

import re
import unicodedata

_TOKEN_RE = re.compile(r"[a-z0-9']+")
_SPACE_RE = re.compile(r"\s+")


def clean(text: str | None) -> str:
    """NFKC-fold, case-fold, trim and collapse whitespace; hyphens become spaces."""
    if not text:
        return ""
    folded = unicodedata.normalize("NFKC", unicodedata.normalize("NFKC", text).casefold())
    return _SPACE_RE.sub(" ", folded.replace("-", " ")).strip()


def tokenize(text: str) -> list[str]:
    return _TOKEN_RE.findall(text.lower())


def title_case(text: str) -> str:
    """Capitalize each whitespace-separated word."""
    return " ".join(word[:1].upper() + word[1:].lower() for word in text.split(" ") if word)


def levenshtein(a: str, b: str) -> int:
    """Edit distance between two strings."""
    if len(a) < len(b):
        a, b = b, a
    if not b:
        return len(a)
    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a):
        current = [i + 1]
        for j, cb in enumerate(b):
            current.append(min(previous[j + 1] + 1, current[j] + 1, previous[j] + (ca != cb)))
        previous = current
    return previous[-1]


def token_matches(token: str, candidates: set[str], fuzzy_min_len: int = 4) -> bool:
    """Whether ``token`` equals a candidate or is one edit away.

    Fuzzy matching only applies to tokens of at least ``fuzzy_min_len``
    characters.
    """
    if token in candidates:
        return True
    if len(token) < fuzzy_min_len:
        return False
    return any(
        abs(len(token) - len(other)) <= 1 and levenshtein(token, other) <= 1
        for other in candidates
        if len(other) >= fuzzy_min_len
    )
