from __future__ import annotations

import re

# Only these six letters are folded; other accents are kept as letters.
_FOLD = str.maketrans({"ı": "i", "ğ": "g", "ü": "u", "ş": "s", "ö": "o", "ç": "c"})
_TOKEN_SPLIT = re.compile(r"[^a-z0-9]+", re.IGNORECASE)


def normalize(text: str) -> str:
    """Lowercase, fold Turkish letters, blank out punctuation, collapse spaces.

    >>> normalize("Şişe Dolabı!")
    'sise dolabi'
    """
    folded = text.lower().translate(_FOLD)
    kept = "".join(
        ch if ch.isalnum() or ch.isspace() or ch == "-" else " " for ch in folded
    )
    return " ".join(kept.split())


def tokenize(text: str) -> list[str]:
    """Split an already-normalized string into ASCII alphanumeric tokens."""
    return [t for t in _TOKEN_SPLIT.split(text) if t]


def edit_distance(a: str, b: str) -> int:
    """Levenshtein distance with unit insert, delete and substitute costs."""
    alen = len(a)
    blen = len(b)
    if alen == 0:
        return blen
    if blen == 0:
        return alen

    dp = [[0] * (blen + 1) for _ in range(alen + 1)]
    for i in range(alen + 1):
        dp[i][0] = i
    for j in range(blen + 1):
        dp[0][j] = j

    for i in range(1, alen + 1):
        for j in range(1, blen + 1):
            cost = 0 if a[i - 1] == b[j - 1] else 1
            dp[i][j] = min(
                dp[i - 1][j] + 1,
                dp[i][j - 1] + 1,
                dp[i - 1][j - 1] + cost,
            )
    return dp[alen][blen]
