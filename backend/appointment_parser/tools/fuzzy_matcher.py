import re


VOWELS = set("aeiou")
CONSONANT_RUN = re.compile(r'[b-df-hj-np-tv-z]{5,}')


def levenshtein(a: str, b: str) -> int:
    """
    Case-insensitive edit distance.

    Classic two-row dynamic programme; the rows are sized by the shorter
    string so memory stays O(min(len(a), len(b))).
    """
    a = (a or "").lower()
    b = (b or "").lower()

    if a == b:
        return 0
    if not a:
        return len(b)
    if not b:
        return len(a)

    if len(a) < len(b):
        a, b = b, a

    previous = list(range(len(b) + 1))
    current = [0] * (len(b) + 1)

    for i, char_a in enumerate(a, start=1):
        current[0] = i
        for j, char_b in enumerate(b, start=1):
            cost = 0 if char_a == char_b else 1
            current[j] = min(
                current[j - 1] + 1,
                previous[j] + 1,
                previous[j - 1] + cost
            )
        previous, current = current, previous

    return previous[len(b)]


def similarity(a: str, b: str) -> float:
    """Normalized similarity: 1.0 = identical, 0.0 = totally different."""
    a = (a or "").strip()
    b = (b or "").strip()

    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0

    return 1.0 - levenshtein(a, b) / longest


def is_plausible_word(token: str) -> bool:
    """
    Reject OCR noise before it reaches fuzzy search.

    Tokens shorter than 3 characters always pass. Longer tokens need at least
    one vowel and no run of 5+ consonant letters. A multi-word window is
    plausible only if every word in it is.
    """
    words = (token or "").lower().split()
    if len(words) > 1:
        return all(is_plausible_word(word) for word in words)

    word = words[0] if words else ""
    if len(word) < 3:
        return True

    if not any(char in VOWELS for char in word):
        return False

    if CONSONANT_RUN.search(word):
        return False

    return True
