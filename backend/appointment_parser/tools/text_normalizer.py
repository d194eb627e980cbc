import re
from typing import Optional, List, Tuple


CONTROL_CHARS = re.compile(r'[\ufeff\x00-\x1f\x7f-\x9f]')

# Ordered. Punctuation goes first so later word-boundary rules never see a
# boundary that only appears on a second pass; the am/pm repairs rely on
# "3 p.m." having already become "3 p m".
OCR_CORRECTIONS: List[Tuple[re.Pattern, str]] = [
    (re.compile(r'[^a-z0-9:.\s]'), ' '),
    (re.compile(r'(?<!\d)\.|\.(?!\d)'), ' '),
    (re.compile(r'dent1st|dnntist'), 'dentist'),
    (re.compile(r'\btom+or+ow\b'), 'tomorrow'),
    (re.compile(r'\btmrw\b'), 'tomorrow'),
    (re.compile(r'\bnxt\b'), 'next'),
    (re.compile(r'\bmon\b'), 'monday'),
    (re.compile(r'\btues?\b'), 'tuesday'),
    (re.compile(r'\bwed\b'), 'wednesday'),
    (re.compile(r'\bthu(?:r|rs)?\b'), 'thursday'),
    (re.compile(r'\bfri\b'), 'friday'),
    (re.compile(r'(?<=\d)\s*[pq]\s*[nm]\b'), 'pm'),
    (re.compile(r'(?<=\d)\s*a\s*m\b'), 'am'),
    (re.compile(r'\bpn\b'), 'pm'),
]


class TextNormalizer:
    """Deterministic, idempotent cleanup of typed or OCR'd request text."""

    def __init__(self, corrections: Optional[List[Tuple[re.Pattern, str]]] = None):
        self.corrections = corrections if corrections is not None else OCR_CORRECTIONS

    def normalize(self, raw: Optional[str]) -> str:
        if raw is None:
            return ""

        text = CONTROL_CHARS.sub(' ', raw).lower()

        for pattern, replacement in self.corrections:
            text = pattern.sub(replacement, text)

        return re.sub(r'\s+', ' ', text).strip()


text_normalizer = TextNormalizer()
