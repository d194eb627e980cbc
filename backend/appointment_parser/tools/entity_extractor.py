import re
from typing import Optional, Tuple, List

from .departments import DepartmentVocabulary, department_vocabulary
from .fuzzy_matcher import similarity, is_plausible_word
from ..schemas import ExtractedEntities
from ..utils.config import settings
from ..utils.logger import logger
from ..utils.time_utils import TimeFormat


WEEKDAY_NAMES = ['monday', 'tuesday', 'wednesday', 'thursday', 'friday', 'saturday', 'sunday']
WEEKDAY_ALTERNATION = "|".join(WEEKDAY_NAMES)

# First match wins
DATE_PHRASE_CASCADE = [
    re.compile(r'\bday after tomorrow\b'),
    re.compile(rf'\bnext\s+(?:{WEEKDAY_ALTERNATION})\b'),
    re.compile(r'\btomorrow\b'),
    re.compile(r'\btoday\b'),
    re.compile(rf'\b(?:{WEEKDAY_ALTERNATION})\b'),
    re.compile(r'\bin\s+\d{1,2}\s+days?\b'),
]

DATE_WORDS = ['today', 'tomorrow'] + WEEKDAY_NAMES

TOKEN_PATTERN = re.compile(r'[a-z0-9]+')


class EntityExtractor:
    """
    Finds department, date phrase and time phrase in normalized text.

    Extraction never raises: anything not found is left as None on the
    returned ExtractedEntities.
    """

    def __init__(
        self,
        vocabulary: DepartmentVocabulary = department_vocabulary,
        department_threshold: float = settings.department_fuzzy_threshold,
        date_threshold: float = settings.date_fuzzy_threshold
    ):
        self.vocabulary = vocabulary
        self.department_threshold = department_threshold
        self.date_threshold = date_threshold
        self._exact_patterns = [
            (name, re.compile(rf'\b{re.escape(name)}\b'))
            for name in vocabulary
        ]

    def extract(self, clean_text: str) -> ExtractedEntities:
        text = (clean_text or "").lower()

        department, department_confidence = self.find_department(text)
        date_phrase = self.find_date_phrase(text)
        time_phrase = self.find_time_phrase(text)

        return ExtractedEntities(
            department=department,
            department_confidence=department_confidence,
            date_phrase=date_phrase,
            time_phrase=time_phrase
        )

    # ----------------- department -----------------

    def find_department(self, text: str) -> Tuple[Optional[str], float]:
        if not text.strip():
            return None, 0.0

        tokens = TOKEN_PATTERN.findall(text)
        joined = " ".join(tokens)

        for name, pattern in self._exact_patterns:
            if pattern.search(joined):
                logger.info(f"Department exact match: '{name}'")
                return name, 1.0

        best_score = 0.0
        best_name = None
        best_window = None

        for window in self._token_windows(tokens, max_size=2):
            if not is_plausible_word(window):
                continue
            for name in self.vocabulary:
                score = similarity(window, name)
                if score > best_score:
                    best_score = score
                    best_name = name
                    best_window = window

        if best_name is not None and best_score >= self.department_threshold:
            logger.info(f"Department fuzzy match: '{best_window}' -> '{best_name}' ({best_score:.2f})")
            return best_name, best_score

        logger.info("No department found")
        return None, 0.0

    @staticmethod
    def _token_windows(tokens: List[str], max_size: int) -> List[str]:
        windows = []
        for size in range(1, max_size + 1):
            for start in range(0, len(tokens) - size + 1):
                windows.append(" ".join(tokens[start:start + size]))
        return windows

    # ----------------- date -----------------

    def find_date_phrase(self, text: str) -> Optional[str]:
        if not text.strip():
            return None

        for pattern in DATE_PHRASE_CASCADE:
            match = pattern.search(text)
            if match:
                return " ".join(match.group(0).split())

        best_score = 0.0
        best_word = None

        for token in TOKEN_PATTERN.findall(text):
            if not is_plausible_word(token):
                continue
            for word in DATE_WORDS:
                score = similarity(token, word)
                if score > best_score:
                    best_score = score
                    best_word = word

        if best_word is not None and best_score >= self.date_threshold:
            logger.info(f"Date phrase fuzzy match: '{best_word}' ({best_score:.2f})")
            return best_word

        return None

    # ----------------- time -----------------

    def find_time_phrase(self, text: str) -> Optional[str]:
        return TimeFormat.find_time_phrase(text)


entity_extractor = EntityExtractor()
