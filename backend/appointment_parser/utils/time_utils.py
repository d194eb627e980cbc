"""
Time utility functions for turning free-form time phrases into 24-hour format.

This module provides a consistent interface for time handling throughout the application:
- Phrase detection: "3pm", "3:30 pm", "15:00", "at 5", "1530"
- Internal storage: 24-hour format (HH:MM)

OCR output frequently garbles the am/pm marker ("3 p n", "3 o m"), so phrase
detection repairs those confusions before matching.
"""

import re
from typing import Optional, List, Tuple


# Applied in order to a local copy of the text before matching
AMPM_OCR_FIXES: List[Tuple[re.Pattern, str]] = [
    (re.compile(r'(?<=\d)\s*[pq]\s*n\b'), 'pm'),
    (re.compile(r'(?<=\d)\s*[og]\s*m\b'), 'pm'),
    (re.compile(r'(?<=\d)\s*p\s*m\b'), 'pm'),
    (re.compile(r'(?<=\d)\s*a\s*m\b'), 'am'),
]

TIME_PHRASE_PATTERNS = [
    re.compile(r'\b(\d{1,2})(?:[:.](\d{2}))?\s*(am|pm)\b'),  # 3pm, 3:30 pm
    re.compile(r'\b(\d{1,2})[:.](\d{2})\b'),  # 15:00, 9.45
    re.compile(r'\b(?:at|around|by)\s+(\d{1,2})\b'),  # at 5
    re.compile(r'\b(\d{1,2})(\d{2})?\b(?!\s*days?\b)'),  # 4, 1530; never "3 days"
]

TIME_24HR_PATTERN = re.compile(r'^(\d{1,2})(?:[:.]?(\d{2}))?(am|pm)?$')


class TimeFormat:
    """
    Utility class for time phrase detection and 24-hour conversion.
    Conversion never rejects a recognisable phrase: out-of-range values are clamped.
    """

    @staticmethod
    def fix_ampm_ocr(text: str) -> str:
        """Repair am/pm markers split or misread by OCR ("3 p n" -> "3pm")."""
        fixed = text.lower()
        for pattern, replacement in AMPM_OCR_FIXES:
            fixed = pattern.sub(replacement, fixed)
        return re.sub(r'\s+', ' ', fixed)

    @staticmethod
    def find_time_phrase(text: str) -> Optional[str]:
        """
        Find the first time phrase in a message.

        Patterns are tried in priority order: an explicit am/pm marker, then
        hour:minute, then a bare hour introduced by "at", "around" or "by", then
        any bare 1-4 digit number that does not count days.

        Args:
            text: Cleaned (lowercase) message text

        Returns:
            Compact phrase "h[:mm][am|pm]" (e.g. "3pm", "3:30pm", "15:00", "5", "15:30") or None

        Example:
            "see dentist at 3 p n" -> "3pm"
        """
        if not text:
            return None

        cleaned = TimeFormat.fix_ampm_ocr(text)

        for pattern in TIME_PHRASE_PATTERNS:
            match = pattern.search(cleaned)
            if not match:
                continue

            groups = match.groups()
            hour = groups[0]
            minute = groups[1] if len(groups) > 1 else None
            am_pm = groups[2] if len(groups) > 2 else None

            phrase = hour
            if minute:
                phrase += f":{minute}"
            if am_pm:
                phrase += am_pm
            return phrase

        return None

    @staticmethod
    def parse_to_24hr(time_str: str) -> Optional[str]:
        """
        Parse a time phrase to 24-hour format (HH:MM).

        Handles:
        - "3pm" -> "15:00"
        - "3:30 pm" -> "15:30"
        - "12am" -> "00:00", "12pm" -> "12:00"
        - "15:00" -> "15:00"
        - "25" -> "23:00" (clamped)

        Args:
            time_str: Time phrase, typically from find_time_phrase()

        Returns:
            24-hour format string (HH:MM) or None if the phrase is not a time
        """
        if not time_str:
            return None

        compact = re.sub(r'\s+', '', str(time_str).lower())

        match = TIME_24HR_PATTERN.match(compact)
        if not match:
            return None

        hour = int(match.group(1))
        minute = int(match.group(2)) if match.group(2) else 0
        am_pm = match.group(3)

        if am_pm == 'pm' and hour < 12:
            hour += 12
        elif am_pm == 'am' and hour == 12:
            hour = 0

        hour = max(0, min(23, hour))
        minute = max(0, min(59, minute))

        return f"{hour:02d}:{minute:02d}"

    @staticmethod
    def extract_from_message(message: str) -> Optional[str]:
        """Find the first time phrase in a message and return it as HH:MM."""
        phrase = TimeFormat.find_time_phrase(message)
        if phrase is None:
            return None
        return TimeFormat.parse_to_24hr(phrase)
