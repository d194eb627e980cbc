from typing import Iterable, Tuple, Iterator

from ..utils.config import settings
from ..utils.logger import logger


class DepartmentVocabulary:
    """
    Controlled vocabulary of canonical department names.

    Names are lowercased and de-duplicated, then ordered longest-first (stable
    for equal lengths) so that exact search tries "cardiologist" before a short
    entry such as "ent". The order is fixed at construction and never re-sorted.
    """

    def __init__(self, names: Iterable[str]):
        cleaned = []
        for name in names:
            canonical = " ".join((name or "").lower().split())
            if canonical and canonical not in cleaned:
                cleaned.append(canonical)

        self._names: Tuple[str, ...] = tuple(sorted(cleaned, key=len, reverse=True))

    @property
    def names(self) -> Tuple[str, ...]:
        return self._names

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __len__(self) -> int:
        return len(self._names)


department_vocabulary = DepartmentVocabulary(settings.departments)
logger.info(f"Loaded {len(department_vocabulary)} departments: {', '.join(department_vocabulary)}")
