from datetime import date
from typing import Optional

from clubmanager.models.athlete import YouthCategory


# Minimum age reached in the reference year, oldest first
_CATEGORY_THRESHOLDS = [
    (18, YouthCategory.ADULT),
    (16, YouthCategory.A),
    (14, YouthCategory.B),
    (12, YouthCategory.C),
    (10, YouthCategory.D),
    (8, YouthCategory.E),
    (6, YouthCategory.F),
]

YOUTH_CATEGORY_LABELS = {
    YouthCategory.F: "F-Jugend",
    YouthCategory.E: "E-Jugend",
    YouthCategory.D: "D-Jugend",
    YouthCategory.C: "C-Jugend",
    YouthCategory.B: "B-Jugend",
    YouthCategory.A: "A-Jugend",
    YouthCategory.ADULT: "Turnerinnen",
}


def calculate_youth_category(
    birth_date: Optional[date],
    reference_year: Optional[int] = None,
) -> Optional[YouthCategory]:
    """
    Youth category by the age the athlete reaches in the reference year.

    Only the birth year matters, not the exact birthday. Athletes younger
    than six get no category.
    """
    if birth_date is None:
        return None

    year = reference_year or date.today().year
    age_this_year = year - birth_date.year

    for min_age, category in _CATEGORY_THRESHOLDS:
        if age_this_year >= min_age:
            return category
    return None
