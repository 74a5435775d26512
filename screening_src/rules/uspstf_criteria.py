"""USPSTF screening criteria reference data and derived metrics.

This module contains the age bounds and thresholds used by the screening
rules, the numeric normalization applied to profile inputs, and the
pack-year calculation. These are simplified summaries of the published
recommendations and should be reviewed when USPSTF updates a topic.

Reference: U.S. Preventive Services Task Force, A and B Recommendations
https://www.uspreventiveservicestaskforce.org/uspstf/recommendation-topics
"""

import logging
import math

from ..models import DerivedProfile, PatientProfile, Sex, SmokingStatus

logger = logging.getLogger(__name__)

# =============================================================================
# Version Tracking
# =============================================================================

USPSTF_GUIDELINE_YEAR = "2025"
LAST_UPDATED = "2025-06-01"


# =============================================================================
# Smoking Exposure
# =============================================================================

# One pack = 20 cigarettes
CIGARETTES_PER_PACK = 20

# Lung cancer: >=20 pack-years, and former smokers quit within 15 years
LUNG_MIN_PACK_YEARS = 20
LUNG_MAX_YEARS_SINCE_QUIT = 15


# =============================================================================
# Age Bounds (inclusive unless noted)
# =============================================================================

AAA_AGE_RANGE = (65, 75)

BREAST_AGE_RANGE = (40, 74)

CERVICAL_CYTOLOGY_AGE_RANGE = (21, 29)
CERVICAL_HPV_AGE_RANGE = (30, 65)
CERVICAL_STOP_AFTER_AGE = 65  # exclusive: >65

# Family history: [40, 45) - stops where general screening starts
CRC_FAMILY_HISTORY_START_AGE = 40
CRC_GENERAL_AGE_RANGE = (45, 75)
CRC_GRADE_A_MIN_AGE = 50
CRC_SELECTIVE_AGE_RANGE = (76, 85)  # ages are whole years: (75, 85]

LUNG_AGE_RANGE = (50, 80)

OSTEOPOROSIS_MIN_AGE = 65

ADULT_MIN_AGE = 18
HYPERTENSION_ANNUAL_MIN_AGE = 40

DIABETES_AGE_RANGE = (35, 70)

HIV_AGE_RANGE = (15, 65)
HCV_AGE_RANGE = (18, 79)

CHLAMYDIA_AGE_RANGE = (15, 24)


# =============================================================================
# Normalization
# =============================================================================

def normalize_non_negative(value) -> float:
    """Coerce a smoking input to a finite, non-negative number.

    None, booleans, strings, NaN, infinities and negatives all become 0.

    Args:
        value: Raw value from the profile

    Returns:
        The value as a float, or 0.0 if it is not usable
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0.0
    number = float(value)
    if not math.isfinite(number) or number < 0:
        return 0.0
    return number


def normalize_age(value) -> int | None:
    """Coerce an age to a non-negative int, or None when unknown.

    None fails every age comparison in this module, which reproduces
    the behavior of a not-a-number age in the source form.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        value = int(value)
    if value < 0:
        return None
    return value


def calculate_pack_years(cigarettes_per_day, years_smoked) -> float:
    """Calculate smoking exposure in pack-years.

    pack-years = (cigarettes per day / 20) * years smoked

    No rounding and no upper bound; 0 when either input is 0 or unusable.
    """
    cigarettes = normalize_non_negative(cigarettes_per_day)
    years = normalize_non_negative(years_smoked)
    return (cigarettes / CIGARETTES_PER_PACK) * years


def derive(profile: PatientProfile) -> DerivedProfile:
    """Build the normalized profile every rule is evaluated against.

    Never raises for a profile built by the profile reader. Categorical
    fields and conditions pass through unchanged.
    """
    age = normalize_age(profile.age)
    if age is None and profile.age is not None:
        logger.debug(f"Age {profile.age!r} is not usable; age-based rules will not apply")

    cigarettes_per_day = normalize_non_negative(profile.cigarettes_per_day)
    years_smoked = normalize_non_negative(profile.years_smoked)

    return DerivedProfile(
        age=age,
        sex=Sex(profile.sex),
        pregnant=bool(profile.pregnant),
        smoking_status=SmokingStatus(profile.smoking_status),
        cigarettes_per_day=cigarettes_per_day,
        years_smoked=years_smoked,
        years_since_quit=normalize_non_negative(profile.years_since_quit),
        conditions=frozenset(profile.conditions),
        pack_years=calculate_pack_years(cigarettes_per_day, years_smoked),
    )


# =============================================================================
# Age Helpers
# =============================================================================

def age_in_range(age: int | None, age_range: tuple[int, int]) -> bool:
    """Check if age falls within an inclusive (low, high) range.

    Args:
        age: Normalized age, or None if unknown
        age_range: (low, high), both inclusive

    Returns:
        True if age is known and low <= age <= high
    """
    if age is None:
        return False
    low, high = age_range
    return low <= age <= high


def age_at_least(age: int | None, minimum: int) -> bool:
    """Check age >= minimum; unknown age never qualifies."""
    return age is not None and age >= minimum


def age_below(age: int | None, limit: int) -> bool:
    """Check age < limit; unknown age never qualifies."""
    return age is not None and age < limit


def age_above(age: int | None, limit: int) -> bool:
    """Check age > limit; unknown age never qualifies."""
    return age is not None and age > limit


# =============================================================================
# Smoking Helpers
# =============================================================================

def meets_lung_cancer_smoking_history(profile: DerivedProfile) -> bool:
    """Check the lung cancer smoking criteria (age not included).

    Current smokers need >=20 pack-years. Former smokers need >=20
    pack-years and to have quit no more than 15 years ago.
    """
    if profile.pack_years < LUNG_MIN_PACK_YEARS:
        return False
    if profile.is_current_smoker:
        return True
    if profile.is_former_smoker:
        return profile.years_since_quit <= LUNG_MAX_YEARS_SINCE_QUIT
    return False


def has_aaa_smoking_history(profile: DerivedProfile) -> bool:
    """Smoking history that qualifies men for grade B AAA screening.

    A former smoker with no recorded pack-years does not count.
    """
    if profile.is_current_smoker:
        return True
    return profile.is_former_smoker and profile.pack_years > 0
