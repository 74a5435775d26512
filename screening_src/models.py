"""Data models for preventive screening recommendations.

This module defines:
- Sex, SmokingStatus: Demographic enums on the patient profile
- Grade: USPSTF evidence grade attached to each recommendation
- RiskFactor: Known risk-factor tags (unknown tags are carried, never rejected)
- PatientProfile: The validated snapshot handed over by the profile reader
- DerivedProfile: Normalized profile plus derived smoking exposure
- Recommendation: One applicable screening, as handed to the renderer
"""

from dataclasses import dataclass, field
from enum import Enum


class Sex(str, Enum):
    """Sex recorded on the profile."""
    MALE = "male"
    FEMALE = "female"


class SmokingStatus(str, Enum):
    """Smoking history category."""
    NEVER = "never"
    CURRENT = "current"
    FORMER = "former"


class Grade(str, Enum):
    """USPSTF grade of the evidence behind a recommendation."""
    A = "A"  # Recommended, high certainty of substantial benefit
    B = "B"  # Recommended, moderate certainty
    C = "C"  # Selective, based on individual circumstances
    D = "D"  # Recommended against
    I = "I"  # Insufficient evidence


class RiskFactor(str, Enum):
    """Risk-factor tags the screening rules look for."""
    FAMILY_HISTORY_AAA = "family-history-aaa"
    FAMILY_HISTORY_CRC = "family-history-crc"
    OSTEOPOROSIS_RISK = "osteoporosis-risk"
    OVERWEIGHT = "overweight"
    HIV_RISK = "hiv-risk"
    HCV_RISK = "hcv-risk"
    STI_RISK = "sti-risk"
    TB_RISK = "tb-risk"


@dataclass(frozen=True)
class PatientProfile:
    """Demographic and risk-factor snapshot for one evaluation.

    `age` is None when the reader could not obtain a number; such a
    profile fails every age-gated rule. `pregnant` is not cross-checked
    against `sex`.
    """
    age: int | None
    sex: Sex
    pregnant: bool = False
    smoking_status: SmokingStatus = SmokingStatus.NEVER
    cigarettes_per_day: float = 0
    years_smoked: float = 0
    years_since_quit: float = 0
    conditions: frozenset[str] = field(default_factory=frozenset)

    def has_condition(self, tag: RiskFactor | str) -> bool:
        """Check whether a risk-factor tag is present on the profile."""
        value = tag.value if isinstance(tag, RiskFactor) else tag
        return value in self.conditions

    def to_dict(self) -> dict:
        return {
            "age": self.age,
            "sex": Sex(self.sex).value,
            "pregnant": self.pregnant,
            "smoking_status": SmokingStatus(self.smoking_status).value,
            "cigarettes_per_day": self.cigarettes_per_day,
            "years_smoked": self.years_smoked,
            "years_since_quit": self.years_since_quit,
            "conditions": sorted(self.conditions),
        }


@dataclass(frozen=True)
class DerivedProfile:
    """Profile with normalized numbers and derived smoking exposure.

    Built once per evaluation by `derive()`; every screening rule reads
    from this rather than from the raw PatientProfile.
    """
    age: int | None
    sex: Sex
    pregnant: bool
    smoking_status: SmokingStatus
    cigarettes_per_day: float
    years_smoked: float
    years_since_quit: float
    conditions: frozenset[str]
    pack_years: float

    @property
    def is_female(self) -> bool:
        return self.sex == Sex.FEMALE

    @property
    def is_male(self) -> bool:
        return self.sex == Sex.MALE

    @property
    def is_current_smoker(self) -> bool:
        return self.smoking_status == SmokingStatus.CURRENT

    @property
    def is_former_smoker(self) -> bool:
        return self.smoking_status == SmokingStatus.FORMER

    @property
    def has_ever_smoked(self) -> bool:
        """Current or former smoker."""
        return self.smoking_status != SmokingStatus.NEVER

    def has_condition(self, tag: RiskFactor | str) -> bool:
        """Check whether a risk-factor tag is present on the profile."""
        value = tag.value if isinstance(tag, RiskFactor) else tag
        return value in self.conditions


@dataclass(frozen=True)
class Recommendation:
    """A single applicable screening recommendation.

    `interval` is an empty string when no interval applies (e.g. grade I
    or grade D entries).
    """
    name: str
    test: str
    interval: str
    grade: Grade
    notes: str

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "test": self.test,
            "interval": self.interval,
            "grade": self.grade.value,
            "notes": self.notes,
        }
