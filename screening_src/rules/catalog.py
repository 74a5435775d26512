"""Catalog of preventive screening rules.

Each rule pairs an eligibility predicate with a producer that builds the
Recommendation, both pure functions of a DerivedProfile. A producer is only
called when its predicate is true, and may branch on the profile to choose
wording, grade or interval.

Rules are independent: the engine evaluates all of them, so two rules for
the same topic can both apply (family-history and general colorectal
screening are kept apart by their age bounds, not by the engine).

The order of SCREENING_RULES is the order recommendations are reported in.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Mapping

from ..models import DerivedProfile, Grade, Recommendation, RiskFactor
from .uspstf_criteria import (
    AAA_AGE_RANGE,
    ADULT_MIN_AGE,
    BREAST_AGE_RANGE,
    CERVICAL_CYTOLOGY_AGE_RANGE,
    CERVICAL_HPV_AGE_RANGE,
    CERVICAL_STOP_AFTER_AGE,
    CHLAMYDIA_AGE_RANGE,
    CRC_FAMILY_HISTORY_START_AGE,
    CRC_GENERAL_AGE_RANGE,
    CRC_GRADE_A_MIN_AGE,
    CRC_SELECTIVE_AGE_RANGE,
    DIABETES_AGE_RANGE,
    HCV_AGE_RANGE,
    HIV_AGE_RANGE,
    HYPERTENSION_ANNUAL_MIN_AGE,
    LUNG_AGE_RANGE,
    OSTEOPOROSIS_MIN_AGE,
    age_above,
    age_at_least,
    age_below,
    age_in_range,
    has_aaa_smoking_history,
    meets_lung_cancer_smoking_history,
)


@dataclass(frozen=True)
class ScreeningRule:
    """A single catalog entry."""
    rule_id: str
    topic: str
    applies: Callable[[DerivedProfile], bool]
    recommend: Callable[[DerivedProfile], Recommendation]


# -----------------------------------------------------------------------------
# 1. Abdominal Aortic Aneurysm
# -----------------------------------------------------------------------------

def aaa_applies(profile: DerivedProfile) -> bool:
    """Men 65-75; women 65-75 who have smoked or have a family history."""
    if not age_in_range(profile.age, AAA_AGE_RANGE):
        return False
    if profile.is_male:
        return True
    return profile.is_female and (
        profile.has_ever_smoked
        or profile.has_condition(RiskFactor.FAMILY_HISTORY_AAA)
    )


def aaa_recommend(profile: DerivedProfile) -> Recommendation:
    if profile.is_male and has_aaa_smoking_history(profile):
        return Recommendation(
            name="Abdominal Aortic Aneurysm",
            test="One-time abdominal ultrasound",
            interval="once between ages 65-75",
            grade=Grade.B,
            notes=(
                "Men aged 65–75 with a history of smoking should have a one-time "
                "ultrasound to detect AAA."
            ),
        )
    if profile.is_male:
        return Recommendation(
            name="Abdominal Aortic Aneurysm",
            test="Consider abdominal ultrasound",
            interval="once between ages 65-75",
            grade=Grade.C,
            notes=(
                "Men aged 65–75 who have never smoked may discuss AAA screening "
                "with their clinician based on risk factors."
            ),
        )
    return Recommendation(
        name="Abdominal Aortic Aneurysm",
        test="Insufficient evidence for screening",
        interval="",
        grade=Grade.I,
        notes=(
            "For women aged 65–75 who have smoked or have a family history of AAA, "
            "evidence is insufficient to recommend screening."
        ),
    )


# -----------------------------------------------------------------------------
# 2. Breast Cancer
# -----------------------------------------------------------------------------

def breast_applies(profile: DerivedProfile) -> bool:
    return profile.is_female and age_in_range(profile.age, BREAST_AGE_RANGE)


def breast_recommend(profile: DerivedProfile) -> Recommendation:
    return Recommendation(
        name="Breast Cancer",
        test="Mammogram",
        interval="every 2 years",
        grade=Grade.B,
        notes=(
            "Women aged 40–74 should have mammography every 2 years. Begin at age 40; "
            "talk to your clinician about earlier screening if high risk."
        ),
    )


# -----------------------------------------------------------------------------
# 3. Cervical Cancer
# -----------------------------------------------------------------------------

def cervical_applies(profile: DerivedProfile) -> bool:
    """Non-pregnant women 21 and older.

    Pregnancy suppresses every branch, including the >65 "stop screening"
    entry.
    """
    if not profile.is_female or profile.pregnant:
        return False
    return (
        age_in_range(profile.age, CERVICAL_CYTOLOGY_AGE_RANGE)
        or age_in_range(profile.age, CERVICAL_HPV_AGE_RANGE)
        or age_above(profile.age, CERVICAL_STOP_AFTER_AGE)
    )


def cervical_recommend(profile: DerivedProfile) -> Recommendation:
    if age_in_range(profile.age, CERVICAL_CYTOLOGY_AGE_RANGE):
        return Recommendation(
            name="Cervical Cancer",
            test="Pap test (cytology)",
            interval="every 3 years",
            grade=Grade.A,
            notes=(
                "Women aged 21–29 should undergo cervical cytology (Pap smear) every "
                "3 years. HPV testing alone is not recommended in this age group."
            ),
        )
    if age_in_range(profile.age, CERVICAL_HPV_AGE_RANGE):
        return Recommendation(
            name="Cervical Cancer",
            test="hrHPV testing or Pap/HPV co-testing",
            interval="hrHPV every 5 years, Pap every 3 years, or co-testing every 5 years",
            grade=Grade.A,
            notes=(
                "Women aged 30–65 can choose high-risk HPV testing every 5 years, Pap "
                "smear every 3 years, or combined Pap/HPV every 5 years."
            ),
        )
    return Recommendation(
        name="Cervical Cancer",
        test="No routine screening",
        interval="",
        grade=Grade.D,
        notes=(
            "Women older than 65 with adequate prior negative screening and no "
            "high-risk factors do not need routine cervical cancer screening."
        ),
    )


# -----------------------------------------------------------------------------
# 4. Colorectal Cancer, family history
# -----------------------------------------------------------------------------

def colorectal_family_history_applies(profile: DerivedProfile) -> bool:
    """First-degree relative with CRC, age 40 up to (not including) 45."""
    return (
        profile.has_condition(RiskFactor.FAMILY_HISTORY_CRC)
        and age_at_least(profile.age, CRC_FAMILY_HISTORY_START_AGE)
        and age_below(profile.age, CRC_GENERAL_AGE_RANGE[0])
    )


def colorectal_family_history_recommend(profile: DerivedProfile) -> Recommendation:
    return Recommendation(
        name="Colorectal Cancer (family history)",
        test="Colonoscopy",
        interval="every 5 years",
        grade=Grade.B,
        notes=(
            "People with a first-degree relative with colorectal cancer should begin "
            "colonoscopy at age 40 or 10 years earlier than the youngest case in the "
            "family and repeat every 5 years."
        ),
    )


# -----------------------------------------------------------------------------
# 5. Colorectal Cancer, general population
# -----------------------------------------------------------------------------

def colorectal_applies(profile: DerivedProfile) -> bool:
    """Adults 45-75, or 76-85 for selective screening."""
    return (
        age_in_range(profile.age, CRC_GENERAL_AGE_RANGE)
        or age_in_range(profile.age, CRC_SELECTIVE_AGE_RANGE)
    )


def colorectal_recommend(profile: DerivedProfile) -> Recommendation:
    if age_in_range(profile.age, CRC_GENERAL_AGE_RANGE):
        grade = Grade.A if age_at_least(profile.age, CRC_GRADE_A_MIN_AGE) else Grade.B
        return Recommendation(
            name="Colorectal Cancer",
            test="Stool-based tests (annual FIT or fecal occult blood) or colonoscopy",
            interval="FIT annually, FIT-DNA every 3 years, colonoscopy every 10 years",
            grade=grade,
            notes=(
                "Adults aged 45–75 should be screened for colorectal cancer. Options "
                "include annual fecal immunochemical test (FIT), FIT-DNA every 3 years, "
                "or colonoscopy every 10 years."
            ),
        )
    return Recommendation(
        name="Colorectal Cancer",
        test="Discuss screening",
        interval="",
        grade=Grade.C,
        notes=(
            "Adults aged 76–85 may choose to continue colorectal cancer screening "
            "based on overall health and prior screening history."
        ),
    )


# -----------------------------------------------------------------------------
# 6. Lung Cancer
# -----------------------------------------------------------------------------

def lung_applies(profile: DerivedProfile) -> bool:
    return (
        age_in_range(profile.age, LUNG_AGE_RANGE)
        and meets_lung_cancer_smoking_history(profile)
    )


def lung_recommend(profile: DerivedProfile) -> Recommendation:
    return Recommendation(
        name="Lung Cancer",
        test="Low-dose computed tomography (LDCT)",
        interval="annually",
        grade=Grade.B,
        notes=(
            "Adults aged 50–80 with a ≥20 pack-year smoking history who currently "
            "smoke or quit within the past 15 years should have annual LDCT to screen "
            "for lung cancer."
        ),
    )


# -----------------------------------------------------------------------------
# 7. Osteoporosis
# -----------------------------------------------------------------------------

def osteoporosis_applies(profile: DerivedProfile) -> bool:
    """Women 65+, or younger women with osteoporosis risk factors."""
    if not profile.is_female:
        return False
    return age_at_least(profile.age, OSTEOPOROSIS_MIN_AGE) or (
        age_below(profile.age, OSTEOPOROSIS_MIN_AGE)
        and profile.has_condition(RiskFactor.OSTEOPOROSIS_RISK)
    )


def osteoporosis_recommend(profile: DerivedProfile) -> Recommendation:
    if age_at_least(profile.age, OSTEOPOROSIS_MIN_AGE):
        notes = (
            "Women aged 65 and older should be screened for osteoporosis using "
            "dual-energy x-ray absorptiometry (DXA) every 2–3 years."
        )
    else:
        notes = (
            "Postmenopausal women younger than 65 with risk factors (e.g., early "
            "menopause, low weight, corticosteroid use) should be screened for "
            "osteoporosis."
        )
    return Recommendation(
        name="Osteoporosis",
        test="Bone density test (DXA)",
        interval="every 2–3 years",
        grade=Grade.B,
        notes=notes,
    )


# -----------------------------------------------------------------------------
# 8. Hypertension
# -----------------------------------------------------------------------------

def hypertension_applies(profile: DerivedProfile) -> bool:
    return age_at_least(profile.age, ADULT_MIN_AGE)


def hypertension_recommend(profile: DerivedProfile) -> Recommendation:
    if age_at_least(profile.age, HYPERTENSION_ANNUAL_MIN_AGE):
        interval = "every year"
    else:
        interval = "every 3–5 years"
    return Recommendation(
        name="High Blood Pressure (Hypertension)",
        test="Blood pressure measurement",
        interval=interval,
        grade=Grade.A,
        notes=(
            "Adults should have their blood pressure checked regularly in a clinical "
            "setting. Adults aged 40+ or at high risk should be screened annually; "
            "others every 3–5 years."
        ),
    )


# -----------------------------------------------------------------------------
# 9. Type 2 Diabetes & Prediabetes
# -----------------------------------------------------------------------------

def diabetes_applies(profile: DerivedProfile) -> bool:
    return (
        age_in_range(profile.age, DIABETES_AGE_RANGE)
        and profile.has_condition(RiskFactor.OVERWEIGHT)
    )


def diabetes_recommend(profile: DerivedProfile) -> Recommendation:
    return Recommendation(
        name="Type 2 Diabetes & Prediabetes",
        test="Fasting plasma glucose or HbA1c",
        interval="every 3 years",
        grade=Grade.B,
        notes=(
            "Adults aged 35–70 with overweight or obesity should be screened for "
            "prediabetes and type 2 diabetes every 3 years. Abnormal results should "
            "be confirmed on repeat testing."
        ),
    )


# -----------------------------------------------------------------------------
# 10. HIV
# -----------------------------------------------------------------------------

def hiv_applies(profile: DerivedProfile) -> bool:
    """Everyone 15-65, plus anyone at risk or pregnant regardless of age."""
    return (
        age_in_range(profile.age, HIV_AGE_RANGE)
        or profile.has_condition(RiskFactor.HIV_RISK)
        or profile.pregnant
    )


def hiv_recommend(profile: DerivedProfile) -> Recommendation:
    return Recommendation(
        name="HIV",
        test="HIV antigen/antibody test",
        interval="once; repeat if at continued risk or pregnant",
        grade=Grade.A,
        notes=(
            "All persons aged 15–65 and those at high risk (e.g., unprotected sex, "
            "injection drug use) should be tested for HIV at least once. Pregnant "
            "persons should be screened early in pregnancy."
        ),
    )


# -----------------------------------------------------------------------------
# 11. Hepatitis C
# -----------------------------------------------------------------------------

def hepatitis_c_applies(profile: DerivedProfile) -> bool:
    return (
        age_in_range(profile.age, HCV_AGE_RANGE)
        or profile.has_condition(RiskFactor.HCV_RISK)
        or profile.pregnant
    )


def hepatitis_c_recommend(profile: DerivedProfile) -> Recommendation:
    return Recommendation(
        name="Hepatitis C",
        test="HCV antibody with reflex RNA test",
        interval="once; repeat for ongoing risk",
        grade=Grade.B,
        notes=(
            "Adults aged 18–79 should be screened once for hepatitis C virus. Those "
            "with continued risk (e.g., injection drug use) require periodic screening."
        ),
    )


# -----------------------------------------------------------------------------
# 12. Hepatitis B
# -----------------------------------------------------------------------------

def hepatitis_b_applies(profile: DerivedProfile) -> bool:
    """No age criterion: HCV or HIV risk, or pregnancy."""
    return (
        profile.has_condition(RiskFactor.HCV_RISK)
        or profile.has_condition(RiskFactor.HIV_RISK)
        or profile.pregnant
    )


def hepatitis_b_recommend(profile: DerivedProfile) -> Recommendation:
    return Recommendation(
        name="Hepatitis B",
        test="HBsAg, anti-HBs, anti-HBc",
        interval="once; repeat for ongoing risk",
        grade=Grade.B,
        notes=(
            "People at increased risk for hepatitis B (e.g., injection drug use, HIV "
            "infection, born in high-prevalence countries) should be screened with "
            "surface antigen and antibody tests."
        ),
    )


# -----------------------------------------------------------------------------
# 13. Syphilis
# -----------------------------------------------------------------------------

def syphilis_applies(profile: DerivedProfile) -> bool:
    return profile.pregnant or profile.has_condition(RiskFactor.STI_RISK)


def syphilis_recommend(profile: DerivedProfile) -> Recommendation:
    if profile.pregnant:
        interval = "early in pregnancy, possibly again in third trimester"
        notes = (
            "All pregnant persons should be screened for syphilis early in pregnancy; "
            "repeat testing later in pregnancy may be needed for high-risk individuals."
        )
    else:
        interval = "periodic if at risk"
        notes = (
            "Screen individuals at increased risk for syphilis (e.g., men who have sex "
            "with men, persons living with HIV, sex workers) with blood tests."
        )
    return Recommendation(
        name="Syphilis",
        test="Serologic testing (treponemal and non-treponemal tests)",
        interval=interval,
        grade=Grade.A,
        notes=notes,
    )


# -----------------------------------------------------------------------------
# 14. Chlamydia & Gonorrhea
# -----------------------------------------------------------------------------

def chlamydia_gonorrhea_applies(profile: DerivedProfile) -> bool:
    """Women 15-24, or older women with STI risk factors."""
    if not profile.is_female:
        return False
    return age_in_range(profile.age, CHLAMYDIA_AGE_RANGE) or (
        age_above(profile.age, CHLAMYDIA_AGE_RANGE[1])
        and profile.has_condition(RiskFactor.STI_RISK)
    )


def chlamydia_gonorrhea_recommend(profile: DerivedProfile) -> Recommendation:
    if age_in_range(profile.age, CHLAMYDIA_AGE_RANGE):
        return Recommendation(
            name="Chlamydia & Gonorrhea",
            test="Vaginal or urine nucleic acid amplification test (NAAT)",
            interval="annually",
            grade=Grade.B,
            notes=(
                "Sexually active women aged ≤24 should be screened every year for "
                "chlamydia and gonorrhea using NAAT."
            ),
        )
    return Recommendation(
        name="Chlamydia & Gonorrhea",
        test="Vaginal or urine NAAT",
        interval="annually or as indicated by risk",
        grade=Grade.B,
        notes=(
            "Women older than 24 who have risk factors for STIs (e.g., new partner, "
            "multiple partners, inconsistent condom use) should be screened for "
            "chlamydia and gonorrhea."
        ),
    )


# -----------------------------------------------------------------------------
# 15. Latent Tuberculosis Infection
# -----------------------------------------------------------------------------

def latent_tb_applies(profile: DerivedProfile) -> bool:
    return profile.has_condition(RiskFactor.TB_RISK)


def latent_tb_recommend(profile: DerivedProfile) -> Recommendation:
    return Recommendation(
        name="Latent Tuberculosis Infection",
        test="Tuberculin skin test (TST) or interferon-gamma release assay (IGRA)",
        interval="once; repeat for ongoing risk",
        grade=Grade.B,
        notes=(
            "People at increased risk of latent TB infection (e.g., born or lived in "
            "high-prevalence countries, residents of homeless shelters or correctional "
            "facilities) should be screened."
        ),
    )


# -----------------------------------------------------------------------------
# 16. Unhealthy Alcohol Use
# -----------------------------------------------------------------------------

def alcohol_applies(profile: DerivedProfile) -> bool:
    return age_at_least(profile.age, ADULT_MIN_AGE)


def alcohol_recommend(profile: DerivedProfile) -> Recommendation:
    return Recommendation(
        name="Unhealthy Alcohol Use",
        test="Screening questionnaire (e.g., AUDIT-C)",
        interval="as part of routine care",
        grade=Grade.B,
        notes=(
            "All adults, including pregnant persons, should be screened for unhealthy "
            "alcohol use and offered brief counseling or referral to treatment when "
            "appropriate."
        ),
    )


# -----------------------------------------------------------------------------
# 17. Tobacco Use
# -----------------------------------------------------------------------------

def tobacco_applies(profile: DerivedProfile) -> bool:
    return age_at_least(profile.age, ADULT_MIN_AGE)


def tobacco_recommend(profile: DerivedProfile) -> Recommendation:
    if profile.pregnant:
        # No cessation medication during pregnancy
        notes = (
            "Pregnant persons who use tobacco should receive behavioral counseling. "
            "Medications are not recommended during pregnancy."
        )
    else:
        notes = (
            "All adults should be asked about tobacco use and offered behavioral "
            "counseling and FDA-approved medications to quit."
        )
    return Recommendation(
        name="Tobacco Use",
        test="Ask about tobacco use and provide cessation support",
        interval="at each visit",
        grade=Grade.A,
        notes=notes,
    )


# =============================================================================
# Catalog, in reporting order
# =============================================================================

SCREENING_RULES: tuple[ScreeningRule, ...] = (
    ScreeningRule("aaa", "Abdominal Aortic Aneurysm", aaa_applies, aaa_recommend),
    ScreeningRule("breast_cancer", "Breast Cancer", breast_applies, breast_recommend),
    ScreeningRule("cervical_cancer", "Cervical Cancer", cervical_applies, cervical_recommend),
    ScreeningRule(
        "colorectal_cancer_family_history",
        "Colorectal Cancer (family history)",
        colorectal_family_history_applies,
        colorectal_family_history_recommend,
    ),
    ScreeningRule("colorectal_cancer", "Colorectal Cancer", colorectal_applies, colorectal_recommend),
    ScreeningRule("lung_cancer", "Lung Cancer", lung_applies, lung_recommend),
    ScreeningRule("osteoporosis", "Osteoporosis", osteoporosis_applies, osteoporosis_recommend),
    ScreeningRule(
        "hypertension",
        "High Blood Pressure (Hypertension)",
        hypertension_applies,
        hypertension_recommend,
    ),
    ScreeningRule(
        "diabetes",
        "Type 2 Diabetes & Prediabetes",
        diabetes_applies,
        diabetes_recommend,
    ),
    ScreeningRule("hiv", "HIV", hiv_applies, hiv_recommend),
    ScreeningRule("hepatitis_c", "Hepatitis C", hepatitis_c_applies, hepatitis_c_recommend),
    ScreeningRule("hepatitis_b", "Hepatitis B", hepatitis_b_applies, hepatitis_b_recommend),
    ScreeningRule("syphilis", "Syphilis", syphilis_applies, syphilis_recommend),
    ScreeningRule(
        "chlamydia_gonorrhea",
        "Chlamydia & Gonorrhea",
        chlamydia_gonorrhea_applies,
        chlamydia_gonorrhea_recommend,
    ),
    ScreeningRule(
        "latent_tb",
        "Latent Tuberculosis Infection",
        latent_tb_applies,
        latent_tb_recommend,
    ),
    ScreeningRule("unhealthy_alcohol_use", "Unhealthy Alcohol Use", alcohol_applies, alcohol_recommend),
    ScreeningRule("tobacco_use", "Tobacco Use", tobacco_applies, tobacco_recommend),
)

SCREENING_RULES_BY_ID: Mapping[str, ScreeningRule] = MappingProxyType(
    {rule.rule_id: rule for rule in SCREENING_RULES}
)
