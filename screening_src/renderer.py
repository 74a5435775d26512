"""Render screening recommendations for display.

Text output mirrors the results panel of the screening form: a heading,
then one block per recommendation in the order given. The interval line
is omitted when a recommendation has no interval.
"""

from typing import Sequence

from .models import Recommendation

NO_RECOMMENDATIONS_MESSAGE = (
    "No specific USPSTF recommendations based on the information provided."
)
RESULTS_HEADING = "Recommended screenings:"


def render_recommendation(recommendation: Recommendation) -> list[str]:
    """Render one recommendation as display lines."""
    lines = [
        f"{recommendation.name} (Grade {recommendation.grade.value})",
        f"Test: {recommendation.test}",
    ]
    if recommendation.interval:
        lines.append(f"Interval: {recommendation.interval}")
    lines.append(f"Notes: {recommendation.notes}")
    return lines


def render_text(recommendations: Sequence[Recommendation]) -> str:
    """Render a recommendation list as plain text.

    Args:
        recommendations: Output of the rules engine, in display order

    Returns:
        Heading plus one blank-line separated block per recommendation,
        or the no-recommendations message when the list is empty
    """
    if not recommendations:
        return NO_RECOMMENDATIONS_MESSAGE

    blocks = [RESULTS_HEADING]
    for recommendation in recommendations:
        blocks.append("\n".join(render_recommendation(recommendation)))
    return "\n\n".join(blocks)


def render_json(recommendations: Sequence[Recommendation]) -> list[dict]:
    """Convert recommendations to JSON-serializable dictionaries."""
    return [recommendation.to_dict() for recommendation in recommendations]
