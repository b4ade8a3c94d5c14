"""Batch scoring for a list of acceptance criteria."""

from typing import List, Optional, Sequence

from loguru import logger

from .lexicons import (
    BULLET_PREFIXES,
    CRITERIA_VALUE_VERBS,
    GHERKIN_KEYWORDS,
    OBSERVABLE_PATTERNS,
    VAGUE_TERMS,
    as_text,
    contains_any,
    find_present,
    lines,
    text_items,
    word_count,
)
from .models import CriteriaFormat, CriteriaScoreResult

CRITERIA_CATEGORIES = ("format", "testability", "specificity", "alignment", "completeness")
CRITERIA_MAXIMA = {"format": 10, "testability": 15, "specificity": 10, "alignment": 10, "completeness": 10}
MAX_CRITERIA_SCORE = 55

_START_KEYWORDS = ("given", "when", "then")
_HINT_VAGUE_WORDS = ("basically", "sort of", "kind of", "maybe", "probably", "might", "somewhat")


def _starts_with_any(text: str, prefixes: Sequence[str]) -> bool:
    return any(text.startswith(prefix) for prefix in prefixes)


def is_gherkin_styled(criterion: str) -> bool:
    """True when the criterion, or any of its lines, opens with Given/When/Then."""
    return any(_starts_with_any(line, _START_KEYWORDS) for line in lines(criterion))


def is_bullet_styled(criterion: str) -> bool:
    return _starts_with_any(criterion.strip().lower(), BULLET_PREFIXES)


def score_format(criteria: Sequence[str], fmt: CriteriaFormat = CriteriaFormat.GHERKIN) -> int:
    """Score 0-10 for structure relative to the declared format.

    Bullet tiers are more forgiving: any Gherkin use earns 5 there, while
    Gherkin only credits bullet structure once it dominates the set.
    """
    total = len(criteria)
    gherkin = sum(1 for c in criteria if is_gherkin_styled(c))
    bullet = sum(1 for c in criteria if is_bullet_styled(c))

    if fmt == CriteriaFormat.BULLET:
        if bullet >= total * 0.6:
            return 10
        if bullet >= total * 0.3:
            return 7
        if gherkin >= total * 0.3:
            return 5
        return 3

    if gherkin >= total * 0.6:
        return 10
    if gherkin >= total * 0.3:
        return 7
    if bullet >= total * 0.6:
        return 5
    if bullet >= total * 0.3:
        return 4
    return 3


def score_testability(criteria: Sequence[str]) -> int:
    score = sum(3 if contains_any(c, OBSERVABLE_PATTERNS) else 1 for c in criteria)
    return min(15, score)


def score_specificity(criteria: Sequence[str]) -> int:
    score = 10
    for criterion in criteria:
        if contains_any(criterion, VAGUE_TERMS):
            score -= 2
        count = word_count(criterion)
        if count < 3:
            score -= 1
        if count > 50:
            score -= 1
    return max(0, score)


def score_alignment(criteria: Sequence[str], story_value: str = "") -> int:
    """5 when there is no story value; +1 per criterion sharing one of its value verbs."""
    if not story_value or not story_value.strip():
        return 5

    verbs = find_present(story_value, CRITERIA_VALUE_VERBS)
    score = 5 + sum(1 for c in criteria if contains_any(c, verbs))
    return min(10, score)


def score_completeness(criteria: Sequence[str], fmt: CriteriaFormat = CriteriaFormat.GHERKIN) -> int:
    score = 0

    if fmt == CriteriaFormat.BULLET:
        if any(contains_any(c, ("must", "shall")) for c in criteria):
            score += 3
        if any(contains_any(c, ("can", "able to")) for c in criteria):
            score += 3
        if any(contains_any(c, ("display", "show", "appear", "message", "notification")) for c in criteria):
            score += 4
    else:
        if any(contains_any(c, GHERKIN_KEYWORDS["given"]) for c in criteria):
            score += 3
        if any(contains_any(c, GHERKIN_KEYWORDS["when"]) for c in criteria):
            score += 3
        if any(contains_any(c, GHERKIN_KEYWORDS["then"]) for c in criteria):
            score += 4

    if len(criteria) >= 3:
        score += 3
    if len(criteria) >= 5:
        score += 2

    return min(10, score)


def _feedback(breakdown, fmt: CriteriaFormat, story_value: str) -> List[str]:
    feedback = []

    if breakdown["format"] >= 8:
        feedback.append("Excellent format! Your criteria follow a clear structure.")
    elif breakdown["format"] < 5:
        if fmt == CriteriaFormat.BULLET:
            feedback.append(
                'Consider starting each criterion with "The system must..." or "The user can..." for clearer criteria.'
            )
        else:
            feedback.append("Consider using Gherkin format (Given/When/Then) for clearer criteria.")

    if breakdown["testability"] >= 12:
        feedback.append("Great testability! Your criteria have clear, observable outcomes.")
    elif breakdown["testability"] < 8:
        feedback.append("Make your criteria more testable with specific, observable outcomes.")

    if breakdown["specificity"] >= 8:
        feedback.append("Nice specificity! Your criteria are clear and unambiguous.")
    else:
        feedback.append("Avoid vague language. Be more specific about expected behaviors.")

    if breakdown["alignment"] >= 8:
        feedback.append("Your criteria align well with the story's value proposition.")
    elif story_value and story_value.strip():
        feedback.append('Try to align your criteria more closely with the story\'s "So that..." value.')

    if breakdown["completeness"] >= 8:
        feedback.append("Comprehensive criteria covering the full scenario.")

    return feedback


def _suggestions(breakdown, fmt: CriteriaFormat, count: int) -> List[str]:
    suggestions = []

    if breakdown["format"] < 8:
        if fmt == CriteriaFormat.BULLET:
            suggestions.append(
                'Try starting each criterion with "The system must...", "The user can...", or "The page displays..."'
            )
        else:
            suggestions.append('Try using "Given [context], When [action], Then [outcome]" format')

    if breakdown["testability"] < 10:
        suggestions.append('Include observable outcomes like "system displays..." or "returns..."')

    if breakdown["specificity"] < 8:
        suggestions.append("Replace vague terms with specific, measurable criteria")

    if count < 3:
        suggestions.append("Consider adding more criteria to cover edge cases and variations")

    return suggestions


def score_criteria(
    criteria: Optional[Sequence[str]],
    story_value: Optional[str] = "",
    fmt=CriteriaFormat.GHERKIN,
) -> CriteriaScoreResult:
    """Score a set of acceptance criteria on five categories for a total out of 55.

    Args:
        criteria: Criterion texts; blank and non-text entries are ignored.
        story_value: The story's "so that" statement, used for alignment.
        fmt: Declared format. Unknown values are treated as Gherkin.

    Returns:
        CriteriaScoreResult. With no criteria the breakdown is empty.
    """
    items = text_items(criteria)
    story_value = as_text(story_value)
    fmt = CriteriaFormat.parse(fmt)

    if not items:
        logger.debug("No criteria supplied; returning empty result")
        return CriteriaScoreResult(
            total_score=0,
            breakdown={},
            feedback=["Please add at least one acceptance criterion"],
            suggestions=[],
            criteria_count=0,
        )

    breakdown = {
        "format": score_format(items, fmt),
        "testability": score_testability(items),
        "specificity": score_specificity(items),
        "alignment": score_alignment(items, story_value),
        "completeness": score_completeness(items, fmt),
    }
    total = max(0, min(MAX_CRITERIA_SCORE, sum(breakdown.values())))

    logger.debug("Scored {} {} criteria: total={}", len(items), fmt.value, total)

    return CriteriaScoreResult(
        total_score=total,
        breakdown=breakdown,
        feedback=_feedback(breakdown, fmt, story_value),
        suggestions=_suggestions(breakdown, fmt, len(items)),
        criteria_count=len(items),
    )


def detect_format(criteria: Optional[Sequence[str]]) -> str:
    """Guess the dominant style: "gherkin", "bullet", "mixed" or "none"."""
    items = text_items(criteria)
    if not items:
        return "none"

    gherkin = 0
    bullet = 0
    for criterion in items:
        lower = criterion.strip().lower()
        if _starts_with_any(lower, _START_KEYWORDS):
            gherkin += 1
        elif _starts_with_any(lower, BULLET_PREFIXES):
            bullet += 1

    if gherkin > bullet:
        return "gherkin"
    if bullet > 0:
        return "bullet"
    return "mixed"


def criterion_hint(criterion: Optional[str], fmt=CriteriaFormat.GHERKIN) -> Optional[str]:
    """One context hint for a criterion being typed, or None when blank or fine."""
    text = as_text(criterion).strip()
    if not text:
        return None

    lower = text.lower()
    fmt = CriteriaFormat.parse(fmt)

    if fmt == CriteriaFormat.GHERKIN:
        if not _starts_with_any(lower, ("given", "when", "then", "and")):
            return 'Try starting with "Given", "When", or "Then" to follow Gherkin format.'
        if lower.startswith("given") and "when" not in lower and "then" not in lower:
            return 'Add a "When" clause to describe the action, and a "Then" clause for the outcome.'
        if lower.startswith("when") and "then" not in lower:
            return 'Add a "Then" clause to describe the expected observable outcome.'
    elif not _starts_with_any(lower, BULLET_PREFIXES):
        return 'Start with "The system must..." or "The user can..." for a clear, testable statement.'

    if contains_any(lower, _HINT_VAGUE_WORDS):
        return "Replace vague words with specific, measurable language."

    if word_count(text) < 5:
        return "This criterion is quite short - add more detail to make it testable."

    return None
