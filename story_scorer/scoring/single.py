"""Live rating of one acceptance criterion while it is being written.

The weighting differs from the batch scorer: each criterion is judged on its
own structure, so the maximum is 13 for Gherkin (4 structure points plus an
"And" bonus) and 12 for bullet criteria. Grade cutoffs are fractions of that
maximum.
"""

from typing import List, Optional, Tuple

from loguru import logger

from .lexicons import (
    ACTION_MODAL_PATTERN,
    AND_PATTERN,
    BULLET_PREFIXES,
    CRITERIA_VALUE_VERBS,
    GHERKIN_START_PATTERN,
    OBLIGATION_PATTERN,
    SINGLE_OBSERVABLES,
    SINGLE_VAGUE_TERMS,
    THEN_PATTERN,
    WHEN_PATTERN,
    as_text,
    contains_any,
    find_present,
    word_count,
)
from .models import CriteriaFormat, SingleCriterionRating, SubScore, color_for, grade_for

EXCELLENT_FRACTION = 0.9
GOOD_FRACTION = 2 / 3
FAIR_FRACTION = 0.5

FORMAT_MAX = {CriteriaFormat.GHERKIN: 5, CriteriaFormat.BULLET: 4}
TESTABILITY_MAX = 3
SPECIFICITY_MAX = 3
ALIGNMENT_MAX = 2

LONG_CRITERION_WORDS = 50

Scored = Tuple[int, List[str]]


def max_score_for(fmt: CriteriaFormat) -> int:
    return FORMAT_MAX[fmt] + TESTABILITY_MAX + SPECIFICITY_MAX + ALIGNMENT_MAX


def single_grade(score: int, max_score: int) -> str:
    return grade_for(
        score,
        excellent=max_score * EXCELLENT_FRACTION,
        good=max_score * GOOD_FRACTION,
        fair=max_score * FAIR_FRACTION,
    )


def _gherkin_format(lower: str) -> Scored:
    if not GHERKIN_START_PATTERN.match(lower):
        return 0, ['Use Gherkin format: start with "Given", "When" or "Then".']

    score = 2
    tips = []
    if WHEN_PATTERN.search(lower):
        score += 1
    else:
        tips.append('Add a "When" clause describing the action.')
    if THEN_PATTERN.search(lower):
        score += 1
    else:
        tips.append('Add a "Then" clause describing the expected outcome.')
    if AND_PATTERN.search(lower):
        score += 1
    return score, tips


def _bullet_format(lower: str) -> Scored:
    if lower.startswith(("the system", "the user")):
        score = 3
    elif lower.startswith(BULLET_PREFIXES):
        score = 2
    else:
        return 0, ['Start with "The system must..." or "The user can..." so ownership is clear.']

    tips = []
    if score < 3:
        tips.append('Open with a full actor phrase such as "The system" or "The user".')
    if ACTION_MODAL_PATTERN.search(lower) or contains_any(lower, SINGLE_OBSERVABLES):
        score += 1
    else:
        tips.append('Follow the actor with a clear action, e.g. "must", "can" or "displays".')
    return score, tips


def _testability(lower: str, count: int) -> Scored:
    if count > LONG_CRITERION_WORDS:
        return 1, ["Long criteria are hard to test; keep each one concise."]
    if count < 4:
        return 0, ["Add more detail so the behaviour can be tested."]
    if contains_any(lower, SINGLE_OBSERVABLES):
        return TESTABILITY_MAX, []
    tip = "Describe an observable outcome, e.g. \"the system displays...\"."
    if OBLIGATION_PATTERN.search(lower):
        return 2, [tip]
    return 0, [tip]


def _specificity(lower: str, count: int) -> Scored:
    score = SPECIFICITY_MAX
    tips = []
    if count > LONG_CRITERION_WORDS:
        score -= 2
        tips.append("Be concise: split criteria over 50 words into smaller ones.")
    elif count < 6:
        score -= 2
        tips.append("Add more detail so the behaviour can be tested.")
    elif count < 10:
        score -= 1
        tips.append("Add a little more detail about the expected behaviour.")
    if contains_any(lower, SINGLE_VAGUE_TERMS):
        score -= 2
        tips.append("Avoid vague terms like \"maybe\" or \"kind of\"; state exactly what happens.")
    return max(0, score), tips


def _alignment(lower: str, story_value: str) -> Scored:
    if not story_value.strip():
        return 1, []
    verbs = find_present(story_value, CRITERIA_VALUE_VERBS)
    if not verbs:
        return 1, []
    if contains_any(lower, verbs):
        return ALIGNMENT_MAX, []
    return 1, [f"Tie this criterion to the story's value (e.g. mention \"{verbs[0]}\")."]


def score_single_criterion(
    text: Optional[str],
    fmt=CriteriaFormat.GHERKIN,
    story_value: Optional[str] = "",
) -> SingleCriterionRating:
    """Rate one criterion for inline feedback.

    Blank text returns a zero score with empty grade, color and feedback.
    Feedback is a "•"-bulleted list of distinct tips in rule order (word
    count rules before keyword rules), or "" when nothing needs attention.
    """
    fmt = CriteriaFormat.parse(fmt)
    max_score = max_score_for(fmt)
    stripped = as_text(text).strip()

    if not stripped:
        return SingleCriterionRating(score=0, max_score=max_score, grade="", color="", feedback="")

    lower = stripped.lower()
    count = word_count(stripped)

    if fmt == CriteriaFormat.BULLET:
        format_score, format_tips = _bullet_format(lower)
    else:
        format_score, format_tips = _gherkin_format(lower)
    testability, testability_tips = _testability(lower, count)
    specificity, specificity_tips = _specificity(lower, count)
    alignment, alignment_tips = _alignment(lower, as_text(story_value))

    breakdown = {
        "format": SubScore(score=format_score, max_score=FORMAT_MAX[fmt], label="Format"),
        "testability": SubScore(score=testability, max_score=TESTABILITY_MAX, label="Testability"),
        "specificity": SubScore(score=specificity, max_score=SPECIFICITY_MAX, label="Specificity"),
        "alignment": SubScore(score=alignment, max_score=ALIGNMENT_MAX, label="Alignment"),
    }
    score = sum(part.score for part in breakdown.values())

    grade = single_grade(score, max_score)

    tips = []
    for tip in format_tips + testability_tips + specificity_tips + alignment_tips:
        if tip not in tips:
            tips.append(tip)

    logger.debug("Rated {} criterion: {}/{} ({})", fmt.value, score, max_score, grade)

    return SingleCriterionRating(
        score=score,
        max_score=max_score,
        grade=grade,
        color=color_for(grade),
        feedback="\n".join(f"• {tip}" for tip in tips),
        breakdown=breakdown,
    )
