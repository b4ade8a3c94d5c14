"""Heuristic scoring for "As a / I want / So that" user stories."""

import re
from typing import Dict, List, Mapping, Optional, Union

from loguru import logger

from .lexicons import (
    BUSINESS_METRICS,
    FILLER_WORDS,
    FLOWERY_PATTERNS,
    FLOWERY_TERMS,
    NUMBER_PATTERN,
    SO_THAT_VAGUE_PHRASES,
    SO_THAT_VALUE_VERBS,
    STORY_VALUE_PHRASES,
    VAGUE_PHRASES,
    as_text,
    collapse_nested,
    contains_any,
    find_present,
    find_tokens,
    word_count,
)
from .models import SingleRating, StoryInput, StoryScoreResult, color_for, grade_for

STORY_CATEGORIES = ("completeness", "length", "clarity", "so_that_quality", "creativity")
STORY_MAXIMA = {"completeness": 10, "length": 10, "clarity": 10, "so_that_quality": 20, "creativity": 5}
MAX_STORY_SCORE = 55
MAX_SO_THAT_SCORE = 20
FLOWERY_PENALTY = 8


def score_length_band(count: int) -> int:
    """Score 0-10 for the story word count; 18-40 words is ideal."""
    if count < 5:
        return 0
    if count < 10:
        return 3
    if count < 15:
        return 6
    if count < 18:
        return 8
    if count <= 40:
        return 10
    if count <= 50:
        return 7
    return 4


def find_filler_words(text: str) -> List[str]:
    return find_tokens(text, FILLER_WORDS)


def score_clarity(text: str) -> int:
    """Start at 10; -2 per filler word found, -3 if any vague phrase appears."""
    score = 10 - 2 * len(find_filler_words(text))
    if contains_any(text, VAGUE_PHRASES):
        score -= 3
    return max(0, score)


def score_so_that_quality(so_that: str) -> int:
    score = 5
    score += 3 * len(find_present(so_that, STORY_VALUE_PHRASES))

    if contains_any(so_that, VAGUE_PHRASES):
        score -= 5

    count = word_count(so_that)
    if count >= 8:
        score += 3
    if count >= 12:
        score += 2
    if count < 4:
        score -= 3

    return min(MAX_SO_THAT_SCORE, max(0, score))


def score_creativity(text: str) -> int:
    """Lexical diversity bonus (0-5) from the unique/total token ratio."""
    tokens = text.lower().split()
    if not tokens:
        return 0

    ratio = len(set(tokens)) / len(tokens)
    if ratio > 0.85:
        return 5
    if ratio > 0.75:
        return 3
    if ratio > 0.65:
        return 2
    return 0


def coerce_story(story: Union[StoryInput, Dict[str, str]]) -> StoryInput:
    """Build a StoryInput; missing, null and non-text fields become blank."""
    if isinstance(story, StoryInput):
        return story
    if not isinstance(story, Mapping):
        story = {}
    return StoryInput(
        as_a=as_text(story.get("as_a")),
        i_want=as_text(story.get("i_want")),
        so_that=as_text(story.get("so_that")),
    )


def _suggestions(story: StoryInput, breakdown: Dict[str, int]) -> List[str]:
    suggestions = []

    if breakdown["so_that_quality"] < 15:
        if find_present(story.so_that, STORY_VALUE_PHRASES):
            suggestions.append(
                "Quantify the outcome in your 'So that' (for example 'by 30%') to make the value measurable"
            )
        else:
            suggestions.append(
                "Try starting your 'So that' with an action verb like 'increase', 'reduce', or 'enable'"
            )

    if breakdown["clarity"] < 8:
        suggestions.append("Use simpler, more direct language")

    if breakdown["length"] < 6:
        suggestions.append("Add more context to make your story clearer")

    return suggestions


def score_story(story: Union[StoryInput, Dict[str, str]]) -> StoryScoreResult:
    """Score a user story on five categories for a total out of 55.

    Args:
        story: A StoryInput, or a mapping with ``as_a``, ``i_want`` and
            ``so_that`` keys.

    Returns:
        StoryScoreResult whose ``total_score`` is the sum of ``breakdown``.
        Incomplete stories short-circuit with every category at zero.
    """
    story = coerce_story(story)

    if not (story.as_a.strip() and story.i_want.strip() and story.so_that.strip()):
        logger.debug("Story incomplete; skipping category scoring")
        return StoryScoreResult(
            total_score=0,
            breakdown={category: 0 for category in STORY_CATEGORIES},
            feedback=["Complete all three fields to earn full points."],
            suggestions=[],
            word_count=0,
        )

    full_story = f"{story.as_a} {story.i_want} {story.so_that}"
    count = word_count(full_story)
    feedback = []
    breakdown = {"completeness": 10}

    breakdown["length"] = score_length_band(count)
    if count < 10:
        feedback.append("Your story is quite short. Add more detail.")
    elif count > 50:
        feedback.append("Your story is a bit long. Try to be more concise.")
    elif 18 <= count <= 40:
        feedback.append("Great length! Clear and concise.")

    breakdown["clarity"] = score_clarity(full_story)
    fillers = find_filler_words(full_story)
    if fillers:
        quoted = '", "'.join(fillers)
        feedback.append(f'Remove filler words like "{quoted}" for better clarity.')
    elif breakdown["clarity"] >= 8:
        feedback.append("Excellent clarity! Your language is direct and simple.")

    breakdown["so_that_quality"] = score_so_that_quality(story.so_that)
    if breakdown["so_that_quality"] >= 15:
        feedback.append("Your value statement is strong and specific!")
    elif breakdown["so_that_quality"] < 10:
        feedback.append("Try to make your 'So that' more specific about the value or outcome.")

    breakdown["creativity"] = score_creativity(full_story)

    total = sum(breakdown.values())
    logger.debug("Scored story: total={} breakdown={}", total, breakdown)

    return StoryScoreResult(
        total_score=total,
        breakdown=breakdown,
        feedback=feedback,
        suggestions=_suggestions(story, breakdown),
        word_count=count,
    )


# ---------------------------------------------------------------------------
# Live "so that" rating
# ---------------------------------------------------------------------------

def has_flowery_language(text: str) -> bool:
    lower = text.lower()
    if any(re.search(rf"\b{re.escape(term)}\b", lower) for term in FLOWERY_TERMS):
        return True
    return any(pattern.search(lower) for pattern in FLOWERY_PATTERNS)


def _so_that_tips(verbs, metrics, has_number, count, vague) -> List[str]:
    tips = []
    if not verbs:
        tips.append("Start with a value verb such as 'reduce', 'increase' or 'improve'.")
    if has_number and not metrics:
        tips.append("Link numbers to business metrics (e.g. 'reduce response time by 30%').")
    if not has_number:
        tips.append("Add a specific number or target to make the outcome measurable.")
    if not metrics and not has_number:
        tips.append("Name the business metric you expect to change, such as cost, revenue or response time.")
    if count < 8:
        tips.append("Add more detail about the outcome and who benefits.")
    if vague:
        tips.append("Replace vague phrases like 'it's better' with a concrete outcome.")
    return tips


def score_so_that_statement(text: Optional[str]) -> Optional[SingleRating]:
    """Rate a single "so that" statement on a 0-20 scale.

    Returns None for blank input: "not rated yet" is distinct from a zero.
    Emotional or flowery wording costs 8 points and its warning replaces all
    other feedback.
    """
    text = as_text(text)
    if not text.strip():
        return None

    verbs = find_present(text, SO_THAT_VALUE_VERBS)
    metrics = collapse_nested(find_present(text, BUSINESS_METRICS))
    has_number = bool(NUMBER_PATTERN.search(text))
    count = word_count(text)
    vague = contains_any(text, SO_THAT_VAGUE_PHRASES)
    flowery = has_flowery_language(text)

    score = 3
    if verbs:
        score += 3
    if len(verbs) >= 2:
        score += 2
    if metrics:
        score += 3
    if len(metrics) >= 2:
        score += 2
    if has_number:
        score += 4
    if count >= 8:
        score += 2
    if count >= 12:
        score += 1
    if count < 4:
        score -= 3
    if vague:
        score -= 4
    if flowery:
        score -= FLOWERY_PENALTY
    score = min(MAX_SO_THAT_SCORE, max(0, score))

    grade = grade_for(score, excellent=17, good=13, fair=9)

    if flowery:
        feedback = (
            "Avoid emotional or flowery language; describe a measurable business outcome instead."
        )
    elif grade == "Excellent":
        feedback = "Excellent! Your value statement names a measurable business outcome."
    else:
        tips = _so_that_tips(verbs, metrics, has_number, count, vague)
        if grade == "Good":
            tips = tips or ["Add a second measurable outcome."]
            feedback = "To reach Excellent: " + " ".join(tips)
        else:
            feedback = " ".join(tips)

    logger.debug("Rated so-that statement: score={} grade={}", score, grade)

    return SingleRating(
        score=score,
        max_score=MAX_SO_THAT_SCORE,
        grade=grade,
        color=color_for(grade),
        feedback=feedback,
    )
