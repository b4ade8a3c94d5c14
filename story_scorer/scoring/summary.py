from .models import CombinedSummary
from .story import MAX_STORY_SCORE
from .criteria import MAX_CRITERIA_SCORE

MAX_COMBINED_SCORE = MAX_STORY_SCORE + MAX_CRITERIA_SCORE

# (minimum percentage, grade, message), highest first
LETTER_GRADES = (
    (90, "A+", "Outstanding!"),
    (80, "A", "Excellent work!"),
    (70, "B", "Great job!"),
    (60, "C", "Good effort!"),
    (50, "D", "Keep practicing!"),
)


def combined_summary(story_score: int, criteria_score: int) -> CombinedSummary:
    """Letter grade for a story and its criteria taken together (out of 110)."""
    combined = story_score + criteria_score
    percentage = round(combined / MAX_COMBINED_SCORE * 100)

    grade, message = "F", "Try again!"
    for minimum, letter, text in LETTER_GRADES:
        if percentage >= minimum:
            grade, message = letter, text
            break

    return CombinedSummary(
        combined_score=combined,
        max_score=MAX_COMBINED_SCORE,
        percentage=percentage,
        grade=grade,
        message=message,
    )
