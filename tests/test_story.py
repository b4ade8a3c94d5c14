import pytest

from story_scorer.scoring import StoryInput, score_story
from story_scorer.scoring.story import (
    STORY_CATEGORIES,
    find_filler_words,
    score_clarity,
    score_creativity,
    score_length_band,
    score_so_that_quality,
)


HIGH_STORY = {
    "as_a": "operations manager",
    "i_want": "to automate nightly backup reports",
    "so_that": "I can reduce manual effort by 30% and increase delivery reliability for the team",
}


# --- Incomplete stories ---

class TestIncompleteStory:
    @pytest.mark.parametrize("missing", ["as_a", "i_want", "so_that"])
    def test_missing_field_scores_zero(self, missing):
        story = dict(HIGH_STORY)
        story[missing] = "   "
        result = score_story(story)

        assert result.total_score == 0
        assert result.word_count == 0
        assert set(result.breakdown) == set(STORY_CATEGORIES)
        assert all(score == 0 for score in result.breakdown.values())
        assert result.feedback == ["Complete all three fields to earn full points."]
        assert result.suggestions == []

    def test_missing_key_in_mapping(self):
        result = score_story({"as_a": "user", "i_want": "a feature"})
        assert result.total_score == 0

    def test_none_values_are_blank(self):
        result = score_story({"as_a": None, "i_want": "x", "so_that": "y"})
        assert result.total_score == 0

    @pytest.mark.parametrize("story", [
        None,
        ["as a user", "I want", "so that"],
        {"as_a": 5, "i_want": "a report", "so_that": "I can save time"},
        {"as_a": "user", "i_want": ["a", "report"], "so_that": "I can save time"},
    ])
    def test_malformed_input_scores_zero(self, story):
        result = score_story(story)
        assert result.total_score == 0
        assert set(result.breakdown) == set(STORY_CATEGORIES)


# --- Category scorers ---

class TestLengthBands:
    @pytest.mark.parametrize("count,expected", [
        (0, 0), (4, 0), (5, 3), (9, 3), (10, 6), (14, 6), (15, 8), (17, 8),
        (18, 10), (40, 10), (41, 7), (50, 7), (51, 4), (200, 4),
    ])
    def test_band_boundaries(self, count, expected):
        assert score_length_band(count) == expected


class TestClarity:
    def test_clean_text_scores_full(self):
        assert score_clarity("operations manager wants automated reports") == 10

    def test_each_distinct_filler_costs_two(self):
        assert score_clarity("I basically want stuff") == 6

    def test_repeated_filler_counts_once(self):
        assert score_clarity("very very very fast") == 8

    def test_multi_word_filler(self):
        assert find_filler_words("it is kind of slow") == ["kind of"]

    def test_filler_must_be_whole_word(self):
        # "justice" contains "just" but is not the filler
        assert find_filler_words("justice for everyone") == []

    def test_vague_phrase_penalty(self):
        assert score_clarity("so that it's better") == 7

    def test_floor_at_zero(self):
        text = "basically kind of sort of stuff things very really just maybe"
        assert score_clarity(text) == 0


class TestSoThatQuality:
    def test_base_score(self):
        # five words: no length bonus or penalty
        assert score_so_that_quality("I get my reports sooner") == 5

    def test_value_verbs_add_three_each(self):
        assert score_so_that_quality("we reduce cost and increase sales") == 11

    def test_short_statement_penalty(self):
        assert score_so_that_quality("better") == 2

    def test_vague_phrase_penalty(self):
        assert score_so_that_quality("it will be better") == 0

    def test_clamped_to_twenty(self):
        text = "we increase reduce enable improve save automate simplify enhance revenue for everyone today"
        assert score_so_that_quality(text) == 20

    def test_uk_spelling(self):
        assert score_so_that_quality("we optimise the flow") == 8

    def test_measurable_value_beats_vague_phrase(self):
        measurable = score_story(dict(HIGH_STORY, so_that="I can reduce response time by 30 percent"))
        vague = score_story(dict(HIGH_STORY, so_that="I can make it better for everyone involved here"))

        assert measurable.breakdown["so_that_quality"] == 11
        assert vague.breakdown["so_that_quality"] == 3
        assert measurable.breakdown["so_that_quality"] > vague.breakdown["so_that_quality"]


class TestCreativity:
    def test_all_unique(self):
        assert score_creativity("one two three four five") == 5

    def test_repetitive(self):
        assert score_creativity("a a a a b") == 0

    def test_empty(self):
        assert score_creativity("") == 0


# --- Whole story ---

class TestScoreStory:
    def test_high_quality_story(self):
        result = score_story(HIGH_STORY)
        assert result.total_score == 54
        assert result.breakdown == {
            "completeness": 10,
            "length": 10,
            "clarity": 10,
            "so_that_quality": 19,
            "creativity": 5,
        }
        assert result.word_count == 21
        assert "Great length! Clear and concise." in result.feedback
        assert "Your value statement is strong and specific!" in result.feedback
        assert result.suggestions == []

    def test_accepts_story_input(self):
        assert score_story(StoryInput(**HIGH_STORY)).total_score == 54

    def test_total_is_sum_of_breakdown(self):
        result = score_story({"as_a": "user", "i_want": "stuff", "so_that": "things work"})
        assert result.total_score == sum(result.breakdown.values())

    def test_filler_feedback_lists_words(self):
        result = score_story({
            "as_a": "user",
            "i_want": "to basically see my stuff",
            "so_that": "I can manage my account",
        })
        assert any('"basically", "stuff"' in line for line in result.feedback)
        assert "Use simpler, more direct language" in result.suggestions

    def test_short_story_feedback(self):
        result = score_story({"as_a": "user", "i_want": "feature", "so_that": "better"})
        assert "Your story is quite short. Add more detail." in result.feedback
        assert "Add more context to make your story clearer" in result.suggestions

    def test_suggests_verb_when_none_present(self):
        result = score_story({"as_a": "user", "i_want": "feature", "so_that": "better"})
        assert any("action verb" in s for s in result.suggestions)

    def test_suggests_quantifying_when_verb_present(self):
        result = score_story({"as_a": "user", "i_want": "a report", "so_that": "I can save"})
        assert not any("action verb" in s for s in result.suggestions)
        assert any("Quantify" in s for s in result.suggestions)

    def test_deterministic(self):
        assert score_story(HIGH_STORY) == score_story(HIGH_STORY)
