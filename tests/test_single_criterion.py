import pytest

from story_scorer.scoring import CriteriaFormat, score_single_criterion
from story_scorer.scoring.single import max_score_for, single_grade


class TestMaxScore:
    def test_gherkin_max(self):
        assert max_score_for(CriteriaFormat.GHERKIN) == 13
        assert score_single_criterion("Given x", "gherkin").max_score == 13

    def test_bullet_max(self):
        assert max_score_for(CriteriaFormat.BULLET) == 12
        assert score_single_criterion("The system works", "bullet").max_score == 12

    def test_breakdown_sums_to_score(self):
        rating = score_single_criterion("Given a user\nWhen they click\nThen a message appears")
        assert rating.score == sum(part.score for part in rating.breakdown.values())
        assert [part.label for part in rating.breakdown.values()] == [
            "Format", "Testability", "Specificity", "Alignment",
        ]


class TestBlank:
    @pytest.mark.parametrize("text", ["", "   \n  ", None])
    def test_blank_returns_empty_rating(self, text):
        rating = score_single_criterion(text, "gherkin")
        assert rating.score == 0
        assert rating.grade == ""
        assert rating.color == ""
        assert rating.feedback == ""

    def test_non_text_returns_empty_rating(self):
        rating = score_single_criterion(7, "gherkin", story_value=3)
        assert rating.score == 0
        assert rating.grade == ""


class TestGradeBoundaries:
    @pytest.mark.parametrize("score,max_score,grade", [
        (12, 13, "Excellent"),
        (11, 13, "Good"),
        (9, 13, "Good"),
        (8, 13, "Fair"),
        (7, 13, "Fair"),
        (6, 13, "Needs work"),
        (11, 12, "Excellent"),
        (10, 12, "Good"),
        (8, 12, "Good"),
        (7, 12, "Fair"),
        (6, 12, "Fair"),
        (5, 12, "Needs work"),
    ])
    def test_cutoffs(self, score, max_score, grade):
        assert single_grade(score, max_score) == grade


# --- Gherkin ---

class TestGherkinExcellentOrGood:
    @pytest.mark.parametrize("text", [
        "Given the user is logged in\nWhen they click the export button\nThen the system displays a download confirmation",
        "Given the email field contains an invalid format\nWhen the user tabs away from the field\nThen an error message appears below the field",
        "Given a valid authentication token\nWhen the API endpoint is called\nThen the system returns a 200 response with the user profile data",
        "Given the email field is empty\nWhen the user clicks submit\nThen an error message displays below the email field stating \"Email is required\"",
    ])
    def test_complete_scenarios(self, text):
        rating = score_single_criterion(text, "gherkin")
        assert rating.score >= 11
        assert rating.grade in ("Excellent", "Good")

    @pytest.mark.parametrize("text", [
        "When the user submits the form\nThen the system shows a success message and redirects to the dashboard",
        "Given the user has entered invalid email\nAnd the password field is empty\nWhen they click submit\nThen the system displays inline validation errors",
    ])
    def test_excellent(self, text):
        rating = score_single_criterion(text, "gherkin")
        assert rating.score >= 12
        assert rating.grade == "Excellent"

    def test_without_clear_observable(self):
        rating = score_single_criterion(
            "Given the user is on the page\nWhen they perform an action\nThen the system responds",
            "gherkin",
        )
        assert 9 <= rating.score < 12
        assert rating.grade == "Good"
        assert rating.color == "blue"

    def test_excellent_has_no_feedback(self):
        rating = score_single_criterion(
            "Given the user is on the home page\nWhen they click the search button\n"
            "Then the system displays the search results page",
            "gherkin",
        )
        assert rating.feedback == ""


class TestGherkinFair:
    def test_missing_observable(self):
        rating = score_single_criterion("Given a valid user\nWhen they authenticate\nThen access is granted", "gherkin")
        assert 7 <= rating.score < 9

    def test_incomplete_structure(self):
        rating = score_single_criterion("When the user clicks submit\nThen something happens", "gherkin")
        assert rating.score == 7
        assert rating.grade == "Fair"
        assert rating.color == "yellow"

    def test_vague(self):
        rating = score_single_criterion(
            "Given that the system is kind of ready\nWhen something basically happens\nThen it might work",
            "gherkin",
        )
        assert rating.score < 9
        assert "vague" in rating.feedback


class TestGherkinNeedsWork:
    def test_not_gherkin(self):
        rating = score_single_criterion("The button should work correctly", "gherkin")
        assert rating.score < 7
        assert rating.grade == "Needs work"
        assert rating.color == "orange"
        assert "Gherkin" in rating.feedback

    @pytest.mark.parametrize("text", ["It works", "Maybe it kind of works"])
    def test_brief(self, text):
        assert score_single_criterion(text, "gherkin").score < 7

    def test_several_tips_are_bulleted(self):
        rating = score_single_criterion("Maybe works", "gherkin")
        assert len(rating.feedback.split("•")) > 2
        assert all(line.startswith("• ") for line in rating.feedback.split("\n"))

    def test_missing_observable_tip(self):
        rating = score_single_criterion("Given a user\nWhen they login\nThen success", "gherkin")
        assert "observable" in rating.feedback

    def test_incomplete_gets_feedback(self):
        assert score_single_criterion("When the button is clicked", "gherkin").feedback

    def test_long_criterion(self):
        text = "Given " + "word " * 60 + "When something Then result"
        assert "concise" in score_single_criterion(text, "gherkin").feedback

    def test_vague_in_otherwise_good(self):
        rating = score_single_criterion(
            "Given the user is kind of ready\nWhen they click\nThen the page appears",
            "gherkin",
        )
        assert "vague" in rating.feedback


# --- Bullet ---

class TestBulletExcellent:
    @pytest.mark.parametrize("text", [
        "The system displays a confirmation message with the order number and redirects to the order details page",
        "The user can filter search results by category, date range, and status using the sidebar filters",
        "The system shows inline error messages below each invalid field when the user submits the form",
        "The user can click the \"Add to Cart\" button and see the cart icon update with the new item count",
        "The system displays error messages with ARIA labels and moves keyboard focus to the first invalid field",
    ])
    def test_excellent(self, text):
        rating = score_single_criterion(text, "bullet")
        assert rating.score >= 11
        assert rating.grade == "Excellent"
        assert rating.color == "green"

    def test_short_actor_prefix_is_good(self):
        rating = score_single_criterion(
            "System must display a loading spinner while the API request is in progress and disable the submit button",
            "bullet",
        )
        assert rating.score == 10
        assert rating.grade == "Good"


class TestBulletLower:
    def test_less_specific(self):
        rating = score_single_criterion("The system shows the results to the user", "bullet")
        assert 8 <= rating.score < 11

    def test_vague_outcome(self):
        rating = score_single_criterion("The user can access the features easily", "bullet")
        assert 6 <= rating.score < 11

    def test_missing_prefix(self):
        rating = score_single_criterion("Validation errors are shown to users when they make mistakes", "bullet")
        assert rating.score == 7
        assert rating.grade == "Fair"

    def test_brief(self):
        assert score_single_criterion("Error messages appear", "bullet").score < 8

    def test_vague(self):
        rating = score_single_criterion("It should basically work", "bullet")
        assert rating.score < 6
        assert rating.grade == "Needs work"
        assert "system" in rating.feedback

    def test_too_brief(self):
        assert score_single_criterion("Works fine", "bullet").score < 6

    def test_probably(self):
        rating = score_single_criterion("The system should probably handle errors correctly", "bullet")
        assert rating.score < 8
        assert rating.feedback

    def test_gherkin_text_when_bullet_expected(self):
        rating = score_single_criterion("Given something When something Then something", "bullet")
        assert "system" in rating.feedback

    def test_short_prefix_with_obligation(self):
        assert score_single_criterion("System must validate all input fields before submission", "bullet").score >= 8


class TestAlignment:
    def test_neutral_without_story_value(self):
        rating = score_single_criterion("The system displays the report", "bullet")
        assert rating.breakdown["alignment"].score == 1

    def test_shared_value_verb(self):
        rating = score_single_criterion(
            "The system displays the report to reduce manual steps",
            "bullet",
            story_value="we reduce manual effort",
        )
        assert rating.breakdown["alignment"].score == 2

    def test_unrelated_to_value(self):
        rating = score_single_criterion(
            "The system displays the report",
            "bullet",
            story_value="we reduce manual effort",
        )
        assert rating.breakdown["alignment"].score == 1
        assert "reduce" in rating.feedback

    def test_formats_differ(self):
        gherkin = score_single_criterion("Given a user\nWhen they click\nThen a message appears", "gherkin")
        bullet = score_single_criterion("The system displays a message when the user clicks", "bullet")
        assert gherkin.score > 0
        assert bullet.score > 0
