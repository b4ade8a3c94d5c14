import json

import pytest

from story_scorer.batch import read_stories, score_file, score_record
from story_scorer.errors import InputFileError
from story_scorer.scoring import CriteriaFormat, score_criteria


STORY = {
    "as_a": "operations manager",
    "i_want": "to automate nightly backup reports",
    "so_that": "I can reduce manual effort by 30% and increase delivery reliability for the team",
}


@pytest.fixture
def stories_file(tmp_path):
    path = tmp_path / "stories.jsonl"
    records = [
        STORY,
        dict(STORY, criteria=["The system must reduce manual steps"], format="bullet"),
        {"as_a": "user", "i_want": "feature"},
    ]
    path.write_text("\n".join(json.dumps(r) for r in records) + "\n\n")
    return path


class TestReadStories:
    def test_skips_blank_lines(self, stories_file):
        assert len(read_stories(stories_file)) == 3

    def test_missing_file(self, tmp_path):
        with pytest.raises(InputFileError):
            read_stories(tmp_path / "missing.jsonl")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "bad.jsonl"
        path.write_text('{"as_a": "user"}\nnot json\n')
        with pytest.raises(InputFileError, match=":2"):
            read_stories(path)

    def test_non_object_line(self, tmp_path):
        path = tmp_path / "bad.jsonl"
        path.write_text('["a", "b"]\n')
        with pytest.raises(InputFileError):
            read_stories(path)

    @pytest.mark.parametrize("record", [
        {"as_a": 5, "i_want": "a report", "so_that": "I can save time"},
        dict(STORY, criteria=[1, "Given a user"]),
        dict(STORY, criteria={"given": "a user"}),
        dict(STORY, format=3),
    ])
    def test_malformed_field(self, tmp_path, record):
        path = tmp_path / "bad.jsonl"
        path.write_text(json.dumps(STORY) + "\n" + json.dumps(record) + "\n")
        with pytest.raises(InputFileError, match=":2"):
            read_stories(path)

    def test_invalid_utf8(self, tmp_path):
        path = tmp_path / "bad.jsonl"
        path.write_bytes(b'\xff\xfe{"as_a": "user"}\n')
        with pytest.raises(InputFileError, match="UTF-8"):
            read_stories(path)

    def test_directory(self, tmp_path):
        with pytest.raises(InputFileError):
            read_stories(tmp_path)


class TestScoreRecord:
    def test_story_only(self):
        scored = score_record(STORY)
        assert scored["story"]["total_score"] == 54
        assert "criteria" not in scored

    def test_with_criteria(self):
        scored = score_record(dict(STORY, criteria=["The system must reduce manual steps"], format="bullet"))
        assert scored["criteria"]["criteria_count"] == 1
        assert scored["criteria"]["breakdown"]["alignment"] == 6
        assert scored["summary"]["combined_score"] == 54 + scored["criteria"]["total_score"]

    def test_single_string_criterion(self):
        scored = score_record(dict(STORY, criteria="Given a user"))
        assert scored["criteria"]["criteria_count"] == 1

    def test_malformed_fields_score_as_blank(self):
        scored = score_record({"as_a": 5, "i_want": "x", "so_that": "y", "criteria": [1, "Given a user"]})
        assert scored["story"]["total_score"] == 0
        assert scored["criteria"]["criteria_count"] == 1

    def test_null_format_uses_default(self):
        scored = score_record(dict(STORY, criteria=["The system must save"], format=None), CriteriaFormat.BULLET)
        expected = score_criteria(["The system must save"], STORY["so_that"], CriteriaFormat.BULLET)
        assert scored["criteria"]["total_score"] == expected.total_score


class TestScoreFile:
    def test_writes_one_line_per_story(self, stories_file, tmp_path):
        output = tmp_path / "out" / "scored.jsonl"
        assert score_file(stories_file, output) == 3

        lines = output.read_text().strip().splitlines()
        assert len(lines) == 3
        results = [json.loads(line) for line in lines]
        assert results[0]["story"]["total_score"] == 54
        assert results[2]["story"]["total_score"] == 0
