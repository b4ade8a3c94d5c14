import json
from pathlib import Path
from typing import Dict, List, Optional

from loguru import logger

from .errors import InputFileError
from .scoring import CriteriaFormat, combined_summary, score_criteria, score_story
from .utils.progress import score_with_progress


TEXT_FIELDS = ("as_a", "i_want", "so_that", "format")


def check_record(record: Dict) -> Optional[str]:
    """Describe the first malformed field of a batch record, or None."""
    for field in TEXT_FIELDS:
        value = record.get(field)
        if value is not None and not isinstance(value, str):
            return f'Field "{field}" must be text'

    criteria = record.get("criteria")
    if criteria is None or isinstance(criteria, str):
        return None
    if not isinstance(criteria, list) or not all(isinstance(c, str) for c in criteria):
        return 'Field "criteria" must be a string or a list of strings'
    return None


def read_stories(input_file: Path) -> List[Dict]:
    """Read one story object per line. Blank lines are skipped."""
    input_file = Path(input_file)
    if not input_file.exists():
        raise InputFileError(f"Input file not found: {input_file}")

    records = []
    try:
        with open(input_file, 'r', encoding='utf-8') as f:
            for line_no, line in enumerate(f, start=1):
                if not line.strip():
                    continue
                try:
                    record = json.loads(line)
                except json.JSONDecodeError as e:
                    raise InputFileError(f"Invalid JSON at {input_file}:{line_no}: {e}") from e
                if not isinstance(record, dict):
                    raise InputFileError(f"Expected an object at {input_file}:{line_no}")
                problem = check_record(record)
                if problem:
                    raise InputFileError(f"{problem} at {input_file}:{line_no}")
                records.append(record)
    except UnicodeDecodeError as e:
        raise InputFileError(f"Input file is not valid UTF-8: {input_file}: {e}") from e
    except OSError as e:
        raise InputFileError(f"Cannot read input file {input_file}: {e}") from e

    return records


def score_record(record: Dict, default_format: CriteriaFormat = CriteriaFormat.GHERKIN) -> Dict:
    """Score one batch record. Criteria are optional; malformed fields score as blank."""
    story = score_story(record)
    scored = {
        "as_a": record.get("as_a", ""),
        "i_want": record.get("i_want", ""),
        "so_that": record.get("so_that", ""),
        "story": story.model_dump(),
    }

    criteria = record.get("criteria")
    if criteria:
        if isinstance(criteria, str):
            criteria = [criteria]
        fmt = CriteriaFormat.parse(record.get("format") or default_format)
        result = score_criteria(criteria, record.get("so_that") or "", fmt)
        scored["criteria"] = result.model_dump()
        scored["summary"] = combined_summary(story.total_score, result.total_score).model_dump()

    return scored


def score_file(
    input_file: Path,
    output_file: Path,
    default_format: CriteriaFormat = CriteriaFormat.GHERKIN,
) -> int:
    """Score every story in a JSONL file and write the results as JSONL."""
    logger.info(f"Reading: {input_file}")
    records = read_stories(input_file)

    results = score_with_progress(
        records,
        lambda record: score_record(record, default_format),
        description="Scoring stories...",
        total=len(records),
    )

    output_file = Path(output_file)
    output_file.parent.mkdir(parents=True, exist_ok=True)
    with open(output_file, 'w', encoding='utf-8') as f:
        for result in results:
            json.dump(result, f, ensure_ascii=False)
            f.write('\n')

    logger.success(f"Scored {len(results)} stories")
    return len(results)
