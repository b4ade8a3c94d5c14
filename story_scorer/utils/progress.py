from rich.progress import Progress, SpinnerColumn, TextColumn, BarColumn, TaskProgressColumn, TimeRemainingColumn
from typing import Iterable, Callable, Optional, List


def create_progress(description: str = "Scoring...", total: Optional[int] = None) -> Progress:
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        TimeRemainingColumn(),
        transient=True,
    )


def score_with_progress(
    items: Iterable,
    score_func: Callable,
    description: str = "Scoring...",
    total: Optional[int] = None,
) -> List:
    """Apply ``score_func`` to every item while showing a progress bar.

    Scoring never fails on text input, so errors raised here come from
    malformed records; they propagate to the caller.
    """
    results = []

    with create_progress(description, total=total) as progress:
        task_id = progress.add_task(description, total=total)

        for item in items:
            results.append(score_func(item))
            progress.update(task_id, advance=1)

    return results
