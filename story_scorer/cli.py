import click
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import __version__
from .config import Config
from .errors import StoryScorerError
from .gamification import CATALOG
from .history import JsonlHistoryRepository, PracticeSession, export_csv
from .scoring import (
    CriteriaFormat,
    StoryInput,
    combined_summary,
    detect_format,
    list_templates,
    score_criteria,
    score_single_criterion,
    score_so_that_statement,
    score_story,
)
from .scoring.criteria import CRITERIA_MAXIMA
from .scoring.story import STORY_MAXIMA
from .utils.logger import setup_logger

console = Console()

FORMAT_CHOICE = click.Choice([f.value for f in CriteriaFormat], case_sensitive=False)

# rich has no plain "orange"
GRADE_STYLES = {"green": "green", "blue": "blue", "yellow": "yellow", "orange": "dark_orange"}


def _breakdown_table(title: str, breakdown: dict, maxima: dict) -> Table:
    table = Table(title=title, min_width=40)
    table.add_column("Category")
    table.add_column("Score", justify="right")
    for category, score in breakdown.items():
        table.add_row(category.replace("_", " ").title(), f"{score}/{maxima.get(category, '?')}")
    return table


def _print_lines(heading: str, lines, style: str):
    if not lines:
        return
    console.print(f"[bold]{heading}[/bold]")
    for line in lines:
        console.print(f"  [{style}]•[/{style}] {escape(line)}")


def _session(ctx: click.Context) -> PracticeSession:
    config = ctx.obj['config']
    repository = JsonlHistoryRepository(config.scoring.history_path)
    return PracticeSession(repository, default_format=config.scoring.default_format)


@click.group()
@click.option('--config', '-c', type=click.Path(dir_okay=False), default='config.yaml',
              help='Path to configuration file')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.pass_context
def cli(ctx: click.Context, config: str, verbose: bool):
    """Story Scorer - Practice writing user stories and acceptance criteria."""
    ctx.ensure_object(dict)

    config_path = Path(config)
    if config_path.exists():
        try:
            ctx.obj['config'] = Config.from_yaml(config_path)
        except ValueError as e:
            raise click.ClickException(f"Invalid config {config_path}: {e}")
    else:
        ctx.obj['config'] = Config()

    log_level = "DEBUG" if verbose else ctx.obj['config'].log_level
    logger = setup_logger(log_level)
    ctx.obj['logger'] = logger

    logger.debug(f"Story Scorer v{__version__}")
    if config_path.exists():
        logger.debug(f"Config loaded from: {config_path}")


@cli.command()
@click.option('--as-a', 'as_a', required=True, help='Who the story is for')
@click.option('--i-want', 'i_want', required=True, help='What they want')
@click.option('--so-that', 'so_that', required=True, help='The value they get')
@click.option('--criterion', '-a', 'criteria', multiple=True, help='Acceptance criterion (repeatable)')
@click.option('--format', '-f', 'fmt', type=FORMAT_CHOICE, help='Criteria format')
@click.option('--record', is_flag=True, help='Save the round to the practice history')
@click.pass_context
def story(ctx: click.Context, as_a: str, i_want: str, so_that: str, criteria: tuple, fmt: str, record: bool):
    """Score a user story (and optionally its acceptance criteria)."""
    config = ctx.obj['config']
    logger = ctx.obj['logger']
    fmt = CriteriaFormat.parse(fmt) if fmt else config.scoring.default_format
    user_story = StoryInput(as_a=as_a, i_want=i_want, so_that=so_that)

    try:
        if record:
            result = _session(ctx).practice(user_story, list(criteria), fmt)
            story_result, criteria_result = result.story_result, result.criteria_result
        else:
            result = None
            story_result = score_story(user_story)
            criteria_result = score_criteria(list(criteria), so_that, fmt) if criteria else None
    except StoryScorerError as e:
        logger.error(f"Scoring failed: {e}")
        raise click.ClickException(str(e))

    console.print(_breakdown_table(f"Story score: {story_result.total_score}/55",
                                   story_result.breakdown, STORY_MAXIMA))
    _print_lines("Feedback", story_result.feedback, "green")
    _print_lines("Suggestions", story_result.suggestions, "yellow")

    if criteria_result is not None:
        console.print(_breakdown_table(f"Criteria score: {criteria_result.total_score}/55",
                                       criteria_result.breakdown, CRITERIA_MAXIMA))
        _print_lines("Criteria feedback", criteria_result.feedback, "green")
        _print_lines("Criteria suggestions", criteria_result.suggestions, "yellow")

        summary = combined_summary(story_result.total_score, criteria_result.total_score)
        console.print(f"[bold]Combined: {summary.combined_score}/{summary.max_score} "
                      f"({summary.percentage}%) {summary.grade}[/bold] - {summary.message}")

    if result is not None:
        for achievement in result.new_achievements:
            console.print(f"[magenta]Achievement unlocked:[/magenta] {achievement.name} - {achievement.description}")
        console.print(f"+{result.xp_gained} XP (total {result.total_xp}, "
                      f"level {result.progression.current_level.name})")


@cli.command('so-that')
@click.argument('text')
def so_that(text: str):
    """Rate a "so that" value statement as you type it."""
    rating = score_so_that_statement(text)
    if rating is None:
        raise click.ClickException("Nothing to rate: the statement is empty")

    style = GRADE_STYLES.get(rating.color, "bold")
    console.print(f"[{style}]{rating.grade}[/{style}] {rating.score}/{rating.max_score}")
    if rating.feedback:
        console.print(escape(rating.feedback))


@cli.command()
@click.option('--criterion', '-a', 'criteria', multiple=True, required=True, help='Acceptance criterion (repeatable)')
@click.option('--format', '-f', 'fmt', type=FORMAT_CHOICE, help='Criteria format')
@click.option('--story-value', '-s', default='', help='The story\'s "so that" text')
@click.pass_context
def criteria(ctx: click.Context, criteria: tuple, fmt: str, story_value: str):
    """Score a set of acceptance criteria."""
    fmt = CriteriaFormat.parse(fmt) if fmt else ctx.obj['config'].scoring.default_format
    result = score_criteria(list(criteria), story_value, fmt)

    detected = detect_format(list(criteria))
    if detected not in (fmt.value, "none"):
        console.print(f"[yellow]Declared {fmt.value} but the criteria look {detected}[/yellow]")

    console.print(_breakdown_table(f"Criteria score: {result.total_score}/55", result.breakdown, CRITERIA_MAXIMA))
    _print_lines("Feedback", result.feedback, "green")
    _print_lines("Suggestions", result.suggestions, "yellow")


@cli.command()
@click.argument('text')
@click.option('--format', '-f', 'fmt', type=FORMAT_CHOICE, help='Criteria format')
@click.option('--story-value', '-s', default='', help='The story\'s "so that" text')
@click.pass_context
def criterion(ctx: click.Context, text: str, fmt: str, story_value: str):
    """Rate a single acceptance criterion as you type it."""
    fmt = CriteriaFormat.parse(fmt) if fmt else ctx.obj['config'].scoring.default_format
    rating = score_single_criterion(text, fmt, story_value)
    if not rating.grade:
        raise click.ClickException("Nothing to rate: the criterion is empty")

    style = GRADE_STYLES.get(rating.color, "bold")
    console.print(f"[{style}]{rating.grade}[/{style}] {rating.score}/{rating.max_score}")
    for sub in rating.breakdown.values():
        console.print(f"  {sub.label}: {sub.score}/{sub.max_score}")
    if rating.feedback:
        console.print(escape(rating.feedback))


@cli.command()
@click.pass_context
def progress(ctx: click.Context):
    """Show XP, level and earned achievements."""
    logger = ctx.obj['logger']
    try:
        session = _session(ctx)
        total_xp = session.total_xp
        progression = session.progression
        earned = session.earned_achievements
        rounds = len(session.history)
    except StoryScorerError as e:
        logger.error(f"Loading history failed: {e}")
        raise click.ClickException(str(e))

    console.print(f"[bold]{progression.current_level.name}[/bold] - {total_xp} XP over {rounds} rounds")
    if progression.next_level is not None:
        console.print(f"{session.level_progress:.0f}% of the way to {progression.next_level.name} "
                      f"({progression.next_level.threshold} XP)")
    else:
        console.print("Maximum level reached")

    table = Table(title=f"Achievements ({len(earned)}/{len(CATALOG)})", min_width=40)
    table.add_column("Badge")
    table.add_column("Description")
    for achievement in earned:
        table.add_row(achievement.name, achievement.description)
    console.print(table)


@cli.command()
@click.option('--input', '-i', 'input_path', type=click.Path(exists=True, dir_okay=False), required=True,
              help='Input JSONL file of stories')
@click.option('--output', '-o', 'output_path', type=click.Path(), required=True, help='Output JSONL file')
@click.pass_context
def batch(ctx: click.Context, input_path: str, output_path: str):
    """Score a JSONL file of stories."""
    from .batch import score_file

    config = ctx.obj['config']
    logger = ctx.obj['logger']

    try:
        num = score_file(Path(input_path), Path(output_path), config.scoring.default_format)
    except StoryScorerError as e:
        logger.error(f"Batch scoring failed: {e}")
        raise click.ClickException(str(e))

    click.echo(f"Scored {num} stories -> {output_path}")


@cli.command()
@click.option('--format', '-f', 'fmt', type=FORMAT_CHOICE, help='Criteria format')
@click.pass_context
def templates(ctx: click.Context, fmt: str):
    """List starter acceptance-criteria templates."""
    fmt = CriteriaFormat.parse(fmt) if fmt else ctx.obj['config'].scoring.default_format
    for template in list_templates(fmt):
        console.print(f"[bold]{template.id}[/bold] - {template.label}")
        for text in template.criteria:
            console.print("  " + text.replace("\n", "\n  "), highlight=False)


@cli.command()
@click.option('--output', '-o', 'output_path', type=click.Path(), required=True, help='Output CSV file')
@click.pass_context
def export(ctx: click.Context, output_path: str):
    """Export the practice history as CSV."""
    logger = ctx.obj['logger']
    try:
        num = export_csv(_session(ctx).history, Path(output_path))
    except StoryScorerError as e:
        logger.error(f"Export failed: {e}")
        raise click.ClickException(str(e))

    click.echo(f"Exported {num} rounds -> {output_path}")


def main():
    cli()


if __name__ == '__main__':
    main()
