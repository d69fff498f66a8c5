"""
Right-of-way referee CLI.

Commands:
    referee   Interactive loop: answer prompts, get the call
    call      Replay choice ids and print the resulting call
    choices   List the legal choices after an optional prefix of choices
"""

import logging

import click

from rightofway import config
from rightofway.engine.errors import InvalidChoiceError, MalformedPhraseError
from rightofway.engine.phrase import PhraseEngine

logger = logging.getLogger(__name__)


def setup_logging(debug: bool = False) -> None:
    """Configure the root logger to write to stderr.

    Only warnings reach the console by default so log lines do not get
    mixed into the interactive prompts.
    """
    level = logging.DEBUG if debug else config.get_log_level(default="WARNING")
    config.setup_logging(level)


def _replay(choices: tuple[str, ...]) -> PhraseEngine:
    """Replay choices, turning engine errors into click errors."""
    try:
        return PhraseEngine.replay(choices)
    except InvalidChoiceError as e:
        raise click.UsageError(str(e))
    except MalformedPhraseError as e:
        raise click.ClickException(e.message)


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(debug: bool):
    """Build fencing referee calls from the actions of a phrase."""
    setup_logging(debug=debug)


@main.command()
def referee():
    """Answer prompts one at a time and get the referee call."""
    engine = PhraseEngine()
    logger.debug("Interactive referee started")

    while True:
        _play_phrase(engine)
        if not click.confirm("Call another phrase?", default=True):
            break
        engine.reset()


def _play_phrase(engine: PhraseEngine) -> None:
    """Prompt until the phrase is complete or turns out malformed."""
    while not engine.is_done():
        snapshot = engine.snapshot()
        click.echo()
        click.echo(f"Current priority: {snapshot.priority.value.capitalize()}")
        click.echo(snapshot.prompt)
        for number, choice in enumerate(snapshot.choices, start=1):
            click.echo(f"  {number}. {choice.label}")

        index = click.prompt("Choice", type=click.IntRange(1, len(snapshot.choices)))
        try:
            snapshot = engine.submit_choice(snapshot.choices[index - 1].id)
        except MalformedPhraseError as e:
            click.secho(f"Error: {e.message}", fg="red")
            return

        if not snapshot.done:
            click.echo(f"Referee calls: {snapshot.call}")

    click.secho(engine.current_prompt(), bold=True)


@main.command()
@click.argument("choices", nargs=-1, required=True)
def call(choices: tuple[str, ...]):
    """Replay CHOICES (e.g. attack-left parried riposte-yes arrives) and print the call."""
    engine = _replay(choices)
    click.echo(engine.rendered_call())

    if not engine.is_done():
        click.echo(f"Phrase incomplete. {engine.current_prompt()}")
        legal = ", ".join(choice.value for choice in engine.legal_choice_ids())
        click.echo(f"Next choices: {legal}")


@main.command()
@click.argument("choices", nargs=-1)
def choices(choices: tuple[str, ...]):
    """List the legal choices after replaying CHOICES (none: the opening)."""
    engine = _replay(choices)
    click.echo(engine.current_prompt())
    for choice in engine.legal_choices():
        click.echo(f"  {choice.id.value:<20} {choice.label}")


if __name__ == "__main__":
    main()
