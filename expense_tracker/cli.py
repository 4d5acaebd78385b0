"""
Command Line Entry Point

Usage:
    expense add 3.29 "Coffee"        # record an expense dated today
    expense list                     # list all expenses, oldest first
    expense search coff              # case-insensitive memo search
    expense delete 3                 # remove expense number 3
    expense clear                    # remove everything (asks first)
    expense                          # show help

Exit status is 0 on success or help, 1 on any user-facing error.
"""

from typing import Optional

import click

from expense_tracker.audit import configure_logging
from expense_tracker.config import get_settings
from expense_tracker.errors import ExpenseTrackerError
from expense_tracker.orchestrator import create_app_components


def read_keypress(prompt: str) -> str:
    """Show the prompt and wait for a single key, no Enter needed."""
    click.echo(prompt)
    return click.getchar()


@click.command(
    context_settings={
        "ignore_unknown_options": True,
        "help_option_names": [],
    },
)
@click.argument("command", required=False)
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def main(ctx: click.Context, command: Optional[str], args: tuple[str, ...]) -> None:
    """An expense recording system."""
    configure_logging(get_settings().app.log_level)
    
    dispatcher, storage = create_app_components(read_key=read_keypress)
    try:
        output = dispatcher.dispatch(command, args)
    except ExpenseTrackerError as e:
        if e.message:
            click.echo(e.message, err=True)
        ctx.exit(e.exit_code)
    finally:
        storage.close()
    
    if output:
        click.echo(output)


if __name__ == "__main__":
    main()
