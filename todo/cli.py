"""Todo CLI: map argv onto command handlers and report their outcomes."""

import re

import typer
import yaml
from typer.core import TyperCommand, TyperGroup

from todo import commands, config
from todo.commands import Outcome
from todo.format import HELP_TEXT
from todo.logs import setup_logging
from todo.store import TaskStore

FAILURE_EXIT = 1
USAGE_EXIT = 2
TASK_ID_RE = re.compile(r"[0-9]+")


def usage_error(message: str) -> None:
    """Echo the error and the usage text to stderr, then exit."""
    typer.echo(f"Error: {message}", err=True)
    typer.echo(HELP_TEXT, err=True)
    raise typer.Exit(USAGE_EXIT)


class TodoGroup(TyperGroup):
    """Report unknown commands with the usage text instead of the default error box."""

    def get_command(self, ctx, cmd_name):
        cmd = super().get_command(ctx, cmd_name)
        if cmd is None and not ctx.resilient_parsing:
            usage_error("No command or unknown command provided.")
        return cmd


class WordsCommand(TyperCommand):
    """Hand every word after the command name to the callback as ctx.args.

    No option parsing happens here, so "--", "--help" and "-1" are plain words.
    """

    def parse_args(self, ctx, args):
        ctx.args = list(args)
        return ctx.args


app = typer.Typer(
    cls=TodoGroup,
    invoke_without_command=True,
    no_args_is_help=False,
    add_completion=False,
    help="Track short tasks in a local JSON file.",
)


@app.callback(context_settings={"help_option_names": ["-h", "--help"]})
def main_callback(ctx: typer.Context):
    """Track short tasks in a local JSON file."""
    if ctx.obj is None:
        ctx.obj = {}

    if ctx.resilient_parsing:
        return

    if ctx.invoked_subcommand is None:
        usage_error("No command or unknown command provided.")


def _store(ctx: typer.Context) -> TaskStore:
    store = ctx.obj.get("store")
    if store is not None:
        return store
    try:
        setup_logging(config.logging_level())
        store = TaskStore(config.tasks_file())
    except (ValueError, yaml.YAMLError, OSError) as e:
        typer.echo(f"Invalid config: {e}", err=True)
        raise typer.Exit(FAILURE_EXIT) from e
    ctx.obj["store"] = store
    return store


def report(outcome: Outcome) -> None:
    for notice in outcome.notices:
        typer.echo(notice)
    if outcome.ok:
        typer.echo(outcome.message)
        return
    typer.echo(outcome.message, err=True)
    raise typer.Exit(FAILURE_EXIT)


def parse_task_id(command: str, words: list[str]) -> int:
    if not words:
        usage_error(f"'{command}' command requires a task ID.")
    if len(words) > 1:
        usage_error(f"'{command}' command takes exactly one task ID.")
    if not TASK_ID_RE.fullmatch(words[0]):
        usage_error("Invalid task ID. Please provide a number.")
    return int(words[0])


@app.command("add", cls=WordsCommand)
def add(ctx: typer.Context):
    """Add a new task: todo add <description...>"""
    description = " ".join(ctx.args)
    if not description.strip():
        usage_error("'add' command requires a description.")
    try:
        description.encode("utf-8")
    except UnicodeEncodeError:
        usage_error("Task description is not valid UTF-8.")
    report(commands.add(_store(ctx), description))


@app.command("list")
def list_cmd(ctx: typer.Context):
    """List all tasks."""
    report(commands.list_tasks(_store(ctx)))


@app.command("complete", cls=WordsCommand)
def complete(ctx: typer.Context):
    """Mark a task as completed by its ID: todo complete <id>"""
    tid = parse_task_id("complete", ctx.args)
    report(commands.complete(_store(ctx), tid))


@app.command("remove", cls=WordsCommand)
def remove(ctx: typer.Context):
    """Remove a task by its ID: todo remove <id>"""
    tid = parse_task_id("remove", ctx.args)
    report(commands.remove(_store(ctx), tid))


@app.command("clear")
def clear(ctx: typer.Context):
    """Clear all tasks after confirmation."""
    store = _store(ctx)
    try:
        answer = typer.prompt(commands.CONFIRM_PROMPT, default="", show_default=False)
    except typer.Abort:
        typer.echo()
        answer = None
    report(commands.clear(store, answer))


@app.command("help")
def help_cmd():
    """Show the usage text."""
    report(commands.show_help())


def main() -> None:
    app()
