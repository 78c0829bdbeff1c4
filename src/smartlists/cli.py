"""smartlists CLI - smart list queries over a todo store."""

import json
import logging
import sys
from datetime import date

import click

from .adapters.json_store import ReadOnlyListError, StoreError
from .config import load_config
from .core.filters import DateRange, DateRangeType, ListFilter, SortCriteria, TodoStatus
from .core.summary import format_todo_line, todo_to_json
from .core.todos import Priority, Todo
from .workflows import (
    ListNotFoundError,
    create_custom_list,
    delete_custom_list,
    edit_custom_list,
    list_overview,
    run_query,
    run_search,
    show_list,
)

ERRORS = (StoreError, ReadOnlyListError, ListNotFoundError)


def _choice(enum_cls) -> click.Choice:
    return click.Choice([m.name for m in enum_cls], case_sensitive=False)


def _as_of(today) -> date | None:
    return today.date() if today else None


def filter_options(f):
    """Attach the ListFilter options shared by `filter` and `add-list`."""
    options = [
        click.option("--priority", "priorities", multiple=True, type=_choice(Priority), help="Include priority (repeatable)"),
        click.option("--tag", "tags", multiple=True, help="Include todos with this tag (repeatable)"),
        click.option("--range", "range_type", type=_choice(DateRangeType), help="Due date range"),
        click.option("--start", help="CUSTOM range start (YYYY-MM-DD)"),
        click.option("--end", help="CUSTOM range end (YYYY-MM-DD)"),
        click.option("--status", "statuses", multiple=True, type=_choice(TodoStatus), help="Include status (repeatable)"),
        click.option("--goal", "goal_ids", multiple=True, help="Include goal id (repeatable)"),
        click.option("--has-subtasks/--no-subtasks", default=None, help="Require (or exclude) subtasks"),
        click.option("--has-due/--no-due", "has_due_date", default=None, help="Require (or exclude) a due date"),
        click.option("--recurring/--not-recurring", "is_recurring", default=None, help="Require (or exclude) recurrence"),
        click.option("--sort", "sort_by", type=_choice(SortCriteria), help="Sort criterion"),
    ]
    for option in reversed(options):
        f = option(f)
    return f


def build_filter(
    priorities=(),
    tags=(),
    range_type=None,
    start=None,
    end=None,
    statuses=(),
    goal_ids=(),
    has_subtasks=None,
    has_due_date=None,
    is_recurring=None,
) -> ListFilter:
    """Translate CLI option values into a ListFilter."""
    date_range = None
    if range_type or start or end:
        kind = DateRangeType[range_type.upper()] if range_type else DateRangeType.CUSTOM
        date_range = DateRange(type=kind, start=start, end=end)
    return ListFilter(
        priorities=frozenset(Priority[p.upper()] for p in priorities),
        tags=frozenset(tags),
        date_range=date_range,
        status=frozenset(TodoStatus[s.upper()] for s in statuses),
        goal_ids=frozenset(goal_ids),
        has_subtasks=has_subtasks,
        has_due_date=has_due_date,
        is_recurring=is_recurring,
    )


def _show_todos(todos: list[Todo], as_json: bool, as_of: date | None, empty_msg: str = "No todos.") -> None:
    """Shared todo display logic."""
    if as_json:
        click.echo(json.dumps([todo_to_json(t, as_of) for t in todos], indent=2, ensure_ascii=False))
        return

    if not todos:
        click.echo(empty_msg)
        return

    for todo in todos:
        click.echo(format_todo_line(todo, as_of))


@click.group()
@click.version_option(package_name="smartlists")
@click.pass_context
def main(ctx):
    """smartlists - filter and sort your todos."""
    config = load_config()
    logging.basicConfig(level=config.log_level, format="%(levelname)s %(name)s: %(message)s")
    ctx.obj = config


@main.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.option("--today", type=click.DateTime(formats=["%Y-%m-%d"]), help="Evaluate as of this date")
@click.pass_obj
def lists(config, as_json: bool, today):
    """List system and custom smart lists with counts."""
    try:
        summaries = list_overview(config, _as_of(today))
    except ERRORS as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if as_json:
        click.echo(
            json.dumps(
                [{**s.smart_list.to_dict(), "count": s.count} for s in summaries],
                indent=2,
                ensure_ascii=False,
            )
        )
    else:
        for summary in summaries:
            click.echo(summary.format())


@main.command()
@click.argument("list_id")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.option("--today", type=click.DateTime(formats=["%Y-%m-%d"]), help="Evaluate as of this date")
@click.pass_obj
def show(config, list_id: str, as_json: bool, today):
    """Show the todos in a smart list."""
    as_of = _as_of(today)
    try:
        smart_list, todos = show_list(config, list_id, as_of)
    except ERRORS as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if not as_json:
        click.echo(f"### {smart_list.icon} {smart_list.name}")
    _show_todos(todos, as_json, as_of, "No todos in this list.")


@main.command()
@click.argument("query")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_obj
def search(config, query: str, as_json: bool):
    """Search titles, descriptions, notes and tags."""
    try:
        todos = run_search(config, query)
    except ERRORS as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    _show_todos(todos, as_json, None, "No matches.")


@main.command("filter")
@filter_options
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.option("--today", type=click.DateTime(formats=["%Y-%m-%d"]), help="Evaluate as of this date")
@click.pass_obj
def filter_cmd(config, sort_by, as_json: bool, today, **criteria):
    """Run an ad-hoc filter over all todos."""
    as_of = _as_of(today)
    sort = SortCriteria[sort_by.upper()] if sort_by else None
    try:
        todos = run_query(config, build_filter(**criteria), sort, as_of)
    except ERRORS as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    _show_todos(todos, as_json, as_of, "No matching todos.")


@main.command("add-list")
@click.argument("name")
@filter_options
@click.option("--icon", default="📋", help="List icon")
@click.option("--color", default="#3182F6", help="List color")
@click.pass_obj
def add_list(config, name: str, sort_by, icon: str, color: str, **criteria):
    """Create a custom smart list."""
    sort = SortCriteria[sort_by.upper()] if sort_by else None
    try:
        smart_list = create_custom_list(config, name, build_filter(**criteria), sort, icon, color)
    except ERRORS as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(f"Created {smart_list.icon} {smart_list.name} [{smart_list.id}]")


@main.command("edit-list")
@click.argument("list_id")
@click.option("--name", help="New list name")
@click.option("--icon", help="New list icon")
@click.option("--color", help="New list color")
@click.option("--sort", "sort_by", type=_choice(SortCriteria), help="New sort criterion")
@click.pass_obj
def edit_list(config, list_id: str, name, icon, color, sort_by):
    """Rename or restyle a custom smart list."""
    sort = SortCriteria[sort_by.upper()] if sort_by else None
    try:
        smart_list = edit_custom_list(config, list_id, name=name, icon=icon, color=color, sort_by=sort)
    except ERRORS as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(f"Updated {smart_list.icon} {smart_list.name} [{smart_list.id}]")


@main.command("delete-list")
@click.argument("list_id")
@click.pass_obj
def delete_list(config, list_id: str):
    """Delete a custom smart list."""
    try:
        delete_custom_list(config, list_id)
    except ERRORS as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(f"Deleted {list_id}")


if __name__ == "__main__":
    main()
