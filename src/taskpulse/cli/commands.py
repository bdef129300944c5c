# src/taskpulse/cli/commands.py

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from typing import cast

from ..tasks.task_api import TaskBoard
from ..tasks.task_models import DerivedTask, Metrics, Priority, TaskDraft, TaskStatus

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[TaskBoard, list[str]], str]
CommandHandler3 = Callable[[TaskBoard, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)

SHORT_ID_LEN = 8


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /list, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        board: TaskBoard,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(board, args, emit)

        h2 = cast(CommandHandler2, handler)
        return h2(board, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- parsing / formatting helpers ----


def parse_status(raw: str) -> TaskStatus:
    """Accept 'done', 'todo', 'in-progress', 'in_progress', 'In Progress'."""
    norm = raw.replace("-", " ").replace("_", " ").strip().lower()
    for s in TaskStatus:
        if s.value.lower() == norm:
            return s
    raise ValueError(f"unknown status: {raw!r}")


def parse_priority(raw: str) -> Priority:
    norm = raw.strip().lower()
    for p in Priority:
        if p.value.lower() == norm:
            return p
    raise ValueError(f"unknown priority: {raw!r}")


_FIELD_ALIASES = {
    "revenue": "revenue",
    "rev": "revenue",
    "time": "time_taken",
    "hours": "time_taken",
    "time_taken": "time_taken",
    "priority": "priority",
    "status": "status",
    "notes": "notes",
    "title": "title",
}


def parse_fields(args: list[str]) -> tuple[dict[str, object], list[str]]:
    """
    Split `key=value` tokens from free words.

    Free words right after `title=` or `notes=` continue that value, so
    `title=New Title` keeps both words.

    Returns (fields, words). Raises ValueError on a bad value.
    """
    fields: dict[str, object] = {}
    words: list[str] = []
    text_field: str | None = None
    for token in args:
        key, sep, value = token.partition("=")
        field = _FIELD_ALIASES.get(key.lower()) if sep else None
        if field is None:
            if text_field is not None:
                fields[text_field] = f"{fields[text_field]} {token}".strip()
            else:
                words.append(token)
            continue
        text_field = field if field in ("title", "notes") else None
        if field in ("revenue", "time_taken"):
            try:
                fields[field] = float(value)
            except ValueError:
                raise ValueError(f"{key} must be a number, got {value!r}") from None
        elif field == "status":
            fields[field] = parse_status(value)
        elif field == "priority":
            fields[field] = parse_priority(value)
        else:
            fields[field] = value.replace("_", " ") if field == "notes" else value
    return fields, words


def resolve_id(board: TaskBoard, token: str) -> str | None:
    """Full id or a unique id prefix -> full id."""
    if token in board.store:
        return token
    matches = [t.id for t in board.tasks if t.id.startswith(token)]
    return matches[0] if len(matches) == 1 else None


def format_derived(i: int, d: DerivedTask) -> str:
    t = d.task
    return (
        f"{i:>2}. [{t.id[:SHORT_ID_LEN]}] {t.title or '(untitled)'} | {t.status.value} | "
        f"{t.priority.value} | rev {t.revenue:.2f} / {t.time_taken:g}h | "
        f"ROI {d.roi:.2f} ({d.grade.value}, {d.time_value.value})"
    )


def format_metrics(m: Metrics) -> str:
    return (
        "Metrics:\n"
        f"  Tasks: {m.task_count} ({m.completed_count} done, {m.completion_rate_pct:.1f}%)\n"
        f"  Total revenue: {m.total_revenue:.2f}\n"
        f"  Total time: {m.total_time_taken:g}h\n"
        f"  Revenue/hour: {m.revenue_per_hour:.2f}\n"
        f"  Time efficiency: {m.time_efficiency_pct:.1f}%\n"
        f"  Average ROI: {m.average_roi:.2f}\n"
        f"  Grade: {m.performance_grade.value}"
    )


# ---- handlers ----


def cmd_help(board: TaskBoard, args: list[str]) -> str:
    return registry.build_help()


def cmd_status(board: TaskBoard, args: list[str]) -> str:
    loading = "loading" if board.loading else "ready"
    err = board.error or "none"
    undo = board.last_deleted.title if board.last_deleted is not None else "nothing"
    return (
        "Status:\n"
        f"  Board: {loading}\n"
        f"  Tasks: {len(board.store)}\n"
        f"  Last error: {err}\n"
        f"  Undo available for: {undo}\n"
        f"  Target revenue/hour: {board.target_rate:g}"
    )


def cmd_list(board: TaskBoard, args: list[str]) -> str:
    derived = board.derived_sorted
    if not derived:
        if board.loading and board.error is None:
            return "Loading tasks..."
        return "No tasks." if board.error is None else f"No tasks. ({board.error})"
    lines = ["Tasks (best first):"]
    lines.extend(format_derived(i, d) for i, d in enumerate(derived, start=1))
    return "\n".join(lines)


def cmd_metrics(board: TaskBoard, args: list[str]) -> str:
    return format_metrics(board.metrics)


def cmd_add(board: TaskBoard, args: list[str]) -> str:
    """
    /add <title words> [revenue=N] [time=H] [priority=Low|Medium|High] [status=todo|in-progress|done]
    """
    try:
        fields, words = parse_fields(args)
    except ValueError as e:
        return f"Cannot add task: {e}"

    title = str(fields.pop("title", "")) or " ".join(words)
    if not title:
        return "Usage: /add <title> [revenue=N] [time=H] [priority=P] [status=S] [notes=...]"

    draft = TaskDraft(
        title=title,
        revenue=cast(float, fields.get("revenue", 0.0)),
        time_taken=cast(float, fields.get("time_taken", 1.0)),
        priority=cast(Priority, fields.get("priority", Priority.MEDIUM)),
        status=cast(TaskStatus, fields.get("status", TaskStatus.TODO)),
        notes=cast("str | None", fields.get("notes")),
    )
    task = board.add_task(draft)
    return f"Added [{task.id[:SHORT_ID_LEN]}] {task.title}."


def cmd_update(board: TaskBoard, args: list[str]) -> str:
    """/update <id> key=value ..."""
    if len(args) < 2:
        return "Usage: /update <id> [title=..] [revenue=N] [time=H] [priority=P] [status=S] [notes=..]"

    task_id = resolve_id(board, args[0])
    if task_id is None:
        return f"No task matches id {args[0]!r}."

    try:
        fields, words = parse_fields(args[1:])
    except ValueError as e:
        return f"Cannot update task: {e}"
    if words:
        return f"Cannot update task: unexpected {' '.join(words)!r}. Use key=value pairs."
    if not fields:
        return "Nothing to update."

    task = board.update_task(task_id, **fields)
    if task is None:
        return f"No task matches id {args[0]!r}."
    return f"Updated [{task.id[:SHORT_ID_LEN]}] {task.title}."


def cmd_done(board: TaskBoard, args: list[str]) -> str:
    if not args:
        return "Usage: /done <id>"
    task_id = resolve_id(board, args[0])
    task = board.update_task(task_id, status=TaskStatus.DONE) if task_id else None
    if task is None:
        return f"No task matches id {args[0]!r}."
    return f"Marked done: {task.title}."


def cmd_delete(board: TaskBoard, args: list[str], emit: CommandEmitter | None = None) -> str:
    if not args:
        return "Usage: /delete <id>"
    task_id = resolve_id(board, args[0]) or args[0]
    task = board.delete_task(task_id)
    if task is None:
        return f"No task matches id {args[0]!r}. Nothing to undo."
    if emit is not None:
        emit("Use /undo to restore it, /dismiss to forget it.")
    return f"Deleted: {task.title}."


def cmd_undo(board: TaskBoard, args: list[str]) -> str:
    pending = board.last_deleted
    task = board.undo_delete()
    if task is None:
        return "Nothing to undo."
    if pending is not None and pending.id != task.id:
        return f"Restored: {task.title} as [{task.id[:SHORT_ID_LEN]}] (id {pending.id} was in use)."
    return f"Restored: {task.title}."


def cmd_dismiss(board: TaskBoard, args: list[str]) -> str:
    board.clear_last_deleted()
    return "Undo cleared."


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show board state (loading/error/undo).")
registry.register("list", cmd_list, help_text="List tasks, best performers first.", aliases=["ls"])
registry.register("metrics", cmd_metrics, help_text="Show aggregate metrics.", aliases=["m"])
registry.register("add", cmd_add, help_text="Add a task: /add <title> revenue=N time=H ...")
registry.register("update", cmd_update, help_text="Update a task: /update <id> key=value ...")
registry.register("done", cmd_done, help_text="Mark a task done: /done <id>.")
registry.register("delete", cmd_delete, help_text="Delete a task: /delete <id>.", aliases=["rm"])
registry.register("undo", cmd_undo, help_text="Restore the last deleted task.")
registry.register("dismiss", cmd_dismiss, help_text="Forget the last deleted task.")
