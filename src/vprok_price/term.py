from __future__ import annotations

import io
from collections.abc import Sequence
from contextvars import ContextVar

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

# Context variable for activity log
_activity_log: ContextVar[ActivityLog | None] = ContextVar("activity_log", default=None)


def activity_log() -> ActivityLog:
  """Get the current ActivityLog instance from context, creating a quiet one if unset."""
  log = _activity_log.get()
  if log is None:
    log = ActivityLog()
    _activity_log.set(log)
  return log


def set_activity_log(log: ActivityLog) -> None:
  """Set the ActivityLog instance for the current context."""
  _activity_log.set(log)


class CategoryLogger:
  """Prefixed logger delegate for a specific category."""

  def __init__(self, console: Console, prefix: str | None, *, verbose: bool = False) -> None:
    self._console = console
    self._prefix = prefix
    self._verbose = verbose

  @property
  def verbose(self) -> bool:
    return self._verbose

  def _emit(self, style: str, message: str) -> None:
    if self._prefix:
      self._console.print(f"[{style}]\\[{self._prefix}] {escape(message)}[/{style}]")
    else:
      self._console.print(f"[{style}]{escape(message)}[/{style}]")

  def operation(self, message: str) -> None:
    """Log an operation in progress (cyan)."""
    self._emit("cyan", message)

  def success(self, message: str) -> None:
    """Log a successful completion (green)."""
    self._emit("green", message)

  def warning(self, message: str) -> None:
    """Log a warning or unusual state (yellow)."""
    self._emit("yellow", message)

  def failure(self, message: str) -> None:
    """Log an error or failure (red)."""
    self._emit("red", message)

  def debug(self, message: str) -> None:
    """Log debug information (white). Dropped unless verbose."""
    if self._verbose:
      self._emit("white", message)

  def trace(self, message: str) -> None:
    """Log low-level debug information (grey70). Dropped unless verbose."""
    if self._verbose:
      self._emit("grey70", message)


class ActivityLog:
  """Terminal logger with per-category prefixes.

  `verbose` replaces a module-wide debug switch: debug and trace lines are only
  printed by logs constructed with `verbose=True`.
  """

  def __init__(self, *, verbose: bool = False, console: Console | None = None) -> None:
    self._console = console or Console()
    self._verbose = verbose

    # Static category loggers
    self.parser = CategoryLogger(self._console, "parser", verbose=verbose)
    self.normalizer = CategoryLogger(self._console, "normalizer", verbose=verbose)
    self.catalog = CategoryLogger(self._console, "catalog", verbose=verbose)

  @property
  def verbose(self) -> bool:
    return self._verbose

  @property
  def console(self) -> Console:
    return self._console

  def prefix(self, name: str | None) -> CategoryLogger:
    """Create a logger with a custom prefix."""
    return CategoryLogger(self._console, name, verbose=self._verbose)

  def print_table(self, table: Table) -> None:
    self._console.print(table)


def render_light_table(rows: Sequence[tuple[str, object]], *, title: str | None = None) -> str:
  """Render lightweight two-column table text for key/value diagnostics."""
  table = Table(
    show_header=False,
    show_edge=False,
    box=box.MINIMAL,
    expand=False,
    pad_edge=False,
  )
  table.add_column(justify="right", style="cyan", no_wrap=True, ratio=1)
  table.add_column(style="white", ratio=3)
  for key, value in rows:
    table.add_row(str(key), "" if value is None else str(value))

  console = Console(record=True, file=io.StringIO())
  if title:
    console.print(f"[bold]{escape(title)}[/bold]")
  console.print(table)
  return console.export_text().rstrip()
