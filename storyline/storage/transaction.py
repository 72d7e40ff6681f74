"""Unit of work around mutable save/player records.

A unit stages writes and deletes in memory. Commit flushes them to disk;
rollback drops them, leaving the files exactly as they were before begin.

Units are not nestable: begin() while a unit is active raises RuntimeError.
Public service operations are wrapped with @transactional and share logic
through private, non-transactional core routines instead of calling each
other.

The active unit lives in a ContextVar, so concurrent requests (each handled
in its own task/context) never see each other's staged writes.
"""

import functools
import logging
import os
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from pathlib import Path
from typing import ParamSpec, TypeVar

from storyline.errors import StoryError, TransactionFailedError

logger = logging.getLogger(__name__)

P = ParamSpec("P")
R = TypeVar("R")


class UnitOfWork:
    def __init__(self) -> None:
        # path -> serialized JSON, or None for a staged delete
        self._pending: dict[Path, str | None] = {}

    def has_pending(self, path: Path) -> bool:
        return path in self._pending

    def pending_text(self, path: Path) -> str | None:
        return self._pending[path]

    def pending_in(self, directory: Path) -> list[tuple[Path, str | None]]:
        return [(p, t) for p, t in self._pending.items() if p.parent == directory]

    def stage_write(self, path: Path, text: str) -> None:
        self._pending[path] = text

    def stage_delete(self, path: Path) -> None:
        self._pending[path] = None

    def discard(self) -> None:
        self._pending.clear()

    def __len__(self) -> int:
        return len(self._pending)

    def flush(self) -> None:
        """Write every staged change to disk.

        New contents go to temp files first and each target's previous bytes
        are kept in memory. If any replace or delete fails, targets already
        touched get their previous bytes back before the error propagates.
        """
        temps: list[tuple[Path, Path]] = []
        try:
            for path, text in self._pending.items():
                if text is None:
                    continue
                tmp = path.with_name(f".{path.name}.tmp")
                tmp.write_text(text)
                temps.append((tmp, path))
        except OSError:
            for tmp, _ in temps:
                tmp.unlink(missing_ok=True)
            raise

        # None: the target did not exist before the commit
        backups = {path: path.read_bytes() if path.is_file() else None for path in self._pending}
        touched: list[Path] = []
        try:
            for tmp, path in temps:
                os.replace(tmp, path)
                touched.append(path)
            for path, text in self._pending.items():
                if text is None:
                    path.unlink(missing_ok=True)
                    touched.append(path)
        except OSError:
            logger.warning("Commit interrupted after %d of %d change(s); restoring", len(touched), len(self))
            for path in touched:
                _restore(path, backups[path])
            for tmp, path in temps:
                if path in touched:
                    continue
                tmp.unlink(missing_ok=True)
            raise
        self.discard()


def _restore(path: Path, content: bytes | None) -> None:
    if content is None:
        path.unlink(missing_ok=True)
    else:
        path.write_bytes(content)


_active: ContextVar[UnitOfWork | None] = ContextVar("storyline_unit_of_work", default=None)


def current_unit() -> UnitOfWork | None:
    return _active.get()


def begin() -> UnitOfWork:
    if _active.get() is not None:
        raise RuntimeError("A unit of work is already active; units cannot be nested")
    unit = UnitOfWork()
    _active.set(unit)
    return unit


def commit(unit: UnitOfWork) -> None:
    try:
        unit.flush()
    finally:
        _active.set(None)


def rollback(unit: UnitOfWork) -> None:
    if len(unit):
        logger.warning("Rolling back unit of work with %d staged change(s)", len(unit))
    unit.discard()
    _active.set(None)


@contextmanager
def transaction() -> Iterator[UnitOfWork]:
    """begin → body → commit, or rollback on any failure.

    StoryError subclasses propagate unchanged. Anything else, including a
    failed commit, surfaces as TransactionFailedError.
    """
    unit = begin()
    try:
        yield unit
    except StoryError:
        rollback(unit)
        raise
    except Exception as e:
        rollback(unit)
        raise TransactionFailedError(str(e)) from e
    try:
        commit(unit)
    except OSError as e:
        logger.warning("Commit failed: %s", e)
        raise TransactionFailedError(f"Commit failed: {e}") from e


def transactional(fn: Callable[P, R]) -> Callable[P, R]:
    """Run the decorated function as exactly one unit of work."""

    @functools.wraps(fn)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        with transaction():
            return fn(*args, **kwargs)

    return wrapper
