"""Rename engine orchestrating resolution, expansion, and renaming."""

from __future__ import annotations

import asyncio
import errno
import logging
import os
from pathlib import Path
from typing import Any, Callable, Collection, Iterable, Optional

from uuidify.config.models import UuidifyConfig
from uuidify.ingestion.drops import InputResolver
from uuidify.ingestion.expander import TreeExpander
from uuidify.ingestion.models import ExpansionResult, LeafFile
from uuidify.naming.generator import NameGenerator
from uuidify.naming.resolver import CollisionResolver

from .access import AccessProvider, NullAccessProvider, scoped_access
from .errors import BusyError
from .models import BatchResult, BatchState, ProgressEvent, RenamePlan, summarize

LOGGER = logging.getLogger(__name__)

IDLE_MESSAGE = "Drop files here to rename them to a random UUID"

ProgressCallback = Callable[[ProgressEvent], None]
Renamer = Callable[[Path, Path], Any]


class RenameEngine:
    """Run rename batches one at a time.

    A batch moves through ``RESOLVING``, ``EXPANDING`` and ``RENAMING`` before
    reaching ``DONE`` and returning to ``IDLE``. Only one batch may be active;
    requesting another raises :class:`BusyError` without touching the running
    one. Per-item rename failures are collected in the result and never abort
    the batch.
    """

    def __init__(
        self,
        *,
        resolver: InputResolver | None = None,
        expander: TreeExpander | None = None,
        collisions: CollisionResolver | None = None,
        access: AccessProvider | None = None,
        renamer: Renamer | None = None,
    ) -> None:
        """Initialize the engine with its collaborators.

        Args:
            resolver: Resolves drop handles into paths.
            expander: Expands resolved roots into leaf files.
            collisions: Produces collision-free target names.
            access: Grants scoped access to dropped roots.
            renamer: Filesystem rename primitive, ``os.rename`` by default.
        """
        self._resolver = resolver or InputResolver()
        self._expander = expander or TreeExpander()
        self._collisions = collisions or CollisionResolver()
        self._access: AccessProvider = access or NullAccessProvider()
        self._renamer: Renamer = renamer or os.rename
        self._state = BatchState.IDLE
        self._status = IDLE_MESSAGE

    @classmethod
    def from_config(
        cls,
        config: UuidifyConfig,
        *,
        access: AccessProvider | None = None,
    ) -> "RenameEngine":
        """Build an engine from loaded configuration."""
        generator = NameGenerator(uppercase=config.naming.uppercase)
        return cls(
            expander=TreeExpander(
                include_hidden=config.traversal.include_hidden,
                follow_symlinks=config.traversal.follow_symlinks,
            ),
            collisions=CollisionResolver(generator, max_attempts=config.naming.max_attempts),
            access=access,
        )

    # ------------------------------------------------------------------ #
    # Public API                                                         #
    # ------------------------------------------------------------------ #

    @property
    def state(self) -> BatchState:
        """Return the lifecycle state of the current batch."""
        return self._state

    @property
    def is_running(self) -> bool:
        """Return whether a batch is between claim and completion."""
        return self._state is not BatchState.IDLE

    @property
    def status(self) -> str:
        """Return the latest human-readable status line."""
        return self._status

    def start_batch(
        self,
        handles: Iterable[Any],
        *,
        progress: Optional[ProgressCallback] = None,
        dry_run: bool = False,
    ) -> "asyncio.Task[BatchResult]":
        """Schedule a batch on the running event loop.

        Args:
            handles: Drop handles supplied by the shell.
            progress: Optional callback receiving a :class:`ProgressEvent` after
                every rename attempt.
            dry_run: Plan names without renaming anything.

        Returns:
            asyncio.Task[BatchResult]: Task resolving to the batch report.

        Raises:
            BusyError: If a batch is already running.
            RuntimeError: If called outside a running event loop.
        """
        loop = asyncio.get_running_loop()
        self._claim()
        task = loop.create_task(self._run(list(handles), progress, dry_run))
        task.add_done_callback(self._release_if_cancelled)
        return task

    async def run_batch(
        self,
        handles: Iterable[Any],
        *,
        progress: Optional[ProgressCallback] = None,
        dry_run: bool = False,
    ) -> BatchResult:
        """Run a batch to completion and return its report.

        Args:
            handles: Drop handles supplied by the shell.
            progress: Optional callback receiving a :class:`ProgressEvent` after
                every rename attempt.
            dry_run: Plan names without renaming anything.

        Returns:
            BatchResult: Succeeded/failed names and the status message.

        Raises:
            BusyError: If a batch is already running.
        """
        self._claim()
        return await self._run(list(handles), progress, dry_run)

    # ------------------------------------------------------------------ #
    # Internal helpers                                                   #
    # ------------------------------------------------------------------ #

    def _claim(self) -> None:
        if self._state is not BatchState.IDLE:
            raise BusyError()
        self._state = BatchState.RESOLVING

    def _release_if_cancelled(self, task: "asyncio.Task[BatchResult]") -> None:
        # A task cancelled before its first step never reaches _run's finally.
        if task.cancelled():
            self._state = BatchState.IDLE

    async def _run(
        self,
        handles: list[Any],
        progress: Optional[ProgressCallback],
        dry_run: bool,
    ) -> BatchResult:
        try:
            self._state = BatchState.RESOLVING
            roots = await self._resolver.resolve(handles)
            if not roots:
                LOGGER.info("None of the %d dropped item(s) resolved to a path.", len(handles))
                return self._finish(BatchResult.empty(dry_run=dry_run))

            with scoped_access(self._access, roots):
                self._state = BatchState.EXPANDING
                expansion = await asyncio.to_thread(self._expander.expand, roots)
                if not expansion.leaves:
                    return self._finish(
                        BatchResult.empty(skipped=expansion.skipped, dry_run=dry_run)
                    )

                self._state = BatchState.RENAMING
                result = await self._rename_all(expansion, progress, dry_run)
                return self._finish(result)
        finally:
            self._state = BatchState.IDLE

    async def _rename_all(
        self,
        expansion: ExpansionResult,
        progress: Optional[ProgressCallback],
        dry_run: bool,
    ) -> BatchResult:
        leaves = expansion.leaves
        total = len(leaves)
        self._status = f"Renaming {total} item(s)"
        LOGGER.info("%s%s", self._status, " (dry run)" if dry_run else "")

        succeeded: list[str] = []
        failed: list[str] = []
        renamed: list[RenamePlan] = []
        errors: list[str] = []
        reserved: set[Path] = set()

        for index, leaf in enumerate(leaves, start=1):
            try:
                plan = await asyncio.to_thread(self._rename_leaf, leaf, reserved, dry_run)
            except OSError as exc:
                LOGGER.warning("Failed to rename %s: %s", leaf.path, exc)
                failed.append(leaf.name)
                errors.append(f"{leaf.path}: {exc}")
                ok = False
            else:
                LOGGER.debug("Renamed %s -> %s", plan.source, plan.destination_name)
                succeeded.append(leaf.name)
                renamed.append(plan)
                reserved.add(plan.destination)
                ok = True

            if progress is not None:
                progress(
                    ProgressEvent(
                        completed=index, total=total, current_name=leaf.name, succeeded=ok
                    )
                )
            await asyncio.sleep(0)

        return BatchResult(
            outcome="completed",
            message=summarize(len(succeeded), len(failed), dry_run=dry_run),
            succeeded=succeeded,
            failed=failed,
            renamed=renamed,
            errors=errors,
            skipped=expansion.skipped,
            dry_run=dry_run,
        )

    def _rename_leaf(self, leaf: LeafFile, reserved: Collection[Path], dry_run: bool) -> RenamePlan:
        destination = self._collisions.resolve(leaf.parent, leaf.extension, reserved=reserved)
        plan = RenamePlan(source=leaf.path, destination=destination)
        if dry_run:
            if not os.path.lexists(leaf.path):
                raise FileNotFoundError(errno.ENOENT, "Source path is missing", str(leaf.path))
            return plan

        # os.rename silently replaces on POSIX; refuse instead.
        if os.path.lexists(destination):
            raise FileExistsError(errno.EEXIST, "Destination already exists", str(destination))
        self._renamer(leaf.path, destination)
        return plan

    def _finish(self, result: BatchResult) -> BatchResult:
        self._state = BatchState.DONE
        self._status = result.message
        if result.outcome == "empty":
            LOGGER.info(result.message)
        else:
            LOGGER.info(
                "Batch finished: renamed=%d failed=%d skipped=%d",
                len(result.succeeded),
                len(result.failed),
                len(result.skipped),
            )
        return result


__all__ = ["IDLE_MESSAGE", "ProgressCallback", "RenameEngine"]
