"""Tests for RichSyncProgress and NullSyncProgress."""

from __future__ import annotations

from rich.console import Console

from mapsync.cli.progress.rich import RichSyncProgress
from mapsync.engine.progress import NullSyncProgress, SyncProgress


class TestNullSyncProgress:
    """NullSyncProgress is a no-op implementation."""

    def test_implements_protocol(self) -> None:
        assert issubclass(NullSyncProgress, SyncProgress)

    def test_phase_lifecycle_is_noop(self) -> None:
        progress = NullSyncProgress()
        progress.phase_start("Discover", total=5)
        progress.item_done("Discover")
        progress.phase_error("Discover", RuntimeError("boom"))
        progress.phase_done("Discover")


class TestRichSyncProgress:
    """RichSyncProgress drives Rich progress bars."""

    def test_context_manager(self) -> None:
        progress = RichSyncProgress()
        with progress as p:
            assert p is progress

    def test_determinate_phase_completes(self) -> None:
        with RichSyncProgress(Console(record=True, width=100)) as progress:
            progress.phase_start("Maps", total=3)
            progress.item_done("Maps")
            progress.phase_done("Maps")

        task = progress._progress.tasks[0]
        assert task.completed == 3

    def test_indeterminate_phase_completes(self) -> None:
        with RichSyncProgress(Console(record=True, width=100)) as progress:
            progress.phase_start("Publish", total=None)
            progress.phase_done("Publish")

        task = progress._progress.tasks[0]
        assert (task.completed, task.total) == (1, 1)

    def test_phase_error_marks_task(self) -> None:
        with RichSyncProgress(Console(record=True, width=100)) as progress:
            progress.phase_start("Tags", total=4)
            progress.phase_error("Tags", RuntimeError("boom"))

        assert "Tags" in progress._progress.tasks[0].description
        assert "✗" in progress._progress.tasks[0].description

    def test_unknown_phase_is_noop(self) -> None:
        with RichSyncProgress() as progress:
            progress.item_done("Unknown")
            progress.phase_done("Unknown")
            progress.phase_error("Unknown", RuntimeError("boom"))

    def test_all_sync_phases_sequentially(self) -> None:
        with RichSyncProgress(Console(record=True, width=100)) as progress:
            for phase, total in [
                ("Discover", None),
                ("Tags", 2),
                ("Terrains", 1),
                ("Maps", 2),
                ("Publish", None),
                ("Cleanup", None),
            ]:
                progress.phase_start(phase, total=total)
                for _ in range(total or 0):
                    progress.item_done(phase)
                progress.phase_done(phase)

        assert len(progress._progress.tasks) == 6
