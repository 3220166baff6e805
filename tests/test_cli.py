from __future__ import annotations

import argparse
import logging
import sys
from typing import Any

import pytest
from rich.console import Console

from mapsync import (
    AuthenticationError,
    CollectionChanges,
    ConfigError,
    ProviderError,
    SourceDataError,
    SyncConfig,
    SyncError,
    SyncResult,
)
from mapsync.cli import _format_summary, _run_dump, _run_sync, build_parser, main
from mapsync.contracts.canonical import VocabularyItem
from mapsync.contracts.item import CollectionItem, RemoteEntry


def _make_config() -> SyncConfig:
    return SyncConfig(collection_id="maps-col", api_token="token")


def _make_args(*, dry_run: bool, verbose: bool = False) -> argparse.Namespace:
    return argparse.Namespace(
        command="sync",
        dry_run=dry_run,
        map_list="map_list.yaml",
        cdn_maps=None,
        maps_metadata=None,
        verbose=verbose,
    )


def _make_result(*, dry_run: bool) -> SyncResult:
    return SyncResult(
        maps=CollectionChanges(added=["Comet Catcher Redux"], updated=["Red Comet"], published=2),
        tags=CollectionChanges(removed=["OLD"]),
        dry_run=dry_run,
    )


def test_build_parser_requires_subcommand() -> None:
    parser = build_parser()

    with pytest.raises(SystemExit) as exc:
        parser.parse_args([])

    assert exc.value.code == 2


def test_build_parser_sync_defaults() -> None:
    args = build_parser().parse_args(["sync"])

    assert args.command == "sync"
    assert args.dry_run is False
    assert args.verbose is False
    assert args.map_list is None


def test_build_parser_sync_accepts_short_flags() -> None:
    args = build_parser().parse_args(["sync", "-d", "-v", "--map-list", "data/map_list.yaml"])

    assert args.dry_run is True
    assert args.verbose is True
    assert args.map_list == "data/map_list.yaml"


def test_build_parser_dump_data() -> None:
    args = build_parser().parse_args(["dump-data"])

    assert args.command == "dump-data"


def test_build_parser_version_prints_and_exits(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc:
        build_parser().parse_args(["--version"])

    assert exc.value.code == 0
    assert "mapsync" in capsys.readouterr().out


@pytest.mark.asyncio
async def test_run_sync_delegates_to_sdk(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    config = _make_config()
    result = _make_result(dry_run=True)
    seen: dict[str, Any] = {}

    class _FakeSDK:
        def __init__(self, *, config: SyncConfig, progress: object = None) -> None:
            seen["config"] = config
            seen["progress"] = progress

        async def sync(self, *, dry_run: bool) -> SyncResult:
            assert dry_run is True
            return result

    def _fake_load_config(**overrides: Any) -> SyncConfig:
        seen["overrides"] = overrides
        return config

    monkeypatch.setattr("mapsync.cli.load_config", _fake_load_config)
    monkeypatch.setattr("mapsync.cli.MapSync", _FakeSDK)

    actual = await _run_sync(_make_args(dry_run=True))

    assert actual == result
    assert seen["config"] == config
    assert seen["progress"] is not None
    assert seen["overrides"] == {"map_list_path": "map_list.yaml", "cdn_maps_path": None, "maps_metadata_path": None}
    assert "sync complete (dry-run)" in capsys.readouterr().out


@pytest.mark.asyncio
async def test_run_sync_verbose_skips_progress_and_logs_debug(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, Any] = {}

    class _FakeSDK:
        def __init__(self, *, config: SyncConfig, progress: object = None) -> None:
            captured["progress"] = progress

        async def sync(self, *, dry_run: bool) -> SyncResult:
            return _make_result(dry_run=False)

    def _fake_basic_config(**kwargs: object) -> None:
        captured.update(kwargs)

    monkeypatch.setattr("mapsync.cli.load_config", lambda **_: _make_config())
    monkeypatch.setattr("mapsync.cli.MapSync", _FakeSDK)
    monkeypatch.setattr("mapsync.cli.common.logging.basicConfig", _fake_basic_config)

    await _run_sync(_make_args(dry_run=False, verbose=True))

    assert captured["progress"] is None
    assert captured["level"] == logging.DEBUG
    assert captured["stream"] == sys.stderr


@pytest.mark.asyncio
async def test_run_dump_prints_each_collection(monkeypatch: pytest.MonkeyPatch) -> None:
    tag = CollectionItem(id="item-1", field_data={"name": "TEAM", "slug": "team"})

    class _FakeSDK:
        def __init__(self, *, config: SyncConfig) -> None:
            pass

        async def dump(self) -> dict[str, dict[str, RemoteEntry[Any]]]:
            return {
                "maps": {},
                "tags": {"team": RemoteEntry(item=tag, record=VocabularyItem(name="TEAM", slug="team"))},
                "terrains": {},
            }

    monkeypatch.setattr("mapsync.cli.load_config", lambda **_: _make_config())
    monkeypatch.setattr("mapsync.cli.MapSync", _FakeSDK)
    console = Console(record=True, width=120)

    await _run_dump(argparse.Namespace(command="dump-data", verbose=False), console=console)

    output = console.export_text()
    assert "maps (0)" in output
    assert "tags (1)" in output
    assert "item-1" in output
    assert "terrains (0)" in output


@pytest.mark.parametrize("argv", [["sync", "--dry-run"], ["dump-data"]])
def test_main_returns_zero_on_success(monkeypatch: pytest.MonkeyPatch, argv: list[str]) -> None:
    monkeypatch.setattr("mapsync.cli.asyncio.run", lambda coro: coro.close())

    assert main(argv) == 0


@pytest.mark.parametrize(
    ("error", "exit_code"),
    [
        (ConfigError("bad config"), 3),
        (SourceDataError("bad map list"), 3),
        (AuthenticationError("auth failed"), 4),
        (ProviderError("provider failed"), 4),
        (SyncError("sync failed"), 5),
        (RuntimeError("boom"), 1),
    ],
)
def test_main_maps_errors_to_exit_codes(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
    error: Exception,
    exit_code: int,
) -> None:
    def _raise(coro: Any) -> None:
        coro.close()
        raise error

    monkeypatch.setattr("mapsync.cli.asyncio.run", _raise)

    actual = main(["sync", "--dry-run"])

    assert actual == exit_code
    captured = capsys.readouterr()
    assert "error:" in captured.err
    assert str(error) in captured.err


def test_main_prints_provider_error_body(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    error = ProviderError("POST /collections/maps-col/items returned HTTP 400", status_code=400, body={"code": "bad"})

    def _raise(coro: Any) -> None:
        coro.close()
        raise error

    monkeypatch.setattr("mapsync.cli.asyncio.run", _raise)

    assert main(["sync"]) == 4
    assert "{'code': 'bad'}" in capsys.readouterr().err


def test_format_summary_lists_changes_per_collection() -> None:
    summary = _format_summary(_make_result(dry_run=False))

    assert "mapsync - sync complete (apply)" in summary
    assert "    Added:     Comet Catcher Redux" in summary
    assert "    Updated:   Red Comet" in summary
    assert "    Removed:   OLD" in summary
    assert "    Published: 2" in summary
    assert "[dry-run]" not in summary
    assert "all items up to date" not in summary


def test_format_summary_reports_up_to_date_dry_run() -> None:
    summary = _format_summary(SyncResult(dry_run=True))

    assert "sync complete (dry-run)" in summary
    assert "    Added:     none" in summary
    assert "  Status:    all items up to date" in summary
    assert "  [dry-run] No changes were made" in summary
