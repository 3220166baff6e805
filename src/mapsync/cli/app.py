"""CLI app entrypoint and error mapping."""

from __future__ import annotations

import sys

from rich.console import Console
from rich.pretty import pretty_repr

from mapsync.contracts.exceptions import (
    AuthenticationError,
    ConfigError,
    ProviderError,
    SourceDataError,
    SyncError,
)


def _print_error(exc: BaseException) -> None:
    print(f"error: {exc}", file=sys.stderr)


def main(argv: list[str] | None = None) -> int:
    import mapsync.cli as cli

    parser = cli.build_parser()
    args = parser.parse_args(argv)

    try:
        if args.command == "sync":
            cli.asyncio.run(cli._run_sync(args))
        elif args.command == "dump-data":
            cli.asyncio.run(cli._run_dump(args))
        return 0
    except (ConfigError, SourceDataError) as exc:
        _print_error(exc)
        return 3
    except (AuthenticationError, ProviderError) as exc:
        _print_error(exc)
        if exc.body is not None:
            Console(stderr=True).print(pretty_repr(exc.body))
        return 4
    except SyncError as exc:
        _print_error(exc)
        return 5
    except Exception as exc:
        _print_error(exc)
        return 1


__all__ = ["main"]
