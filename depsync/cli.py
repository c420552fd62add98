# Copyright 2026 Pramod Kumar Voola
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

# -----------------------------------------------------------------------------
# DEPSYNC - COMMAND LINE INTERFACE
# -----------------------------------------------------------------------------
# Usage:
#   depsync [--v-headers-root PATH] [--spirv-cross-root PATH]
#           [--glslang-root PATH] [-v]
#
# Path flags also accept the --flag=PATH form. An empty PATH is rejected.
# Short flags cannot be clustered: -v is the only one, and -vv is unsupported.
# Unknown flags abort with exit code 1 before anything on disk is touched.
# Stray positional arguments are ignored.
# -----------------------------------------------------------------------------

import argparse
import sys
from pathlib import Path

from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from depsync.core.synchronizer import DependencySynchronizer, SyncError, SyncReport
from depsync.domain.config import ConfigError, load_settings, resolve_root
from depsync.domain.models import SyncConfig

console = Console()
err_console = Console(stderr=True)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130


class UsageError(Exception):
    """Raised for an unsupported flag or a malformed flag value."""

    pass


class _FlagParser(argparse.ArgumentParser):
    """ArgumentParser that raises instead of exiting with status 2."""

    def error(self, message: str) -> None:
        raise UsageError(message)


def _override_path(value: str) -> Path:
    if not value.strip():
        raise argparse.ArgumentTypeError("override path must not be empty")
    return Path(value).expanduser().absolute()


def build_parser() -> argparse.ArgumentParser:
    parser = _FlagParser(
        prog="depsync",
        description="Fetch, link and build the pinned external dependencies.",
        allow_abbrev=False,
    )
    parser.add_argument(
        "--v-headers-root", dest="v_headers_root", type=_override_path, metavar="PATH",
        help="Use an existing Vulkan-Headers checkout instead of fetching it",
    )
    parser.add_argument(
        "--spirv-cross-root", dest="spirv_cross_root", type=_override_path, metavar="PATH",
        help="Use an existing SPIRV-Cross checkout instead of fetching it",
    )
    parser.add_argument(
        "--glslang-root", dest="glslang_root", type=_override_path, metavar="PATH",
        help="Use an existing glslang checkout instead of fetching it",
    )
    parser.add_argument(
        "-v", dest="verbose", action="store_true", help="Verbose build output",
    )
    return parser


def parse_args(argv: list[str]) -> SyncConfig:
    """
    Parse command line flags into a SyncConfig.

    Repeated flags keep the last value.

    Raises:
        UsageError: For an unsupported flag or a flag missing its value
    """
    for token in argv:
        if token.startswith("-") and not token.startswith("--") and token not in ("-v", "-h"):
            raise UsageError(f"Unsupported flag {token}")

    namespace, leftovers = build_parser().parse_known_args(argv)

    for token in leftovers:
        if token.startswith("-"):
            raise UsageError(f"Unsupported flag {token}")

    return SyncConfig(
        v_headers_root=namespace.v_headers_root,
        spirv_cross_root=namespace.spirv_cross_root,
        glslang_root=namespace.glslang_root,
        verbose=namespace.verbose,
    )


def print_report(report: SyncReport) -> None:
    table = Table(title="Dependencies")
    table.add_column("Repository", style="bold")
    table.add_column("Action")
    table.add_column("Revision / Source")

    for outcome in report.repos:
        detail = outcome.head[:12] if outcome.head else (outcome.source or "")
        table.add_row(outcome.name, outcome.action, detail)

    console.print(table)


def main(argv: list[str] | None = None) -> int:
    """Entry point. Returns the process exit code."""
    if argv is None:
        argv = sys.argv[1:]

    try:
        config = parse_args(argv)
    except UsageError as e:
        err_console.print(f"Error: {escape(str(e))}")
        return EXIT_FAILURE

    load_dotenv(Path.cwd() / ".env")
    root = resolve_root()

    try:
        settings = load_settings(root)
        report = DependencySynchronizer(config, settings, root).run()
    except (SyncError, ConfigError) as e:
        err_console.print(
            Panel(
                f"[bold red]{escape(str(e))}[/bold red]\n\n"
                "Partial results were left on disk. Fix the problem and re-run.",
                title="SYNC HALTED",
                border_style="red",
            )
        )
        return EXIT_FAILURE
    except KeyboardInterrupt:
        err_console.print("[yellow]Interrupted[/yellow]")
        return EXIT_INTERRUPTED

    print_report(report)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
