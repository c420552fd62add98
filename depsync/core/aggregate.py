# -----------------------------------------------------------------------------
# AGGREGATE BUILD - XCODEBUILD
# -----------------------------------------------------------------------------
# Responsibility: The terminal step. Compiles every fetched dependency
# together through the project's Xcode project into the derived data dir.
# -----------------------------------------------------------------------------

from pathlib import Path

from rich.console import Console

from depsync.domain.config import SyncSettings
from depsync.infra.process import ProcessError, ProcessRunner

console = Console()


class AggregateBuildError(Exception):
    """Raised when the final xcodebuild invocation fails."""

    def __init__(self, message: str, returncode: int, output: str = "") -> None:
        super().__init__(message)
        self.returncode = returncode
        self.output = output


class AggregateBuilder:
    """Runs xcodebuild for the external-dependencies project."""

    def __init__(self, runner: ProcessRunner, settings: SyncSettings, root: Path) -> None:
        self._runner = runner
        self._settings = settings
        self._root = Path(root)

    def command(self, verbose: bool = False) -> list[str]:
        cmd = ["xcodebuild"]
        if not verbose:
            cmd.append("-quiet")
        cmd += [
            "-project", self._settings.xcode_project,
            "-scheme", self._settings.xcode_scheme,
            "-configuration", self._settings.xcode_configuration,
            "-derivedDataPath", str(self._settings.derived_data_dir),
            "build",
        ]
        return cmd

    def build(self, verbose: bool = False) -> None:
        """
        Build all dependencies with xcodebuild.

        Args:
            verbose: Show full xcodebuild output (omits -quiet)

        Raises:
            AggregateBuildError: If xcodebuild fails or is not installed
        """
        console.print(
            f"[cyan][XCODE] Building {self._settings.xcode_scheme} "
            f"({self._settings.xcode_configuration})[/cyan]"
        )

        try:
            self._runner.run(self.command(verbose), cwd=self._root, capture_output=False)
        except ProcessError as e:
            console.print("[red][XCODE] Build failed[/red]")
            raise AggregateBuildError(str(e), e.returncode, e.output) from e

        derived = self._settings.derived_data_path(self._root)
        console.print(f"[green][XCODE] Dependencies built: {derived}[/green]")
