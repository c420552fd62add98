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
# PROCESS RUNNER - EXTERNAL COMMAND EXECUTION
# -----------------------------------------------------------------------------
# Responsibility: The single seam through which depsync launches git, cmake,
# ninja, make, codegen scripts and xcodebuild.
#
# Every call takes an explicit working directory. The process-wide cwd is
# never changed.
# -----------------------------------------------------------------------------

import subprocess
from dataclasses import dataclass
from pathlib import Path

from rich.console import Console

console = Console()

# Exit code reported when the executable itself cannot be launched
LAUNCH_FAILURE_EXIT_CODE = 127


class ProcessError(Exception):
    """Raised when an external command fails, times out or cannot start."""

    def __init__(self, message: str, command: list[str], returncode: int, output: str = "") -> None:
        super().__init__(message)
        self.command = command
        self.returncode = returncode
        self.output = output


@dataclass
class ProcessResult:
    """Structured outcome of one external command."""

    args: list[str]
    returncode: int
    cwd: Path
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class ProcessRunner:
    """
    Thin subprocess wrapper returning ProcessResult records.

    Output is captured by default. Long-running builds pass
    capture_output=False so the tool's own progress reaches the terminal.
    """

    def __init__(self, verbose: bool = False) -> None:
        """
        Args:
            verbose: Echo each command before running it.
        """
        self._verbose = verbose

    def run(
        self,
        args: list[str],
        cwd: Path,
        check: bool = True,
        capture_output: bool = True,
        timeout: float | None = None,
    ) -> ProcessResult:
        """
        Run a command in the given directory.

        Args:
            args: Command parts (e.g., ["git", "fetch", "--all"])
            cwd: Directory to run in
            check: Raise on non-zero exit
            capture_output: Capture stdout/stderr instead of inheriting them
            timeout: Seconds before the command is killed (None = no limit)

        Returns:
            ProcessResult for the finished command

        Raises:
            ProcessError: If the command cannot start, times out, or fails with check=True
        """
        args = [str(a) for a in args]
        cwd = Path(cwd)

        if self._verbose:
            console.print(f"[dim]$ {' '.join(args)}  (in {cwd})[/dim]")

        try:
            completed = subprocess.run(
                args,
                cwd=cwd,
                capture_output=capture_output,
                text=True,
                timeout=timeout,
            )
        except FileNotFoundError as e:
            raise ProcessError(
                f"Cannot launch '{args[0]}': {e}", args, LAUNCH_FAILURE_EXIT_CODE
            ) from e
        except subprocess.TimeoutExpired as e:
            raise ProcessError(f"Command timed out ({timeout}s): {' '.join(args)}", args, -1) from e
        except OSError as e:
            raise ProcessError(
                f"Cannot launch '{args[0]}': {e}", args, LAUNCH_FAILURE_EXIT_CODE
            ) from e

        result = ProcessResult(
            args=args,
            returncode=completed.returncode,
            cwd=cwd,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )

        if check and not result.ok:
            output = (result.stderr or result.stdout or "").strip()
            raise ProcessError(
                f"Command failed (exit {result.returncode}): {' '.join(args)}",
                args,
                result.returncode,
                output,
            )

        return result
