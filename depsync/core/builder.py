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
# THE SUB-BUILDER - CMAKE TREES INSIDE FETCHED REPOS
# -----------------------------------------------------------------------------
# Responsibility: Configure and build a CMake project in Release mode.
#
# Generator selection:
# - ninja on PATH  -> cmake -G Ninja, then ninja
# - otherwise      -> default generator, then make -j<cpus>
# -----------------------------------------------------------------------------

import os
import shutil
from pathlib import Path

from rich.console import Console

from depsync.domain.models import BuildTarget
from depsync.infra.process import ProcessError, ProcessRunner

console = Console()

CMAKE_BUILD_TYPE = "Release"


class BuildError(Exception):
    """Raised when configuring or building a sub-project fails."""

    def __init__(self, message: str, target: Path, output: str = "") -> None:
        super().__init__(message)
        self.target = target
        self.output = output


class SubBuilder:
    """
    Builds CMake sub-projects of fetched repositories.

    Tool lookup happens once at construction; pass ninja_path / jobs
    explicitly to pin them (tests do).
    """

    def __init__(
        self,
        runner: ProcessRunner,
        ninja_path: str | None = None,
        detect_ninja: bool = True,
        jobs: int | None = None,
    ) -> None:
        self._runner = runner
        self._ninja = ninja_path or (shutil.which("ninja") if detect_ninja else None)
        self._jobs = jobs or os.cpu_count() or 1

    @property
    def uses_ninja(self) -> bool:
        return self._ninja is not None

    def configure_command(self, target: BuildTarget) -> list[str]:
        cmd = ["cmake"]
        if self.uses_ninja:
            cmd += ["-G", "Ninja"]
        cmd += [
            "-D", f"CMAKE_BUILD_TYPE={CMAKE_BUILD_TYPE}",
            "-D", f"CMAKE_INSTALL_PREFIX={target.install_prefix}",
            os.path.relpath(target.source_dir, target.build_dir),
        ]
        return cmd

    def build_command(self) -> list[str]:
        if self.uses_ninja:
            return [self._ninja]
        return ["make", f"-j{self._jobs}"]

    def build_repo(self, source_dir: Path) -> BuildTarget:
        """
        Configure and build the CMake project in source_dir.

        The build tree is <source_dir>/build and is created if absent.

        Returns:
            The BuildTarget that was built

        Raises:
            BuildError: If cmake or the build tool fails
        """
        target = BuildTarget(source_dir=Path(source_dir))
        target.build_dir.mkdir(parents=True, exist_ok=True)

        generator = "Ninja" if self.uses_ninja else f"Make (-j{self._jobs})"
        console.print(f"[cyan][BUILD] {target.source_dir} ({generator}, {CMAKE_BUILD_TYPE})[/cyan]")

        try:
            self._runner.run(
                self.configure_command(target), cwd=target.build_dir, capture_output=False
            )
            self._runner.run(self.build_command(), cwd=target.build_dir, capture_output=False)
        except ProcessError as e:
            console.print(f"[red][BUILD] Failed: {target.source_dir}[/red]")
            raise BuildError(
                f"Build failed for {target.source_dir}: {e}", target.source_dir, e.output
            ) from e

        console.print(f"[green][BUILD] Built: {target.source_dir}[/green]")
        return target
