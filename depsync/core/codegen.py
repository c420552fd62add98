# -----------------------------------------------------------------------------
# POST-FETCH CODE GENERATION
# -----------------------------------------------------------------------------
# Runs the vendored scripts a fetched repository needs before it can be
# built (glslang source sync, Hologram dispatch tables). The scripts are
# opaque; the only contract is "run them, in order, in the repo".
# -----------------------------------------------------------------------------

import sys
from pathlib import Path

from rich.console import Console

from depsync.domain.models import ScriptStep
from depsync.infra.process import ProcessError, ProcessRunner

console = Console()


class CodegenError(Exception):
    """Raised when a post-fetch script is missing or exits non-zero."""

    def __init__(self, message: str, step: ScriptStep, output: str = "") -> None:
        super().__init__(message)
        self.step = step
        self.output = output


def step_command(step: ScriptStep, script_path: Path) -> list[str]:
    """Build the argv for a step. 'python' maps to the running interpreter."""
    if step.interpreter is None:
        return [str(script_path), *step.args]

    interpreter = sys.executable if step.interpreter == "python" else step.interpreter
    return [interpreter, str(script_path), *step.args]


def run_post_fetch(runner: ProcessRunner, repo_path: Path, steps: list[ScriptStep]) -> None:
    """
    Run each step in order inside repo_path.

    Raises:
        CodegenError: On the first missing script or failing step
    """
    for step in steps:
        workdir = Path(repo_path) / step.workdir
        script_path = (workdir / step.script).resolve()

        if not script_path.is_file():
            raise CodegenError(f"Codegen script not found: {script_path}", step)

        label = " ".join([step.script, *step.args])
        console.print(f"[cyan][CODEGEN] {label}[/cyan]")

        try:
            runner.run(step_command(step, script_path), cwd=workdir, capture_output=False)
        except ProcessError as e:
            console.print(f"[red][CODEGEN] Failed: {label}[/red]")
            raise CodegenError(f"Codegen step failed ({label}): {e}", step, e.output) from e
