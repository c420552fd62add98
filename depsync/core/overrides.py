# -----------------------------------------------------------------------------
# LOCAL OVERRIDES
# -----------------------------------------------------------------------------
# A parent build that already has its own checkout of a dependency can hand
# its path in; the entry under the external directory becomes a symlink to it
# and no fetch happens.
#
# The override target is not inspected.
# -----------------------------------------------------------------------------

from pathlib import Path

from rich.console import Console

from depsync.core.updater import remove_entry

console = Console()


def link_override(external_dir: Path, name: str, target: Path) -> Path:
    """
    Replace <external_dir>/<name> with a symlink to target.

    Returns:
        Path of the created link
    """
    link = Path(external_dir) / name

    if link.exists() or link.is_symlink():
        console.print(f"[yellow][OVERRIDE] Removing existing entry: {link}[/yellow]")
        remove_entry(link)

    Path(external_dir).mkdir(parents=True, exist_ok=True)
    link.symlink_to(target, target_is_directory=True)

    console.print(f"[green][OVERRIDE] {name} -> {target}[/green]")
    return link
