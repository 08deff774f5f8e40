"""
Command-line interface for a snapshot store.

Each mutating command loads the store, stages one change, commits it and
saves the result.

Example:
    localvcs add notes.txt "first draft"
    localvcs rename notes.txt draft.txt
    localvcs ls
"""

from pathlib import Path
from typing import Optional

import click

from localvcs.config import config
from localvcs.logging import get_vcs_logger, initialize_from_config
from localvcs.version_control import LocalVcs, SnapshotStorage, StorageError


def _open(ctx: click.Context) -> LocalVcs:
    storage: SnapshotStorage = ctx.obj["storage"]
    try:
        return LocalVcs.from_storage(storage)
    except StorageError as e:
        raise click.ClickException(str(e)) from e


def _require(vcs: LocalVcs, name: str) -> None:
    if not vcs.has_file(name):
        raise click.ClickException(f"No such file: {name}")


def _commit(ctx: click.Context, vcs: LocalVcs) -> None:
    vcs.commit()
    try:
        vcs.save(ctx.obj["storage"])
    except StorageError as e:
        raise click.ClickException(str(e)) from e


@click.group()
@click.option(
    "--store",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Snapshot store file (default: LOCALVCS_STORE_PATH)",
)
@click.option("--verbose", is_flag=True, help="Show debug logging")
@click.pass_context
def cli(ctx: click.Context, store: Optional[Path], verbose: bool):
    """Local version control for named files."""
    log_config = config.logging
    if verbose:
        log_config = log_config.model_copy(update={"level": "DEBUG"})
    initialize_from_config(log_config)

    path = store if store is not None else config.storage.path
    ctx.obj = {"storage": SnapshotStorage(path, indent=config.storage.indent)}
    get_vcs_logger("cli").debug(f"Using store {path}")


@cli.command("ls")
@click.pass_context
def list_files(ctx: click.Context):
    """List stored files."""
    for name in _open(ctx).list_files():
        click.echo(name)


@cli.command()
@click.argument("name")
@click.pass_context
def show(ctx: click.Context, name: str):
    """Print the content of a file."""
    revision = _open(ctx).get_file_revision(name)
    if revision is None:
        raise click.ClickException(f"No such file: {name}")
    click.echo(revision.content)


@cli.command()
@click.argument("name")
@click.argument("content")
@click.pass_context
def add(ctx: click.Context, name: str, content: str):
    """Add a file, replacing any file with the same name."""
    vcs = _open(ctx)
    vcs.add_file(name, content)
    _commit(ctx, vcs)
    click.echo(f"Added {name}")


@cli.command()
@click.argument("name")
@click.argument("content")
@click.pass_context
def change(ctx: click.Context, name: str, content: str):
    """Replace the content of a file."""
    vcs = _open(ctx)
    _require(vcs, name)
    vcs.change_file(name, content)
    _commit(ctx, vcs)
    click.echo(f"Changed {name}")


@cli.command()
@click.argument("old_name")
@click.argument("new_name")
@click.pass_context
def rename(ctx: click.Context, old_name: str, new_name: str):
    """Rename a file."""
    vcs = _open(ctx)
    _require(vcs, old_name)
    vcs.rename_file(old_name, new_name)
    _commit(ctx, vcs)
    click.echo(f"Renamed {old_name} -> {new_name}")


@cli.command()
@click.argument("name")
@click.pass_context
def delete(ctx: click.Context, name: str):
    """Delete a file."""
    vcs = _open(ctx)
    _require(vcs, name)
    vcs.delete_file(name)
    _commit(ctx, vcs)
    click.echo(f"Deleted {name}")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
