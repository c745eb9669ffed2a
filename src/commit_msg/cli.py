"""Command-line interface for commit-msg."""

import sys
from pathlib import Path
from typing import Optional

import click

from ._version import __version__
from .cli_utils import setup_logging
from .installer import InstallError, install_hook
from .pipeline import run_hook
from .utils.debug import is_verbose_mode


class ExecAsDefaultGroup(click.Group):
    """
    Custom Click group that routes a bare message file to the exec command.
    This allows Git to call 'commit-msg .git/COMMIT_EDITMSG' like 'commit-msg exec .git/COMMIT_EDITMSG',
    and a bare 'commit-msg' to behave like 'commit-msg install'.
    """

    def parse_args(self, ctx, args):
        """Override parse_args to redirect unrecognized patterns to exec/install."""
        global_options = {"--version", "--help", "-h"}

        positional = [arg for arg in args if not arg.startswith("-")]
        if not positional:
            if any(arg in global_options for arg in args):
                return super().parse_args(ctx, args)
            return super().parse_args(ctx, args + ["install"])

        # First positional argument is a known subcommand
        if positional[0] in self.list_commands(ctx):
            return super().parse_args(ctx, args)

        # Anything else is taken as the message file, keeping leading options
        index = args.index(positional[0])
        return super().parse_args(ctx, args[:index] + ["exec"] + args[index:])


def _log_level(log: str, verbose: bool) -> str:
    if log.upper() != "NONE":
        return log
    return "INFO" if verbose or is_verbose_mode() else "none"


log_option = click.option(
    "--log",
    type=click.Choice(["none", "INFO", "DEBUG"], case_sensitive=False),
    default="none",
    help="Enable logging with specified level (default: none)",
)
verbose_option = click.option("--verbose", is_flag=True, help="Enable verbose output")


@click.group(cls=ExecAsDefaultGroup)
@click.version_option(version=__version__, prog_name="commit-msg")
@click.help_option("-h", "--help")
@verbose_option
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """commit-msg - Git commit-msg hook adding Change-Id and Co-developed-by trailers.

    Run without arguments to install the hook into the current repository.
    Git runs the installed hook as: commit-msg exec MESSAGE_FILE
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


@cli.command(name="exec")
@click.argument("message_file", type=click.Path(path_type=Path))
@verbose_option
@log_option
@click.pass_context
def exec_command(ctx: click.Context, message_file: Path, verbose: bool, log: str) -> None:
    """Execute the commit-msg hook logic on MESSAGE_FILE."""
    verbose = verbose or (ctx.obj or {}).get("verbose", False)
    logger = setup_logging(_log_level(log, verbose), __name__)

    try:
        result = run_hook(message_file)
    except FileNotFoundError as e:
        raise click.ClickException(str(e)) from e
    except Exception as e:
        logger.debug("Hook failed", exc_info=True)
        raise click.ClickException(f"Error processing commit message: {e}") from e

    if not verbose and not is_verbose_mode():
        return
    if result is None:
        click.echo("Merge commit detected, skipping commit-msg hook processing.")
    elif result.should_save:
        click.echo("Commit message processed and saved successfully!")
    else:
        click.echo("Commit message processed, no changes needed.")


@cli.command(name="install")
@click.option(
    "--path",
    "-p",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Repository to install into (default: current directory)",
)
@verbose_option
@log_option
@click.pass_context
def install_command(ctx: click.Context, path: Optional[Path], verbose: bool, log: str) -> None:
    """Install the commit-msg hook in the current Git repository."""
    verbose = verbose or (ctx.obj or {}).get("verbose", False)
    setup_logging(_log_level(log, verbose), __name__)

    click.echo("Installing commit-msg hook...")
    try:
        hook_path = install_hook(path)
    except InstallError as e:
        raise click.ClickException(str(e)) from e

    click.echo("Commit-msg hook installed successfully!")
    click.echo(f"Hook installed at: {hook_path}")


def main() -> None:
    """Main entry point for the CLI."""
    cli(obj={})


if __name__ == "__main__":
    sys.exit(main())
