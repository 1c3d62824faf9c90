"""
Command-line interface for photo-organizer.

Commands:
    import: Move photos and videos from a source directory into the target tree
    index: Rebuild the dedup store from the files already in the target tree
    report: Show how many files the dedup store knows about

Example:
    $ po import /media/sdcard/DCIM ~/Pictures
    $ po index ~/Pictures
    $ po report ~/Pictures

Any malformed invocation prints the usage block on stdout and does nothing.
"""

import sys
from typing import List, Optional

import click
import yaml

from photo_organizer.config import Config
from photo_organizer.errors import StoreUnavailable
from photo_organizer.organizer import FileOutcome, import_media, index_media, report
from photo_organizer.utils import setup_logging

USAGE = """\
Usage:
  po import SOURCE_DIR [TARGET_DIR]
  po index [TARGET_DIR]
  po report [TARGET_DIR]

Commands:
  import    Import photos and videos from SOURCE_DIR to TARGET_DIR (default: current directory)
  index     Rebuild the database index for media files in TARGET_DIR (default: current directory)
  report    Report the total number of files in the database in TARGET_DIR (default: current directory)
"""

# Move to column 0 and clear the line
_CLEAR_LINE = "\r\x1b[2K"


class ProgressPrinter:
    """
    Renders per-file progress on a single, overwritten line.

    Failures are printed on a line of their own so they stay visible.
    """

    def __init__(self, verb: str):
        self.verb = verb
        self._line_open = False

    def __call__(self, index: int, total: int, outcome: FileOutcome) -> None:
        if outcome.status.is_success:
            percent = (index + 1) * 100 // total
            click.echo(f"{_CLEAR_LINE}[{percent}%] \t {outcome.path}: {outcome.message}", nl=False)
            self._line_open = True
        else:
            self.finish()
            click.echo(f"Failed to {self.verb} {outcome.path}: {outcome.reason}")

    def finish(self) -> None:
        if self._line_open:
            click.echo()
            self._line_open = False


@click.group(invoke_without_command=True)
@click.option('--config', '-c', 'config_path', type=click.Path(), help='Configuration file path')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.option('--quiet', '-q', is_flag=True, help='Only log errors')
@click.pass_context
def cli(ctx, config_path, verbose, quiet):
    """Organize photos and videos into a dated tree without storing duplicates."""
    ctx.ensure_object(dict)

    if ctx.invoked_subcommand is None:
        click.echo(USAGE)
        return

    # Subcommand arguments are not parsed yet; nothing is loaded until they are
    ctx.obj.update(config_path=config_path, verbose=verbose, quiet=quiet)


def load_config(ctx: click.Context) -> Config:
    """Load the configuration and set up logging for a subcommand."""
    options = ctx.find_root().obj

    try:
        config = Config.load(options["config_path"])
    except (OSError, ValueError, TypeError, yaml.YAMLError) as e:
        raise click.ClickException(f"Invalid configuration: {e}") from e

    if options["quiet"]:
        log_level = 'ERROR'
    elif options["verbose"]:
        log_level = 'DEBUG'
    else:
        log_level = config.logging.level

    setup_logging(log_level, config.logging.file, config.logging.format)
    return config


@cli.command(name='import')
@click.argument('source_dir', type=click.Path())
@click.argument('target_dir', type=click.Path(), default='.')
@click.pass_context
def import_command(ctx, source_dir, target_dir):
    """Import photos and videos from SOURCE_DIR to TARGET_DIR.

    Files are moved to TARGET_DIR/<photo|video>/YYYY/MM/. Content that is
    already in the store goes under TARGET_DIR/duplication/ instead.
    """
    config = load_config(ctx)
    printer = ProgressPrinter('import')

    try:
        result = import_media(
            source_dir,
            target_dir,
            config,
            progress=printer,
            on_scanned=lambda total: click.echo(f"Found {total} media files."),
        )
    except StoreUnavailable as e:
        printer.finish()
        raise click.ClickException(str(e)) from e

    printer.finish()
    click.echo(str(result))


@cli.command(name='index')
@click.argument('target_dir', type=click.Path(), default='.')
@click.pass_context
def index_command(ctx, target_dir):
    """Rebuild the database index for media files in TARGET_DIR."""
    config = load_config(ctx)
    printer = ProgressPrinter('index')

    try:
        result = index_media(
            target_dir,
            config,
            progress=printer,
            on_scanned=lambda total: click.echo(f"Found {total} media files."),
        )
    except StoreUnavailable as e:
        printer.finish()
        raise click.ClickException(str(e)) from e

    printer.finish()
    click.echo(str(result))


@cli.command(name='report')
@click.argument('target_dir', type=click.Path(), default='.')
@click.pass_context
def report_command(ctx, target_dir):
    """Report the total number of files in the database in TARGET_DIR."""
    config = load_config(ctx)

    try:
        total = report(target_dir, config)
    except StoreUnavailable as e:
        raise click.ClickException(str(e)) from e

    if total is None:
        click.echo(f"Database not found in {config.store_dir(target_dir)}")
    else:
        click.echo(f"Total number of files: {total}")


def main(argv: Optional[List[str]] = None) -> int:
    """
    Entry point for the `po` console script.

    Click's usage errors (unknown command, missing or extra arguments) are
    replaced by the fixed usage block on stdout.
    """
    try:
        cli.main(args=argv, prog_name='po', standalone_mode=False)
    except click.UsageError:
        click.echo(USAGE)
    except click.ClickException as e:
        e.show()
        return e.exit_code
    return 0


if __name__ == '__main__':
    sys.exit(main())
