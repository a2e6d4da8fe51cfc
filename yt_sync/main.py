"""
Main CLI interface for yt-sync

This module provides the command-line entry point. A single invocation loads
the configuration, syncs every configured playlist in order and exits; there
are no subcommands.

Exit codes:
- 0: every playlist was synced (individual download failures do not count)
- 1: configuration error, or a playlist could not be listed or prepared
- 130: interrupted by the user
"""

import sys
import click
import functools

from . import __version__
from .config.settings import DEFAULT_CONFIG_PATH, load_settings
from .sync.synchronizer import PlaylistSynchronizer
from .utils.logger import configure_from_settings, get_logger, get_current_log_file, setup_logging


logger = get_logger(__name__)


def handle_error(func):
    """
    Decorator to handle common CLI errors gracefully

    Catches common exceptions and provides user-friendly error messages
    while ensuring proper logging and exit codes.

    Args:
        func: The CLI command function to wrap

    Returns:
        Wrapped function with error handling
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except KeyboardInterrupt:
            click.echo(click.style("\n\nOperation cancelled by user", fg='yellow'))
            sys.exit(130)  # Standard exit code for SIGINT
        except Exception as e:
            logger.debug(f"Command failed: {e}", exc_info=e)
            click.echo(click.style(f"Error: {e}", fg='red'), err=True)
            sys.exit(1)
    return wrapper


@click.command()
@click.option('--config', 'config_path', type=click.Path(dir_okay=False),
              default=str(DEFAULT_CONFIG_PATH), show_default=True,
              help='Path to config file (created with placeholders if missing)')
@click.option('--keep-going', is_flag=True,
              help='Continue with remaining playlists when one cannot be listed')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
@click.option('--no-progress', is_flag=True, help='Do not draw progress bars')
@click.version_option(__version__, prog_name='yt-sync')
@handle_error
def cli(config_path, keep_going, verbose, no_progress):
    """
    yt-sync - Keep local folders in sync with YouTube playlists

    Lists every configured playlist, compares it with the files already in
    its folder and downloads the missing items as audio with embedded
    thumbnails.

    When the config file does not exist, a default one with two placeholder
    playlists is written and the command exits with status 0 without
    syncing. Configuration, listing and directory errors exit with 1, an
    interrupt with 130.
    """
    # Console logging is needed before settings exist to report config bootstrapping
    setup_logging(level="DEBUG" if verbose else "INFO", console_output=True)

    settings = load_settings(config_path)
    configure_from_settings(settings, verbose=verbose)
    logger.debug(f"Loaded {settings}")

    log_file = get_current_log_file()
    if log_file:
        logger.console_info(f"Logging to {log_file}")

    # Placeholder entries point at nothing real, so a fresh config is never synced
    if settings.created_default:
        logger.console_warning(f"Edit {settings.config_path} to configure your playlists")
        return

    if not settings.items:
        logger.console_warning("No playlists configured")
        return

    synchronizer = PlaylistSynchronizer.from_settings(settings, show_progress=not no_progress)
    continue_on_error = keep_going or settings.sync.continue_on_error

    summary = synchronizer.sync_all(settings.items, continue_on_error=continue_on_error)

    if len(summary.statuses) > 1:
        logger.console_info(
            f"Synced {len(summary.statuses)} playlists, {summary.fetched_count} new songs in total"
        )

    if not summary.success:
        for status in summary.failed_playlists:
            click.echo(click.style(f"  {status.playlist.id}: {status.error_message}", fg='red'), err=True)
        sys.exit(1)


if __name__ == '__main__':
    cli()
