#!/usr/bin/env python3
"""
Command-line interface for Clone Git Repo.
"""

import sys
import click

from . import __version__
from .cloner import BulkCloner
from .config import Config, DEFAULT_CONFIG_FILE
from .errors import ConfigError, RepositoryListError
from .logging_setup import setup_logging
from .report import RESULT_FILE, print_status_table, write_status_csv
from .repositories import read_repository_urls


@click.command()
@click.version_option(version=__version__, prog_name="clone-git-repo")
@click.option('--config', '-c', 'config_file', default=DEFAULT_CONFIG_FILE, show_default=True,
              help='Path to INI config file')
@click.option('--csv-file', '-f', default=None, help='CSV file listing repository URLs (header row, URL in first column)')
@click.option('--clone-dir', '-d', default=None, help='Directory repositories are cloned into')
@click.option('--username', '-u', default=None, help='Username used when a repository requires authentication')
@click.option('--token', '-t', default=None, help='Access token used when a repository requires authentication')
@click.option('--log-dir', default=None, help='Log directory')
@click.option('--log-max-size', type=int, default=None, help='Maximum log file size in bytes')
@click.option('--result-file', default=RESULT_FILE, show_default=True, help='CSV file the results are written to')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging, including transfer progress')
@click.option('--quiet', '-q', is_flag=True, help='Quiet mode - show only progress bar and errors')
def main(config_file: str, csv_file: str, clone_dir: str, username: str, token: str, log_dir: str,
         log_max_size: int, result_file: str, verbose: bool, quiet: bool):
    """
    Clone every repository listed in a CSV file.

    Repositories that need authentication are retried with the configured
    username and token; existing destination directories are removed and
    cloned again. Every branch of every repository is checked out locally,
    and a result table is printed and written to a CSV file.

    Values given on the command line override the config file.
    """
    try:
        config = Config.from_ini(config_file).update(
            csv_file=csv_file,
            clone_dir=clone_dir,
            username=username,
            token=token,
            log_dir=log_dir,
            log_max_size=log_max_size,
        )
        config.validate()
    except ConfigError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)

    try:
        logger = setup_logging(config.log_dir, config.log_max_size, verbose=verbose, quiet=quiet)
    except OSError as e:
        click.echo(f"Could not set up logging in {config.log_dir}: {e}", err=True)
        sys.exit(1)

    logger.debug(f"Configuration: {config.to_dict()}")

    try:
        urls = read_repository_urls(config.csv_file)
    except RepositoryListError as e:
        logger.error(str(e))
        sys.exit(1)

    invalid = [url for url in urls if not Config.validate_repository_url(url)]
    for url in invalid:
        logger.warning(f"Repository URL does not look valid, trying anyway: {url}")

    cloner = BulkCloner(config, quiet=quiet, logger=logger)

    try:
        statuses = cloner.clone_all(urls)
    except KeyboardInterrupt:
        logger.info("Operation cancelled by user")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Unexpected error: {e}")
        sys.exit(1)

    print_status_table(statuses)

    try:
        write_status_csv(statuses, result_file)
        logger.info(f"Results written to {result_file}")
    except OSError as e:
        logger.error(f"Could not write results to {result_file}: {e}")
        sys.exit(1)

    sys.exit(1 if cloner.cancelled else 0)


if __name__ == '__main__':
    main()
