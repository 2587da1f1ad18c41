# === FILE: site_warmer/cli.py ===
#!/usr/bin/env python3
"""
Command-line entry point of SiteWarmer: crawl URLs so they can be pre-cached.

Options:
  --mode, -m          sitemap | links (default: sitemap)
  --site, -s URL      Site to crawl; repeat for several sites
  --css3selector, -c  CSS3 selector for links mode (default: a)
  --concurrency, -n   Number of concurrent requests per site (default: 10)
  --timeout, -t SEC   Request timeout in seconds (default: 10)
  --sitemap-path      Sitemap location relative to each site (default: /sitemap.xml)
  --user-agent        User-Agent header sent with every request
  --config PATH       YAML/JSON file with any of the settings above
  --log-level LEVEL   Logging level (DEBUG, INFO, ...)
  --log-file PATH     Also write logs to this file
  --log-format FORMAT Logging format string
  --version, -v       Show the SiteWarmer version

Example:
  site-warmer --mode links --site https://example.com --css3selector "nav a" -n 4
"""
import asyncio
import sys
from pathlib import Path

import click

from site_warmer import __version__
from site_warmer.config import load_config
from site_warmer.engine import start_crawl
from site_warmer.errors import CrawlError
from site_warmer.logger import DEFAULT_FORMAT, configure

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.command(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='SiteWarmer, version %(version)s')
@click.option(
    '--mode', '-m', 'mode',
    type=click.Choice(['sitemap', 'links']),
    default=None,
    help="The mode for crawling, either 'sitemap' or 'links'  [default: sitemap]"
)
@click.option(
    '--site', '-s', 'sites',
    multiple=True,
    help='The site to crawl; may be given several times'
)
@click.option(
    '--css3selector', '-c', 'css3selector',
    default=None,
    help="The CSS3 selector used to find links on the site  [default: a]"
)
@click.option(
    '--concurrency', '-n', 'concurrency',
    type=int,
    default=None,
    help='Number of concurrent requests  [default: 10]'
)
@click.option(
    '--timeout', '-t', 'timeout',
    type=float,
    default=None,
    help='Request timeout in seconds  [default: 10]'
)
@click.option(
    '--sitemap-path', 'sitemap_path',
    default=None,
    help='Sitemap location relative to each site  [default: /sitemap.xml]'
)
@click.option(
    '--user-agent', 'user_agent',
    default=None,
    help='User-Agent header for every request'
)
@click.option(
    '--config', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='YAML or JSON file with crawl settings; command-line options win.'
)
@click.option(
    '--log-level', 'log_level',
    default='INFO', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Logging level'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Log file (stdout only if not given)'
)
@click.option(
    '--log-format', 'log_format',
    default=DEFAULT_FORMAT,
    show_default=True,
    help='Logging format string'
)
def cli(mode, sites, css3selector, concurrency, timeout, sitemap_path, user_agent,
        config_path, log_level, log_file, log_format):
    """Crawl URLs so they can be pre-cached."""
    configure(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    try:
        cfg = load_config(
            config_path,
            mode=mode,
            sites=list(sites) or None,
            css3selector=css3selector,
            concurrency=concurrency,
            timeout=timeout,
            sitemap_path=sitemap_path,
            user_agent=user_agent,
        )
    except Exception as e:
        print_error(f'Invalid configuration: {e}')

    try:
        asyncio.run(start_crawl(cfg))
    except CrawlError as e:
        print_error(f'Crawl aborted: {e}')
    except Exception as e:
        print_error(f'Crawl failed: {e}')


if __name__ == "__main__":
    cli()
