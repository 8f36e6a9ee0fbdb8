"""
deepsum CLI.

Recursively compute or audit hashes over a directory tree, sorted
lexicographically for deterministic output.
"""

import click

from deepsum import __version__
from deepsum.core.config import default_workers
from deepsum.core.digest import HashAlgorithm


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__)
@click.option("--path", "-p", default=".", show_default=True,
              help="Directory path to start recursive traversal from")
@click.option("--hasher", "-c", type=click.Choice(HashAlgorithm.names()),
              default=HashAlgorithm.BLAKE3.value, show_default=True, help="Hash function")
@click.option("--audit", "-a", help="Audit against hashes read from this manifest file")
@click.option("--recursive", "-r", is_flag=True,
              help="Ignored; traversal is always recursive (hashdeep compatibility)")
@click.option("--compatoutput", "-C", is_flag=True,
              help="Output <size>,<hash>,<absolute path> lines like hashdeep")
@click.option("--parallel/--sequential", default=False, help="Hash files on a thread pool")
@click.option("--workers", "-j", type=click.IntRange(min=1), default=default_workers,
              help="Worker threads for --parallel")
@click.option("--color/--no-color", default=True, help="Colourise audit tags on terminals")
@click.option("--summary", is_flag=True, help="Print outcome counts to stderr when done")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def main(
    path: str,
    hasher: str,
    audit: str | None,
    recursive: bool,
    compatoutput: bool,
    parallel: bool,
    workers: int,
    color: bool,
    summary: bool,
    verbose: bool,
) -> None:
    """Recursively compute or verify (in audit mode) hashes over a directory tree."""
    from deepsum.core.config import ScanConfig
    from deepsum.core.errors import DeepsumError
    from deepsum.io.report import Reporter
    from deepsum.logging import setup_logging
    from deepsum.runner import ScanRunner

    setup_logging("DEBUG" if verbose else "WARNING")

    try:
        config = ScanConfig(
            path=path,
            algorithm=hasher,
            audit=audit,
            compat_output=compatoutput,
            parallel=parallel,
            workers=workers,
            color=color,
            summary=summary,
        )
    except ValueError as e:
        click.echo(f"Error: invalid configuration: {e}", err=True)
        raise SystemExit(1)

    reporter = Reporter(color=None if config.color else False)
    runner = ScanRunner(config=config, reporter=reporter)

    try:
        result = runner.run()
    except DeepsumError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)

    if config.summary:
        reporter.summary(result)


if __name__ == "__main__":
    main()
