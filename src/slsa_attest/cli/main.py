"""CLI entry point for slsa-attest.

Invoked as::

    slsa-attest [OPTIONS] COMMAND [ARGS]...

or, during development::

    python -m slsa_attest.cli.main

Commands
--------
- ``hash``     Write the attestation file for a build output directory.
- ``check``    Re-check an attestation file against the files on disk.
- ``verify``   Verify the provenance of a build's direct dependencies.
"""
from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

console = Console()


@click.group()
@click.version_option(package_name="slsa-attest")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Include debug logs.")
def cli(verbose: bool) -> None:
    """Build output attestation and dependency provenance verification"""
    _configure_logging(verbose)


def _configure_logging(verbose: bool) -> None:
    """Send package logs, including forwarded verifier output, to stderr."""
    package_logger = logging.getLogger("slsa_attest")
    for handler in list(package_logger.handlers):
        if isinstance(handler, RichHandler):
            package_logger.removeHandler(handler)
    handler = RichHandler(console=Console(stderr=True), show_path=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG if verbose else logging.INFO)


# ---------------------------------------------------------------------------
# version
# ---------------------------------------------------------------------------


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    from slsa_attest import __version__

    console.print(f"[bold]slsa-attest[/bold] v{__version__}")


# ---------------------------------------------------------------------------
# hash
# ---------------------------------------------------------------------------


@cli.command(name="hash")
@click.argument(
    "target_dir",
    type=click.Path(path_type=Path, file_okay=False),
)
@click.option(
    "--output-json",
    "-o",
    default=None,
    help="Attestation file path (default: TARGET_DIR/hash.json).",
)
@click.option(
    "--config",
    "config_file",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="YAML configuration file (outputJsonPath, runHashJarfile).",
)
@click.option(
    "--run/--skip",
    "run_gate",
    default=None,
    help="Force the generator on or off (overrides runHashJarfile).",
)
def hash_command(
    target_dir: Path,
    output_json: str | None,
    config_file: Path | None,
    run_gate: bool | None,
) -> None:
    """Digest the .jar and .pom files in TARGET_DIR into an attestation file.

    Examples:

    \b
        slsa-attest hash target/
        slsa-attest hash target/ -o build/attestations/hash.json
        slsa-attest hash target/ --config slsa.yaml
    """
    from slsa_attest.config import HashConfig, load_config
    from slsa_attest.hashing.errors import HashingError
    from slsa_attest.hashing.generator import HashGenerator

    base = HashConfig(run_hash_jarfile=True)
    if config_file is not None:
        try:
            loaded = load_config(config_file).hashing
        except (ValueError, FileNotFoundError) as exc:
            console.print(f"[red]Configuration error:[/red] {exc}")
            sys.exit(1)
        base = loaded

    config = HashConfig(
        output_json_path=output_json if output_json is not None else base.output_json_path,
        run_hash_jarfile=run_gate if run_gate is not None else base.run_hash_jarfile,
    )

    try:
        written = HashGenerator(config).run(target_dir)
    except HashingError as exc:
        console.print(f"[red]Failed to generate hashes for the build outputs:[/red] {exc}")
        sys.exit(1)

    if written is None:
        console.print("[yellow]Artifact hashing is skipped.[/yellow]")
        return
    console.print(f"[green]Attestations written to:[/green] {written}")


# ---------------------------------------------------------------------------
# check
# ---------------------------------------------------------------------------


@cli.command(name="check")
@click.argument(
    "attestation_file",
    type=click.Path(path_type=Path, dir_okay=False),
)
@click.option(
    "--target-dir",
    "-d",
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help="Directory holding the attested files (default: the file's directory).",
)
@click.option(
    "--json-output",
    is_flag=True,
    default=False,
    help="Output results as JSON.",
)
def check_command(
    attestation_file: Path,
    target_dir: Path | None,
    json_output: bool,
) -> None:
    """Re-check ATTESTATION_FILE against the files it describes."""
    from slsa_attest.hashing.errors import HashingError
    from slsa_attest.hashing.integrity import check_collection
    from slsa_attest.hashing.model import load_collection

    try:
        collection = load_collection(attestation_file)
        results = check_collection(collection, target_dir or attestation_file.parent)
    except (ValueError, FileNotFoundError, HashingError) as exc:
        console.print(f"[red]Check error:[/red] {exc}")
        sys.exit(1)

    all_ok = all(result.ok for result in results)

    if json_output:
        payload = {
            "ok": all_ok,
            "results": [
                {
                    "name": r.name,
                    "status": r.status.value,
                    "expected": r.expected,
                    "actual": r.actual,
                }
                for r in results
            ],
        }
        click.echo(json.dumps(payload, indent=2))
    else:
        table = Table(title=f"Integrity check: {attestation_file}")
        table.add_column("File", style="cyan")
        table.add_column("Status")
        colours = {"match": "green", "mismatch": "red", "missing": "yellow"}
        for result in results:
            colour = colours[result.status.value]
            table.add_row(result.name, f"[{colour}]{result.status.value}[/{colour}]")
        console.print(table)

    if not all_ok:
        sys.exit(1)


# ---------------------------------------------------------------------------
# verify
# ---------------------------------------------------------------------------


@cli.command(name="verify")
@click.option(
    "--dependencies",
    "dependencies_file",
    required=True,
    type=click.Path(path_type=Path, dir_okay=False),
    help="YAML file with a top-level 'dependencies' list.",
)
@click.option(
    "--repository",
    required=True,
    type=click.Path(path_type=Path, file_okay=False),
    help="Maven-layout repository to fetch provenance files and jars from.",
)
@click.option(
    "--verifier-path",
    default=None,
    help="Path to the external verifier executable.",
)
@click.option(
    "--work-dir",
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help="Directory receiving downloaded files (default: target/slsa).",
)
@click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help="Seconds to wait for each verifier process.",
)
@click.option(
    "--config",
    "config_file",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="YAML configuration file (verifierPath, workDir, verifierTimeout).",
)
@click.option(
    "--json-output",
    is_flag=True,
    default=False,
    help="Output the report as JSON.",
)
@click.option(
    "--fail-on-error",
    is_flag=True,
    default=False,
    help="Exit non-zero if any dependency failed verification.",
)
def verify_command(
    dependencies_file: Path,
    repository: Path,
    verifier_path: str | None,
    work_dir: Path | None,
    timeout: float | None,
    config_file: Path | None,
    json_output: bool,
    fail_on_error: bool,
) -> None:
    """Verify the provenance of every dependency in DEPENDENCIES.

    Dependencies without a provenance file are skipped.  By default the
    command reports results without failing.

    Examples:

    \b
        slsa-attest verify --dependencies deps.yaml \\
            --repository ~/.m2/repository --verifier-path ./slsa-verifier
    """
    from slsa_attest.config import PluginConfig, VerifierConfig, load_config
    from slsa_attest.verification.coordinates import load_dependencies
    from slsa_attest.verification.fetcher import LocalRepositoryFetcher
    from slsa_attest.verification.verifier import ProvenanceVerifier

    try:
        base = load_config(config_file) if config_file is not None else PluginConfig()
        config = VerifierConfig(
            verifier_path=verifier_path or base.verifier_path,
            work_dir=work_dir or base.work_dir,
            timeout=timeout if timeout is not None else base.verifier_timeout,
        )
        dependencies = load_dependencies(dependencies_file)
    except (ValueError, FileNotFoundError) as exc:
        console.print(f"[red]Configuration error:[/red] {exc}")
        sys.exit(1)

    verifier = ProvenanceVerifier.from_config(config, LocalRepositoryFetcher(repository))
    try:
        report = verifier.verify(dependencies)
    except OSError as exc:
        console.print(
            f"[red]Configuration error:[/red] Could not prepare work directory "
            f"{config.work_dir}: {exc}"
        )
        sys.exit(1)

    if json_output:
        click.echo(json.dumps(report.to_dict(), indent=2))
    else:
        table = Table(title="Dependency provenance")
        table.add_column("Dependency", style="cyan")
        table.add_column("Status")
        table.add_column("Reason")
        colours = {"verified": "green", "failed": "red", "skipped": "yellow"}
        for outcome in report.outcomes:
            colour = colours[outcome.status.value]
            table.add_row(
                outcome.coordinate.coordinate,
                f"[{colour}]{outcome.status.value}[/{colour}]",
                outcome.reason,
            )
        console.print(table)
        console.print(
            f"  Verified: {len(report.verified)}  Failed: {len(report.failed)}"
            f"  Skipped: {len(report.skipped)}"
        )
        if report.aborted:
            console.print("[red]Verification stopped: the verifier could not be launched.[/red]")

    if fail_on_error and report.has_failures:
        sys.exit(1)


if __name__ == "__main__":
    cli()
