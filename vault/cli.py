"""
Vault CLI
==========

Click-based command-line interface for CyberVault. Provides subcommands
for encryption, decryption, text and file hashing, password strength
assessment and password generation.

Usage::

    python -m vault encrypt "attack at dawn" -a AES -k hunter2
    python -m vault decrypt "U2FsdGVkX1..." -a AES -k hunter2
    python -m vault hash "hello" -a SHA256
    python -m vault hash-file ./image.iso --expected 9f86d0...
    python -m vault password "abcdefgH1!"
    python -m vault generate --length 24 --no-symbols

References:
    - Click Documentation. https://click.palletsprojects.com/
"""

from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path
from typing import Callable, Optional

import click

from shared.config import ToolkitConfig
from shared.console import ToolkitConsole
from shared.models import ScanResult

from vault import __version__
from vault.core.engine import VaultEngine
from vault.core.errors import VaultError
from vault.core.models import (
    CipherAlgorithm,
    CryptoRequest,
    CryptoResult,
    DigestAlgorithm,
    FileHashReport,
    Operation,
    StrengthAssessment,
)
from vault.output.console import VaultConsoleOutput
from vault.output.report import VaultReportGenerator

_CIPHER_CHOICES = [a.value for a in CipherAlgorithm]
_DIGEST_CHOICES = [d.value for d in DigestAlgorithm]
_FILE_DIGEST_CHOICES = [d.value for d in DigestAlgorithm if d.supports_files]


# ===================================================================== #
#  CLI Group
# ===================================================================== #

@click.group()
@click.version_option(__version__, prog_name="cybervault")
@click.option(
    "--config", "-c",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Path to CyberVault configuration file (TOML).",
)
@click.option(
    "--output", "-o",
    type=click.Choice(["console", "json"]),
    default="console",
    help="Output format.",
)
@click.option(
    "--output-file", "-f",
    type=click.Path(dir_okay=False),
    default=None,
    help="Output file path (for JSON output).",
)
@click.option(
    "--quiet", "-q",
    is_flag=True,
    default=False,
    help="Suppress the banner.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config: Optional[str],
    output: str,
    output_file: Optional[str],
    quiet: bool,
) -> None:
    """CyberVault -- client-side cryptography and password toolkit.

    Encrypt, decrypt and hash text, hash and compare files, assess
    password strength, and generate random passwords.
    """
    ctx.ensure_object(dict)

    toolkit_config = ToolkitConfig.load(config) if config else ToolkitConfig()
    ctx.obj["config"] = toolkit_config
    ctx.obj["output_format"] = output
    ctx.obj["output_file"] = output_file

    console = ToolkitConsole()
    ctx.obj["console"] = console
    ctx.obj["engine"] = VaultEngine(toolkit_config)
    ctx.obj["display"] = VaultConsoleOutput(console)
    ctx.obj["reporter"] = VaultReportGenerator()

    if not quiet and output == "console":
        console.banner(version=toolkit_config.global_settings.version)


def _handle_output(
    ctx: click.Context,
    result: ScanResult,
    render: Callable[[], None],
) -> None:
    """Render *result* on the console or export it as JSON."""
    console: ToolkitConsole = ctx.obj["console"]

    if ctx.obj["output_format"] == "console":
        render()
        console.findings_table(result.findings)
        return

    reporter: VaultReportGenerator = ctx.obj["reporter"]
    output_file = ctx.obj["output_file"]
    if output_file:
        path = reporter.generate_json(result, Path(output_file))
        click.echo(f"JSON report saved to: {path}", err=True)
    else:
        click.echo(reporter.render_json(result))


def _run_crypto(ctx: click.Context, request: CryptoRequest) -> None:
    engine: VaultEngine = ctx.obj["engine"]
    display: VaultConsoleOutput = ctx.obj["display"]

    result = engine.crypto_report(request)
    outcome = CryptoResult.model_validate(result.metadata)
    _handle_output(ctx, result, lambda: display.display_crypto(outcome))
    if not outcome.ok:
        ctx.exit(1)


# ===================================================================== #
#  Subcommands
# ===================================================================== #

@cli.command()
@click.argument("text")
@click.option("--algorithm", "-a", type=click.Choice(_CIPHER_CHOICES, case_sensitive=False),
              default=None, help="Cipher (default from config).")
@click.option("--key", "-k", default=None, help="Shared secret (not needed for Base64).")
@click.pass_context
def encrypt(ctx: click.Context, text: str, algorithm: Optional[str], key: Optional[str]) -> None:
    """Encrypt TEXT (or Base64-encode it)."""
    algo = algorithm or ctx.obj["config"].vault.default_encrypt_algorithm
    _run_crypto(ctx, CryptoRequest(operation=Operation.ENCRYPT, algorithm=algo, text=text, key=key))


@cli.command()
@click.argument("text")
@click.option("--algorithm", "-a", type=click.Choice(_CIPHER_CHOICES, case_sensitive=False),
              default=None, help="Cipher (default from config).")
@click.option("--key", "-k", default=None, help="Shared secret (not needed for Base64).")
@click.pass_context
def decrypt(ctx: click.Context, text: str, algorithm: Optional[str], key: Optional[str]) -> None:
    """Decrypt TEXT produced by the encrypt command."""
    algo = algorithm or ctx.obj["config"].vault.default_encrypt_algorithm
    _run_crypto(ctx, CryptoRequest(operation=Operation.DECRYPT, algorithm=algo, text=text, key=key))


@cli.command("hash")
@click.argument("text")
@click.option("--algorithm", "-a", type=click.Choice(_DIGEST_CHOICES, case_sensitive=False),
              default=None, help="Digest (default from config).")
@click.pass_context
def hash_cmd(ctx: click.Context, text: str, algorithm: Optional[str]) -> None:
    """Compute the hex digest of TEXT."""
    algo = algorithm or ctx.obj["config"].vault.default_hash_algorithm
    _run_crypto(ctx, CryptoRequest(operation=Operation.HASH, algorithm=algo, text=text))


@cli.command("hash-file")
@click.argument("file", type=click.Path(dir_okay=False))
@click.option("--algorithm", "-a", type=click.Choice(_FILE_DIGEST_CHOICES, case_sensitive=False),
              default=None, help="Digest (default from config).")
@click.option("--expected", "-e", default=None, help="Digest to compare against.")
@click.pass_context
def hash_file(ctx: click.Context, file: str, algorithm: Optional[str], expected: Optional[str]) -> None:
    """Hash FILE and optionally compare it with an expected digest."""
    engine: VaultEngine = ctx.obj["engine"]
    display: VaultConsoleOutput = ctx.obj["display"]

    console: ToolkitConsole = ctx.obj["console"]

    if ctx.obj["output_format"] == "console":
        with console.status(f"Hashing {Path(file).name}..."):
            result = asyncio.run(engine.file_report(Path(file), algorithm, expected))
    else:
        result = asyncio.run(engine.file_report(Path(file), algorithm, expected))

    def render() -> None:
        if result.metadata:
            display.display_file_hash(FileHashReport.model_validate(result.metadata))

    _handle_output(ctx, result, render)
    if not result.metadata:
        ctx.exit(1)
    if result.metadata.get("matches") is False:
        ctx.exit(2)


@cli.command()
@click.argument("password")
@click.pass_context
def password(ctx: click.Context, password: str) -> None:
    """Assess the strength of PASSWORD."""
    engine: VaultEngine = ctx.obj["engine"]
    display: VaultConsoleOutput = ctx.obj["display"]

    result = engine.password_report(password)
    assessment = StrengthAssessment.model_validate(result.metadata)
    _handle_output(ctx, result, lambda: display.display_strength(assessment))


@cli.command()
@click.option("--length", "-l", type=int, default=None, help="Password length.")
@click.option("--uppercase/--no-uppercase", default=None, help="Include A-Z.")
@click.option("--lowercase/--no-lowercase", default=None, help="Include a-z.")
@click.option("--numbers/--no-numbers", default=None, help="Include 0-9.")
@click.option("--symbols/--no-symbols", default=None, help="Include punctuation.")
@click.pass_context
def generate(
    ctx: click.Context,
    length: Optional[int],
    uppercase: Optional[bool],
    lowercase: Optional[bool],
    numbers: Optional[bool],
    symbols: Optional[bool],
) -> None:
    """Generate a random password."""
    engine: VaultEngine = ctx.obj["engine"]
    display: VaultConsoleOutput = ctx.obj["display"]

    try:
        generated = engine.generate_password(length, uppercase, lowercase, numbers, symbols)
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="--length") from exc

    if ctx.obj["output_format"] == "console":
        display.display_generated(generated)
        return

    document = generated.model_dump(mode="json")
    output_file = ctx.obj["output_file"]
    if output_file:
        reporter: VaultReportGenerator = ctx.obj["reporter"]
        path = reporter.write(document, Path(output_file))
        click.echo(f"JSON report saved to: {path}", err=True)
    else:
        click.echo(json.dumps(document, indent=2, ensure_ascii=False))


# ===================================================================== #
#  Entry Point
# ===================================================================== #

def main() -> None:
    """Main entry point for the CyberVault CLI."""
    try:
        cli(obj={})
    except VaultError as exc:
        click.echo(f"Error: {exc.message}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
