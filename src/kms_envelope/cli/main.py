"""Typer-based command line interface for kms-envelope."""
from __future__ import annotations

from pathlib import Path
from typing import NoReturn, Optional

import typer

from ..config import AppConfig, load_config
from ..core.exceptions import KmsEnvelopeError, VerificationFailed
from ..crypto.keys import RsaPublicKey
from ..kms.base import KeyService
from ..kms.loader import load_key_service
from ..logging import configure_logging
from ..services.asymmetric import AsymmetricOperations
from ..version import __version__

app = typer.Typer(help="Asymmetric key operations against a remote key service")

KEY_HELP = "Key version resource name (projects/.../cryptoKeyVersions/N)"


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"kms-envelope {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(None, "--config", metavar="PATH"),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show version and exit"
    ),
) -> None:
    try:
        ctx.obj = load_config(config)
    except ValueError as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(code=2)
    configure_logging(ctx.obj.logging.normalized_level())


def build_key_service(config: AppConfig) -> KeyService:
    return load_key_service(config.key_service)


def _operations(ctx: typer.Context) -> AsymmetricOperations:
    config: AppConfig = ctx.obj
    try:
        return AsymmetricOperations(build_key_service(config))
    except ValueError as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(code=2)


def _fail(exc: KmsEnvelopeError) -> NoReturn:
    if isinstance(exc, VerificationFailed):
        typer.echo("signature invalid", err=True)
    else:
        typer.echo(f"error: {exc}", err=True)
    raise typer.Exit(code=1)


@app.command("public-key")
def public_key(ctx: typer.Context, key: str = typer.Argument(..., help=KEY_HELP)) -> None:
    """Print the public key's type and parameters"""
    try:
        resolved = _operations(ctx).get_public_key(key)
    except KmsEnvelopeError as exc:
        _fail(exc)
    if isinstance(resolved, RsaPublicKey):
        typer.echo(f"RSA {resolved.key_size} bits, e={resolved.exponent}")
    else:
        typer.echo(f"EC {resolved.curve}")


@app.command()
def encrypt(
    ctx: typer.Context,
    key: str = typer.Argument(..., help=KEY_HELP),
    message: str = typer.Option(..., "-m", "--message", help="Plaintext to encrypt"),
) -> None:
    """RSA-OAEP encrypt locally; prints base64 ciphertext"""
    try:
        typer.echo(_operations(ctx).encrypt_rsa(message, key))
    except KmsEnvelopeError as exc:
        _fail(exc)


@app.command()
def decrypt(
    ctx: typer.Context,
    key: str = typer.Argument(..., help=KEY_HELP),
    ciphertext: str = typer.Option(..., "-c", "--ciphertext", help="Base64 ciphertext"),
) -> None:
    """Decrypt with the service-held private key"""
    try:
        typer.echo(_operations(ctx).decrypt_rsa(ciphertext, key))
    except KmsEnvelopeError as exc:
        _fail(exc)


@app.command()
def sign(
    ctx: typer.Context,
    key: str = typer.Argument(..., help=KEY_HELP),
    message: str = typer.Option(..., "-m", "--message", help="Message to sign"),
) -> None:
    """Sign the SHA-256 digest of a message; prints base64 signature"""
    try:
        typer.echo(_operations(ctx).sign_asymmetric(message, key))
    except KmsEnvelopeError as exc:
        _fail(exc)


@app.command("verify-rsa")
def verify_rsa(
    ctx: typer.Context,
    key: str = typer.Argument(..., help=KEY_HELP),
    message: str = typer.Option(..., "-m", "--message"),
    signature: str = typer.Option(..., "-s", "--signature", help="Base64 signature"),
) -> None:
    """Verify an RSA-PSS SHA-256 signature"""
    try:
        _operations(ctx).verify_signature_rsa(signature, message, key)
    except KmsEnvelopeError as exc:
        _fail(exc)
    typer.echo("signature valid")


@app.command("verify-ec")
def verify_ec(
    ctx: typer.Context,
    key: str = typer.Argument(..., help=KEY_HELP),
    message: str = typer.Option(..., "-m", "--message"),
    signature: str = typer.Option(..., "-s", "--signature", help="Base64 DER signature"),
) -> None:
    """Verify an ECDSA SHA-256 signature"""
    try:
        _operations(ctx).verify_signature_ec(signature, message, key)
    except KmsEnvelopeError as exc:
        _fail(exc)
    typer.echo("signature valid")
