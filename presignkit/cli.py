"""presignkit CLI tool."""

import asyncio
import json
import logging
import sys

import click

from presignkit.core.client import InstanceContext
from presignkit.core.settings import load_settings
from presignkit.storage.signed_urls import (
    OperationKind,
    SignedURLIssuer,
    SignedURLRequest,
)


def build_issuer(region: str | None, endpoint: str | None) -> SignedURLIssuer:
    """Create an issuer from the environment plus command line overrides."""
    overrides = {}
    if region:
        overrides["REGION"] = region
    if endpoint:
        overrides["aws_url"] = endpoint
    return SignedURLIssuer(load_settings(overrides))


def _issue(request: SignedURLRequest, region: str | None, endpoint: str | None):
    async def _run():
        issuer = build_issuer(region, endpoint)
        async with InstanceContext() as context:
            return await issuer.issue(context, request)

    result = asyncio.run(_run())
    click.echo(json.dumps(result.to_callback_value(), indent=2))
    if not result.ok:
        click.echo("Signing failed, see the log output for details.", err=True)
        sys.exit(1)


@click.group()
@click.option("--region", help="AWS region (overrides AWS_DEFAULT_REGION)")
@click.option("--endpoint", help="S3 endpoint URL (for LocalStack)")
@click.option("-v", "--verbose", is_flag=True, help="Log timing markers and errors")
@click.pass_context
def cli(ctx, region, endpoint, verbose):
    """presignkit CLI - Issue signed S3 URLs."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)
    ctx.obj = {"region": region, "endpoint": endpoint}


@cli.command()
@click.argument("bucket")
@click.argument("key")
@click.option("--expires", type=click.IntRange(min=0), default=0, help="URL lifetime in seconds (0 = SDK default)")
@click.option("--max-size", type=click.IntRange(min=0), default=0, help="Max upload size in bytes (0 = no limit)")
@click.pass_context
def post(ctx, bucket, key, expires, max_size):
    """Signed URL and form fields for a browser POST upload."""
    request = SignedURLRequest(
        operation=OperationKind.POST,
        bucket=bucket,
        key=key,
        expire_time=expires,
        max_allowed_size=max_size,
    )
    _issue(request, ctx.obj["region"], ctx.obj["endpoint"])


@cli.command()
@click.argument("bucket")
@click.argument("key")
@click.option("--expires", type=click.IntRange(min=0), default=0, help="URL lifetime in seconds (0 = SDK default)")
@click.pass_context
def put(ctx, bucket, key, expires):
    """Signed URL for an HTTP PUT upload."""
    request = SignedURLRequest(
        operation=OperationKind.PUT, bucket=bucket, key=key, expire_time=expires
    )
    _issue(request, ctx.obj["region"], ctx.obj["endpoint"])


@cli.command()
@click.argument("bucket")
@click.argument("key")
@click.option("--expires", type=click.IntRange(min=0), default=0, help="URL lifetime in seconds (0 = SDK default)")
@click.pass_context
def get(ctx, bucket, key, expires):
    """Signed URL for downloading an object."""
    request = SignedURLRequest(
        operation=OperationKind.GET, bucket=bucket, key=key, expire_time=expires
    )
    _issue(request, ctx.obj["region"], ctx.obj["endpoint"])


@cli.command()
def version():
    """Show presignkit version."""
    from presignkit import __version__

    click.echo(f"presignkit version: {__version__}")


if __name__ == "__main__":
    cli()
