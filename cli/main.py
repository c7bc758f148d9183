"""CLI for resolving SSL bundles from Vault."""

from pathlib import Path

import click
from dotenv import load_dotenv

from vaultssl import __version__

load_dotenv(Path.cwd() / ".env")


def _load(ctx: click.Context):
    """Load config, Vault settings and bundle specs for a command."""
    from vaultssl.config import ConfigLoader, VaultSettings, load_bundle_specs

    loader = ConfigLoader(config_dir=ctx.obj["config_dir"])
    cfg = loader.load(environment=ctx.obj["environment"])
    return VaultSettings.from_config(cfg), load_bundle_specs(cfg)


def _describe(value) -> str:
    if value is None:
        return "-"
    if value.startswith("-----BEGIN"):
        return f"PEM ({len(value)} chars)"
    return value


@click.group()
@click.version_option(version=__version__, prog_name="vault-ssl-bundles")
@click.option(
    "--config-dir",
    "-c",
    type=click.Path(path_type=Path),
    default=None,
    help="Config directory (default: $VAULT_SSL_CONFIG_DIR or ./config)",
)
@click.option("--environment", "-e", default=None, help="Environment (dev/prod)")
@click.option("--log-level", default="WARNING", help="Log level")
@click.pass_context
def cli(ctx: click.Context, config_dir: Path, environment: str, log_level: str):
    """Vault SSL Bundles CLI - load PEM bundles from HashiCorp Vault."""
    from vaultssl.utils.logging import setup_logging

    setup_logging(level=log_level)
    ctx.ensure_object(dict)
    ctx.obj["config_dir"] = config_dir
    ctx.obj["environment"] = environment


@cli.command()
@click.pass_context
def bundles(ctx: click.Context):
    """List configured bundles and which slots reference Vault."""
    from vaultssl.bundles import is_reference

    settings, specs = _load(ctx)

    click.echo(f"\n{'='*60}")
    click.echo(f"Configured Bundles ({len(specs)})")
    click.echo(f"{'='*60}\n")

    for name, spec in specs.items():
        click.echo(f"  • {name}")
        slots = spec.to_dict()
        for slot, fields in slots.items():
            for field_name, value in fields.items():
                if value is None:
                    continue
                source = "vault" if is_reference(value, settings.prefix) else "literal"
                click.echo(f"      {slot}.{field_name}: {source}")

    click.echo("")


@cli.command()
@click.pass_context
def resolve(ctx: click.Context):
    """Resolve all bundles from Vault and report the outcome."""
    from vaultssl.bundles import (
        BundleRegistrar,
        BundleRegistrationError,
        BundleRegistry,
        BundleResolver,
    )

    settings, specs = _load(ctx)
    resolver = BundleResolver(settings.create_store(), prefix=settings.prefix)
    registry = BundleRegistry(resolver)
    registrar = BundleRegistrar(specs, resolver)

    click.echo(f"\n{'='*60}")
    click.echo(f"Resolving {len(specs)} bundle(s) from {settings.url}")
    click.echo(f"{'='*60}\n")

    failures = []
    try:
        registrar.register_bundles(registry)
    except BundleRegistrationError as e:
        failures = e.failures

    for name in registry.names():
        bundle = registry.get_bundle(name)
        click.echo(f"✓ {name}")
        click.echo(f"    certificate:    {_describe(bundle.certificate)}")
        click.echo(f"    private key:    {'present' if bundle.private_key else '-'}")
        click.echo(f"    ca certificate: {_describe(bundle.ca_certificate)}")

    for failure in failures:
        click.echo(f"✗ {failure.bundle_name}: {failure.cause}", err=True)

    click.echo(f"\nResolved: {len(registry)}, Failed: {len(failures)}")
    if failures:
        raise SystemExit(1)


@cli.command()
@click.argument("name")
@click.pass_context
def show(ctx: click.Context, name: str):
    """Print the certificate of a bundle (NAME may be vault:<path>)."""
    from vaultssl.bundles import BundleError, BundleRegistry, BundleResolver, SslBundle

    settings, specs = _load(ctx)
    resolver = BundleResolver(settings.create_store(), prefix=settings.prefix)
    registry = BundleRegistry(resolver)

    try:
        if name in specs:
            spec = resolver.resolve_bundle(specs[name])
            registry.register_bundle(name, SslBundle.from_spec(spec))
        bundle = registry.get_bundle(name)
    except BundleError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)

    if bundle.certificate:
        click.echo(bundle.certificate)
    if bundle.ca_certificate:
        click.echo(bundle.ca_certificate)


@cli.command()
@click.pass_context
def health(ctx: click.Context):
    """Check config and secret store health."""
    click.echo(f"\n{'='*60}")
    click.echo("Health Check")
    click.echo(f"{'='*60}\n")

    try:
        settings, specs = _load(ctx)
        click.echo(f"✓ Config loaded ({len(specs)} bundles)")
    except Exception as e:
        click.echo(f"✗ Config failed: {e}")
        raise SystemExit(1)

    try:
        store = settings.create_store()
        if store.health_check():
            click.echo(f"✓ Secret store reachable ({settings.store})")
        else:
            click.echo(f"✗ Secret store unhealthy ({settings.store})")
    except Exception as e:
        click.echo(f"✗ Secret store failed: {e}")

    click.echo("")


def main():
    """Entry point."""
    cli(obj={})


if __name__ == "__main__":
    main()
