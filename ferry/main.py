"""
ferry — CLI entrypoint.

Usage:
    python -m ferry.main --help
    ferry update
    ferry install ripgrep
"""

from __future__ import annotations

import json
import sys

import click

from ferry import __version__
from ferry.core.observability.logging_config import resolve_level, setup_from_env


@click.group()
@click.version_option(version=__version__, prog_name="ferry")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, quiet: bool, debug: bool) -> None:
    """ferry — install prebuilt binaries from a package registry."""
    ctx.ensure_object(dict)
    ctx.obj["quiet"] = quiet

    setup_from_env(resolve_level(debug, verbose, quiet), quiet_third_party=not debug)


def get_engine(ctx: click.Context):
    """Build the engine context once per invocation."""
    from ferry.core.config.loader import load_settings
    from ferry.core.context import EngineContext
    from ferry.core.errors import FerryError

    obj = ctx.ensure_object(dict)
    if "engine" not in obj:
        try:
            obj["engine"] = EngineContext.from_settings(load_settings())
        except FerryError as e:
            fail(str(e))
    return obj["engine"]


def get_observer(ctx: click.Context):
    from ferry.ui.cli.observer import ClickProgressObserver

    return ClickProgressObserver(quiet=ctx.ensure_object(dict).get("quiet", False))


def fail(message: str) -> None:
    click.secho(f"Error: {message}", fg="red")
    sys.exit(1)


# ── Query ───────────────────────────────────────────────────────


@cli.command("list")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def list_installed(ctx: click.Context, as_json: bool) -> None:
    """List installed packages."""
    engine = get_engine(ctx)
    packages = engine.state.packages

    if as_json:
        click.echo(json.dumps(engine.state.model_dump(mode="json"), indent=2))
        return

    click.secho("Installed Packages:", bold=True)
    if not packages:
        click.echo("   (No packages installed)")
        return
    for name in sorted(packages):
        click.echo(f" - {click.style(name, bold=True)} (v{packages[name].version})")


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def search(ctx: click.Context, as_json: bool) -> None:
    """Search for available packages."""
    from ferry.core.platform import current_target
    from ferry.core.services.manifest_store import list_available_packages

    engine = get_engine(ctx)
    target = current_target()
    available = list_available_packages(engine)

    if as_json:
        click.echo(json.dumps(
            {name: m.model_dump(mode="json") for name, m in available},
            indent=2,
        ))
        return

    click.secho(f"Available Packages ({target}):", bold=True)
    if not available:
        click.echo("   (Registry is empty — run 'ferry update')")
        return
    for name, manifest in available:
        supported = "✅" if target in manifest.targets else "⚪"
        desc = f" — {manifest.description}" if manifest.description else ""
        click.echo(f" {supported} {name:<24} v{manifest.version}{desc}")


# ── Mutate ──────────────────────────────────────────────────────


@cli.command()
@click.argument("name")
@click.pass_context
def install(ctx: click.Context, name: str) -> None:
    """Install a package."""
    from ferry.core.errors import FerryError
    from ferry.core.use_cases.install import install_by_name

    engine = get_engine(ctx)
    click.secho(f"📦 Installing {name}", fg="cyan", bold=True)
    try:
        outcome = install_by_name(engine, name, observer=get_observer(ctx))
    except FerryError as e:
        fail(str(e))
        return

    if outcome.status == "skipped":
        click.secho(f"⚠️  {outcome.message}", fg="yellow")
        return
    if not outcome.ok:
        fail(outcome.message)
    assert outcome.result is not None
    click.secho(
        f"✅ Installed {name} v{outcome.result.version} → {outcome.result.path}",
        fg="green",
    )


@cli.command()
@click.argument("name")
@click.pass_context
def uninstall(ctx: click.Context, name: str) -> None:
    """Uninstall a package."""
    from ferry.core.services.install_ops import uninstall_package

    result = uninstall_package(get_engine(ctx), name)
    if result is None:
        click.secho(f"⚠️  {name} is not installed", fg="yellow")
        return
    click.secho(f"🗑️  Uninstalled {name}", fg="green")
    for binary in result.binaries_removed:
        click.echo(f"   - {binary}")


@cli.command()
@click.pass_context
def upgrade(ctx: click.Context) -> None:
    """Upgrade all installed packages."""
    from ferry.core.errors import FerryError
    from ferry.core.use_cases.upgrade import upgrade_all

    click.secho("🔍 Checking for upgrades...", fg="cyan")
    try:
        result = upgrade_all(get_engine(ctx), observer=get_observer(ctx))
    except FerryError as e:
        fail(str(e))
        return

    for pkg in result.upgraded:
        click.echo(f"   {pkg.name}: {pkg.from_version} → {pkg.to_version}")
    if result.count:
        click.secho(f"✅ Upgraded {result.count} package(s)", fg="green")
    else:
        click.secho("✅ Everything is up to date", fg="green")


@cli.command()
@click.pass_context
def update(ctx: click.Context) -> None:
    """Update the package registry."""
    from ferry.core.errors import FerryError
    from ferry.core.services.registry_sync import update_registry

    try:
        result = update_registry(get_engine(ctx), get_observer(ctx))
    except FerryError as e:
        fail(str(e))
        return
    click.secho(
        f"✅ Registry updated from {result.source} ({result.manifests} packages)",
        fg="green",
    )


@cli.command()
@click.pass_context
def clean(ctx: click.Context) -> None:
    """Remove temp files left by interrupted installs."""
    from ferry.core.services.clean import clean_trash

    result = clean_trash(get_engine(ctx))
    if not result.files_cleaned:
        click.echo("✨ No trash found")
        return
    click.secho(f"🧹 Cleaned {len(result.files_cleaned)} file(s)", fg="green")
    for name in result.files_cleaned:
        click.echo(f"   - {name}")


# ── Register sub-command groups from ferry/ui/cli/ ────────────────

from ferry.ui.cli.dev import dev  # noqa: E402

cli.add_command(dev)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
