"""
CLI commands for registry authoring.

Thin wrappers over ``ferry.core.services.dev_ops``.
"""

from __future__ import annotations

import click


@click.group()
def dev() -> None:
    """Developer tools — add and import packages into a local registry."""


@dev.command()
@click.argument("name")
@click.option("--version", "version", required=True, help="Package version.")
@click.option("--target", required=True, help="Target triple, e.g. x86_64-linux.")
@click.option("--url", required=True, help="Download URL of the .tar.gz.")
@click.option("--bin", "bin_name", default=None, help="Binary name (default: NAME).")
@click.pass_context
def add(
    ctx: click.Context,
    name: str,
    version: str,
    target: str,
    url: str,
    bin_name: str | None,
) -> None:
    """Create or update a manifest in the local registry."""
    from ferry.core.errors import FerryError
    from ferry.core.services.dev_ops import add_package_manual
    from ferry.main import fail, get_engine, get_observer

    engine = get_engine(ctx)
    click.echo(f"🌐 Fetching {url}")
    try:
        path = add_package_manual(
            engine, name, version, target, url, bin_name, get_observer(ctx),
        )
    except FerryError as e:
        fail(str(e))
        return
    click.secho(f"✅ Added {name} ({target}) → {path}", fg="green")


@dev.command("import")
@click.argument("repo")
@click.pass_context
def import_release(ctx: click.Context, repo: str) -> None:
    """Import the latest GitHub release of OWNER/REPO."""
    from ferry.core.errors import FerryError
    from ferry.core.services.dev_ops import add_package_manual, fetch_github_import_candidates
    from ferry.main import fail, get_engine, get_observer

    engine = get_engine(ctx)
    click.echo(f"🔎 Fetching release metadata for {repo}")
    try:
        name, version, candidates = fetch_github_import_candidates(engine, repo)
    except FerryError as e:
        fail(str(e))
        return
    click.secho(f"Found release v{version}", fg="cyan", bold=True)

    for candidate in candidates:
        if not candidate.assets:
            click.echo(f"   ⏭️  No assets for {candidate.target_slug}")
            continue

        click.secho(f"\n{candidate.target_desc} [{candidate.target_slug}]", bold=True)
        click.echo("   0) skip")
        for i, scored in enumerate(candidate.assets, start=1):
            click.echo(f"   {i}) {scored.asset.name}  (score {scored.score})")

        choice = click.prompt(
            "   Select asset",
            type=click.IntRange(0, len(candidate.assets)),
            default=1,
        )
        if choice == 0:
            click.echo(f"   ⏭️  Skipping {candidate.target_slug}")
            continue

        asset = candidate.assets[choice - 1].asset
        click.echo(f"🌐 Fetching {asset.browser_download_url}")
        try:
            add_package_manual(
                engine,
                name,
                version,
                candidate.target_slug,
                asset.browser_download_url,
                None,
                get_observer(ctx),
            )
        except FerryError as e:
            fail(str(e))
            return

    click.secho("\n✨ Import complete", fg="green")
