"""Command line interface for registry version checks."""

from pathlib import Path

import click

from .app import RegistryApp
from .cache.registry_cache import RegistryCache
from .config import load_config
from .diff import removed_identifiers
from .exceptions import TemplateRegistryError
from .logging import create_registry_logger
from .types import BumpCategory
from .versioning import bump_semver, is_semver

PART_CHOICES = [category.value for category in BumpCategory]


def _report_error(app: RegistryApp | None, message: str, error: Exception) -> None:
    """Echo an error for the user and log it through the app logger when there is one."""
    click.echo(f"ERROR: {error}", err=True)
    logger = app.logger if app is not None else create_registry_logger(log_level="ERROR")
    logger.error(message, error=error)


@click.group()
@click.version_option(package_name="template-registry")
def main():
    """Template registry CLI - decide the next registry version from local templates."""
    pass


@main.command()
@click.argument("version")
@click.option("--part", type=click.Choice(PART_CHOICES), default="minor", help="Version component to bump")
def bump(version: str, part: str):
    """Print VERSION bumped by one PART (malformed versions yield 1.0.0)."""
    click.echo(bump_semver(version, BumpCategory(part)))


@main.command()
@click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help="YAML or JSON config file")
@click.option("--registry-url", help="URL of the published registry.json")
@click.option("--registry-file", type=click.Path(dir_okay=False, path_type=Path),
              help="Read the published registry from a local file instead")
@click.option("--templates-dir", type=click.Path(file_okay=False, path_type=Path),
              help="Directory holding one folder per template")
@click.option("--part", type=click.Choice(PART_CHOICES), default=None, help="Version component to bump")
@click.option("--offline", is_flag=True, help="Use only the cached registry")
@click.option("--log-level", type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]), default=None)
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON")
@click.option("--check", is_flag=True, help="Exit with code 1 when a version bump is needed")
@click.pass_context
def diff(ctx, config_path, registry_url, registry_file, templates_dir, part, offline,
         log_level, as_json: bool, check: bool):
    """Compare the published registry with local templates and report the next version."""
    app = None
    try:
        config = load_config(
            config_path,
            registry_url=registry_url,
            registry_file=registry_file,
            templates_dir=templates_dir,
            bump_part=part,
            offline=offline or None,
            log_level=log_level,
        )
        app = RegistryApp(config)

        previous = app.load_previous()
        local_ids = app.scan_local()
        result = app.evaluate(previous, local_ids)

    except TemplateRegistryError as e:
        _report_error(app, "Registry diff failed", e)
        ctx.exit(2)

    if as_json:
        click.echo(result.to_json())
    else:
        if previous is None:
            click.echo(f"[REGISTRY] No published registry at {app.source.location}")
        else:
            click.echo(f"[REGISTRY] {app.source.location} (version {previous.version})")
            click.echo(f"[LIVE] {', '.join(sorted(previous.templates)) or '(none)'}")
        click.echo(f"[LOCAL] {', '.join(local_ids) or '(none)'}")
        click.echo(f"[NEW] {', '.join(result.new_identifiers) or '(none)'}")

        removed = removed_identifiers(previous, local_ids)
        if removed:
            click.echo(f"[REMOVED] {', '.join(removed)} (no version change)")

        click.echo(f"Version: {result.base_version} -> {result.next_version}")
        if not is_semver(result.next_version):
            click.echo(f"WARNING: {result.next_version} is not a MAJOR.MINOR.PATCH version", err=True)

    if check and result.bumped:
        ctx.exit(1)


@main.group()
def cache():
    """Registry snapshot cache commands."""
    pass


def _load_cache(ctx, config_path: Path | None, cache_dir: Path | None) -> RegistryCache:
    """Cache location and TTL from config, with --cache-dir taking precedence."""
    try:
        config = load_config(config_path, cache_dir=cache_dir)
    except TemplateRegistryError as e:
        _report_error(None, "Cache config failed", e)
        ctx.exit(2)
    return RegistryCache(config.cache_dir, config.cache_ttl)


@cache.command()
@click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help="YAML or JSON config file")
@click.option("--cache-dir", type=click.Path(file_okay=False, path_type=Path), default=None,
              help="Cache directory (default from config)")
@click.pass_context
def stats(ctx, config_path: Path | None, cache_dir: Path | None):
    """Show cache statistics."""
    registry_cache = _load_cache(ctx, config_path, cache_dir)
    cache_stats = registry_cache.stats()

    click.echo("Cache Statistics:")
    click.echo(f"  Entries: {cache_stats['count']}")
    click.echo(f"  Size: {cache_stats['size_mb']:.2f} MB")
    click.echo(f"  Stale: {cache_stats['stale']}")
    for source in cache_stats['sources']:
        click.echo(f"  - {source}")


@cache.command()
@click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help="YAML or JSON config file")
@click.option("--cache-dir", type=click.Path(file_okay=False, path_type=Path), default=None,
              help="Cache directory (default from config)")
@click.confirmation_option(prompt="Are you sure you want to clear the cache?")
@click.pass_context
def clear(ctx, config_path: Path | None, cache_dir: Path | None):
    """Remove all cached registry snapshots."""
    cleared = _load_cache(ctx, config_path, cache_dir).clear()
    click.echo(f"Cleared {cleared} cached registries")


if __name__ == "__main__":
    main()
