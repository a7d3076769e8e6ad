"""Command-line interface for license-sync."""

import sys
from pathlib import Path

import click
import yaml
from colorama import Fore, Style, init

from license_cli.config import (
    CONFIG_FILENAME,
    DEFAULT_LICENSE_FILE,
    DEFAULT_LINE_LENGTH,
    DEFAULT_TEMPLATE_PATH,
    ProjectLicenseConfig,
)
from license_cli.exceptions import LicenseError
from license_cli.tasks import ASSEMBLE, LICENSE_TEMPLATE_UPDATE, LICENSE_UPDATE, build_task_graph
from license_cli.utils.console import (
    _rich_error, _rich_info, _rich_panel, _rich_success, _rich_table, _rich_warning
)
from license_cli.version import get_version

init(autoreset=True)

ERROR = f"{Fore.RED}{Style.BRIGHT}"
RESET = Style.RESET_ALL


def print_version(ctx, param, value):
    """Print version and exit."""
    if not value or ctx.resilient_parsing:
        return
    _rich_panel(f"license-sync version {get_version()}", style="cyan")
    ctx.exit()


@click.group(help="license-sync: keep the project license in sync with its canonical text")
@click.option('--version', is_flag=True, callback=print_version,
              expose_value=False, is_eager=True, help="Show version and exit.")
@click.option('--project-dir', '-C', default=".", show_default=True,
              type=click.Path(file_okay=False, path_type=Path), help="Project root directory")
@click.option('--config', 'config_file', type=click.Path(dir_okay=False, path_type=Path),
              help=f"Configuration file (default: {CONFIG_FILENAME} in the project root)")
@click.pass_context
def cli(ctx, project_dir, config_file):
    """Main entry point for the license-sync CLI."""
    ctx.ensure_object(dict)
    ctx.obj['project_dir'] = project_dir
    ctx.obj['config_file'] = config_file


def _config_provider(ctx, **overrides):
    """Defer configuration loading until a task actually runs."""
    project_dir = ctx.obj['project_dir']
    config_file = ctx.obj['config_file']
    return lambda: ProjectLicenseConfig.load(project_dir, config_file, **overrides)


def _run_tasks(ctx, targets, **overrides):
    graph = build_task_graph(_config_provider(ctx, **overrides))
    try:
        graph.run(targets)
    except LicenseError as e:
        _rich_error(f"Task failed: {e}", symbol="error")
        sys.exit(1)


@cli.command(name="template-update", help="Download configured license into license template file")
@click.option('--url', help="License source URL")
@click.option('--name', help="Copyright holder (organization name)")
@click.option('--inception-year', type=click.IntRange(min=1), help="First year of the copyright range")
@click.option('--template', help="License template file")
@click.option('--reflow/--no-reflow', default=None, help="Re-fill paragraphs longer than the line length")
@click.option('--line-length', type=click.IntRange(min=1), help="Line length used by --reflow")
@click.option('--timeout', type=click.FloatRange(min=0, min_open=True), help="Download timeout in seconds")
@click.pass_context
def template_update(ctx, url, name, inception_year, template, reflow, line_length, timeout):
    """Run the licenseTemplateUpdate task."""
    _run_tasks(
        ctx, [LICENSE_TEMPLATE_UPDATE],
        license_source_url=url,
        organization_name=name,
        inception_year=inception_year,
        template_path=template,
        reflow=reflow,
        line_length=line_length,
        timeout=timeout,
    )


@cli.command(help="Update license file from template")
@click.option('--template', help="License template file")
@click.option('--output', '-o', help="License file to write")
@click.pass_context
def update(ctx, template, output):
    """Run the licenseUpdate task."""
    _run_tasks(ctx, [LICENSE_UPDATE], template_path=template, license_file=output)


@cli.command(help="Assemble the project (updates the license file first)")
@click.pass_context
def assemble(ctx):
    """Run the assemble lifecycle task and its dependencies."""
    _run_tasks(ctx, [ASSEMBLE])


@cli.command(help="Run tasks by name, dependencies first")
@click.argument('task_names', nargs=-1, required=True)
@click.pass_context
def run(ctx, task_names):
    """Run the named tasks."""
    _run_tasks(ctx, list(task_names))


@cli.command(help="List available tasks")
@click.pass_context
def tasks(ctx):
    """Show declared tasks with their dependencies."""
    graph = build_task_graph(_config_provider(ctx))
    _rich_table(
        "Tasks",
        ["Task", "Group", "Description", "Depends on"],
        [(t.name, t.group, t.description, ", ".join(t.depends_on) or "-") for t in graph.tasks],
    )


@cli.command(help="List project files and whether the header checker skips them")
@click.option('--excluded', 'only_excluded', is_flag=True, help="Only list excluded files")
@click.pass_context
def headers(ctx, only_excluded):
    """Classify project files with the configured header excludes."""
    try:
        settings = _config_provider(ctx)()
    except LicenseError as e:
        _rich_error(f"Error loading configuration: {e}", symbol="error")
        sys.exit(1)

    header = settings.header_settings()
    rows = []
    skipped = 0
    for path, excluded in header.scan(settings.base_dir):
        if excluded:
            skipped += 1
        if excluded or not only_excluded:
            rows.append((path.as_posix(), "excluded" if excluded else "checked"))

    _rich_table(f"Header files ({header.header})", ["File", "Status"], rows)
    _rich_info(f"{skipped} excluded, build directory '{header.build_dir}' not scanned")


@cli.command(help="Show the resolved license configuration")
@click.option('--show', is_flag=True, help="Show current configuration")
@click.pass_context
def config(ctx, show):
    """Display configuration and header settings."""
    if not show:
        _rich_info("Use --show to display configuration")
        return

    try:
        settings = _config_provider(ctx)()
    except LicenseError as e:
        _rich_error(f"Error loading configuration: {e}", symbol="error")
        sys.exit(1)

    header = settings.header_settings()
    _rich_table(
        "License Configuration",
        ["Category", "Setting", "Value"],
        [
            ("Project", "Organization", settings.organization_name or "(unset)"),
            ("", "Inception year", settings.inception_year or "(unset)"),
            ("License", "Source URL", settings.license_source_url or "(unset)"),
            ("", "Template", settings.template_file),
            ("", "License file", settings.license_path),
            ("", "Line length", settings.line_length),
            ("", "Reflow", settings.reflow),
            ("", "Timeout", f"{settings.timeout}s"),
            ("Headers", "Header file", header.header),
            ("", "Excludes", ", ".join(header.excludes)),
            ("", "Build directory", header.build_dir),
            ("Global", "license-sync version", get_version()),
        ],
    )


@cli.command(name="init", help=f"Create a starter {CONFIG_FILENAME}")
@click.option('--name', default="Your Organization", show_default=True, help="Copyright holder")
@click.option('--url', default="", help="License source URL")
@click.option('--inception-year', type=click.IntRange(min=1), help="First year of the copyright range")
@click.option('--force', '-f', is_flag=True, help="Overwrite an existing configuration file")
@click.pass_context
def init_config(ctx, name, url, inception_year, force):
    """Write a license.yml with default settings."""
    path = ctx.obj['config_file'] or ctx.obj['project_dir'] / CONFIG_FILENAME
    if path.exists() and not force:
        _rich_warning(f"{path} already exists, use --force to overwrite")
        sys.exit(1)

    data = {'organization': {'name': name}}
    if inception_year:
        data['inception_year'] = inception_year
    data['license'] = {
        'source_url': url,
        'template': DEFAULT_TEMPLATE_PATH,
        'file': DEFAULT_LICENSE_FILE,
        'excludes': [],
        'line_length': DEFAULT_LINE_LENGTH,
        'reflow': False,
    }

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            yaml.safe_dump(data, f, sort_keys=False)
    except OSError as e:
        _rich_error(f"Cannot write {path}: {e}", symbol="error")
        sys.exit(1)
    _rich_success(f"Created {path}", symbol="success")


def main():
    """Main entry point for the CLI."""
    try:
        cli(obj={})
    except Exception as e:
        click.echo(f"{ERROR}Error: {e}{RESET}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
