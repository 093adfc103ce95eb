#!/usr/bin/env python3

import sys
from pathlib import Path

import click
from rich.markup import escape

from vendorpatch import __version__
from vendorpatch.config import ToolConfig
from vendorpatch.console import Console, ConsolePrompter, NonInteractivePrompter
from vendorpatch.creator import PatchCreator, PatchRequest
from vendorpatch.errors import InputError, PatchToolError, UserAbort
from vendorpatch.log import setup_logging
from vendorpatch.package import PackageIdentifier

EPILOG = """\b
Description:
  → Create a patch file for packages by identifying modified files.
  → Supports custom installer paths (e.g., Drupal projects).
  → Detects the package location from composer.json installer-paths.
  → Adds an entry for the patch to composer.json extra.patches.
  → Patches are applied by the composer plugin cweagans/composer-patches.

\b
Examples:
  vendorpatch magento/module-url-rewrite
  vendorpatch drupal/webform -n fix-validation.patch -m "Fixed webform validation"
  vendorpatch bower-asset/photoswipe -n photoswipe-fix.patch

\b
Supported paths:
  → Standard vendor directory (vendor/vendor-name/package-name)
  → Drupal modules (web/modules/contrib, web/modules/custom)
  → Drupal themes (web/themes/contrib, web/themes/custom)
  → Drupal libraries (web/libraries)
  → Drush commands (drush/Commands/contrib)
  → Any custom paths defined in composer.json extra.installer-paths
"""


def _validate_package(ctx, param, value):
    try:
        PackageIdentifier.parse(value)
    except InputError as e:
        raise click.BadParameter(str(e)) from e
    return value


def _strip_equals(ctx, param, value):
    # Accept the short option forms -n=fix.patch and -m=text
    if value and value.startswith("="):
        return value[1:]
    return value


def load_config(project_dir: Path) -> ToolConfig:
    """Settings from the nearest vendorpatch.json, rooted at ``project_dir``."""
    root = project_dir.resolve()
    config = ToolConfig.find_project_config(root)
    if config is None:
        return ToolConfig(project_root=root)
    config.project_root = root
    return config


@click.command(
    context_settings={"help_option_names": ["-h", "--help"]},
    epilog=EPILOG,
)
@click.argument("package", metavar="<vendor/package>", callback=_validate_package)
@click.option("-n", "--name", "patch_name", callback=_strip_equals, help="Custom patch file name.")
@click.option("-m", "--message", "description", callback=_strip_equals, help="Patch description.")
@click.option(
    "-r",
    "--project-relative",
    is_flag=True,
    help="Keep paths relative to the project root (default: vendor-relative).",
)
@click.option(
    "-d",
    "--patches-dir",
    envvar="VENDORPATCH_PATCHES_DIR",
    help="Directory for patch files, relative to the project root.",
)
@click.option(
    "--manifest",
    envvar="VENDORPATCH_MANIFEST",
    help="Manifest file name (default: composer.json).",
)
@click.option(
    "-C",
    "--project-dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=".",
    help="Project root (default: current directory).",
)
@click.option("--no-input", is_flag=True, help="Do not ask for a patch name or description.")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.version_option(__version__, prog_name="vendorpatch")
def main(
    package: str,
    patch_name: str | None,
    description: str | None,
    project_relative: bool,
    patches_dir: str | None,
    manifest: str | None,
    project_dir: Path,
    no_input: bool,
    verbose: bool,
):
    """Vendor patch creation utility.

    Stage a Composer package, wait while you edit it, then save your edits
    as a patch and register it in composer.json.
    """
    console = Console()
    setup_logging(verbose)

    config = load_config(project_dir)
    if patches_dir:
        config.patches_dir = patches_dir
    if manifest:
        config.manifest_file = manifest

    prompter_cls = NonInteractivePrompter if no_input else ConsolePrompter
    creator = PatchCreator(
        config, prompter_cls(console, config.confirm_answer), console=console
    )
    request = PatchRequest(
        package=package,
        patch_name=patch_name,
        description=description,
        project_relative=project_relative,
    )

    try:
        result = creator.create(request)
    except UserAbort as e:
        console.print(f"[yellow]{escape(str(e))}[/yellow]")
        sys.exit(e.exit_code)
    except PatchToolError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        sys.exit(e.exit_code)

    console.print(f"[bold green]✅ Patch created successfully: {escape(str(result.patch_file))}[/bold green]")


if __name__ == "__main__":
    main()
