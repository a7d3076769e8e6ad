"""License file generation from the stored template."""

from datetime import date
from pathlib import Path
from typing import Optional

from ..config import ProjectLicenseConfig
from ..exceptions import ConfigurationError, IoError
from ..utils.console import _rich_echo
from .generator import write_text
from .substitution import expand_year


def update_license(config: ProjectLicenseConfig, current_year: Optional[int] = None) -> Path:
    """Write the project license file from the license template.

    Args:
        config (ProjectLicenseConfig): Project license configuration.
        current_year (int, optional): Year to resolve ``${year}`` with, defaults to today's year.

    Returns:
        Path: The written license file.

    Raises:
        ConfigurationError: If the template or license path is unset.
        IoError: If the template cannot be read or the license file cannot be written.
    """
    template_file = config.template_file
    if template_file is None:
        raise ConfigurationError("The license template file must be set (license.template)")
    license_path = config.license_path
    if license_path is None:
        raise ConfigurationError("The license file must be set (license.file)")

    if current_year is None:
        current_year = date.today().year

    try:
        with open(template_file, "r", encoding="utf-8", newline="") as f:
            template = f.read()
    except FileNotFoundError as e:
        raise IoError(
            f"License template {template_file} not found, run 'license-sync template-update' first",
            path=template_file,
        ) from e
    except (OSError, UnicodeDecodeError) as e:
        raise IoError(f"Cannot read license template {template_file}: {e}", path=template_file) from e

    write_text(license_path, expand_year(template, current_year))
    _rich_echo(f"Wrote license file {license_path}", style="muted")
    return license_path
