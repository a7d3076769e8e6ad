"""License template generation: fetch, normalize, templatize, write."""

import os
import stat
import tempfile
from datetime import date
from pathlib import Path
from typing import Optional

from ..config import ProjectLicenseConfig
from ..exceptions import ConfigurationError, IoError
from ..utils.console import _rich_echo, _rich_info
from .fetcher import LicenseFetcher
from .normalizer import normalize, reflow
from .substitution import replace_variables, year_expression


def write_text(path: Path, text: str) -> None:
    """Atomically replace ``path`` with ``text`` encoded as UTF-8.

    Parent directories are created as needed. An existing file keeps its
    permissions, a new file gets the usual ``0o666 & ~umask`` mode. On failure
    the previous file content is left in place.

    Raises:
        IoError: If the directory or the file cannot be written.
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}-", dir=str(path.parent))
    except OSError as e:
        raise IoError(f"Cannot create {path}: {e}", path=path) from e

    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as fh:
            fh.write(text)
        os.chmod(tmp_name, _target_mode(path))
        os.replace(tmp_name, path)
    except OSError as e:
        try:
            os.unlink(tmp_name)
        except OSError:
            pass
        raise IoError(f"Cannot write {path}: {e}", path=path) from e


def _target_mode(path: Path) -> int:
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        pass
    # mkstemp creates 0o600, use the mode open() would have created
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def render_template(raw_text: str, config: ProjectLicenseConfig, current_year: int) -> str:
    """Turn a downloaded license text into template text.

    Args:
        raw_text (str): Text as downloaded.
        config (ProjectLicenseConfig): Supplies holder, inception year and reflow settings.
        current_year (int): Year the template is generated in.

    Returns:
        str: Normalized text with the holder resolved and a deferred year expression.
    """
    text = normalize(raw_text)
    if config.reflow:
        text = reflow(text, config.line_length)
    return replace_variables(
        text,
        name=config.organization_name,
        year=year_expression(config.inception_year, current_year),
    )


def update_template(config: ProjectLicenseConfig, fetcher: Optional[LicenseFetcher] = None,
                    current_year: Optional[int] = None) -> Path:
    """Download the configured license into the license template file.

    Args:
        config (ProjectLicenseConfig): Project license configuration.
        fetcher (LicenseFetcher, optional): Fetcher to use, a new one by default.
        current_year (int, optional): Defaults to today's year.

    Returns:
        Path: The written template file.

    Raises:
        ConfigurationError: If the URL or template path is unset.
        FetchError: If the download fails.
        IoError: If the template cannot be written.
    """
    if not config.license_source_url:
        raise ConfigurationError("The license URL must be set (license.source_url)")
    template_file = config.template_file
    if template_file is None:
        raise ConfigurationError("The license template file must be set (license.template)")

    if current_year is None:
        current_year = date.today().year

    owns_fetcher = fetcher is None
    if owns_fetcher:
        fetcher = LicenseFetcher(timeout=config.timeout)

    try:
        _rich_info(f"Downloading license from {config.license_source_url}", symbol="running")
        raw_text = fetcher.fetch(config.license_source_url)
    finally:
        if owns_fetcher:
            fetcher.close()

    text = render_template(raw_text, config, current_year)
    write_text(template_file, text)
    _rich_echo(f"Wrote license template {template_file}", style="muted")
    return template_file
