"""Project license configuration loaded from license.yml."""

from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Any, Dict, List, Optional, Union

import yaml

from .exceptions import ConfigurationError
from .headers import HeaderSettings

CONFIG_FILENAME = "license.yml"

DEFAULT_TEMPLATE_PATH = "docs/templates/LICENSE.txt"
DEFAULT_LICENSE_FILE = "LICENSE.txt"
DEFAULT_LINE_LENGTH = 76
DEFAULT_TIMEOUT = 30.0
DEFAULT_BUILD_DIR = "build"

# Always excluded from header scanning, ahead of project excludes
DEFAULT_HEADER_EXCLUDES = ["**/*.json"]


@dataclass
class ProjectLicenseConfig:
    """Settings for the license template and license file tasks."""
    organization_name: Optional[str] = None
    inception_year: Optional[int] = None
    license_source_url: Optional[str] = None
    exclude_patterns: List[str] = field(default_factory=list)
    template_path: str = DEFAULT_TEMPLATE_PATH
    license_file: str = DEFAULT_LICENSE_FILE
    line_length: int = DEFAULT_LINE_LENGTH
    reflow: bool = False
    timeout: float = DEFAULT_TIMEOUT
    build_dir: str = DEFAULT_BUILD_DIR
    base_dir: Path = field(default_factory=Path.cwd)

    @classmethod
    def load(cls, base_dir: Union[str, Path] = ".", config_file: Optional[Union[str, Path]] = None,
             **overrides) -> 'ProjectLicenseConfig':
        """Create configuration from license.yml with command-line overrides.

        Args:
            base_dir: Project root; relative paths resolve against it.
            config_file: Configuration file, defaults to license.yml in base_dir.
            **overrides: Values that take precedence over the file. None means "not given".

        Returns:
            ProjectLicenseConfig: Configuration with file values and overrides applied.

        Raises:
            ConfigurationError: If the file is malformed or holds invalid values.
        """
        base_dir = Path(base_dir)
        config = cls(base_dir=base_dir)

        path = Path(config_file) if config_file else base_dir / CONFIG_FILENAME
        if path.exists():
            config._apply_file(path)
        elif config_file:
            raise ConfigurationError(f"Configuration file not found: {path}")

        for key, value in overrides.items():
            if value is None:
                continue
            if not hasattr(config, key):
                raise ConfigurationError(f"Unknown configuration setting: {key}")
            setattr(config, key, value)

        config.validate()
        return config

    def _apply_file(self, path: Path) -> None:
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML format in {path}: {e}") from e
        except OSError as e:
            raise ConfigurationError(f"Cannot read {path}: {e}") from e

        if data is None:
            return
        if not isinstance(data, dict):
            raise ConfigurationError(f"{path.name} must contain a YAML object, got {type(data).__name__}")

        organization = data.get('organization') or {}
        if not isinstance(organization, dict):
            raise ConfigurationError("'organization' must be a mapping with a 'name' entry")
        if 'name' in organization:
            self.organization_name = organization['name']
        if 'inception_year' in data:
            self.inception_year = data['inception_year']

        license_section: Dict[str, Any] = data.get('license') or {}
        if not isinstance(license_section, dict):
            raise ConfigurationError("'license' must be a mapping")

        if 'source_url' in license_section:
            self.license_source_url = license_section['source_url']
        if 'template' in license_section:
            self.template_path = license_section['template']
        if 'file' in license_section:
            self.license_file = license_section['file']
        if 'excludes' in license_section:
            self.exclude_patterns = license_section['excludes'] or []
        if 'line_length' in license_section:
            self.line_length = license_section['line_length']
        if 'reflow' in license_section:
            self.reflow = license_section['reflow']
        if 'timeout' in license_section:
            self.timeout = license_section['timeout']
        if 'build_dir' in license_section:
            self.build_dir = license_section['build_dir']

    def validate(self) -> None:
        """Check value types. Presence of the URL and paths is checked by each task."""
        if self.organization_name is not None and not isinstance(self.organization_name, str):
            raise ConfigurationError("'organization.name' must be a string")
        if self.inception_year is not None:
            if isinstance(self.inception_year, bool) or not isinstance(self.inception_year, int) \
                    or self.inception_year <= 0:
                raise ConfigurationError(
                    f"'inception_year' must be a positive integer, got {self.inception_year!r}")
        if self.license_source_url is not None and not isinstance(self.license_source_url, str):
            raise ConfigurationError("'license.source_url' must be a string")
        for key, value in (('license.template', self.template_path),
                           ('license.file', self.license_file),
                           ('license.build_dir', self.build_dir)):
            if value is not None and not isinstance(value, str):
                raise ConfigurationError(f"'{key}' must be a path string, got {value!r}")
        if not isinstance(self.exclude_patterns, list) or \
                not all(isinstance(p, str) for p in self.exclude_patterns):
            raise ConfigurationError("'license.excludes' must be a list of glob strings")
        if isinstance(self.line_length, bool) or not isinstance(self.line_length, int) or self.line_length <= 0:
            raise ConfigurationError(f"'license.line_length' must be a positive integer, got {self.line_length!r}")
        if not isinstance(self.reflow, bool):
            raise ConfigurationError("'license.reflow' must be true or false")
        if isinstance(self.timeout, bool) or not isinstance(self.timeout, (int, float)) or self.timeout <= 0:
            raise ConfigurationError(f"'license.timeout' must be a positive number, got {self.timeout!r}")

    def resolve(self, path: Optional[str]) -> Optional[Path]:
        """Resolve a configured path against the project root."""
        if not path:
            return None
        resolved = Path(path)
        if not resolved.is_absolute():
            resolved = self.base_dir / resolved
        return resolved

    @property
    def template_file(self) -> Optional[Path]:
        return self.resolve(self.template_path)

    @property
    def license_path(self) -> Optional[Path]:
        return self.resolve(self.license_file)

    def header_settings(self) -> HeaderSettings:
        """Settings handed to the source header tool."""
        return HeaderSettings(
            header=self.license_path or self.base_dir / DEFAULT_LICENSE_FILE,
            excludes=DEFAULT_HEADER_EXCLUDES + list(self.exclude_patterns),
            build_dir=PurePosixPath(self.build_dir or DEFAULT_BUILD_DIR),
        )

