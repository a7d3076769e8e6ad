"""Version management for license-sync."""

import re
from pathlib import Path

# Build-time version constant (injected during packaging)
__BUILD_VERSION__ = None


def get_version() -> str:
    """
    Get the current version.

    Uses the build-time constant when present, otherwise reads the version
    from the repository's pyproject.toml (development checkouts).

    Returns:
        str: Version string, or "unknown" when it cannot be determined
    """
    if __BUILD_VERSION__:
        return __BUILD_VERSION__

    pyproject_path = Path(__file__).parent.parent.parent / "pyproject.toml"
    if not pyproject_path.exists():
        return "unknown"

    try:
        content = pyproject_path.read_text(encoding='utf-8')
    except OSError:
        return "unknown"

    match = re.search(r'^version\s*=\s*["\']([^"\']+)["\']', content, re.MULTILINE)
    if match and re.match(r'^\d+\.\d+\.\d+(a\d+|b\d+|rc\d+)?$', match.group(1)):
        return match.group(1)
    return "unknown"


__version__ = get_version()
