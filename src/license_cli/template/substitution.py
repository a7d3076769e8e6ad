"""Placeholder substitution for license templates."""

from typing import Optional, Union

FULLNAME_PLACEHOLDER = "[fullname]"
YEAR_PLACEHOLDER = "[year]"

# Survives into the template and is resolved when the license file is written
YEAR_TOKEN = "${year}"


def replace_variables(text: str, name: Optional[str] = None, year: Optional[Union[int, str]] = None) -> str:
    """Replace the copyright placeholders of a fetched license text.

    Placeholders without a usable value stay in the text unchanged.

    Args:
        text (str): License text containing ``[fullname]`` and ``[year]``.
        name (str, optional): Copyright holder. Skipped when empty.
        year (int or str, optional): Year or year expression. Skipped when
            empty or not positive.

    Returns:
        str: Text with the placeholders replaced.
    """
    if name:
        text = text.replace(FULLNAME_PLACEHOLDER, name)

    if _has_year(year):
        text = text.replace(YEAR_PLACEHOLDER, str(year))

    return text


def _has_year(year: Optional[Union[int, str]]) -> bool:
    if year is None or isinstance(year, bool):
        return False
    if isinstance(year, int):
        return year > 0
    return bool(year.strip())


def year_expression(inception_year: Optional[int], current_year: int) -> str:
    """Build the copyright year written into the template.

    >>> year_expression(2016, 2024)
    '2016-${year}'
    >>> year_expression(None, 2024)
    '${year}'
    """
    if not inception_year or inception_year == current_year:
        return YEAR_TOKEN
    return f"{inception_year}-{YEAR_TOKEN}"


def expand_year(text: str, year: int) -> str:
    """Replace every ``${year}`` token with the given year."""
    return text.replace(YEAR_TOKEN, str(year))
