"""License template retrieval and rendering."""

from .fetcher import LicenseFetcher
from .generator import render_template, update_template, write_text
from .instancer import update_license
from .normalizer import normalize, reflow, strip_preamble, unindent
from .substitution import (
    FULLNAME_PLACEHOLDER,
    YEAR_PLACEHOLDER,
    YEAR_TOKEN,
    expand_year,
    replace_variables,
    year_expression,
)

__all__ = [
    # Fetching and writing
    'LicenseFetcher',
    'render_template',
    'update_template',
    'write_text',
    'update_license',

    # Text processing
    'normalize',
    'reflow',
    'strip_preamble',
    'unindent',
    'replace_variables',
    'year_expression',
    'expand_year',
    'FULLNAME_PLACEHOLDER',
    'YEAR_PLACEHOLDER',
    'YEAR_TOKEN',
]
