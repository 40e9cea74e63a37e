"""Canonical name resolution for rooms and laboratories.

The cascade lives in ``campus_directory.resolution.cascade``; it depends on
the data layer and is imported from there directly.
"""

from .codes import expand_variants, extract_code, loose_code_regex
from .disambiguation import (
    CompoundRule,
    NumberedFamily,
    SISTEMAS_DIGITALES,
    TELEMATICA,
    resolve_lab_token,
    resolve_numbered,
    rewrite_lab_terms,
)
from .normalizer import exact_regex, like_regex, normalize
from .synonyms import SynonymIndex, build_synonym_index, numbered_synonyms
from .tables import SynonymTables, load_synonym_tables

__all__ = [
    "expand_variants",
    "extract_code",
    "loose_code_regex",
    "CompoundRule",
    "NumberedFamily",
    "SISTEMAS_DIGITALES",
    "TELEMATICA",
    "resolve_lab_token",
    "resolve_numbered",
    "rewrite_lab_terms",
    "exact_regex",
    "like_regex",
    "normalize",
    "SynonymIndex",
    "build_synonym_index",
    "numbered_synonyms",
    "SynonymTables",
    "load_synonym_tables",
]
