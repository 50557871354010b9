"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/normalizer.py
Canonical path keys used for directory identity, cycle detection and exclusion.

A canonical key is the absolute, separator-normalized form of a path, case-folded
unless the normalizer is configured as case-sensitive. Symbolic links, hard links
and mount aliases are NOT resolved: two paths reaching the same physical directory
under different names produce different keys.
"""

import os
from functools import lru_cache
from typing import NewType, Union

CanonicalKey = NewType("CanonicalKey", str)


@lru_cache(maxsize=8192)
def _normalize_absolute(path: str, case_sensitive: bool) -> str:
    key = os.path.normcase(os.path.normpath(path))
    if not case_sensitive:
        key = key.casefold()
    return key


class PathNormalizer:
    """
    Produces canonical keys for paths.

    Attributes:
        case_sensitive: When False (default), keys differing only by case are equal
    """

    def __init__(self, case_sensitive: bool = False):
        self.case_sensitive = case_sensitive

    def canonical_key(self, path: Union[str, "os.PathLike[str]"]) -> CanonicalKey:
        """
        Build the canonical key for a path.

        Examples (case-insensitive):
            "/Data/Photos/"  → "/data/photos"
            "/data/./photos" → "/data/photos"
            "photos" (cwd /data) → "/data/photos"
        """
        absolute = os.path.abspath(os.fspath(path))
        return CanonicalKey(_normalize_absolute(absolute, self.case_sensitive))

    def __repr__(self):
        return f"<PathNormalizer case_sensitive={self.case_sensitive}>"
