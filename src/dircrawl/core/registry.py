"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/registry.py
Run-unique identifiers for directories and files.
"""

from typing import Dict, Tuple


class IdentityRegistry:
    """
    Assigns sequential ids starting at 1: directories keyed by canonical key,
    files by discovery order. The two sequences are independent.
    The registry only grows; it is owned by a single run.
    """

    def __init__(self):
        self._directory_ids: Dict[str, int] = {}
        self._file_count = 0

    def assign_directory_id(self, canonical_key: str) -> Tuple[int, bool]:
        """
        Returns (id, already_existed). A repeated key returns the existing id and
        already_existed=True, which signals a revisit.
        """
        existing = self._directory_ids.get(canonical_key)
        if existing is not None:
            return existing, True
        new_id = len(self._directory_ids) + 1
        self._directory_ids[canonical_key] = new_id
        return new_id, False

    def next_file_id(self) -> int:
        self._file_count += 1
        return self._file_count

    @property
    def directory_count(self) -> int:
        return len(self._directory_ids)

    @property
    def file_count(self) -> int:
        return self._file_count

    def __repr__(self):
        return f"<IdentityRegistry dirs={self.directory_count}, files={self.file_count}>"
