"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/worklist.py
FIFO queue of directories waiting to be processed.
"""

from collections import deque
from typing import Deque

from dircrawl.core.models import WorklistEntry


class Worklist:
    """
    Children are appended at the tail and processed from the head, so a root's whole
    reachable set unfolds level by level before anything queued after it.
    """

    def __init__(self):
        self._entries: Deque[WorklistEntry] = deque()
        self.total_enqueued = 0

    def push(self, entry: WorklistEntry) -> None:
        self._entries.append(entry)
        self.total_enqueued += 1

    def pop(self) -> WorklistEntry:
        return self._entries.popleft()

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    def __repr__(self):
        return f"<Worklist pending={len(self._entries)}, total={self.total_enqueued}>"
