"""
Submission storage.

The gateway depends on the SubmissionStore interface only; the store is
injected when the app is created. InMemorySubmissionStore keeps accepted
submissions for the lifetime of the process.

INVARIANTS:
    - Submissions are appended once and never mutated or removed
    - ids start at 1 and are previous count + 1
"""
from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Sequence

from dynform.model import FieldSchema


def utc_timestamp() -> str:
    """ISO-8601 UTC timestamp with milliseconds, e.g. 2024-05-01T12:00:00.000Z"""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True)
class Submission:
    """
    An accepted form instance.

    Properties:
        id: Sequential identifier assigned by the store
        timestamp: ISO-8601 time of acceptance
        schema: Field schemas the data was validated against
        data: Submitted values, as received
    """

    id: int
    timestamp: str
    schema: List[FieldSchema] = field(default_factory=list)
    data: Dict[str, Any] = field(default_factory=dict)

    def summary(self) -> Dict[str, Any]:
        """Listing shape: the schema is left out."""
        return {"id": self.id, "timestamp": self.timestamp, "data": self.data}


class SubmissionStore(ABC):
    """Append-only store of accepted submissions."""

    @abstractmethod
    def append(self, schema: Sequence[FieldSchema], data: Dict[str, Any]) -> Submission:
        """Record a validated submission and return it with its id."""

    @abstractmethod
    def list(self) -> List[Submission]:
        """All submissions in acceptance order."""

    def __len__(self) -> int:
        return len(self.list())


class InMemorySubmissionStore(SubmissionStore):
    """Process-local store. Appends are serialized by a lock."""

    def __init__(self) -> None:
        self._submissions: List[Submission] = []
        self._lock = threading.Lock()

    def append(self, schema: Sequence[FieldSchema], data: Dict[str, Any]) -> Submission:
        with self._lock:
            submission = Submission(
                id=len(self._submissions) + 1,
                timestamp=utc_timestamp(),
                schema=list(schema),
                data=dict(data),
            )
            self._submissions.append(submission)
        return submission

    def list(self) -> List[Submission]:
        with self._lock:
            return list(self._submissions)

    def __len__(self) -> int:
        with self._lock:
            return len(self._submissions)
