from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ValidationIssue:
    code: str
    message: str
    # Dotted location inside the record, e.g. "address.houseNumber"
    path: str = ""


class ValidationError(Exception):
    def __init__(self, issues: list[ValidationIssue], record_index: Optional[int] = None):
        self.issues = issues
        self.record_index = record_index
        prefix = f"record {record_index}: " if record_index is not None else ""
        super().__init__(
            prefix + "; ".join(f"{i.code} at {i.path or '<root>'}: {i.message}" for i in issues)
        )
