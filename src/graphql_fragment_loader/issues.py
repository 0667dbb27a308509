"""Diagnostics reported while compiling a document."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from graphql import Node


class IssueSeverity(str, Enum):
    """Severity level for issues."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class IssueType(str, Enum):
    """Type of issue detected."""

    NAMING_VIOLATION = "naming_violation"
    DANGLING_REFERENCE = "dangling_reference"


@dataclass
class Issue:
    """Represents an issue found while compiling a document."""

    type: IssueType
    severity: IssueSeverity
    message: str
    source_file: Optional[Path] = None
    line: int = 0
    column: int = 0
    operation: Optional[str] = None

    @classmethod
    def at_node(
        cls,
        node: Optional[Node],
        type: IssueType,
        severity: IssueSeverity,
        message: str,
        source_file: Optional[Path] = None,
        operation: Optional[str] = None,
    ) -> "Issue":
        """Create an issue positioned at a node's first token, if it has a location."""
        line = column = 0
        loc = getattr(node, "loc", None)
        if loc is not None and loc.start_token is not None:
            line = loc.start_token.line
            column = loc.start_token.column

        return cls(
            type=type,
            severity=severity,
            message=message,
            source_file=source_file,
            line=line,
            column=column,
            operation=operation,
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON output."""
        return {
            "type": self.type.value,
            "severity": self.severity.value,
            "message": self.message,
            "file": str(self.source_file) if self.source_file else None,
            "line": self.line,
            "column": self.column,
            "operation": self.operation,
        }
