# SPDX-License-Identifier: AGPL-3.0-only
from __future__ import annotations

from enum import Enum
from typing import Any


class _Unknown(Enum):
    ABSENT = "absent"
    INDETERMINATE = "indeterminate"

    def __repr__(self) -> str:
        return self.name


# Attribute lookups return one of three states: a literal, ABSENT (provably not
# there) or INDETERMINATE (depends on a spread or a non-literal expression).
ABSENT = _Unknown.ABSENT
INDETERMINATE = _Unknown.INDETERMINATE


class Interactivity(str, Enum):
    INTERACTIVE = "interactive"
    NON_INTERACTIVE = "non_interactive"
    PRESENTATIONAL = "presentational"
    INDETERMINATE = "indeterminate"

    def __str__(self) -> str:
        return self.value


class ConfigError(ValueError):
    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        super().__init__(message)
        self.errors = list(errors or [])


class SnapshotError(ValueError):
    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        super().__init__(message)
        self.errors = list(errors or [])


class LintError(ValueError):
    def __init__(self, message: str, report: dict[str, Any]) -> None:
        super().__init__(message)
        self.report = report


class LintWarning(UserWarning):
    pass
