from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

type ReleaseErrorKind = Literal[
    "config_invalid",
    "missing_version",
    "missing_task",
    "unknown_step",
    "invalid_input",
    "git_failed",
    "publish_failed",
]


@dataclass(frozen=True, slots=True)
class ReleaseError:
    kind: ReleaseErrorKind
    message: str
    hint: str | None = None
