from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

PackagingErrorKind = Literal[
    "invalid_config",
    "missing_dependency",
    "dependency_install_declined",
    "dependency_install_failed",
    "missing_source_file",
    "staging_failure",
    "backend_invocation_failure",
    "artifact_not_produced",
]


@dataclass(frozen=True, slots=True)
class PackagingError:
    kind: PackagingErrorKind
    message: str
    hint: str | None = None
