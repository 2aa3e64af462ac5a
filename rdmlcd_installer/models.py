from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class ArchSupport(str, Enum):
    UNKNOWN = "unknown"
    SUPPORTED = "supported"
    UNSUPPORTED = "unsupported"


class ArtifactSource(str, Enum):
    UNRESOLVED = "unresolved"
    PREBUILT = "prebuilt"
    SOURCE_BUILD = "source_build"


class Outcome(str, Enum):
    PENDING = "pending"
    SUCCESS = "success"
    FAILED = "failed"


# PREBUILT -> SOURCE_BUILD is the fallback taken when an attempted extraction
# turns out to be unusable.
_ARTIFACT_TRANSITIONS = {
    ArtifactSource.UNRESOLVED: {ArtifactSource.PREBUILT, ArtifactSource.SOURCE_BUILD},
    ArtifactSource.PREBUILT: {ArtifactSource.SOURCE_BUILD},
    ArtifactSource.SOURCE_BUILD: set(),
}


@dataclass
class InstallRun:
    """The single install transaction for this process. Never persisted."""

    arch: Optional[str] = None
    arch_support: ArchSupport = ArchSupport.UNKNOWN
    lock_acquired: bool = False
    artifact_source: ArtifactSource = ArtifactSource.UNRESOLVED
    outcome: Outcome = Outcome.PENDING
    failed_step: Optional[str] = None
    warnings: List[str] = field(default_factory=list)

    def set_artifact_source(self, target: ArtifactSource) -> None:
        if target not in _ARTIFACT_TRANSITIONS[self.artifact_source]:
            raise ValueError(
                f"Invalid artifact source transition: {self.artifact_source.value} -> {target.value}"
            )
        self.artifact_source = target

    def warn(self, message: str) -> None:
        self.warnings.append(message)
