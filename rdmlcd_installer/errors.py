"""Installer error taxonomy.

Every failure the orchestrator knows how to name is an ``InstallError`` with a
stable ``kind``. The class hierarchy encodes how the pipeline reacts:

- ``PreconditionError``: terminal, the run stops without any cleanup.
- ``FatalError``: the rollback handler releases the lock and ends the run.
- ``RecoverableError``: handled by the component that raised it.
"""

from __future__ import annotations


class InstallError(RuntimeError):
    kind = "InstallError"


class PreconditionError(InstallError):
    kind = "PreconditionError"


class FatalError(InstallError):
    kind = "FatalError"


class RecoverableError(InstallError):
    kind = "RecoverableError"


# Preconditions


class UnsupportedArchitecture(PreconditionError):
    kind = "UnsupportedArchitecture"


class AlreadyInstalling(PreconditionError):
    kind = "AlreadyInstalling"


# Provisioning


class DependencyRefreshFailed(FatalError):
    kind = "DependencyRefreshFailed"


class DependencyInstallFailed(FatalError):
    kind = "DependencyInstallFailed"


# Compositor artifact


class PrebuiltExtractionFailed(RecoverableError):
    kind = "PrebuiltExtractionFailed"


class CompositorInstallFailed(FatalError):
    kind = "CompositorInstallFailed"


class NativeModuleBuildFailed(FatalError):
    kind = "NativeModuleBuildFailed"


# Deployment


class OverlayAssetMissing(FatalError):
    kind = "OverlayAssetMissing"


class OverlayInstallFailed(FatalError):
    kind = "OverlayInstallFailed"


class BootConfigUpdateFailed(FatalError):
    kind = "BootConfigUpdateFailed"


class ServiceUnitWriteFailed(FatalError):
    kind = "ServiceUnitWriteFailed"


# Service lifecycle


class SupervisorReloadFailed(FatalError):
    kind = "SupervisorReloadFailed"


class ServiceEnableFailed(FatalError):
    kind = "ServiceEnableFailed"


class ServiceStartFailed(RecoverableError):
    kind = "ServiceStartFailed"


class StrictServiceStartFailed(FatalError):
    """Service start failure when the host is configured to treat it as fatal."""

    kind = "ServiceStartFailed"
