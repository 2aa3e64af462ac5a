from .step_10_check_preconditions import CheckPreconditionsStep
from .step_20_provision_deps import ProvisionDependenciesStep
from .step_30_resolve_compositor import ResolveCompositorStep
from .step_40_deploy_files import DeployFilesStep
from .step_50_activate_service import ActivateServiceStep

__all__ = [
    "CheckPreconditionsStep",
    "ProvisionDependenciesStep",
    "ResolveCompositorStep",
    "DeployFilesStep",
    "ActivateServiceStep",
]
