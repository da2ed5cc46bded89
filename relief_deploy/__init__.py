"""Deployment tooling for the ReliefFinance contract."""

from .artifacts import ArtifactStore, ContractArtifact
from .config import (
    CustomChainDescriptor,
    DeployConfig,
    NetworkProfile,
    VerificationConfig,
    resolve_config,
)
from .exceptions import (
    ArtifactNotFoundError,
    ConfigurationError,
    DeploymentError,
    DeploymentFailedError,
    EstimationFailedError,
    InvalidAddressError,
    NoSignerConfiguredError,
    SignerUnavailableError,
)
from .factory import ContractFactory, get_contract_factory
from .modules import RELIEF_FINANCE_MODULE, DeploymentModule
from .records import DeploymentResult
from .runner import DeploymentRunner, Operation, Stage

__all__ = [
    "ArtifactNotFoundError",
    "ArtifactStore",
    "ConfigurationError",
    "ContractArtifact",
    "ContractFactory",
    "CustomChainDescriptor",
    "DeployConfig",
    "DeploymentError",
    "DeploymentFailedError",
    "DeploymentModule",
    "DeploymentResult",
    "DeploymentRunner",
    "EstimationFailedError",
    "InvalidAddressError",
    "NetworkProfile",
    "NoSignerConfiguredError",
    "Operation",
    "RELIEF_FINANCE_MODULE",
    "SignerUnavailableError",
    "Stage",
    "VerificationConfig",
    "get_contract_factory",
    "resolve_config",
]
