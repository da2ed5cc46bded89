"""Exception types raised while configuring and running deployments."""


class DeploymentError(Exception):
    """Base exception for every deployment failure."""

    pass


class ConfigurationError(DeploymentError, ValueError):
    """Raised when an environment value is missing or malformed."""

    pass


class ArtifactNotFoundError(DeploymentError, LookupError):
    """Raised when no compiled artifact exists for a contract name."""

    pass


class SignerUnavailableError(DeploymentError, RuntimeError):
    """Raised when the signer cannot act on the active network."""

    pass


class NoSignerConfiguredError(DeploymentError, RuntimeError):
    """Raised when the active network exposes no signer at all."""

    pass


class EstimationFailedError(DeploymentError, RuntimeError):
    """Raised when the node cannot estimate gas for a deployment."""

    pass


class DeploymentFailedError(DeploymentError, RuntimeError):
    """Raised when a deployment transaction is rejected or reverts."""

    pass


class InvalidAddressError(DeploymentError, ValueError):
    """Raised when attaching to a malformed contract address."""

    pass
