"""
Deployment modules

A module names the contract to deploy and the parameters its constructor
takes, each with a default. Defaults can be overridden from a JSON file
keyed by module id:

    {"ReliefFinanceModule": {"rwaToken": "0x..."}}
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

from web3 import Web3

from .exceptions import ConfigurationError


@dataclass(frozen=True)
class DeploymentModule:
    module_id: str
    contract_name: str
    # Ordered (name, default) pairs, in constructor argument order
    parameters: Tuple[Tuple[str, Any], ...] = field(default=())

    @property
    def defaults(self) -> Dict[str, Any]:
        return dict(self.parameters)

    def constructor_args(self, overrides: Optional[Mapping[str, Any]] = None) -> List[Any]:
        """Constructor arguments after applying parameter overrides."""
        overrides = dict(overrides or {})
        unknown = sorted(set(overrides) - set(self.defaults))
        if unknown:
            raise ConfigurationError(
                f"Unknown parameter(s) for {self.module_id}: {', '.join(unknown)}"
            )
        return [_normalize(overrides.get(name, default)) for name, default in self.parameters]


def _normalize(value):
    # Addresses must be checksummed before ABI encoding
    if isinstance(value, str) and len(value) == 42 and Web3.is_address(value):
        return Web3.to_checksum_address(value)
    return value


RWA_TOKEN_ADDRESS = "0x4563554284aa7148d6e6d0351519e954ba3b6e02"

RELIEF_FINANCE_MODULE = DeploymentModule(
    module_id="ReliefFinanceModule",
    contract_name="ReliefFinance",
    parameters=(("rwaToken", RWA_TOKEN_ADDRESS),),
)


def load_parameters(path: Optional[Path], module: DeploymentModule) -> Dict[str, Any]:
    """Read the overrides for one module from a parameters file."""
    if path is None:
        return {}

    path = Path(path)
    if not path.exists():
        raise ConfigurationError(f"Parameters file not found: {path}")

    try:
        with open(path) as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Parameters file {path} is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Parameters file {path} must hold a JSON object keyed by module id")

    params = data.get(module.module_id, {})
    if not isinstance(params, dict):
        raise ConfigurationError(f"Parameters for {module.module_id} in {path} must be an object")
    return params
