"""
Deployment results and the records saved for them
"""

import json
import time
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Optional

from .exceptions import ConfigurationError

DEPLOYMENTS_DIR = Path("deployments")


@dataclass(frozen=True)
class DeploymentResult:
    """Outcome of one script run. Estimates carry no address or tx hash."""

    contract_name: str
    network: str
    contract_address: Optional[str] = None
    transaction_hash: Optional[str] = None
    estimated_gas: Optional[int] = None
    deployer: Optional[str] = None
    block_number: Optional[int] = None
    gas_used: Optional[int] = None

    def __post_init__(self):
        if self.estimated_gas is not None and self.estimated_gas < 0:
            raise ValueError("estimated_gas must be unsigned")


def deployment_file(network: str, directory: Path = DEPLOYMENTS_DIR) -> Path:
    return Path(directory) / f"{network}_deployment.json"


def save_deployment(result: DeploymentResult, directory: Path = DEPLOYMENTS_DIR) -> Path:
    """Write the deployment info for result's network, replacing any older one."""
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)

    deployment_info = asdict(result)
    deployment_info.pop("estimated_gas")
    deployment_info["deployment_time"] = int(time.time())

    filename = deployment_file(result.network, directory)
    with open(filename, "w") as f:
        json.dump(deployment_info, f, indent=2)
    return filename


def load_deployment(network: str, directory: Path = DEPLOYMENTS_DIR) -> Optional[dict]:
    """Saved deployment info for network, or None if it was never deployed."""
    filename = deployment_file(network, directory)
    if not filename.exists():
        return None
    try:
        with open(filename) as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Deployment file {filename} is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ConfigurationError(f"Deployment file {filename} must hold a JSON object")
    return data
