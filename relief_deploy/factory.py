"""
Contract factories

A ContractFactory binds one compiled artifact to a signer and can build,
estimate, submit or attach deployments of it. Failures are translated into
the deployment error types and raised immediately, without retries.
"""

from dataclasses import dataclass
from typing import Any, Optional

from web3 import Web3

from .artifacts import ArtifactStore, ContractArtifact
from .exceptions import (
    DeploymentFailedError,
    EstimationFailedError,
    InvalidAddressError,
    SignerUnavailableError,
)

RECEIPT_TIMEOUT = 300


@dataclass(frozen=True)
class DeployedContract:
    contract: Any
    transaction_hash: str
    receipt: Any

    @property
    def address(self) -> str:
        return self.contract.address


class ContractFactory:
    """Deploys or attaches instances of one contract artifact."""

    def __init__(self, artifact: ContractArtifact, signer):
        self.artifact = artifact
        self.signer = signer
        self.w3 = signer.w3
        self._contract = self.w3.eth.contract(abi=artifact.abi, bytecode=artifact.bytecode)

    @property
    def contract_name(self) -> str:
        return self.artifact.contract_name

    def get_deploy_transaction(self, *args) -> dict:
        """Unsigned deployment transaction with constructor arguments encoded."""
        constructor = self._contract.constructor(*args)
        return {"from": self.signer.address, "data": constructor.data_in_transaction}

    def estimate_gas(self, *args) -> int:
        """Ask the node what deploying with these arguments would cost. Sends nothing."""
        try:
            return self._contract.constructor(*args).estimate_gas({"from": self.signer.address})
        except Exception as e:
            raise EstimationFailedError(
                f"Gas estimation for {self.contract_name} failed: {e}"
            ) from e

    def deploy(self, *args, value: int = 0, timeout: int = RECEIPT_TIMEOUT) -> DeployedContract:
        """Submit the deployment and wait for it to be mined."""
        try:
            tx_hash = self.signer.transact(self._contract.constructor(*args), value=value)
            receipt = self.w3.eth.wait_for_transaction_receipt(tx_hash, timeout=timeout)
        except Exception as e:
            raise DeploymentFailedError(
                f"Deployment of {self.contract_name} failed: {e}"
            ) from e

        if receipt.status != 1:
            raise DeploymentFailedError(
                f"Deployment of {self.contract_name} reverted in tx {tx_hash.to_0x_hex()}"
            )

        return DeployedContract(
            contract=self.w3.eth.contract(address=receipt.contractAddress, abi=self.artifact.abi),
            transaction_hash=tx_hash.to_0x_hex(),
            receipt=receipt,
        )

    def attach(self, address: str):
        """Bind the ABI to an already deployed address. No request is made."""
        if not isinstance(address, str) or not Web3.is_address(address):
            raise InvalidAddressError(f"Not a valid contract address: {address!r}")
        return self.w3.eth.contract(address=Web3.to_checksum_address(address), abi=self.artifact.abi)


def get_contract_factory(
    contract_name: str,
    signer,
    store: ArtifactStore,
    network: Optional[str] = None,
) -> ContractFactory:
    """
    Return a factory for contract_name bound to signer.

    Raises ArtifactNotFoundError if nothing was compiled under that name and
    SignerUnavailableError if there is no signer or it belongs to another
    network than the active one.
    """
    if signer is None:
        raise SignerUnavailableError(f"No signer available to deploy {contract_name}")
    if network is not None and signer.network != network:
        raise SignerUnavailableError(
            f"Signer {signer.address} belongs to {signer.network}, not {network}"
        )

    return ContractFactory(store.get(contract_name), signer)
