"""
Deployment runner

Drives one script run through its stages:

    IDLE -> SIGNER_ACQUIRED -> FACTORY_READY
         -> GAS_ESTIMATED | DEPLOYED | ATTACHED -> REPORTED -> TERMINAL

Any deployment error moves the run to FAILED and is re-raised to the caller.
Nothing is retried; a submitted deployment cannot be rolled back anyway.
"""

from contextlib import contextmanager
from enum import Enum

from .artifacts import ArtifactStore
from .config import NetworkProfile
from .exceptions import DeploymentError, NoSignerConfiguredError
from .factory import get_contract_factory
from .records import DeploymentResult
from .signers import get_signers


class Stage(Enum):
    IDLE = "idle"
    SIGNER_ACQUIRED = "signer_acquired"
    FACTORY_READY = "factory_ready"
    GAS_ESTIMATED = "gas_estimated"
    DEPLOYED = "deployed"
    ATTACHED = "attached"
    REPORTED = "reported"
    TERMINAL = "terminal"
    FAILED = "failed"


OUTCOMES = (Stage.GAS_ESTIMATED, Stage.DEPLOYED, Stage.ATTACHED)


class Operation(Enum):
    ESTIMATE = "estimate"
    DEPLOY = "deploy"
    ATTACH = "attach"


class DeploymentRunner:
    """Runs one estimate, deploy or attach against a single network."""

    def __init__(self, w3, profile: NetworkProfile, store: ArtifactStore):
        self.w3 = w3
        self.profile = profile
        self.store = store
        self.stage = Stage.IDLE
        self.signer = None
        self.factory = None
        self.contract = None
        self.result = None

    def _advance(self, allowed, new_stage: Stage):
        if self.stage not in allowed:
            raise RuntimeError(
                f"Cannot move to {new_stage.value} from {self.stage.value}"
            )
        self.stage = new_stage

    @contextmanager
    def _step(self, allowed):
        if self.stage not in allowed:
            raise RuntimeError(f"Step not allowed in stage {self.stage.value}")
        try:
            yield
        except DeploymentError:
            self.stage = Stage.FAILED
            raise

    def acquire_signer(self):
        with self._step((Stage.IDLE,)):
            signers = get_signers(self.w3, self.profile)
            if not signers:
                raise NoSignerConfiguredError(f"No signer configured for {self.profile.name}")
            self.signer = signers[0]
        self._advance((Stage.IDLE,), Stage.SIGNER_ACQUIRED)
        print(f"👤 Deploying contracts with the account: {self.signer.address}")
        return self.signer

    def prepare_factory(self, contract_name: str):
        with self._step((Stage.SIGNER_ACQUIRED,)):
            self.factory = get_contract_factory(
                contract_name, self.signer, self.store, network=self.profile.name
            )
        self._advance((Stage.SIGNER_ACQUIRED,), Stage.FACTORY_READY)
        return self.factory

    def estimate_gas(self, *args) -> DeploymentResult:
        with self._step((Stage.FACTORY_READY,)):
            estimated_gas = self.factory.estimate_gas(*args)
        self.result = DeploymentResult(
            contract_name=self.factory.contract_name,
            network=self.profile.name,
            estimated_gas=estimated_gas,
            deployer=self.signer.address,
        )
        self._advance((Stage.FACTORY_READY,), Stage.GAS_ESTIMATED)
        return self.result

    def deploy(self, *args) -> DeploymentResult:
        with self._step((Stage.FACTORY_READY,)):
            print(f"🚀 Deploying {self.factory.contract_name} to {self.profile.name}...")
            deployed = self.factory.deploy(*args)
        self.contract = deployed.contract
        self.result = DeploymentResult(
            contract_name=self.factory.contract_name,
            network=self.profile.name,
            contract_address=deployed.address,
            transaction_hash=deployed.transaction_hash,
            deployer=self.signer.address,
            block_number=deployed.receipt.blockNumber,
            gas_used=deployed.receipt.gasUsed,
        )
        self._advance((Stage.FACTORY_READY,), Stage.DEPLOYED)
        return self.result

    def attach(self, address: str) -> DeploymentResult:
        with self._step((Stage.FACTORY_READY,)):
            self.contract = self.factory.attach(address)
        self.result = DeploymentResult(
            contract_name=self.factory.contract_name,
            network=self.profile.name,
            contract_address=self.contract.address,
            deployer=self.signer.address,
        )
        self._advance((Stage.FACTORY_READY,), Stage.ATTACHED)
        return self.result

    def report(self) -> str:
        """Print a summary of the outcome and return it."""
        if self.stage not in OUTCOMES:
            raise RuntimeError(f"Nothing to report in stage {self.stage.value}")

        result = self.result
        if self.stage == Stage.GAS_ESTIMATED:
            lines = [f"Estimated Gas Cost: {result.estimated_gas}"]
        elif self.stage == Stage.DEPLOYED:
            lines = [
                f"contract deployed to {result.contract_address}",
                f"🔗 Transaction hash: {result.transaction_hash}",
                f"⛽ Gas used: {result.gas_used:,}",
            ]
        else:
            lines = [f"attached to {result.contract_address}"]

        summary = "\n".join(lines)
        print(summary)
        self._advance(OUTCOMES, Stage.REPORTED)
        return summary

    def finish(self):
        self._advance((Stage.REPORTED,), Stage.TERMINAL)

    def execute(self, operation: Operation, contract_name: str, args=(), address: str = None) -> DeploymentResult:
        """Run every stage of one operation and return its result."""
        self.acquire_signer()
        self.prepare_factory(contract_name)

        if operation == Operation.ESTIMATE:
            self.estimate_gas(*args)
        elif operation == Operation.DEPLOY:
            self.deploy(*args)
        elif operation == Operation.ATTACH:
            self.attach(address)
        else:
            raise ValueError(f"Unknown operation: {operation!r}")

        self.report()
        self.finish()
        return self.result
