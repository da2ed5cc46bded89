"""
Shared pytest fixtures for the deployment tooling.

Chain-level tests run against an in-memory EthereumTester chain. The
ReliefFinance stand-in is compiled once per session and written out as a
Hardhat style artifact in a temporary project directory.
"""

import json
import shutil

import pytest
from pathlib import Path
from eth_account import Account
from eth_tester import EthereumTester, PyEVMBackend
from vyper import compile_code
from web3 import Web3

from relief_deploy.artifacts import ArtifactStore
from relief_deploy.config import resolve_config
from relief_deploy.signers import LocalSigner

CONTRACTS_DIR = Path(__file__).parent / "contracts"

DEPLOYER_KEY = "0x" + "4c" * 32
SECOND_KEY = "0x" + "5d" * 32

RWA_TOKEN = "0x4563554284aa7148d6e6d0351519e954ba3b6e02"
OTHER_TOKEN = "0x000000000000000000000000000000000000dEaD"


@pytest.fixture(scope="session")
def relief_compiled():
    """Compile the ReliefFinance stand-in once per test session"""
    with open(CONTRACTS_DIR / "ReliefFinance.vy") as f:
        return compile_code(f.read(), output_formats=["bytecode", "abi"])


@pytest.fixture
def project_dir(tmp_path, relief_compiled):
    """Project root with Hardhat build output for ReliefFinance and a Vyper Reverter"""
    artifact_dir = tmp_path / "artifacts" / "contracts" / "ReliefFinance.sol"
    artifact_dir.mkdir(parents=True)
    with open(artifact_dir / "ReliefFinance.json", "w") as f:
        json.dump({
            "_format": "hh-sol-artifact-1",
            "contractName": "ReliefFinance",
            "sourceName": "contracts/ReliefFinance.sol",
            "abi": relief_compiled["abi"],
            "bytecode": relief_compiled["bytecode"],
        }, f)

    (tmp_path / "contracts").mkdir()
    shutil.copy(CONTRACTS_DIR / "Reverter.vy", tmp_path / "contracts" / "Reverter.vy")
    return tmp_path


@pytest.fixture
def store(project_dir):
    return ArtifactStore(project_dir)


@pytest.fixture
def eth_tester():
    """Create a fresh EthereumTester for each test"""
    return EthereumTester(backend=PyEVMBackend())


@pytest.fixture
def w3(eth_tester):
    """Create Web3 instance connected to EthereumTester"""
    from web3.providers.eth_tester import EthereumTesterProvider
    return Web3(EthereumTesterProvider(eth_tester))


@pytest.fixture
def accounts(w3):
    return w3.eth.accounts


def fund(w3, address, ether=10):
    tx_hash = w3.eth.send_transaction({
        "from": w3.eth.accounts[0],
        "to": address,
        "value": w3.to_wei(ether, "ether"),
    })
    w3.eth.wait_for_transaction_receipt(tx_hash)


@pytest.fixture
def deployer_address():
    return Account.from_key(DEPLOYER_KEY).address


@pytest.fixture
def funded_key(w3, deployer_address):
    """Private key whose account holds test ether"""
    fund(w3, deployer_address)
    return DEPLOYER_KEY


@pytest.fixture
def sepolia_env(funded_key):
    """Environment for the sepolia network, key given without its 0x prefix"""
    return {
        "SEPOLIA_API_URL": "https://rpc.example",
        "SEPOLIA_PRIVATE_KEY": funded_key[2:],
    }


@pytest.fixture
def sepolia_profile(sepolia_env):
    return resolve_config(sepolia_env, networks=["sepolia"]).network("sepolia")


@pytest.fixture
def localhost_profile():
    return resolve_config({}, networks=["localhost"]).network("localhost")


@pytest.fixture
def local_signer(w3, funded_key):
    return LocalSigner(w3, funded_key, "sepolia")
