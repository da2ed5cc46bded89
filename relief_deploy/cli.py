"""
Script entry points

Each entry point resolves configuration once, hands it to a
DeploymentRunner and turns any deployment error into exit code 1.
"""

import argparse
import os
import sys
from pathlib import Path

from dotenv import load_dotenv
from web3 import Web3
from web3.exceptions import Web3Exception

from .artifacts import ArtifactStore
from .config import resolve_config
from .exceptions import DeploymentError, InvalidAddressError
from .modules import RELIEF_FINANCE_MODULE, load_parameters
from .records import load_deployment, save_deployment
from .runner import DeploymentRunner, Operation
from .signers import connect

DEFAULT_NETWORK = "localhost"

DESCRIPTIONS = {
    Operation.ESTIMATE: "Estimate the gas needed to deploy ReliefFinance",
    Operation.DEPLOY: "Deploy a new ReliefFinance instance",
    Operation.ATTACH: "Attach to an already deployed ReliefFinance instance",
}


def _parse_args(operation: Operation, argv):
    parser = argparse.ArgumentParser(description=DESCRIPTIONS[operation])
    parser.add_argument("--network", default=DEFAULT_NETWORK, help="Network to run against")
    parser.add_argument("--parameters", type=Path, help="JSON file with module parameter overrides")
    if operation == Operation.ATTACH:
        parser.add_argument(
            "address", nargs="?",
            help="Contract address (defaults to the saved deployment for the network)",
        )
    return parser.parse_args(argv)


def _attach_address(args) -> str:
    address = args.address
    if not address:
        saved = load_deployment(args.network)
        if not saved or not saved.get("contract_address"):
            raise InvalidAddressError(f"No address given and no saved deployment for {args.network}")
        print(f"📍 Using saved deployment for {args.network}")
        address = saved["contract_address"]

    # Validated before any connection is made
    if not Web3.is_address(address):
        raise InvalidAddressError(f"Not a valid contract address: {address!r}")
    return address


def _print_explorer_link(config, w3, address: str):
    # The deployment is already mined and saved; a failed lookup only costs the link
    try:
        chain_id = w3.eth.chain_id
    except (OSError, Web3Exception) as e:
        print(f"⚠️  Could not look up the chain id for an explorer link: {e}")
        return
    chain = config.verification.find_chain(chain_id=chain_id)
    if chain is not None:
        print(f"🔎 {chain.browser_url.rstrip('/')}/address/{address}")


def run(operation: Operation, argv=None, environ=None) -> int:
    """Run one operation end to end. Returns the process exit code."""
    args = _parse_args(operation, argv)
    if environ is None:
        load_dotenv()
        environ = os.environ

    module = RELIEF_FINANCE_MODULE
    try:
        config = resolve_config(environ, networks=[args.network])
        profile = config.network(args.network)
        constructor_args = module.constructor_args(load_parameters(args.parameters, module))
        address = _attach_address(args) if operation == Operation.ATTACH else None

        print(f"🌐 Network: {profile.name}")
        w3 = connect(profile)
        runner = DeploymentRunner(w3, profile, ArtifactStore())
        result = runner.execute(operation, module.contract_name, args=constructor_args, address=address)

        if operation == Operation.DEPLOY:
            filename = save_deployment(result)
            print(f"💾 Deployment info saved to {filename}")
            _print_explorer_link(config, w3, result.contract_address)

    except DeploymentError as e:
        print(f"❌ {type(e).__name__}: {e}", file=sys.stderr)
        return 1

    return 0


def estimate_main(argv=None) -> int:
    return run(Operation.ESTIMATE, argv)


def deploy_main(argv=None) -> int:
    return run(Operation.DEPLOY, argv)


def attach_main(argv=None) -> int:
    return run(Operation.ATTACH, argv)
