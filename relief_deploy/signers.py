"""
Network connections and transaction signers

Two kinds of signer exist: a LocalSigner holding a private key from the
environment, which signs transactions itself and sends them raw, and a
NodeSigner for development nodes that manage unlocked accounts.
"""

from typing import List

from web3 import Web3
from web3.middleware import ExtraDataToPOAMiddleware

from .config import NetworkProfile
from .exceptions import SignerUnavailableError


def connect(profile: NetworkProfile) -> Web3:
    """Create a Web3 client for a network profile. No request is made yet."""
    w3 = Web3(Web3.HTTPProvider(profile.url))
    if profile.poa:
        w3.middleware_onion.inject(ExtraDataToPOAMiddleware, layer=0)
    return w3


class LocalSigner:
    """Signs with a private key and submits raw transactions."""

    def __init__(self, w3: Web3, private_key: str, network: str):
        self.w3 = w3
        self.network = network
        self._account = w3.eth.account.from_key(private_key)

    @property
    def address(self) -> str:
        return self._account.address

    def transact(self, call, value: int = 0):
        """Build, sign and send a contract call or constructor. Returns the tx hash."""
        tx = call.build_transaction({
            "from": self.address,
            "nonce": self.w3.eth.get_transaction_count(self.address),
            "value": value,
        })
        signed_tx = self._account.sign_transaction(tx)
        return self.w3.eth.send_raw_transaction(signed_tx.raw_transaction)

    def __repr__(self):
        return f"LocalSigner({self.address} on {self.network})"


class NodeSigner:
    """An account unlocked on the node itself."""

    def __init__(self, w3: Web3, address: str, network: str):
        self.w3 = w3
        self.network = network
        self.address = address

    def transact(self, call, value: int = 0):
        return call.transact({"from": self.address, "value": value})

    def __repr__(self):
        return f"NodeSigner({self.address} on {self.network})"


def get_signers(w3: Web3, profile: NetworkProfile) -> List:
    """
    Return every signer available on the profile's network, deployer first.

    Key based profiles never touch the network here; node managed accounts
    are listed with eth_accounts.
    """
    if profile.remote_accounts:
        try:
            accounts = w3.eth.accounts
        except Exception as e:
            raise SignerUnavailableError(
                f"Cannot list accounts on {profile.name} ({profile.url}): {e}"
            ) from e
        return [NodeSigner(w3, address, profile.name) for address in accounts]

    return [LocalSigner(w3, key, profile.name) for key in profile.accounts]
