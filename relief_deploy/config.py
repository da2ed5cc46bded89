"""
Network and verification configuration

Resolves RPC endpoints and signing keys for every supported network from an
environment mapping. The mapping is passed in explicitly (the CLI hands over
os.environ after loading .env) so nothing here reads process state.
"""

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional, Tuple

from eth_account import Account

from .exceptions import ConfigurationError

# Network definitions. A network either reads its RPC URL from an
# environment variable or ships a fixed public endpoint.
NETWORKS = {
    "goerli": {
        "url_env": "GOERLI_API_URL",
        "key_env": "GOERLI_PRIVATE_KEY",
    },
    "polygon": {
        "url_env": "POLYGON_API_URL",
        "key_env": "POLYGON_PRIVATE_KEY",
        "poa": True,
    },
    "sepolia": {
        "url_env": "SEPOLIA_API_URL",
        "key_env": "SEPOLIA_PRIVATE_KEY",
    },
    "bnbtestnet": {
        "url_env": "BNBTESTNET_API_URL",
        "default_url": "https://data-seed-prebsc-1-s1.binance.org:8545/",
        "key_env": "BNBTESTNET_PRIVATE_KEY",
        "poa": True,
    },
    "assetchain_testnet": {
        "url_env": "ASSETCHAIN_TESTNET_API_URL",
        "default_url": "https://enugu-rpc.assetchain.org/",
        "key_env": "ASSETCHAIN_PRIVATE_KEY",
    },
    # Local development node with unlocked accounts
    "localhost": {
        "url_env": "LOCALHOST_API_URL",
        "default_url": "http://127.0.0.1:8545",
        "key_env": None,
    },
}

VERIFICATION_API_KEY_ENV = "POLYGONSCAN"

# Chains the verification service does not know about out of the box
CUSTOM_CHAINS = [
    {
        "network": "assetchain_test",
        "chain_id": 42421,
        "api_url": "https://scan-testnet.assetchain.org/api",
        "browser_url": "https://scan-testnet.assetchain.org/",
    },
]

_PRIVATE_KEY_RE = re.compile(r"^(0x)?[0-9a-fA-F]{64}$")


@dataclass(frozen=True)
class NetworkProfile:
    """Connection parameters for one target network."""

    name: str
    url: str
    signing_key: Optional[str] = field(default=None, repr=False)
    extra_signing_keys: Tuple[str, ...] = field(default=(), repr=False)
    remote_accounts: bool = False
    poa: bool = False

    @property
    def accounts(self) -> List[str]:
        """All signing keys, deployer first."""
        if self.remote_accounts:
            return []
        return [k for k in (self.signing_key, *self.extra_signing_keys) if k]

    def to_framework_dict(self) -> dict:
        return {
            "url": self.url,
            "accounts": "remote" if self.remote_accounts else self.accounts,
        }


@dataclass(frozen=True)
class CustomChainDescriptor:
    """Routing entry for a chain unknown to the verification service."""

    network: str
    chain_id: int
    api_url: str
    browser_url: str

    def to_framework_dict(self) -> dict:
        return {
            "network": self.network,
            "chainId": self.chain_id,
            "urls": {"apiURL": self.api_url, "browserURL": self.browser_url},
        }


@dataclass(frozen=True)
class VerificationConfig:
    api_key: Optional[str] = field(default=None, repr=False)
    custom_chains: Tuple[CustomChainDescriptor, ...] = ()

    def find_chain(self, network: Optional[str] = None, chain_id: Optional[int] = None) -> Optional[CustomChainDescriptor]:
        for chain in self.custom_chains:
            if network is not None and chain.network == network:
                return chain
            if chain_id is not None and chain.chain_id == chain_id:
                return chain
        return None

    def explorer_for(self, network: Optional[str] = None, chain_id: Optional[int] = None) -> CustomChainDescriptor:
        """Find the custom chain a verification request should be routed to."""
        if not self.api_key:
            raise ConfigurationError(
                f"{VERIFICATION_API_KEY_ENV} is not set; verification is unavailable"
            )
        chain = self.find_chain(network=network, chain_id=chain_id)
        if chain is not None:
            return chain
        raise ConfigurationError(
            f"No custom chain configured for network={network!r} chain_id={chain_id!r}"
        )

    def to_framework_dict(self) -> dict:
        return {
            "apiKey": self.api_key,
            "customChains": [c.to_framework_dict() for c in self.custom_chains],
        }


@dataclass(frozen=True)
class DeployConfig:
    """Process-wide configuration, built once at entry and passed around."""

    networks: Mapping[str, NetworkProfile]
    verification: VerificationConfig

    def network(self, name: str) -> NetworkProfile:
        try:
            return self.networks[name]
        except KeyError:
            raise ConfigurationError(
                f"Network {name!r} is not configured. Available: {', '.join(self.networks)}"
            ) from None

    def to_framework_dict(self) -> dict:
        """Render the networks/etherscan structure a deployment framework consumes."""
        return {
            "networks": {name: p.to_framework_dict() for name, p in self.networks.items()},
            "etherscan": self.verification.to_framework_dict(),
        }


def normalize_private_key(value: str) -> str:
    """Return the key 0x-prefixed, or raise if it is not a usable secp256k1 key."""
    value = value.strip()
    if not _PRIVATE_KEY_RE.match(value):
        raise ValueError("must be 32 bytes of hex, with or without a 0x prefix")
    if not value.startswith("0x"):
        value = "0x" + value
    # Zero and values at or above the curve order are 32 bytes but not keys
    try:
        Account.from_key(value)
    except ValueError:
        raise ValueError("is not a valid secp256k1 private key") from None
    return value


def _read(environ: Mapping[str, str], name: Optional[str]) -> Optional[str]:
    if name is None:
        return None
    value = environ.get(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def _resolve_network(name: str, definition: dict, environ: Mapping[str, str], problems: List[str]):
    url = _read(environ, definition["url_env"]) or definition.get("default_url")
    if not url:
        problems.append(f"{definition['url_env']} is not set (RPC URL for {name})")

    key_env = definition["key_env"]
    if key_env is None:
        return NetworkProfile(name=name, url=url, remote_accounts=True, poa=definition.get("poa", False))

    raw_keys = _read(environ, key_env)
    if raw_keys is None:
        problems.append(f"{key_env} is not set (signing key for {name})")
        return None

    keys = []
    for position, raw in enumerate(raw_keys.split(",")):
        try:
            keys.append(normalize_private_key(raw))
        except ValueError as e:
            problems.append(f"{key_env} entry {position} is malformed: {e}")

    if not url or len(keys) != raw_keys.count(",") + 1:
        return None
    return NetworkProfile(
        name=name,
        url=url,
        signing_key=keys[0],
        extra_signing_keys=tuple(keys[1:]),
        poa=definition.get("poa", False),
    )


def validate_custom_chains(chains: Iterable[CustomChainDescriptor]) -> Tuple[CustomChainDescriptor, ...]:
    """Check every chain id is a positive integer and unique."""
    chains = tuple(chains)
    seen = {}
    for chain in chains:
        if isinstance(chain.chain_id, bool) or not isinstance(chain.chain_id, int) or chain.chain_id <= 0:
            raise ConfigurationError(
                f"Custom chain {chain.network!r} has invalid chain id {chain.chain_id!r}"
            )
        if chain.chain_id in seen:
            raise ConfigurationError(
                f"Chain id {chain.chain_id} is used by both "
                f"{seen[chain.chain_id]!r} and {chain.network!r}"
            )
        seen[chain.chain_id] = chain.network
    return chains


def resolve_config(
    environ: Mapping[str, str],
    networks: Optional[Iterable[str]] = None,
    custom_chains: Optional[Iterable[CustomChainDescriptor]] = None,
) -> DeployConfig:
    """
    Build the deployment configuration from an environment mapping.

    Only the requested networks are resolved (all of them by default). Every
    missing or malformed variable is collected and reported in a single
    ConfigurationError.
    """
    names = list(NETWORKS) if networks is None else list(networks)
    unknown = [n for n in names if n not in NETWORKS]
    if unknown:
        raise ConfigurationError(
            f"Unknown network(s): {', '.join(unknown)}. Supported: {', '.join(NETWORKS)}"
        )

    problems = []
    profiles = {}
    for name in names:
        profile = _resolve_network(name, NETWORKS[name], environ, problems)
        if profile is not None:
            profiles[name] = profile

    if problems:
        raise ConfigurationError("Invalid configuration:\n  " + "\n  ".join(problems))

    if custom_chains is None:
        custom_chains = [CustomChainDescriptor(**c) for c in CUSTOM_CHAINS]

    return DeployConfig(
        networks=MappingProxyType(profiles),
        verification=VerificationConfig(
            api_key=_read(environ, VERIFICATION_API_KEY_ENV),
            custom_chains=validate_custom_chains(custom_chains),
        ),
    )
