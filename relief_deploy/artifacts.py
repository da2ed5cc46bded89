"""
Compiled contract artifacts

Looks a contract name up in Hardhat style build output first
(artifacts/**/<Name>.json) and falls back to compiling contracts/<Name>.vy
with Vyper.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from vyper import compile_code

from .exceptions import ArtifactNotFoundError


@dataclass(frozen=True)
class ContractArtifact:
    """ABI and creation bytecode for one contract."""

    contract_name: str
    abi: List[Dict[str, Any]] = field(repr=False)
    bytecode: str = field(repr=False)
    source_path: Optional[Path] = None

    @property
    def constructor_inputs(self) -> List[Dict[str, Any]]:
        for item in self.abi:
            if item.get("type") == "constructor":
                return item.get("inputs", [])
        return []


class ArtifactStore:
    """Resolves contract names to compiled artifacts under a project root."""

    def __init__(self, root: Path = Path("."), artifacts_dir: str = "artifacts", contracts_dir: str = "contracts"):
        self.root = Path(root)
        self.artifacts_dir = self.root / artifacts_dir
        self.contracts_dir = self.root / contracts_dir
        self._cache: Dict[str, ContractArtifact] = {}

    def get(self, contract_name: str) -> ContractArtifact:
        if contract_name not in self._cache:
            self._cache[contract_name] = self._load(contract_name)
        return self._cache[contract_name]

    def _load(self, contract_name: str) -> ContractArtifact:
        artifact = self._find_build_artifact(contract_name)
        if artifact is not None:
            return artifact

        source = self.contracts_dir / f"{contract_name}.vy"
        if source.exists():
            return self._compile_vyper(contract_name, source)

        raise ArtifactNotFoundError(
            f"No artifact for {contract_name!r}: looked for "
            f"{self.artifacts_dir}/**/{contract_name}.json and {source}"
        )

    def _find_build_artifact(self, contract_name: str) -> Optional[ContractArtifact]:
        if not self.artifacts_dir.exists():
            return None

        # Debug files (<Name>.dbg.json) share the stem prefix but not the name
        for path in sorted(self.artifacts_dir.rglob(f"{contract_name}.json")):
            with open(path) as f:
                data = json.load(f)
            if "abi" not in data or "bytecode" not in data:
                continue
            if data.get("contractName", contract_name) != contract_name:
                continue
            bytecode = data["bytecode"]
            if bytecode in ("", "0x"):
                raise ArtifactNotFoundError(
                    f"{contract_name} in {path} has no creation bytecode (abstract contract or interface?)"
                )
            return ContractArtifact(
                contract_name=contract_name,
                abi=data["abi"],
                bytecode=bytecode,
                source_path=path,
            )
        return None

    def _compile_vyper(self, contract_name: str, source: Path) -> ContractArtifact:
        print(f"📦 Compiling {source}...")
        with open(source, "r") as f:
            source_code = f.read()

        compiled = compile_code(source_code, output_formats=["bytecode", "abi"])
        return ContractArtifact(
            contract_name=contract_name,
            abi=compiled["abi"],
            bytecode=compiled["bytecode"],
            source_path=source,
        )
