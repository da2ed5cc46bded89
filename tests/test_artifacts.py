"""
Tests for compiled artifact lookup
"""

import json
import shutil

import pytest

from relief_deploy.artifacts import ArtifactStore
from relief_deploy.exceptions import ArtifactNotFoundError

from conftest import CONTRACTS_DIR


@pytest.mark.unit
class TestHardhatArtifacts:
    """Test lookup in Hardhat build output"""

    def test_finds_artifact_by_name(self, store, relief_compiled):
        artifact = store.get("ReliefFinance")
        assert artifact.contract_name == "ReliefFinance"
        assert artifact.abi == relief_compiled["abi"]
        assert artifact.bytecode == relief_compiled["bytecode"]
        assert artifact.source_path.name == "ReliefFinance.json"

    def test_same_name_same_artifact(self, store):
        assert store.get("ReliefFinance") is store.get("ReliefFinance")

    def test_fresh_store_loads_identical_artifact(self, project_dir):
        first = ArtifactStore(project_dir).get("ReliefFinance")
        second = ArtifactStore(project_dir).get("ReliefFinance")
        assert first == second

    def test_constructor_inputs(self, store):
        inputs = store.get("ReliefFinance").constructor_inputs
        assert [i["type"] for i in inputs] == ["address"]

    def test_debug_files_ignored(self, project_dir):
        artifact_dir = project_dir / "artifacts" / "contracts" / "ReliefFinance.sol"
        with open(artifact_dir / "ReliefFinance.dbg.json", "w") as f:
            json.dump({"_format": "hh-sol-dbg-1", "buildInfo": "../build-info/x.json"}, f)

        assert ArtifactStore(project_dir).get("ReliefFinance").source_path.name == "ReliefFinance.json"

    def test_interface_without_bytecode(self, project_dir):
        artifact_dir = project_dir / "artifacts" / "contracts" / "IToken.sol"
        artifact_dir.mkdir(parents=True)
        with open(artifact_dir / "IToken.json", "w") as f:
            json.dump({"contractName": "IToken", "abi": [], "bytecode": "0x"}, f)

        with pytest.raises(ArtifactNotFoundError, match="no creation bytecode"):
            ArtifactStore(project_dir).get("IToken")


@pytest.mark.unit
class TestVyperSources:
    """Test compiling contracts/<Name>.vy when no build output exists"""

    def test_compiles_vyper_source(self, tmp_path, relief_compiled):
        (tmp_path / "contracts").mkdir()
        shutil.copy(CONTRACTS_DIR / "ReliefFinance.vy", tmp_path / "contracts")

        artifact = ArtifactStore(tmp_path).get("ReliefFinance")
        assert artifact.abi == relief_compiled["abi"]
        assert artifact.bytecode.startswith("0x")
        assert artifact.source_path.suffix == ".vy"

    def test_build_output_takes_precedence(self, project_dir):
        shutil.copy(CONTRACTS_DIR / "ReliefFinance.vy", project_dir / "contracts")
        assert ArtifactStore(project_dir).get("ReliefFinance").source_path.suffix == ".json"


@pytest.mark.unit
def test_unknown_contract(store):
    with pytest.raises(ArtifactNotFoundError, match="Missing"):
        store.get("Missing")


@pytest.mark.unit
def test_empty_project(tmp_path):
    with pytest.raises(ArtifactNotFoundError):
        ArtifactStore(tmp_path).get("ReliefFinance")
