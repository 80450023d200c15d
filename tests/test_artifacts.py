"""
Artifact Registry Tests
Resolving Hardhat artifacts by contract name
"""

import pytest

from blockchain.artifacts import ArtifactRegistry
from blockchain.errors import DefinitionNotFoundError

from conftest import ABI, BYTECODE, write_artifact


class TestArtifactRegistry:

    def test_resolve_bare_name(self, artifacts_dir):
        definition = ArtifactRegistry(str(artifacts_dir)).resolve("AlgorithmicMusicCollab")

        assert definition.name == "AlgorithmicMusicCollab"
        assert definition.source_name == "contracts/AlgorithmicMusicCollab.sol"
        assert definition.bytecode == BYTECODE
        assert list(definition.abi) == ABI
        assert definition.fully_qualified_name == "contracts/AlgorithmicMusicCollab.sol:AlgorithmicMusicCollab"

    def test_resolve_nested_source(self, tmp_path):
        root = tmp_path / "artifacts"
        write_artifact(root, "AlgorithmicMusicCollab", source_name="contracts/music/Collab.sol")

        definition = ArtifactRegistry(str(root)).resolve("AlgorithmicMusicCollab")

        assert definition.source_name == "contracts/music/Collab.sol"

    def test_unknown_name(self, artifacts_dir):
        with pytest.raises(DefinitionNotFoundError, match="RoyaltySplitter"):
            ArtifactRegistry(str(artifacts_dir)).resolve("RoyaltySplitter")

    def test_missing_directory(self, tmp_path):
        with pytest.raises(DefinitionNotFoundError, match="hardhat compile"):
            ArtifactRegistry(str(tmp_path / "nowhere")).resolve("AlgorithmicMusicCollab")

    def test_ambiguous_name_requires_qualified(self, artifacts_dir):
        write_artifact(artifacts_dir, "AlgorithmicMusicCollab", source_name="contracts/v2/Collab.sol")
        registry = ArtifactRegistry(str(artifacts_dir))

        with pytest.raises(DefinitionNotFoundError, match="fully qualified") as exc_info:
            registry.resolve("AlgorithmicMusicCollab")

        assert "contracts/v2/Collab.sol:AlgorithmicMusicCollab" in str(exc_info.value)

        definition = registry.resolve("contracts/v2/Collab.sol:AlgorithmicMusicCollab")
        assert definition.source_name == "contracts/v2/Collab.sol"

    def test_qualified_name_with_wrong_source(self, artifacts_dir):
        with pytest.raises(DefinitionNotFoundError):
            ArtifactRegistry(str(artifacts_dir)).resolve("contracts/Other.sol:AlgorithmicMusicCollab")

    def test_abstract_contract_cannot_be_deployed(self, tmp_path):
        root = tmp_path / "artifacts"
        write_artifact(root, "IMusicCollab", bytecode="0x")

        with pytest.raises(DefinitionNotFoundError, match="abstract"):
            ArtifactRegistry(str(root)).resolve("IMusicCollab")

    def test_malformed_artifact(self, tmp_path):
        root = tmp_path / "artifacts"
        path = write_artifact(root, "AlgorithmicMusicCollab")
        path.write_text("{not json")

        with pytest.raises(DefinitionNotFoundError, match="Unreadable"):
            ArtifactRegistry(str(root)).resolve("AlgorithmicMusicCollab")

    def test_artifact_not_utf8(self, tmp_path):
        root = tmp_path / "artifacts"
        path = write_artifact(root, "AlgorithmicMusicCollab")
        path.write_bytes(b'{"contractName": "\xff\xfe"}')

        with pytest.raises(DefinitionNotFoundError, match="Unreadable"):
            ArtifactRegistry(str(root)).resolve("AlgorithmicMusicCollab")

    def test_artifact_without_abi(self, tmp_path):
        root = tmp_path / "artifacts"
        write_artifact(root, "AlgorithmicMusicCollab", abi="not-a-list")

        with pytest.raises(DefinitionNotFoundError, match="missing abi"):
            ArtifactRegistry(str(root)).resolve("AlgorithmicMusicCollab")

    def test_build_info_ignored(self, artifacts_dir):
        build_info = artifacts_dir / "build-info"
        build_info.mkdir()
        (build_info / "AlgorithmicMusicCollab.json").write_text("{}")

        definition = ArtifactRegistry(str(artifacts_dir)).resolve("AlgorithmicMusicCollab")

        assert "build-info" not in str(definition.path)

    def test_resolution_is_cached(self, artifacts_dir):
        registry = ArtifactRegistry(str(artifacts_dir))
        first = registry.resolve("AlgorithmicMusicCollab")

        (artifacts_dir / "contracts").rename(artifacts_dir / "moved")

        assert registry.resolve("AlgorithmicMusicCollab") is first

    def test_list_contracts(self, artifacts_dir):
        write_artifact(artifacts_dir, "RoyaltySplitter")

        assert ArtifactRegistry(str(artifacts_dir)).list_contracts() == [
            "contracts/AlgorithmicMusicCollab.sol:AlgorithmicMusicCollab",
            "contracts/RoyaltySplitter.sol:RoyaltySplitter"
        ]
