"""
Artifact Registry
Resolves compiled contract definitions from Hardhat artifacts by name
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Tuple
from loguru import logger

from .errors import DefinitionNotFoundError


@dataclass(frozen=True)
class ContractDefinition:
    """Compiled contract ready for deployment"""

    name: str
    source_name: str
    abi: Tuple
    bytecode: str
    path: Path

    @property
    def fully_qualified_name(self) -> str:
        return f"{self.source_name}:{self.name}"


class ArtifactRegistry:
    """
    Looks up contract artifacts under a Hardhat artifacts directory

    Layout: <source>/contracts/<File>.sol/<Contract>.json
    Debug files (*.dbg.json) and build-info/ are ignored.
    """

    def __init__(self, source_dir: str = "artifacts"):
        """
        Initialize Artifact Registry

        Args:
            source_dir: Hardhat artifacts directory
        """
        self.source_dir = Path(source_dir)
        self._cache: Dict[str, ContractDefinition] = {}

    def resolve(self, name: str) -> ContractDefinition:
        """
        Resolve a contract definition by bare or fully qualified name

        Args:
            name: "AlgorithmicMusicCollab" or "contracts/Music.sol:AlgorithmicMusicCollab"

        Returns:
            ContractDefinition

        Raises:
            DefinitionNotFoundError: unknown, ambiguous, malformed or abstract
        """
        if name in self._cache:
            return self._cache[name]

        if not self.source_dir.is_dir():
            raise DefinitionNotFoundError(
                f"Artifacts directory not found: {self.source_dir} "
                f"(run 'npx hardhat compile' first)"
            )

        if ':' in name:
            source_name, contract_name = name.rsplit(':', 1)
        else:
            source_name, contract_name = None, name

        candidates = []
        for path in self._candidate_files(contract_name):
            artifact = self._read_artifact(path)
            if artifact.get('contractName') != contract_name:
                continue
            if source_name is not None and artifact.get('sourceName') != source_name:
                continue
            candidates.append((path, artifact))

        if not candidates:
            raise DefinitionNotFoundError(
                f"Artifact for contract \"{name}\" not found in {self.source_dir}"
            )

        if len(candidates) > 1:
            qualified = sorted(
                f"{artifact.get('sourceName')}:{contract_name}" for _, artifact in candidates
            )
            raise DefinitionNotFoundError(
                f"There are multiple artifacts for contract \"{name}\", "
                f"please use a fully qualified name instead: {', '.join(qualified)}"
            )

        path, artifact = candidates[0]
        definition = self._to_definition(path, artifact)

        self._cache[name] = definition
        logger.debug(f"Resolved {definition.fully_qualified_name} from {path}")
        return definition

    def list_contracts(self) -> List[str]:
        """Fully qualified names of every artifact in the source directory"""
        names = []

        if not self.source_dir.is_dir():
            return names

        for path in self._candidate_files('*'):
            artifact = self._read_artifact(path)
            if 'contractName' in artifact and 'sourceName' in artifact:
                names.append(f"{artifact['sourceName']}:{artifact['contractName']}")

        return sorted(names)

    def _candidate_files(self, contract_name: str) -> List[Path]:
        build_info = self.source_dir / 'build-info'
        return sorted(
            path for path in self.source_dir.rglob(f"{contract_name}.json")
            if not path.name.endswith('.dbg.json') and build_info not in path.parents
        )

    def _read_artifact(self, path: Path) -> Dict:
        try:
            with open(path, 'r', encoding='utf-8') as f:
                artifact = json.load(f)
        except (OSError, ValueError) as e:
            raise DefinitionNotFoundError(f"Unreadable artifact {path}: {e}") from e

        if not isinstance(artifact, dict):
            raise DefinitionNotFoundError(f"Malformed artifact {path}: expected a JSON object")

        return artifact

    def _to_definition(self, path: Path, artifact: Dict) -> ContractDefinition:
        name = artifact['contractName']

        abi = artifact.get('abi')
        bytecode = artifact.get('bytecode')

        if not isinstance(abi, list) or not isinstance(bytecode, str):
            raise DefinitionNotFoundError(f"Malformed artifact {path}: missing abi or bytecode")

        if bytecode in ('', '0x'):
            raise DefinitionNotFoundError(
                f"{name} is an abstract contract or interface and cannot be deployed"
            )

        return ContractDefinition(
            name=name,
            source_name=artifact.get('sourceName', ''),
            abi=tuple(abi),
            bytecode=bytecode,
            path=path,
        )
