"""
Shared fixtures for deployment tests
"""

import itertools
import json
from pathlib import Path
from unittest.mock import Mock

import pytest

from blockchain.artifacts import ContractDefinition
from blockchain.errors import DefinitionNotFoundError
from blockchain.ledger_client import DeployedContractHandle, LedgerClient, PendingDeployment
from deployer.config import DeployerConfig


# Hardhat default account #0
HARDHAT_PRIVATE_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
HARDHAT_ADDRESS = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"

DEPLOYED_ADDRESS = "0x5FbDB2315678afecb367f032d93F642f64180aa3"

ABI = [
    {"inputs": [], "stateMutability": "nonpayable", "type": "constructor"},
    {
        "inputs": [],
        "name": "owner",
        "outputs": [{"name": "", "type": "address"}],
        "stateMutability": "view",
        "type": "function"
    }
]
BYTECODE = "0x6080604052348015600f57600080fd5b50603f80601d6000396000f3fe"


def write_artifact(
    root: Path,
    contract_name: str,
    source_name: str = None,
    bytecode: str = BYTECODE,
    abi=None
) -> Path:
    """Write a Hardhat-style artifact (plus its debug file) under root"""
    source_name = source_name or f"contracts/{contract_name}.sol"
    directory = root / source_name
    directory.mkdir(parents=True, exist_ok=True)

    artifact = {
        "_format": "hh-sol-artifact-1",
        "contractName": contract_name,
        "sourceName": source_name,
        "abi": ABI if abi is None else abi,
        "bytecode": bytecode,
        "deployedBytecode": bytecode,
        "linkReferences": {},
        "deployedLinkReferences": {}
    }

    path = directory / f"{contract_name}.json"
    path.write_text(json.dumps(artifact))
    (directory / f"{contract_name}.dbg.json").write_text(
        json.dumps({"_format": "hh-sol-dbg-1", "buildInfo": "../../build-info/x.json"})
    )
    return path


@pytest.fixture
def artifacts_dir(tmp_path):
    """Artifacts directory containing AlgorithmicMusicCollab"""
    root = tmp_path / "artifacts"
    write_artifact(root, "AlgorithmicMusicCollab")
    return root


@pytest.fixture
def config(artifacts_dir):
    """Test configuration"""
    return DeployerConfig(
        network_endpoint="http://127.0.0.1:8545",
        contract_definition_source=str(artifacts_dir)
    )


@pytest.fixture
def definition(tmp_path):
    return ContractDefinition(
        name="AlgorithmicMusicCollab",
        source_name="contracts/AlgorithmicMusicCollab.sol",
        abi=tuple(ABI),
        bytecode=BYTECODE,
        path=tmp_path / "AlgorithmicMusicCollab.json"
    )


@pytest.fixture
def ledger(definition):
    """
    Mock ledger service

    Every deployment gets a fresh transaction hash and contract address.
    """
    ledger = Mock(spec=LedgerClient)
    counter = itertools.count(1)

    ledger.resolve_definition.return_value = definition

    async def submit(definition, *args):
        n = next(counter)
        return PendingDeployment(
            contract_name=definition.name,
            tx_hash="0x" + f"{n:064x}",
            sender=HARDHAT_ADDRESS,
            transaction={"from": HARDHAT_ADDRESS, "nonce": n - 1}
        )

    async def confirm(pending):
        n = int(pending.tx_hash, 16)
        address = DEPLOYED_ADDRESS if n == 1 else "0x" + f"{n:040x}"
        return DeployedContractHandle(
            contract_name=pending.contract_name,
            address=address,
            tx_hash=pending.tx_hash,
            block_number=n,
            gas_used=120000
        )

    ledger.submit_deployment.side_effect = submit
    ledger.wait_for_deployment.side_effect = confirm
    return ledger


@pytest.fixture
def missing_definition_ledger(ledger):
    ledger.resolve_definition.side_effect = DefinitionNotFoundError(
        'Artifact for contract "AlgorithmicMusicCollab" not found in artifacts'
    )
    return ledger
