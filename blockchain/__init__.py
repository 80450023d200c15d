"""
Blockchain Interaction Package
Handles artifact resolution, transaction building and deployment submission
"""

from .errors import DeploymentError, DefinitionNotFoundError, DeploymentFailedError
from .artifacts import ArtifactRegistry, ContractDefinition
from .transaction_builder import DeploymentTransactionBuilder
from .wallet import DeployerWallet
from .ledger_client import LedgerClient, PendingDeployment, DeployedContractHandle

__all__ = [
    'DeploymentError',
    'DefinitionNotFoundError',
    'DeploymentFailedError',
    'ArtifactRegistry',
    'ContractDefinition',
    'DeploymentTransactionBuilder',
    'DeployerWallet',
    'LedgerClient',
    'PendingDeployment',
    'DeployedContractHandle'
]
