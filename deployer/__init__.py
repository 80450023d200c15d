"""
Deployer Package
AlgorithmicMusicCollab deployment command and its configuration
"""

from blockchain.errors import DeploymentError, DefinitionNotFoundError, DeploymentFailedError

from .config import DeployerConfig
from .deployer import (
    CONTRACT_NAME,
    Deployer,
    DeploymentRequest,
    DeploymentResult,
    DeploymentState,
    ExitStatus,
    exit_status,
    format_failure,
    format_success
)

__all__ = [
    'CONTRACT_NAME',
    'DeployerConfig',
    'Deployer',
    'DeploymentRequest',
    'DeploymentResult',
    'DeploymentState',
    'ExitStatus',
    'exit_status',
    'format_failure',
    'format_success',
    'DeploymentError',
    'DefinitionNotFoundError',
    'DeploymentFailedError'
]
