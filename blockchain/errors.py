"""
Deployment Errors
Failure kinds reported by the deployer
"""

from typing import Optional


class DeploymentError(Exception):
    """Base class for every failure that ends a deployment"""

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail

    def __str__(self) -> str:
        return self.detail


class DefinitionNotFoundError(DeploymentError):
    """The named contract definition could not be resolved"""


class DeploymentFailedError(DeploymentError):
    """
    Submission or confirmation failed (network, rejection, revert)
    """

    def __init__(self, detail: str, tx_hash: Optional[str] = None):
        super().__init__(detail)
        self.tx_hash = tx_hash
