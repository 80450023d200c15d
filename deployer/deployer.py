"""
Deployer
Resolves the AlgorithmicMusicCollab definition, deploys it and reports the result
"""

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional, Tuple
from loguru import logger

from blockchain.errors import DeploymentError
from blockchain.ledger_client import DeployedContractHandle, LedgerClient

from .config import DeployerConfig


CONTRACT_NAME = "AlgorithmicMusicCollab"

SUCCESS_LABEL = f"{CONTRACT_NAME} deployed to:"
FAILURE_LABEL = "Error during deployment:"


class ExitStatus(IntEnum):
    SUCCESS = 0
    FAILURE = 1


class DeploymentState(Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    AWAITING_CONFIRMATION = "awaiting_confirmation"
    SUCCEEDED = "succeeded"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (DeploymentState.SUCCEEDED, DeploymentState.FAILED)


@dataclass(frozen=True)
class DeploymentRequest:
    """Names the contract to deploy; this deployment takes no constructor arguments"""

    contract_name: str = CONTRACT_NAME
    constructor_args: Tuple = ()


@dataclass(frozen=True)
class DeploymentResult:
    """Either a confirmed handle or the error that ended the deployment"""

    handle: Optional[DeployedContractHandle] = None
    error: Optional[DeploymentError] = None

    def __post_init__(self):
        if (self.handle is None) == (self.error is None):
            raise ValueError("DeploymentResult needs exactly one of handle or error")

    @property
    def ok(self) -> bool:
        return self.handle is not None

    @property
    def address(self) -> str:
        if self.handle is None:
            raise AttributeError("failed deployment has no address")
        return self.handle.address


class Deployer:
    """
    Single-shot deployment of the AlgorithmicMusicCollab contract

    State flow: IDLE -> SUBMITTING -> AWAITING_CONFIRMATION -> SUCCEEDED | FAILED
    """

    def __init__(
        self,
        config: DeployerConfig,
        ledger: Optional[LedgerClient] = None,
        request: Optional[DeploymentRequest] = None
    ):
        """
        Initialize Deployer

        Args:
            config: Explicit deployer configuration
            ledger: Ledger service (built from config when omitted)
            request: Deployment request (defaults to AlgorithmicMusicCollab, no args)
        """
        self.config = config
        self.ledger = ledger if ledger is not None else LedgerClient.from_config(config)
        self.request = request if request is not None else DeploymentRequest()
        self.state = DeploymentState.IDLE

    async def run(self) -> DeploymentResult:
        """
        Deploy once and return the outcome

        DeploymentError never escapes; it is returned inside the result.

        Returns:
            DeploymentResult
        """
        if self.state is not DeploymentState.IDLE:
            raise RuntimeError(f"Deployer already ran (state: {self.state.value})")

        request = self.request
        logger.info(f"Deploying {request.contract_name}...")

        try:
            definition = self.ledger.resolve_definition(request.contract_name)

            self._transition(DeploymentState.SUBMITTING)
            pending = await self.ledger.submit_deployment(definition, *request.constructor_args)

            self._transition(DeploymentState.AWAITING_CONFIRMATION)
            handle = await self.ledger.wait_for_deployment(pending)

        except DeploymentError as e:
            self._transition(DeploymentState.FAILED)
            logger.error(f"Deployment of {request.contract_name} failed: {e}")
            return DeploymentResult(error=e)

        self._transition(DeploymentState.SUCCEEDED)
        logger.success(f"{request.contract_name} deployed at {handle.address}")
        return DeploymentResult(handle=handle)

    def _transition(self, state: DeploymentState):
        logger.debug(f"Deployer state: {self.state.value} -> {state.value}")
        self.state = state


def format_success(handle: DeployedContractHandle) -> str:
    return f"{SUCCESS_LABEL} {handle.address}"


def format_failure(error) -> str:
    # one line on stderr, whatever the node put in the message
    detail = " ".join(str(error).split())
    return f"{FAILURE_LABEL} {detail}"


def exit_status(result: DeploymentResult) -> ExitStatus:
    return ExitStatus.SUCCESS if result.ok else ExitStatus.FAILURE
