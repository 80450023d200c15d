"""
Ledger Client
JSON-RPC ledger service: definition resolution, deployment submission
and confirmation
"""

import asyncio
from dataclasses import dataclass
from typing import Dict, Optional
from web3 import Web3
from web3.exceptions import ContractLogicError, TimeExhausted, Web3Exception
from loguru import logger

from .artifacts import ArtifactRegistry, ContractDefinition
from .errors import DeploymentFailedError
from .transaction_builder import DeploymentTransactionBuilder
from .wallet import DeployerWallet


@dataclass(frozen=True)
class PendingDeployment:
    """Submitted deployment awaiting confirmation (no address yet)"""

    contract_name: str
    tx_hash: str
    sender: str
    transaction: Dict


@dataclass(frozen=True)
class DeployedContractHandle:
    """Deployed contract, only created from a confirmed receipt"""

    contract_name: str
    address: str
    tx_hash: str
    block_number: int
    gas_used: int


class LedgerClient:
    """
    Talks to an EVM node over HTTP

    Signs locally when a private key is configured, otherwise sends
    through the node's first unlocked account.
    """

    def __init__(
        self,
        network_endpoint: str,
        registry: ArtifactRegistry,
        private_key: Optional[str] = None,
        receipt_timeout: Optional[float] = None,
        gas_buffer: float = 1.2,
        default_gas_limit: int = 3000000,
        w3: Optional[Web3] = None
    ):
        """
        Initialize Ledger Client

        Args:
            network_endpoint: JSON-RPC URL
            registry: Contract definition source
            private_key: Deployer private key (None = node account 0)
            receipt_timeout: Confirmation timeout in seconds (None = indefinite)
            gas_buffer: Gas estimate multiplier
            default_gas_limit: Fallback gas limit
            w3: Preconfigured Web3 instance (overrides network_endpoint)
        """
        self.network_endpoint = network_endpoint
        self.registry = registry
        self.receipt_timeout = receipt_timeout

        self.w3 = w3 if w3 is not None else Web3(Web3.HTTPProvider(network_endpoint))
        self.builder = DeploymentTransactionBuilder(
            self.w3,
            gas_buffer=gas_buffer,
            default_gas_limit=default_gas_limit
        )

        self._private_key = private_key
        self._wallet: Optional[DeployerWallet] = None
        self._connected = False

    @classmethod
    def from_config(cls, config) -> "LedgerClient":
        """Build a client from a DeployerConfig"""
        return cls(
            network_endpoint=config.network_endpoint,
            registry=ArtifactRegistry(config.contract_definition_source),
            private_key=config.credentials,
            receipt_timeout=config.receipt_timeout,
            gas_buffer=config.gas_buffer,
            default_gas_limit=config.default_gas_limit
        )

    def connect(self):
        """
        Verify the node is reachable

        Raises:
            DeploymentFailedError: node unreachable
        """
        if self._connected:
            return

        if not self.w3.is_connected():
            raise DeploymentFailedError(f"Could not connect to {self.network_endpoint}")

        self._connected = True
        logger.info(f"Connected to {self.network_endpoint}")

    def resolve_definition(self, name: str) -> ContractDefinition:
        """Resolve a contract definition by name"""
        return self.registry.resolve(name)

    async def submit_deployment(
        self,
        definition: ContractDefinition,
        *constructor_args
    ) -> PendingDeployment:
        """
        Submit a deployment transaction

        Args:
            definition: Resolved contract definition
            constructor_args: Constructor arguments

        Returns:
            PendingDeployment

        Raises:
            DeploymentFailedError: connection, signing or node rejection
        """
        self.connect()

        try:
            return await asyncio.to_thread(self._submit, definition, constructor_args)
        except DeploymentFailedError:
            raise
        except (Web3Exception, ValueError, OSError) as e:
            logger.error(f"Error submitting deployment: {e}")
            raise DeploymentFailedError(f"Deployment submission failed: {e}") from e

    async def wait_for_deployment(self, pending: PendingDeployment) -> DeployedContractHandle:
        """
        Wait for the deployment transaction to be finalized

        Args:
            pending: Submitted deployment

        Returns:
            DeployedContractHandle

        Raises:
            DeploymentFailedError: revert, timeout or node error
        """
        logger.info("Waiting for confirmation...")

        try:
            receipt = await asyncio.to_thread(self._wait_for_receipt, pending.tx_hash)
        except TimeExhausted as e:
            raise DeploymentFailedError(
                f"Transaction {pending.tx_hash} not confirmed after {self.receipt_timeout}s",
                tx_hash=pending.tx_hash
            ) from e
        except (Web3Exception, ValueError, OSError) as e:
            raise DeploymentFailedError(
                f"Error waiting for transaction {pending.tx_hash}: {e}",
                tx_hash=pending.tx_hash
            ) from e

        if receipt['status'] != 1:
            reason = await asyncio.to_thread(self._revert_reason, pending, receipt['blockNumber'])
            logger.error(f"Deployment reverted: {pending.tx_hash}")
            raise DeploymentFailedError(
                f"Transaction {pending.tx_hash} reverted: {reason}",
                tx_hash=pending.tx_hash
            )

        address = receipt.get('contractAddress')
        if not address:
            raise DeploymentFailedError(
                f"Receipt for {pending.tx_hash} has no contract address",
                tx_hash=pending.tx_hash
            )

        handle = DeployedContractHandle(
            contract_name=pending.contract_name,
            address=Web3.to_checksum_address(address),
            tx_hash=pending.tx_hash,
            block_number=receipt['blockNumber'],
            gas_used=receipt['gasUsed']
        )

        logger.success(f"Contract address: {handle.address}")
        logger.success(f"Transaction hash: {handle.tx_hash}")
        logger.success(f"Gas used: {handle.gas_used}")

        return handle

    def _submit(self, definition: ContractDefinition, constructor_args: tuple) -> PendingDeployment:
        wallet = self._get_wallet()

        if wallet is not None:
            sender = wallet.address
            logger.info(f"Account balance: {wallet.get_balance(self.w3)} ETH")
        else:
            accounts = self.w3.eth.accounts
            if not accounts:
                raise DeploymentFailedError(
                    "No deployer account: set DEPLOYER_PRIVATE_KEY or use a node with unlocked accounts"
                )
            sender = accounts[0]

        logger.info(f"Deploying {definition.name} from: {sender}")

        transaction = self.builder.build(definition, sender, *constructor_args)

        logger.info("Sending deployment transaction...")
        if wallet is not None:
            signed_tx = wallet.sign_transaction(transaction)
            tx_hash = self.w3.eth.send_raw_transaction(signed_tx.raw_transaction)
        else:
            tx_hash = self.w3.eth.send_transaction(transaction)

        tx_hash = Web3.to_hex(tx_hash)
        logger.info(f"Transaction sent: {tx_hash}")

        return PendingDeployment(
            contract_name=definition.name,
            tx_hash=tx_hash,
            sender=sender,
            transaction=transaction
        )

    def _get_wallet(self) -> Optional[DeployerWallet]:
        if self._wallet is None and self._private_key:
            self._wallet = DeployerWallet(self._private_key)
        return self._wallet

    def _wait_for_receipt(self, tx_hash: str):
        timeout = self.receipt_timeout if self.receipt_timeout is not None else float('inf')
        return self.w3.eth.wait_for_transaction_receipt(tx_hash, timeout=timeout)

    def _revert_reason(self, pending: PendingDeployment, block_number: int) -> str:
        """Replay the creation call at the failing block to recover the reason"""
        replay = {
            key: pending.transaction[key]
            for key in ('from', 'data', 'value', 'gas')
            if key in pending.transaction
        }

        try:
            self.w3.eth.call(replay, block_number)
        except ContractLogicError as e:
            return e.message or str(e)
        except (Web3Exception, ValueError, OSError) as e:
            logger.debug(f"Could not replay reverted deployment: {e}")

        return "transaction reverted"
