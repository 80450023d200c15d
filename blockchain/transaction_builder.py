"""
Transaction Builder
Constructs contract-creation transactions
"""

from typing import Dict, Optional
from web3 import Web3
from loguru import logger

from .artifacts import ContractDefinition


class DeploymentTransactionBuilder:
    """
    Builds deployment transactions with buffered gas estimates
    """

    def __init__(
        self,
        w3: Web3,
        gas_buffer: float = 1.2,
        default_gas_limit: int = 3000000
    ):
        """
        Initialize Transaction Builder

        Args:
            w3: Web3 instance
            gas_buffer: Multiplier applied on top of the node's estimate
            default_gas_limit: Used when estimation fails
        """
        self.w3 = w3
        self.gas_buffer = gas_buffer
        self.default_gas_limit = default_gas_limit

    def contract_factory(self, definition: ContractDefinition):
        """Web3 contract factory for a resolved definition"""
        return self.w3.eth.contract(
            abi=list(definition.abi),
            bytecode=definition.bytecode
        )

    def estimate_gas_limit(self, constructor, sender: str) -> int:
        """
        Estimate gas for a constructor call plus buffer

        Args:
            constructor: Bound web3 ContractConstructor
            sender: Deploying address

        Returns:
            Gas limit
        """
        try:
            gas_estimate = constructor.estimate_gas({'from': sender})
        except Exception as e:
            # reverting constructors cannot be estimated; the receipt reports the revert
            logger.warning(f"Gas estimation failed: {e}, using default")
            return self.default_gas_limit

        return int(gas_estimate * self.gas_buffer)

    def build(
        self,
        definition: ContractDefinition,
        sender: str,
        *constructor_args,
        nonce: Optional[int] = None
    ) -> Dict:
        """
        Build an unsigned deployment transaction

        Args:
            definition: Resolved contract definition
            sender: Deploying address
            constructor_args: Constructor arguments (none for this deployment)
            nonce: Explicit nonce (None = pending transaction count)

        Returns:
            Transaction dict
        """
        sender = Web3.to_checksum_address(sender)
        constructor = self.contract_factory(definition).constructor(*constructor_args)

        if nonce is None:
            nonce = self.w3.eth.get_transaction_count(sender, 'pending')

        gas_limit = self.estimate_gas_limit(constructor, sender)
        gas_price = self.w3.eth.gas_price

        logger.info(f"Gas limit: {gas_limit}")
        logger.info(f"Gas price: {self.w3.from_wei(gas_price, 'gwei')} gwei")

        transaction = constructor.build_transaction({
            'from': sender,
            'nonce': nonce,
            'gas': gas_limit,
            'gasPrice': gas_price,
            'chainId': self.w3.eth.chain_id
        })

        logger.info(f"Estimated deployment cost: {self.w3.from_wei(self.estimate_cost(transaction), 'ether')} ETH")

        return transaction

    @staticmethod
    def estimate_cost(transaction: Dict) -> int:
        """Upper bound of the deployment fee in wei"""
        return transaction['gas'] * transaction.get('gasPrice', 0)
