"""
Deployer Wallet
Holds the deploying account and signs transactions locally
"""

from decimal import Decimal
from typing import Dict
from web3 import Web3
from eth_account import Account
from loguru import logger


class DeployerWallet:
    """
    Wraps the account whose private key pays for the deployment
    """

    def __init__(self, private_key: str):
        """
        Initialize wallet

        Args:
            private_key: Hex private key

        Raises:
            ValueError: key is not a valid secp256k1 private key
        """
        try:
            self.account = Account.from_key(private_key)
        except Exception as e:
            # never echo the key itself
            raise ValueError(f"Invalid deployer private key: {type(e).__name__}") from None

        self.address = self.account.address

        logger.info(f"Deployer wallet: {self.address}")

    def __repr__(self) -> str:
        return f"DeployerWallet(address={self.address!r})"

    def sign_transaction(self, transaction: Dict):
        """
        Sign a transaction with the deployer key

        Args:
            transaction: Transaction dict

        Returns:
            Signed transaction
        """
        try:
            return self.account.sign_transaction(transaction)
        except Exception as e:
            logger.error(f"Error signing transaction: {e}")
            raise

    def get_balance(self, w3: Web3) -> Decimal:
        """Native balance of the deployer in ether"""
        balance_wei = w3.eth.get_balance(self.address)
        return Decimal(str(w3.from_wei(balance_wei, 'ether')))
