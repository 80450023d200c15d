"""
Deployer Configuration
Explicit settings for network endpoint, credentials and artifact source
"""

import os
from dataclasses import dataclass, field
from typing import Optional
from dotenv import load_dotenv


DEFAULT_RPC_URL = "http://127.0.0.1:8545"
DEFAULT_ARTIFACTS_DIR = "artifacts"
DEFAULT_GAS_BUFFER = 1.2
DEFAULT_GAS_LIMIT = 3000000


@dataclass(frozen=True)
class DeployerConfig:
    """
    Configuration passed into the Deployer at construction

    Attributes:
        network_endpoint: JSON-RPC URL of the ledger node
        credentials: Hex private key of the deploying account (None = node account 0)
        contract_definition_source: Directory holding compiled Hardhat artifacts
        receipt_timeout: Seconds to wait for confirmation (None = wait indefinitely)
        gas_buffer: Multiplier applied to the gas estimate
        default_gas_limit: Gas limit used when estimation fails
        log_level: Minimum level for the stderr log sink
        log_file: Optional path of a rotating log file
    """

    network_endpoint: str = DEFAULT_RPC_URL
    credentials: Optional[str] = field(default=None, repr=False)
    contract_definition_source: str = DEFAULT_ARTIFACTS_DIR
    receipt_timeout: Optional[float] = None
    gas_buffer: float = DEFAULT_GAS_BUFFER
    default_gas_limit: int = DEFAULT_GAS_LIMIT
    log_level: str = "INFO"
    log_file: Optional[str] = None

    def __post_init__(self):
        if not self.network_endpoint:
            raise ValueError("network_endpoint must not be empty")
        if self.gas_buffer < 1:
            raise ValueError(f"gas_buffer must be >= 1, got {self.gas_buffer}")
        if self.default_gas_limit <= 0:
            raise ValueError(f"default_gas_limit must be positive, got {self.default_gas_limit}")
        if self.receipt_timeout is not None and self.receipt_timeout <= 0:
            raise ValueError(f"receipt_timeout must be positive, got {self.receipt_timeout}")

    @property
    def has_credentials(self) -> bool:
        return bool(self.credentials)

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> "DeployerConfig":
        """
        Build configuration from environment variables

        A .env file is loaded first; variables already set in the
        environment take precedence over it.

        Args:
            dotenv_path: Explicit .env location (None = search from cwd)

        Returns:
            DeployerConfig
        """
        load_dotenv(dotenv_path)

        gas_buffer = _optional_float('GAS_BUFFER')
        gas_limit = _optional_int('DEFAULT_GAS_LIMIT')

        return cls(
            network_endpoint=os.getenv('RPC_URL', DEFAULT_RPC_URL),
            credentials=os.getenv('DEPLOYER_PRIVATE_KEY') or None,
            contract_definition_source=os.getenv('ARTIFACTS_DIR', DEFAULT_ARTIFACTS_DIR),
            receipt_timeout=_optional_float('RECEIPT_TIMEOUT'),
            gas_buffer=DEFAULT_GAS_BUFFER if gas_buffer is None else gas_buffer,
            default_gas_limit=DEFAULT_GAS_LIMIT if gas_limit is None else gas_limit,
            log_level=os.getenv('LOG_LEVEL', 'INFO').upper(),
            log_file=os.getenv('LOG_FILE') or None,
        )


def _optional_float(name: str) -> Optional[float]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == '':
        return None
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


def _optional_int(name: str) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == '':
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
