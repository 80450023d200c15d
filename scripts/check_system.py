"""
System Check Script
Verifies configuration, artifacts and node connection before deploying
"""

import sys
from decimal import Decimal
from pathlib import Path
from typing import Optional
from web3 import Web3
from loguru import logger

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from blockchain.artifacts import ArtifactRegistry  # noqa: E402
from blockchain.errors import DefinitionNotFoundError  # noqa: E402
from blockchain.wallet import DeployerWallet  # noqa: E402
from deployer.config import DeployerConfig  # noqa: E402
from deployer.deployer import CONTRACT_NAME  # noqa: E402


MIN_BALANCE_ETH = Decimal("0.01")


def check_configuration() -> Optional[DeployerConfig]:
    """Load configuration from the environment"""
    logger.info("Checking configuration...")

    try:
        config = DeployerConfig.from_env()
    except ValueError as e:
        logger.error(f"  ✗ {e}")
        return None

    logger.success(f"  ✓ RPC endpoint: {config.network_endpoint}")
    logger.success(f"  ✓ Artifacts: {config.contract_definition_source}")

    if config.has_credentials:
        logger.success("  ✓ DEPLOYER_PRIVATE_KEY set")
    else:
        logger.warning("  DEPLOYER_PRIVATE_KEY not set - node account 0 will deploy")

    return config


def check_artifacts(config: DeployerConfig) -> bool:
    """Check that the contract definition resolves"""
    logger.info("Checking contract artifacts...")

    registry = ArtifactRegistry(config.contract_definition_source)

    try:
        definition = registry.resolve(CONTRACT_NAME)
    except DefinitionNotFoundError as e:
        logger.error(f"  ✗ {e}")
        available = registry.list_contracts()
        if available:
            logger.info(f"  Available: {', '.join(available)}")
        return False

    logger.success(f"  ✓ {definition.fully_qualified_name} ({definition.path})")
    return True


def check_rpc_connection(w3: Web3, config: DeployerConfig) -> bool:
    """Check RPC endpoint connection"""
    logger.info("Checking RPC connection...")

    if not w3.is_connected():
        logger.error(f"  ✗ {config.network_endpoint}: Connection failed")
        return False

    logger.success(f"  ✓ Connected (Chain ID: {w3.eth.chain_id}, Block: {w3.eth.block_number})")
    return True


def check_deployer_balance(w3: Web3, config: DeployerConfig) -> bool:
    """Check that the deploying account can pay for gas"""
    logger.info("Checking deployer balance...")

    if config.has_credentials:
        try:
            address = DeployerWallet(config.credentials).address
        except ValueError as e:
            logger.error(f"  ✗ {e}")
            return False
    else:
        accounts = w3.eth.accounts
        if not accounts:
            logger.error("  ✗ No private key and no unlocked node accounts")
            return False
        address = accounts[0]

    balance = Decimal(str(w3.from_wei(w3.eth.get_balance(address), 'ether')))
    logger.info(f"  {address}: {balance:.4f} ETH")

    if balance < MIN_BALANCE_ETH:
        logger.warning(f"  ⚠ Deployer balance low (need at least {MIN_BALANCE_ETH} ETH)")
        return False

    logger.success("  ✓ Deployer balance sufficient")
    return True


def main() -> int:
    """Run all system checks"""
    logger.info("=" * 70)
    logger.info(f"{CONTRACT_NAME} Deployment Check")
    logger.info("=" * 70)

    config = check_configuration()
    if config is None:
        return 1

    w3 = Web3(Web3.HTTPProvider(config.network_endpoint))

    checks = [
        ("Contract Artifacts", lambda: check_artifacts(config)),
        ("RPC Connection", lambda: check_rpc_connection(w3, config)),
        ("Deployer Balance", lambda: check_deployer_balance(w3, config))
    ]

    results = []

    for name, check_func in checks:
        logger.info("")
        try:
            result = check_func()
        except Exception as e:
            logger.error(f"Error in {name}: {e}")
            result = False
        results.append((name, result))

        # later checks need a reachable node
        if name == "RPC Connection" and not result:
            break

    logger.info("")
    logger.info("=" * 70)
    logger.info("Summary")
    logger.info("=" * 70)

    passed = sum(1 for _, result in results if result)

    for name, result in results:
        status = "✓ PASS" if result else "✗ FAIL"
        logger.info(f"  {status}: {name}")

    logger.info("")
    logger.info(f"Total: {passed}/{len(checks)} checks passed")

    if passed == len(checks):
        logger.success("✅ Ready to deploy: python main.py")
        return 0

    logger.error("❌ Not ready - fix issues above")
    return 1


if __name__ == "__main__":
    sys.exit(main())
