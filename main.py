"""
AlgorithmicMusicCollab Deployment - Main Entry Point
Deploys the contract and exits 0 on success, 1 on failure
"""

import asyncio
import sys
from typing import Optional
from loguru import logger

from deployer import (
    Deployer,
    DeployerConfig,
    ExitStatus,
    exit_status,
    format_failure,
    format_success
)


def configure_logging(level: str = "INFO", log_file: Optional[str] = None):
    """Route loguru output to stderr and, optionally, a rotating file"""
    logger.remove()
    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>",
        level=level
    )
    if log_file:
        logger.add(
            log_file,
            rotation="1 day",
            retention="7 days",
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function} - {message}",
            level="DEBUG"
        )


class DeployRunner:
    """Command-line adapter: runs the Deployer and translates its result"""

    def __init__(self, config: DeployerConfig, deployer: Optional[Deployer] = None):
        self.config = config
        self.deployer = deployer if deployer is not None else Deployer(config)

    async def start(self) -> ExitStatus:
        result = await self.deployer.run()

        if result.ok:
            print(format_success(result.handle))
        else:
            print(format_failure(result.error), file=sys.stderr)

        return exit_status(result)


def run() -> int:
    """Console script entry point"""
    try:
        config = DeployerConfig.from_env()
    except ValueError as e:
        configure_logging()
        logger.error(f"Invalid configuration: {e}")
        print(format_failure(e), file=sys.stderr)
        return int(ExitStatus.FAILURE)

    configure_logging(config.log_level, config.log_file)

    try:
        runner = DeployRunner(config)
        status = asyncio.run(runner.start())
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        print(format_failure("interrupted"), file=sys.stderr)
        return int(ExitStatus.FAILURE)

    return int(status)


def main():
    sys.exit(run())


if __name__ == "__main__":
    main()
