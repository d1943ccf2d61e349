import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import List

from dotenv import load_dotenv

from voting_backend.lib.logger import configure_logger

logger = configure_logger(__name__)

load_dotenv()

# Deployer of the voting contract on testnet
DEFAULT_CONTRACT_ADDRESS = "ST33Y8RCP74098JCSPW5QHHCD6QN4H3XS9E4PVW1G"


@dataclass
class APIConfig:
    hiro_api_url: str = os.getenv("VOTING_HIRO_API_URL", "https://api.testnet.hiro.so")
    hiro_api_key: str = os.getenv("HIRO_API_KEY", "")
    webhook_auth: str = os.getenv("VOTING_WEBHOOK_AUTH_TOKEN", "Bearer your-secret-token")
    request_timeout_seconds: float = float(
        os.getenv("VOTING_REQUEST_TIMEOUT_SECONDS", "30")
    )


@dataclass
class ContractConfig:
    """Location and read-only functions of the voting contract."""

    address: str = os.getenv("VOTING_CONTRACT_ADDRESS", DEFAULT_CONTRACT_ADDRESS)
    name: str = os.getenv("VOTING_CONTRACT_NAME", "Blackadam-vote-contract")
    poll_count_function: str = os.getenv("VOTING_POLL_COUNT_FUNCTION", "get-poll-count")
    poll_function: str = os.getenv("VOTING_POLL_FUNCTION", "get-poll")
    # The node requires a sender on read-only calls; it carries no privilege
    default_sender: str = os.getenv("VOTING_DEFAULT_SENDER", DEFAULT_CONTRACT_ADDRESS)


@dataclass
class AggregationConfig:
    """Settings for fetching poll records from the node."""

    pacing_delay_seconds: float = float(
        os.getenv("VOTING_PACING_DELAY_SECONDS", "0.15")
    )
    lookup_timeout_seconds: float = float(
        os.getenv("VOTING_LOOKUP_TIMEOUT_SECONDS", "10")
    )


@dataclass
class CORSConfig:
    allowed_origins: List[str] = field(
        default_factory=lambda: [
            origin.strip()
            for origin in os.getenv(
                "VOTING_CORS_ORIGINS", "http://localhost:3000"
            ).split(",")
            if origin.strip()
        ]
    )


@dataclass
class NetworkConfig:
    network: str = os.getenv("NETWORK", "testnet")


@dataclass
class Config:
    api: APIConfig = field(default_factory=APIConfig)
    contract: ContractConfig = field(default_factory=ContractConfig)
    aggregation: AggregationConfig = field(default_factory=AggregationConfig)
    cors: CORSConfig = field(default_factory=CORSConfig)
    network: NetworkConfig = field(default_factory=NetworkConfig)

    @classmethod
    def load(cls) -> "Config":
        """Load and validate configuration"""
        config = cls()
        if config.aggregation.pacing_delay_seconds < 0:
            raise ValueError("VOTING_PACING_DELAY_SECONDS must not be negative")
        if config.aggregation.lookup_timeout_seconds <= 0:
            raise ValueError("VOTING_LOOKUP_TIMEOUT_SECONDS must be positive")
        logger.info(
            "Configuration loaded successfully",
            extra={
                "network": config.network.network,
                "contract": f"{config.contract.address}.{config.contract.name}",
            },
        )
        return config


@lru_cache(maxsize=1)
def get_config() -> Config:
    """Return the process-wide configuration, loading it on first use."""
    return Config.load()
