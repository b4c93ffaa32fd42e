"""
Configuration management for the security feed aggregator.

This module handles:
- Centralized configuration
- Environment variable support
- Configuration validation
- Logging setup
"""

import os
import json
import logging
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List

logger = logging.getLogger(__name__)


MONITORED_EXCHANGES = [
    "binance", "coinbase-exchange", "kraken", "okx", "bybit",
    "bitfinex", "bitstamp", "gemini", "kucoin", "huobi"
]


@dataclass
class IncidentApiConfig:
    """Security-incident provider configuration."""
    api_key: Optional[str] = None
    url: str = "https://cpw-tracker.p.rapidapi.com/"
    host: str = "cpw-tracker.p.rapidapi.com"
    entities: str = "cryptocurrency exchanges"
    topic: str = "security incident"


@dataclass
class TrustScoreApiConfig:
    """Exchange-info provider configuration."""
    base_url: str = "https://api.coingecko.com/api/v3"
    monitored_exchanges: List[str] = field(default_factory=lambda: list(MONITORED_EXCHANGES))
    # CoinGecko free tier allows 10-30 calls/minute
    request_delay_ms: int = 2000


@dataclass
class StorageConfig:
    """Output file configuration."""
    data_dir: str = "data"
    snapshot_file: str = "security-data.json"
    incidents_file: str = "incidents.json"
    trust_scores_file: str = "trust-scores.json"


@dataclass
class Config:
    """Main configuration class."""
    incident_api: IncidentApiConfig = field(default_factory=IncidentApiConfig)
    trust_score_api: TrustScoreApiConfig = field(default_factory=TrustScoreApiConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)

    # Request settings
    lookback_days: int = 7
    request_timeout: Optional[float] = None

    # Logging
    log_level: str = "INFO"
    log_file: Optional[str] = None

    @classmethod
    def from_env(cls) -> 'Config':
        """Create configuration from environment variables."""
        timeout = os.getenv("REQUEST_TIMEOUT")
        return cls(
            incident_api=IncidentApiConfig(
                api_key=os.getenv("RAPIDAPI_KEY") or None,
                url=os.getenv("CPW_API_URL", "https://cpw-tracker.p.rapidapi.com/"),
                host=os.getenv("CPW_API_HOST", "cpw-tracker.p.rapidapi.com")
            ),
            trust_score_api=TrustScoreApiConfig(
                base_url=os.getenv("COINGECKO_API_URL", "https://api.coingecko.com/api/v3"),
                request_delay_ms=int(os.getenv("COINGECKO_REQUEST_DELAY_MS", "2000"))
            ),
            storage=StorageConfig(
                data_dir=os.getenv("DATA_DIR", "data")
            ),
            request_timeout=float(timeout) if timeout else None,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_file=os.getenv("LOG_FILE")
        )

    @classmethod
    def from_file(cls, file_path: str) -> 'Config':
        """Create configuration from JSON file."""
        with open(file_path, 'r') as f:
            config_data = json.load(f)

        return cls(
            incident_api=IncidentApiConfig(**config_data.get('incident_api', {})),
            trust_score_api=TrustScoreApiConfig(**config_data.get('trust_score_api', {})),
            storage=StorageConfig(**config_data.get('storage', {})),
            **{k: v for k, v in config_data.items()
               if k not in ['incident_api', 'trust_score_api', 'storage']}
        )

    @property
    def request_delay_seconds(self) -> float:
        return self.trust_score_api.request_delay_ms / 1000.0

    def to_dict(self) -> Dict[str, Any]:
        """Return the configuration with the credential masked."""
        incident_api = dict(self.incident_api.__dict__)
        if incident_api.get('api_key'):
            incident_api['api_key'] = '***'
        return {
            'incident_api': incident_api,
            'trust_score_api': dict(self.trust_score_api.__dict__),
            'storage': dict(self.storage.__dict__),
            'lookback_days': self.lookback_days,
            'request_timeout': self.request_timeout,
            'log_level': self.log_level,
            'log_file': self.log_file
        }

    def validate(self):
        """Validate configuration values."""
        errors = []

        if not self.incident_api.url.startswith(('http://', 'https://')):
            errors.append("Incident API URL must start with http:// or https://")

        if not self.trust_score_api.base_url.startswith(('http://', 'https://')):
            errors.append("Trust score API URL must start with http:// or https://")

        if not self.trust_score_api.monitored_exchanges:
            errors.append("At least one monitored exchange is required")

        if self.trust_score_api.request_delay_ms < 0:
            errors.append("Request delay must not be negative")

        if self.lookback_days <= 0:
            errors.append("Lookback days must be positive")

        if self.request_timeout is not None and self.request_timeout <= 0:
            errors.append("Request timeout must be positive")

        if not self.storage.data_dir:
            errors.append("Data directory must be set")

        if errors:
            raise ValueError(f"Configuration validation failed: {'; '.join(errors)}")

        logger.debug("Configuration validation passed")

    def setup_logging(self):
        """Set up logging based on configuration."""
        level = getattr(logging, self.log_level.upper(), logging.INFO)
        logging.basicConfig(
            level=level,
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )

        if self.log_file:
            handler = logging.FileHandler(self.log_file)
            handler.setLevel(level)
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )
            handler.setFormatter(formatter)
            logging.getLogger().addHandler(handler)

        logger.debug(f"Logging configured with level {self.log_level}")
