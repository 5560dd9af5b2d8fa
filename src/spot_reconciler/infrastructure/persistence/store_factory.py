# src/spot_reconciler/infrastructure/persistence/store_factory.py
import logging

from spot_reconciler.config.schemas.storage_schema import StorageConfig
from spot_reconciler.domain.base.exceptions import ConfigurationError
from spot_reconciler.infrastructure.persistence.json_store import JSONSpotRequestStore
from spot_reconciler.infrastructure.persistence.memory_store import InMemorySpotRequestStore

logger = logging.getLogger(__name__)


class StateStoreFactory:
    """Creates the spot request state store selected by StorageConfig."""

    @staticmethod
    def create_store(config: StorageConfig):
        """
        Create a state store instance based on configuration.

        Args:
            config: Storage configuration

        Returns:
            SpotRequestStateStorePort implementation

        Raises:
            ConfigurationError: If the strategy is not supported
        """
        if config.strategy == "json":
            logger.info(f"Using JSON spot request store at {config.json_strategy.path}")
            return JSONSpotRequestStore(config.json_strategy.path)
        elif config.strategy == "memory":
            logger.info("Using in-memory spot request store")
            return InMemorySpotRequestStore()
        raise ConfigurationError(f"Unsupported storage strategy: {config.strategy}")
