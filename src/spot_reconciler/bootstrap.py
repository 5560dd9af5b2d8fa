"""Application bootstrap - wires configuration to the poller and its collaborators."""

from typing import Optional

from spot_reconciler.application.polling import SpotRequestPoller
from spot_reconciler.config import AppConfig, ConfigurationManager
from spot_reconciler.domain.base.ports import SpotRequestStateStorePort
from spot_reconciler.helpers.logger import setup_logging
from spot_reconciler.infrastructure.aws import EC2SpotRequestProvider
from spot_reconciler.infrastructure.persistence import StateStoreFactory


def build_poller(app_config: AppConfig,
                 state_store: Optional[SpotRequestStateStorePort] = None,
                 provider: Optional[EC2SpotRequestProvider] = None) -> SpotRequestPoller:
    """
    Build a SpotRequestPoller from configuration.

    Args:
        app_config: Validated application configuration
        state_store: Store to use instead of the configured one
        provider: Provider to use instead of an EC2SpotRequestProvider

    Returns:
        Configured poller, not yet started
    """
    return SpotRequestPoller(
        provider=provider or EC2SpotRequestProvider(app_config.provider),
        state_store=state_store or StateStoreFactory.create_store(app_config.storage),
        regions=app_config.provider.regions,
        batch_size=app_config.poller.batch_size,
        poll_interval=app_config.poller.poll_interval_seconds,
        max_workers=app_config.poller.max_workers,
    )


class Application:
    """Application context: configuration, logging and the poller."""

    def __init__(self, config_path: Optional[str] = None, log_level: Optional[str] = None) -> None:
        self.config_manager = ConfigurationManager(config_path)
        if log_level:
            self.config_manager.update_config({"logging": {"level": log_level}})
        self.config = self.config_manager.app_config
        self.logger = setup_logging(self.config.logging)
        self._poller: Optional[SpotRequestPoller] = None
        self._state_store: Optional[SpotRequestStateStorePort] = None

    @property
    def state_store(self) -> SpotRequestStateStorePort:
        if self._state_store is None:
            self._state_store = StateStoreFactory.create_store(self.config.storage)
        return self._state_store

    @property
    def poller(self) -> SpotRequestPoller:
        if self._poller is None:
            self._poller = build_poller(self.config, state_store=self.state_store)
        return self._poller
