"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from taxon.config import ConfigCell, Settings
from taxon.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_config_cell(self, settings: Settings) -> ConfigCell:
        """Provide the live taxonomy configuration.

        APP-scoped: runtime settings changes are shared by every request.
        """
        return ConfigCell(settings.taxonomy)
