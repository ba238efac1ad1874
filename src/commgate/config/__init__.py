"""Gateway configuration loading."""

from commgate.config.settings import GatewaySettings, ProviderEndpoints, load_settings

__all__ = ["GatewaySettings", "ProviderEndpoints", "load_settings"]
