# File: src/blockscope/config/settings.py

import copy
import os
from typing import Any, Dict, Mapping, Optional

import yaml
from dotenv import load_dotenv

from ..exceptions import ConfigError
from ..utils.config import Config

class ExplorerConfig:
    def __init__(
        self,
        config_path: Optional[str] = None,
        environ: Optional[Mapping[str, str]] = None
    ):
        if environ is None:
            load_dotenv()
            environ = os.environ
        self.environ = environ
        self.config_path = config_path or environ.get("BLOCKSCOPE_CONFIG", Config.DEFAULT_CONFIG_PATH)
        self.config = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        config = self._default_config()
        if os.path.exists(self.config_path):
            with open(self.config_path, 'r') as f:
                try:
                    loaded = yaml.safe_load(f) or {}
                except yaml.YAMLError as e:
                    raise ConfigError(f"Invalid config file {self.config_path}: {e}") from e
            if not isinstance(loaded, dict):
                raise ConfigError(f"Config file {self.config_path} must contain a mapping")
            _merge(config, loaded)

        self._apply_environment(config)
        return config

    def _default_config(self) -> Dict[str, Any]:
        return {
            "provider": {
                "api_key": None,
                "network": Config.DEFAULT_NETWORK,
                "rpc_url": None
            },
            "explorer": {
                "window_size": Config.WINDOW_SIZE
            },
            "server": {
                "host": Config.DEFAULT_HOST,
                "port": Config.DEFAULT_PORT
            },
            "monitoring": {
                "log_dir": "logs",
                "log_level": "INFO"
            }
        }

    def _apply_environment(self, config: Dict[str, Any]):
        overrides = {
            "ALCHEMY_API_KEY": ("provider", "api_key"),
            "ALCHEMY_NETWORK": ("provider", "network"),
            "ETH_RPC_URL": ("provider", "rpc_url"),
        }
        for env_name, (section, key) in overrides.items():
            value = self.environ.get(env_name)
            if value:
                config[section][key] = value

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value."""
        try:
            keys = key.split('.')
            value = self.config
            for k in keys:
                value = value[k]
            return value
        except (KeyError, TypeError):
            return default

    def update(self, key: str, value: Any):
        """Update configuration value in memory."""
        keys = key.split('.')
        config = self.config
        for k in keys[:-1]:
            config = config.setdefault(k, {})
        config[keys[-1]] = value

    def provider_url(self) -> str:
        """JSON-RPC endpoint: explicit rpc_url, else the Alchemy URL for the network.

        A missing API key is not rejected here; the provider answers with an
        authentication failure on the first request instead.
        """
        rpc_url = self.get("provider.rpc_url")
        if rpc_url:
            return rpc_url
        return Config.ALCHEMY_URL_TEMPLATE.format(
            network=self.get("provider.network", Config.DEFAULT_NETWORK),
            api_key=self.get("provider.api_key") or ""
        )

    @property
    def window_size(self) -> int:
        return int(self.get("explorer.window_size", Config.WINDOW_SIZE))

def _merge(base: Dict[str, Any], override: Dict[str, Any]):
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _merge(base[key], value)
        else:
            base[key] = copy.deepcopy(value)
