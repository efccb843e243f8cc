from __future__ import annotations

import os
from typing import Mapping, Protocol


CLIENT_ID_HEADER = "Client-ID"

# Key holding the Twitch application client id.
CLIENT_ID_KEY = "twitch_client_id"
DEFAULT_CLIENT_ID = "kkjo0gmafpxng9jlmod6g8x0z7rjjj"

STREAMS_URL = "https://api.twitch.tv/helix/streams"

KEYS = [CLIENT_ID_KEY]


class ConfigProvider(Protocol):
    def get_string(self, key: str) -> str: ...

    def set_default(self, key: str, value: str) -> None: ...


class Settings:
    """Key-value settings resolved as explicit value > env var > default.

    Environment lookups use the upper-cased key, so ``twitch_client_id`` is
    read from ``TWITCH_CLIENT_ID``.
    """

    def __init__(self, *, env: Mapping[str, str] | None = None):
        self._env = os.environ if env is None else env
        self._values: dict[str, str] = {}
        self._defaults: dict[str, str] = {}

    def set(self, key: str, value: str) -> None:
        self._values[key.lower()] = value

    def set_default(self, key: str, value: str) -> None:
        self._defaults[key.lower()] = value

    def get_string(self, key: str) -> str:
        key = key.lower()
        if key in self._values:
            return self._values[key]
        env_val = self._env.get(key.upper())
        if env_val:
            return env_val
        return self._defaults.get(key, "")

    def source(self, key: str) -> str:
        key = key.lower()
        if key in self._values:
            return "explicit"
        if self._env.get(key.upper()):
            return "env"
        if key in self._defaults:
            return "default"
        return "unset"

    def keys(self) -> list[str]:
        return sorted(set(self._values) | set(self._defaults))


def apply_defaults(provider: ConfigProvider) -> None:
    """Seed the client id fallback.

    Explicit and environment values still win over it. A default the caller
    set earlier is replaced.
    """
    provider.set_default(CLIENT_ID_KEY, DEFAULT_CLIENT_ID)


def load_settings(*, env: Mapping[str, str] | None = None) -> Settings:
    settings = Settings(env=env)
    apply_defaults(settings)
    return settings
