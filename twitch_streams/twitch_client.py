from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

import requests

from .config import CLIENT_ID_HEADER, CLIENT_ID_KEY, STREAMS_URL, ConfigProvider, apply_defaults
from .errors import ConfigurationError, CopyError, RequestBuildError, TransportError, UnexpectedStatusError
from .http import HttpClient

logger = logging.getLogger(__name__)

# A retrieval strategy: runs one request/response cycle and returns the raw body.
StreamsBy = Callable[[], bytes]


class Client:
    """Retrieves raw Helix streams payloads.

    Both dependencies are shared with, and owned by, the caller. Build one
    through :class:`ClientBuilder` or :func:`new_client`::

        client = new_client(with_transport(new_http_client()), with_config_provider(load_settings()))
        with client:
            body = client.streams(client.by_user_login("summit1g"))
    """

    def __init__(self, *, http: HttpClient, config: ConfigProvider):
        self.http = http
        self.config = config

    def streams(self, by: StreamsBy) -> bytes:
        return by()

    def by_user_login(self, login: str) -> "ByUserLogin":
        return ByUserLogin(client=self, login=login)

    def close(self) -> None:
        self.http.close()

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def _has_control_chars(s: str) -> bool:
    return any(ord(ch) < 0x20 or ord(ch) == 0x7F for ch in s)


@dataclass(frozen=True)
class ByUserLogin:
    client: Client
    login: str

    def url(self) -> str:
        # Plain concatenation: the login is assumed to be a valid Twitch login.
        return STREAMS_URL + "?user_login=" + self.login

    def __call__(self) -> bytes:
        http = self.client.http
        headers = {CLIENT_ID_HEADER: self.client.config.get_string(CLIENT_ID_KEY)}

        if _has_control_chars(self.login):
            raise RequestBuildError(f"failed to create streams request: user login {self.login!r} contains control characters")

        try:
            prepared = http.prepare("GET", self.url(), headers=headers)
        except (requests.RequestException, ValueError) as exc:
            raise RequestBuildError(f"failed to create streams request for user login {self.login}: {exc}") from exc

        logger.debug("GET %s", prepared.url)
        try:
            resp = http.send(prepared)
        except requests.RequestException as exc:
            raise TransportError(self.login, exc) from exc

        with resp:
            logger.debug("GET %s -> %s", prepared.url, resp.status_code)
            if resp.status_code != requests.codes.ok:
                raise UnexpectedStatusError(self.login, resp.status_code)
            try:
                return b"".join(resp.iter_content(chunk_size=8192))
            except (requests.RequestException, OSError) as exc:
                raise CopyError(self.login, exc) from exc


class ClientBuilder:
    def __init__(self):
        self._http: HttpClient | None = None
        self._config: ConfigProvider | None = None

    def with_transport(self, http: HttpClient) -> "ClientBuilder":
        self._http = http
        return self

    def with_config_provider(self, config: ConfigProvider) -> "ClientBuilder":
        self._config = config
        return self

    def build(self) -> Client:
        if self._http is None:
            raise ConfigurationError("failed to initialize client: no HTTP transport supplied")
        if self._config is None:
            raise ConfigurationError("failed to initialize client: no config provider supplied")
        apply_defaults(self._config)
        return Client(http=self._http, config=self._config)


ClientOption = Callable[[ClientBuilder], None]


def with_transport(http: HttpClient) -> ClientOption:
    def option(b: ClientBuilder) -> None:
        b.with_transport(http)

    return option


def with_config_provider(config: ConfigProvider) -> ClientOption:
    def option(b: ClientBuilder) -> None:
        b.with_config_provider(config)

    return option


def new_client(*options: ClientOption) -> Client:
    builder = ClientBuilder()
    for option in options:
        option(builder)
    return builder.build()
