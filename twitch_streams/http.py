from __future__ import annotations

from dataclasses import dataclass, field
import requests


@dataclass(frozen=True)
class HttpClient:
    session: requests.Session = field(default_factory=requests.Session)
    timeout_s: float | None = 30.0

    def prepare(self, method: str, url: str, *, headers: dict[str, str] | None = None) -> requests.PreparedRequest:
        return self.session.prepare_request(requests.Request(method, url, headers=headers))

    def send(self, prepared: requests.PreparedRequest) -> requests.Response:
        """Send a prepared request; the body is left unread for the caller to drain."""
        settings = self.session.merge_environment_settings(prepared.url, {}, None, None, None)
        settings["stream"] = True
        return self.session.send(prepared, timeout=self.timeout_s, **settings)

    def close(self) -> None:
        # Session.close only closes its adapters' pools, so repeat calls are harmless.
        self.session.close()


def new_http_client(*, timeout_s: float | None = 30.0) -> HttpClient:
    return HttpClient(session=requests.Session(), timeout_s=timeout_s)
