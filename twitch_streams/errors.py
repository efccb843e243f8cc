from __future__ import annotations


class TwitchError(RuntimeError):
    """Base class for every error raised by this package."""


class ConfigurationError(TwitchError):
    """A required client dependency was not supplied."""


class RequestBuildError(TwitchError):
    pass


class TransportError(TwitchError):
    def __init__(self, login: str, cause: BaseException):
        super().__init__(f"failed to retrieve streams by user login {login}: {cause}")
        self.login = login


class UnexpectedStatusError(TwitchError):
    def __init__(self, login: str, status_code: int):
        super().__init__(f"failed to retrieve streams by user login {login}, status code = {status_code}")
        self.login = login
        self.status_code = status_code


class CopyError(TwitchError):
    def __init__(self, login: str, cause: BaseException):
        super().__init__(f"failed to copy streams for user login {login} into buffer: {cause}")
        self.login = login
