# ABOUTME: Failure taxonomy for weather lookups: tagged variants returned by the client.
# ABOUTME: ConfigurationError is the only raised exception, since it happens at startup.

from typing import Literal, Union

from pydantic import BaseModel, ConfigDict


class _Failure(BaseModel):
    model_config = ConfigDict(frozen=True)

    message: str


class ValidationFailure(_Failure):
    """Caller input was malformed."""

    kind: Literal["validation"] = "validation"
    field: str


class UpstreamClientError(_Failure):
    """Provider rejected the request with a 4xx (bad key, unknown city, rate limited)."""

    kind: Literal["upstream_client"] = "upstream_client"
    status: int


class UpstreamServerError(_Failure):
    """Provider answered with a 5xx or a status outside the client-error range."""

    kind: Literal["upstream_server"] = "upstream_server"
    status: int


class UpstreamUnreachable(_Failure):
    """Transport failure: timeout, DNS, refused connection."""

    kind: Literal["upstream_unreachable"] = "upstream_unreachable"


class MalformedUpstreamResponse(_Failure):
    """Provider returned 2xx with a body that did not parse or validate."""

    kind: Literal["malformed_upstream"] = "malformed_upstream"


WeatherError = Union[
    ValidationFailure,
    UpstreamClientError,
    UpstreamServerError,
    UpstreamUnreachable,
    MalformedUpstreamResponse,
]


class ConfigurationError(RuntimeError):
    """Required configuration is missing or invalid."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)
