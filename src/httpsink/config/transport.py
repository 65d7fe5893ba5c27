"""Configuration types for the outbound HTTP transport."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_TIMEOUT_SECONDS = 30.0


@dataclass(slots=True, frozen=True)
class TransportConfig:
    """Settings for the HTTP client used to fetch remote content.

    ``verify`` toggles TLS certificate verification and ``verbose`` enables
    request/response logging. The default instance verifies certificates and
    stays quiet.
    """

    verify: bool = True
    verbose: bool = False
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS


DEFAULT_TRANSPORT = TransportConfig()
