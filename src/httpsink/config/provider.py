"""Provider configurations that select transport settings for a resource."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictFloat,
    TypeAdapter,
    ValidationError,
)

from .env import env_flag
from .errors import ConfigurationError, ProviderConfigNotFoundError
from .transport import DEFAULT_TIMEOUT_SECONDS, TransportConfig

if TYPE_CHECKING:
    from pathlib import Path

log = getLogger(__name__)


class ProviderConfigPayload(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    verbose: StrictBool = False
    insecure: StrictBool = False
    timeout_seconds: StrictFloat = Field(DEFAULT_TIMEOUT_SECONDS, alias="timeoutSeconds", gt=0)


_PROVIDER_CONFIGS = TypeAdapter(dict[str, ProviderConfigPayload])


@dataclass(frozen=True, slots=True)
class ProviderConfig:
    """Named transport settings referenced by ``providerConfigRef``."""

    name: str
    verbose: bool = False
    insecure: bool = False
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    @classmethod
    def from_payload(cls, name: str, payload: ProviderConfigPayload) -> ProviderConfig:
        return cls(
            name=name,
            verbose=payload.verbose,
            insecure=payload.insecure,
            timeout_seconds=payload.timeout_seconds,
        )

    def to_transport(self) -> TransportConfig:
        return TransportConfig(
            verify=not self.insecure,
            verbose=self.verbose,
            timeout_seconds=self.timeout_seconds,
        )


@dataclass(slots=True)
class ProviderConfigRegistry:
    """In-process lookup table of provider configurations by name."""

    configs: dict[str, ProviderConfig] = field(default_factory=dict)

    def add(self, config: ProviderConfig) -> None:
        self.configs[config.name] = config

    def get(self, name: str) -> ProviderConfig:
        try:
            return self.configs[name]
        except KeyError:
            raise ProviderConfigNotFoundError(f"ProviderConfig not found: {name}") from None


def load_provider_configs(path: Path) -> ProviderConfigRegistry:
    """Load provider configurations from a JSON document keyed by name.

    ``HTTPSINK_VERBOSE`` and ``HTTPSINK_INSECURE`` override the matching flag of
    every loaded configuration when they are set.
    """

    try:
        raw = path.read_bytes()
    except OSError as exc:
        raise ConfigurationError(f"Cannot read provider configs from {path}: {exc}") from exc
    try:
        payloads = _PROVIDER_CONFIGS.validate_json(raw)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid provider configs in {path}: {exc}") from exc

    verbose = env_flag("HTTPSINK_VERBOSE")
    insecure = env_flag("HTTPSINK_INSECURE")
    registry = ProviderConfigRegistry()
    for name, payload in payloads.items():
        config = ProviderConfig.from_payload(name, payload)
        if verbose is not None:
            config = replace(config, verbose=verbose)
        if insecure is not None:
            config = replace(config, insecure=insecure)
        registry.add(config)
    if verbose is not None or insecure is not None:
        log.debug("Applied environment overrides to %d provider configs", len(registry.configs))
    return registry
