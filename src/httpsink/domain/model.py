"""Domain model for HttpRequest resources (pure, dependency-light)."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum
from typing import ClassVar

DEFAULT_METHOD = "GET"


class SinkKind(StrEnum):
    CONFIG_MAP = "ConfigMap"
    SECRET = "Secret"


class ConditionType(StrEnum):
    READY = "Ready"


class ConditionReason(StrEnum):
    AVAILABLE = "Available"
    CREATING = "Creating"
    DELETING = "Deleting"


@dataclass(frozen=True, slots=True)
class ValueSelector:
    """Selects one key of a ConfigMap or Secret in an arbitrary namespace."""

    name: str
    namespace: str
    key: str


@dataclass(frozen=True, slots=True)
class ConfigMapSource:
    selector: ValueSelector
    kind: ClassVar[SinkKind] = SinkKind.CONFIG_MAP


@dataclass(frozen=True, slots=True)
class SecretSource:
    selector: ValueSelector
    kind: ClassVar[SinkKind] = SinkKind.SECRET


@dataclass(frozen=True, slots=True)
class LiteralSource:
    value: str


type ValueSource = ConfigMapSource | SecretSource | LiteralSource

SOURCE_PRECEDENCE: tuple[type[ConfigMapSource | SecretSource | LiteralSource], ...] = (
    ConfigMapSource,
    SecretSource,
    LiteralSource,
)


@dataclass(frozen=True, slots=True)
class NamedValue:
    """A named query parameter or header with up to one source of each kind.

    ``sources`` is kept sorted by resolution precedence (ConfigMap, Secret,
    literal) whatever order the caller passes them in.
    """

    name: str
    sources: tuple[ValueSource, ...] = ()
    fmt: str | None = None

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("NamedValue name must not be empty")
        seen: set[type[object]] = set()
        for source in self.sources:
            if type(source) in seen:
                raise ValueError(
                    f"NamedValue {self.name!r} has more than one {type(source).__name__}"
                )
            seen.add(type(source))
        ordered = tuple(sorted(self.sources, key=lambda s: SOURCE_PRECEDENCE.index(type(s))))
        object.__setattr__(self, "sources", ordered)

    @classmethod
    def of(
        cls,
        name: str,
        *,
        config_map: ValueSelector | None = None,
        secret: ValueSelector | None = None,
        value: str | None = None,
        fmt: str | None = None,
    ) -> NamedValue:
        sources: list[ValueSource] = []
        if config_map is not None:
            sources.append(ConfigMapSource(config_map))
        if secret is not None:
            sources.append(SecretSource(secret))
        if value is not None:
            sources.append(LiteralSource(value))
        return cls(name=name, sources=tuple(sources), fmt=fmt)


@dataclass(frozen=True, slots=True)
class SinkRef:
    """Key inside a keyed store that receives the fetched content."""

    name: str
    namespace: str
    key: str
    kind: SinkKind = SinkKind.CONFIG_MAP


@dataclass(frozen=True, slots=True)
class RequestSpec:
    url: str
    sink: SinkRef
    method: str | None = None
    params: tuple[NamedValue, ...] = ()
    headers: tuple[NamedValue, ...] = ()

    @property
    def effective_method(self) -> str:
        return self.method or DEFAULT_METHOD


@dataclass(frozen=True, slots=True)
class HttpRequestObservation:
    """Observed fields mirroring the sink target once it is in sync."""

    target: str
    name: str
    namespace: str
    key: str

    @classmethod
    def from_spec(cls, spec: RequestSpec) -> HttpRequestObservation:
        return cls(
            target=str(spec.sink.kind),
            name=spec.sink.name,
            namespace=spec.sink.namespace,
            key=spec.sink.key,
        )

    def to_dict(self) -> dict[str, str]:
        return {
            "target": self.target,
            "name": self.name,
            "namespace": self.namespace,
            "key": self.key,
        }


@dataclass(frozen=True, slots=True)
class Condition:
    type: ConditionType
    status: bool
    reason: ConditionReason
    last_transition_time: datetime = field(default_factory=lambda: datetime.now(UTC))

    @classmethod
    def available(cls) -> Condition:
        return cls(type=ConditionType.READY, status=True, reason=ConditionReason.AVAILABLE)

    @classmethod
    def creating(cls) -> Condition:
        return cls(type=ConditionType.READY, status=False, reason=ConditionReason.CREATING)

    @classmethod
    def deleting(cls) -> Condition:
        return cls(type=ConditionType.READY, status=False, reason=ConditionReason.DELETING)


@dataclass(slots=True)
class HttpRequestStatus:
    at_provider: HttpRequestObservation | None = None
    conditions: list[Condition] = field(default_factory=list["Condition"])

    def set_condition(self, condition: Condition) -> None:
        """Replace the condition of the same type, keeping the transition time if unchanged."""

        for index, existing in enumerate(self.conditions):
            if existing.type is not condition.type:
                continue
            if existing.status == condition.status and existing.reason is condition.reason:
                return
            self.conditions[index] = condition
            return
        self.conditions.append(condition)

    def get_condition(self, condition_type: ConditionType) -> Condition | None:
        for condition in self.conditions:
            if condition.type is condition_type:
                return condition
        return None


@dataclass(slots=True)
class HttpRequest:
    """Managed resource: a request spec plus the status written by reconciliation."""

    name: str
    spec: RequestSpec
    provider_config_ref: str | None = None
    status: HttpRequestStatus = field(default_factory=HttpRequestStatus)


@dataclass(frozen=True, slots=True)
class ExternalObservation:
    resource_exists: bool
    resource_up_to_date: bool


@dataclass(frozen=True, slots=True)
class SyncResult:
    """Outcome of a fetch-and-write pass."""

    url: str
    mime_type: str
    digest: str
    size: int


__all__ = [
    "DEFAULT_METHOD",
    "SOURCE_PRECEDENCE",
    "Condition",
    "ConditionReason",
    "ConditionType",
    "ConfigMapSource",
    "ExternalObservation",
    "HttpRequest",
    "HttpRequestObservation",
    "HttpRequestStatus",
    "LiteralSource",
    "NamedValue",
    "RequestSpec",
    "SecretSource",
    "SinkKind",
    "SinkRef",
    "SyncResult",
    "ValueSelector",
    "ValueSource",
]
