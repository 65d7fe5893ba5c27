"""Translate manifest payloads into domain resources and back into status documents."""

from __future__ import annotations

from typing import TYPE_CHECKING

from httpsink.domain.model import (
    HttpRequest,
    NamedValue,
    RequestSpec,
    SinkKind,
    SinkRef,
    ValueSelector,
)

if TYPE_CHECKING:
    from .schema import HttpRequestManifest, NamedValuePayload, ValueSelectorPayload


def translate_manifest(manifest: HttpRequestManifest) -> HttpRequest:
    params = manifest.spec.for_provider
    sink = params.write_response_to_config_map
    spec = RequestSpec(
        url=params.url,
        method=params.method,
        params=tuple(_named_value(entry) for entry in params.params),
        headers=tuple(_named_value(entry) for entry in params.headers),
        sink=SinkRef(
            name=sink.name,
            namespace=sink.namespace,
            key=sink.key,
            kind=SinkKind.CONFIG_MAP,
        ),
    )
    provider_ref = manifest.spec.provider_config_ref
    return HttpRequest(
        name=manifest.metadata.name,
        spec=spec,
        provider_config_ref=provider_ref.name if provider_ref else None,
    )


def render_status(resource: HttpRequest) -> dict[str, object]:
    """Return the resource status in manifest form (``atProvider`` plus conditions)."""

    status = resource.status
    return {
        "atProvider": status.at_provider.to_dict() if status.at_provider else {},
        "conditions": [
            {
                "type": str(condition.type),
                "status": "True" if condition.status else "False",
                "reason": str(condition.reason),
                "lastTransitionTime": condition.last_transition_time.isoformat(),
            }
            for condition in status.conditions
        ],
    }


def _named_value(payload: NamedValuePayload) -> NamedValue:
    return NamedValue.of(
        payload.name,
        config_map=_selector(payload.config_map_ref),
        secret=_selector(payload.secret_ref),
        value=payload.value,
        fmt=payload.fmt,
    )


def _selector(payload: ValueSelectorPayload | None) -> ValueSelector | None:
    if payload is None:
        return None
    return ValueSelector(name=payload.name, namespace=payload.namespace, key=payload.key)
