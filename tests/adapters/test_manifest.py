from __future__ import annotations

import json
from datetime import UTC, datetime
from typing import TYPE_CHECKING

import pytest

from httpsink.adapters.manifest import ManifestError, load_manifest, parse_manifest, render_status
from httpsink.domain.model import (
    Condition,
    ConditionReason,
    ConditionType,
    ConfigMapSource,
    HttpRequestObservation,
    LiteralSource,
    SecretSource,
    SinkKind,
    ValueSelector,
)

if TYPE_CHECKING:
    from pathlib import Path


def _manifest(**for_provider: object) -> dict[str, object]:
    params: dict[str, object] = {
        "url": "https://api.example.com/items",
        "writeResponseToConfigMap": {"name": "cm1", "namespace": "ns", "key": "data"},
    }
    params.update(for_provider)
    return {
        "apiVersion": "http.example.org/v1alpha1",
        "kind": "HttpRequest",
        "metadata": {"name": "items"},
        "spec": {"forProvider": params},
    }


def test_parse_minimal_manifest() -> None:
    resource = parse_manifest(_manifest())

    assert resource.name == "items"
    assert resource.provider_config_ref is None
    assert resource.spec.url == "https://api.example.com/items"
    assert resource.spec.method is None
    assert resource.spec.effective_method == "GET"
    assert resource.spec.sink.kind is SinkKind.CONFIG_MAP
    assert (resource.spec.sink.name, resource.spec.sink.namespace, resource.spec.sink.key) == (
        "cm1",
        "ns",
        "data",
    )
    assert resource.status.conditions == []


def test_parse_named_values_with_aliases() -> None:
    payload = _manifest(
        method="POST",
        params=[
            {"name": "page", "value": "1"},
            {
                "name": "region",
                "configMapRef": {"name": "settings", "namespace": "ns", "key": "region"},
            },
        ],
        headers=[
            {
                "name": "Authorization",
                "value": "anonymous",
                "secretRef": {"name": "api", "namespace": "ns", "key": "token"},
                "fmt": "Bearer %s",
            }
        ],
    )
    payload["spec"]["providerConfigRef"] = {"name": "insecure"}  # type: ignore[index]

    resource = parse_manifest(payload)

    assert resource.spec.method == "POST"
    assert resource.provider_config_ref == "insecure"
    page, region = resource.spec.params
    assert page.sources == (LiteralSource("1"),)
    assert region.sources == (
        ConfigMapSource(ValueSelector(name="settings", namespace="ns", key="region")),
    )
    (auth,) = resource.spec.headers
    assert auth.fmt == "Bearer %s"
    assert auth.sources == (
        SecretSource(ValueSelector(name="api", namespace="ns", key="token")),
        LiteralSource("anonymous"),
    )


def test_unknown_fields_are_ignored() -> None:
    payload = _manifest(unknownField=True)
    payload["status"] = {"atProvider": {}}

    assert parse_manifest(payload).name == "items"


@pytest.mark.parametrize(
    "mutate",
    [
        lambda p: p["spec"]["forProvider"].pop("writeResponseToConfigMap"),
        lambda p: p["spec"]["forProvider"].pop("url"),
        lambda p: p.update(kind="Deployment"),
        lambda p: p["metadata"].update(name=""),
        lambda p: p["spec"]["forProvider"].update(params=[{"name": "", "value": "x"}]),
    ],
)
def test_invalid_manifests_raise(mutate: object) -> None:
    payload = _manifest()
    mutate(payload)  # type: ignore[operator]

    with pytest.raises(ManifestError):
        parse_manifest(payload)


def test_load_manifest_from_file(tmp_path: Path) -> None:
    path = tmp_path / "items.json"
    path.write_text(json.dumps(_manifest()))

    assert load_manifest(path).name == "items"


def test_load_manifest_rejects_bad_json(tmp_path: Path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{not json")

    with pytest.raises(ManifestError, match="Cannot read manifest"):
        load_manifest(path)


def test_load_manifest_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ManifestError):
        load_manifest(tmp_path / "missing.json")


def test_render_status() -> None:
    resource = parse_manifest(_manifest())
    resource.status.at_provider = HttpRequestObservation.from_spec(resource.spec)
    moment = datetime(2025, 1, 2, 3, 4, 5, tzinfo=UTC)
    resource.status.set_condition(
        Condition(
            type=ConditionType.READY,
            status=True,
            reason=ConditionReason.AVAILABLE,
            last_transition_time=moment,
        )
    )

    assert render_status(resource) == {
        "atProvider": {"target": "ConfigMap", "name": "cm1", "namespace": "ns", "key": "data"},
        "conditions": [
            {
                "type": "Ready",
                "status": "True",
                "reason": "Available",
                "lastTransitionTime": "2025-01-02T03:04:05+00:00",
            }
        ],
    }


def test_render_empty_status() -> None:
    assert render_status(parse_manifest(_manifest())) == {"atProvider": {}, "conditions": []}
