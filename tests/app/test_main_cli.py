from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING

import pytest
from sqlalchemy.exc import OperationalError

from httpsink.adapters import sqlalchemy as sqlalchemy_adapter
from httpsink.adapters.manifest import ManifestError
from httpsink.adapters.sqlalchemy import StartupError
from httpsink.app import ConnectedResource
from httpsink.config import ConfigurationError
from httpsink.domain.context import PassContext
from httpsink.domain.errors import TransportError
from httpsink.domain.reconciler import HttpRequestReconciler
from httpsink.ui import cli
from tests.support.fetchers import FakeFetcher

if TYPE_CHECKING:
    from collections.abc import Callable

    from httpsink.adapters.memory import InMemoryKeyedStore
    from httpsink.domain.model import HttpRequest, SinkKind


@pytest.fixture
def captured(monkeypatch: pytest.MonkeyPatch) -> dict[str, object]:
    monkeypatch.delenv(cli.PROVIDER_CONFIG_ENV, raising=False)
    return {}


def _patch_open_resource(
    monkeypatch: pytest.MonkeyPatch,
    captured: dict[str, object],
    resource: HttpRequest,
    reconciler: HttpRequestReconciler,
) -> None:
    def fake_open_resource(manifest_path: Path, **kwargs: object) -> ConnectedResource:
        captured["manifest"] = manifest_path
        captured.update(kwargs)
        return ConnectedResource(resource=resource, reconciler=reconciler, context=PassContext())

    monkeypatch.setattr(cli, "open_resource", fake_open_resource)


def test_reconcile_prints_outcome(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
    captured: dict[str, object],
    make_resource: Callable[..., HttpRequest],
    stores: dict[SinkKind, InMemoryKeyedStore],
) -> None:
    resource = make_resource()
    reconciler = HttpRequestReconciler(stores=stores, fetcher=FakeFetcher(b"hello"))
    _patch_open_resource(monkeypatch, captured, resource, reconciler)

    cli.main(["reconcile", "manifest.json", "--timeout", "5"])

    payload = json.loads(capsys.readouterr().out)
    assert captured["manifest"] == Path("manifest.json")
    assert captured["timeout_seconds"] == 5.0
    assert captured["provider_config_path"] is None
    assert payload["action"] == "created"
    assert payload["name"] == "sample"
    assert payload["sha1"] == "aaf4c61ddcc5e8a2dabede0f3b482cd9aea9434d"
    assert payload["status"]["conditions"][0]["reason"] == "Creating"


def test_observe_and_delete_commands(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
    captured: dict[str, object],
    make_resource: Callable[..., HttpRequest],
    stores: dict[SinkKind, InMemoryKeyedStore],
    config_map_store: InMemoryKeyedStore,
) -> None:
    config_map_store.set("cm1", "ns", "data", "hello")
    resource = make_resource()
    reconciler = HttpRequestReconciler(stores=stores, fetcher=FakeFetcher(b"hello"))
    _patch_open_resource(monkeypatch, captured, resource, reconciler)

    cli.main(["observe", "manifest.json"])
    observed = json.loads(capsys.readouterr().out)
    cli.main(["delete", "manifest.json"])
    deleted = json.loads(capsys.readouterr().out)

    assert observed["exists"] is True
    assert observed["upToDate"] is True
    assert observed["status"]["atProvider"]["name"] == "cm1"
    assert deleted["deleted"] is True
    assert config_map_store.get("cm1", "ns", "data") is None


def test_provider_config_from_environment(
    monkeypatch: pytest.MonkeyPatch,
    captured: dict[str, object],
    make_resource: Callable[..., HttpRequest],
    stores: dict[SinkKind, InMemoryKeyedStore],
) -> None:
    reconciler = HttpRequestReconciler(stores=stores, fetcher=FakeFetcher(b"x"))
    _patch_open_resource(monkeypatch, captured, make_resource(), reconciler)
    monkeypatch.setenv(cli.PROVIDER_CONFIG_ENV, "/etc/httpsink/providers.json")

    cli.main(["observe", "manifest.json"])

    assert captured["provider_config_path"] == Path("/etc/httpsink/providers.json")


@pytest.mark.parametrize(
    "error",
    [
        ManifestError("bad manifest"),
        ConfigurationError("bad provider config"),
        StartupError("adapter not initialised"),
        OperationalError("CREATE TABLE store_entry", {}, Exception("unable to open database")),
    ],
)
def test_open_errors_exit_with_usage_code(
    monkeypatch: pytest.MonkeyPatch,
    captured: dict[str, object],
    error: Exception,
) -> None:
    def fake_open_resource(*_: object, **__: object) -> ConnectedResource:
        raise error

    monkeypatch.setattr(cli, "open_resource", fake_open_resource)

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["reconcile", "manifest.json"])

    assert excinfo.value.code == 2


def test_reconcile_error_exits_with_failure_code(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
    captured: dict[str, object],
    make_resource: Callable[..., HttpRequest],
    stores: dict[SinkKind, InMemoryKeyedStore],
) -> None:
    fetcher = FakeFetcher(TransportError("connection refused"))
    reconciler = HttpRequestReconciler(stores=stores, fetcher=fetcher)
    _patch_open_resource(monkeypatch, captured, make_resource(), reconciler)

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["reconcile", "manifest.json"])

    assert excinfo.value.code == 1
    assert capsys.readouterr().out == ""


@pytest.mark.parametrize("timeout", ["0", "-1", "soon"])
def test_invalid_timeout_is_rejected(timeout: str, captured: dict[str, object]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["observe", "manifest.json", "--timeout", timeout])

    assert excinfo.value.code == 2


def test_command_is_required() -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main([])

    assert excinfo.value.code == 2


def test_bad_database_uri_exits_with_usage_code(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
    captured: dict[str, object],
) -> None:
    manifest = tmp_path / "manifest.json"
    manifest.write_text(
        json.dumps(
            {
                "kind": "HttpRequest",
                "metadata": {"name": "sample"},
                "spec": {
                    "forProvider": {
                        "url": "https://example.com/a",
                        "writeResponseToConfigMap": {"name": "c", "namespace": "n", "key": "k"},
                    }
                },
            }
        )
    )
    sqlalchemy_adapter.shutdown()
    monkeypatch.setenv("DATABASE_URI", "not a database uri")

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["observe", str(manifest)])

    assert excinfo.value.code == 2
    assert not sqlalchemy_adapter.is_started()
