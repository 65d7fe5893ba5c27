"""Application orchestration entry points."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from logging import getLogger
from typing import TYPE_CHECKING

from httpsink.adapters import sqlalchemy as sqlalchemy_adapter
from httpsink.adapters.http import HttpContentFetcher
from httpsink.adapters.manifest import load_manifest
from httpsink.config import (
    DEFAULT_TRANSPORT,
    ConfigurationError,
    ProviderConfigRegistry,
    TransportConfig,
    load_provider_configs,
)
from httpsink.domain.context import BACKGROUND, PassContext
from httpsink.domain.reconciler import HttpRequestReconciler

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping
    from pathlib import Path

    from httpsink.domain.model import ExternalObservation, HttpRequest, SinkKind, SyncResult
    from httpsink.domain.ports import ContentFetcher, KeyedStore

type Stores = Mapping[SinkKind, KeyedStore]
type FetcherFactory = Callable[[TransportConfig], ContentFetcher]

log = getLogger(__name__)


class ReconcileAction(StrEnum):
    NONE = "none"
    CREATED = "created"
    UPDATED = "updated"


@dataclass(frozen=True, slots=True)
class ReconcileOutcome:
    action: ReconcileAction
    observation: ExternalObservation
    sync: SyncResult | None = None


def _default_fetcher_factory(transport: TransportConfig) -> ContentFetcher:
    return HttpContentFetcher(transport=transport)


def transport_for(
    resource: HttpRequest,
    registry: ProviderConfigRegistry | None,
) -> TransportConfig:
    """Return the transport selected by ``providerConfigRef``, or the default one.

    A missing reference or a failed lookup never fails the pass; the default
    TLS-verifying, non-verbose transport is used instead.
    """

    if resource.provider_config_ref is None:
        log.info("providerConfigRef is not given: using default HTTP client")
        return DEFAULT_TRANSPORT
    if registry is None:
        log.info("No provider configs loaded: using default HTTP client")
        return DEFAULT_TRANSPORT
    try:
        return registry.get(resource.provider_config_ref).to_transport()
    except ConfigurationError as exc:
        log.info("%s: using default HTTP client", exc)
        return DEFAULT_TRANSPORT


def connect(
    resource: HttpRequest,
    *,
    stores: Stores,
    registry: ProviderConfigRegistry | None = None,
    fetcher_factory: FetcherFactory | None = None,
) -> HttpRequestReconciler:
    """Build a reconciler for ``resource`` with its provider-selected transport."""

    factory = fetcher_factory or _default_fetcher_factory
    return HttpRequestReconciler(stores=stores, fetcher=factory(transport_for(resource, registry)))


def reconcile_once(
    resource: HttpRequest,
    reconciler: HttpRequestReconciler,
    *,
    context: PassContext = BACKGROUND,
) -> ReconcileOutcome:
    """Run one level-triggered pass: observe, then create or update when needed.

    This performs a single pass only; repeating passes and retrying failures is
    left to whatever schedules the calls.
    """

    observation = reconciler.observe(resource, context=context)
    if not observation.resource_exists:
        sync = reconciler.create(resource, context=context)
        action = ReconcileAction.CREATED
    elif not observation.resource_up_to_date:
        sync = reconciler.update(resource, context=context)
        action = ReconcileAction.UPDATED
    else:
        sync = None
        action = ReconcileAction.NONE

    log.info("Reconciled HttpRequest %s: action=%s", resource.name, action)
    return ReconcileOutcome(action=action, observation=observation, sync=sync)


@dataclass(slots=True)
class ConnectedResource:
    """Everything needed to run lifecycle operations for one manifest."""

    resource: HttpRequest
    reconciler: HttpRequestReconciler
    context: PassContext


def open_resource(
    manifest_path: Path,
    *,
    provider_config_path: Path | None = None,
    timeout_seconds: float | None = None,
    stores: Stores | None = None,
    fetcher_factory: FetcherFactory | None = None,
) -> ConnectedResource:
    """Load a manifest and wire it to stores and a transport."""

    resource = load_manifest(manifest_path)
    registry = load_provider_configs(provider_config_path) if provider_config_path else None
    if stores is None:
        if not sqlalchemy_adapter.is_started():
            sqlalchemy_adapter.startup()
        stores = sqlalchemy_adapter.build_stores()
    reconciler = connect(
        resource,
        stores=stores,
        registry=registry,
        fetcher_factory=fetcher_factory,
    )
    return ConnectedResource(
        resource=resource,
        reconciler=reconciler,
        context=PassContext.with_timeout(timeout_seconds),
    )

