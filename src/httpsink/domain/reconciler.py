"""Observe/Create/Update/Delete lifecycle for HttpRequest resources.

The reconciler is level-triggered: every call re-derives its answer from the
sink and the remote endpoint. It keeps no record of earlier passes; the sink
content is the only persisted state. Scheduling, retries and per-resource
serialisation belong to the caller.
"""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from .context import BACKGROUND, PassContext
from .digest import compute_digest, digests_equal
from .errors import LookupFailedError
from .model import Condition, ExternalObservation, HttpRequestObservation, SyncResult
from .request import build_request
from .sniff import sniff_content_type

if TYPE_CHECKING:
    from collections.abc import Mapping

    from .model import HttpRequest, RequestSpec, SinkKind
    from .ports.fetching import ContentFetcher
    from .ports.store import KeyedStore

log = getLogger(__name__)


def decode_body(body: bytes) -> str:
    """Decode fetched bytes into the string stored in the sink."""

    return body.decode("utf-8", errors="replace")


@dataclass(slots=True)
class HttpRequestReconciler:
    """Reconcile an ``HttpRequest`` resource against its sink and remote endpoint.

    ``stores`` supplies one keyed store per sink kind. Every store serves value
    lookups for parameters and headers; the one matching ``spec.sink.kind``
    also receives the fetched content.
    """

    stores: Mapping[SinkKind, KeyedStore]
    fetcher: ContentFetcher

    def observe(
        self, resource: HttpRequest, *, context: PassContext = BACKGROUND
    ) -> ExternalObservation:
        spec = resource.spec
        sink = spec.sink
        context.check("reading sink")
        stored = self._sink_store(spec).get(sink.name, sink.namespace, sink.key)
        if not stored:
            log.debug("Sink value does not exist: %s (op=observe)", sink)
            return ExternalObservation(resource_exists=False, resource_up_to_date=True)

        stored_digest = compute_digest(stored)
        log.debug("Sink value exists: %s sha1=%s (op=observe)", sink, stored_digest)

        body = self._fetch(spec, context=context)
        remote_digest = compute_digest(decode_body(body))
        log.debug("Remote content digest: url=%s sha1=%s (op=observe)", spec.url, remote_digest)

        if not digests_equal(stored_digest, remote_digest):
            return ExternalObservation(resource_exists=True, resource_up_to_date=False)

        resource.status.at_provider = HttpRequestObservation.from_spec(spec)
        resource.status.set_condition(Condition.available())
        return ExternalObservation(resource_exists=True, resource_up_to_date=True)

    def create(self, resource: HttpRequest, *, context: PassContext = BACKGROUND) -> SyncResult:
        resource.status.set_condition(Condition.creating())
        return self._sync(resource.spec, context=context, operation="create")

    def update(self, resource: HttpRequest, *, context: PassContext = BACKGROUND) -> SyncResult:
        # Always a full refetch-and-overwrite; observe already established drift.
        return self._sync(resource.spec, context=context, operation="update")

    def delete(self, resource: HttpRequest, *, context: PassContext = BACKGROUND) -> None:
        resource.status.set_condition(Condition.deleting())
        sink = resource.spec.sink
        context.check("deleting sink value")
        self._sink_store(resource.spec).delete(sink.name, sink.namespace, sink.key)
        log.debug("Sink value deleted: %s (op=delete)", sink)

    def _sync(self, spec: RequestSpec, *, context: PassContext, operation: str) -> SyncResult:
        body = self._fetch(spec, context=context)
        mime_type = sniff_content_type(body)
        log.info("HTTP remote content fetched (url: %s, mimeType: %s)", spec.url, mime_type)

        value = decode_body(body)
        sink = spec.sink
        context.check("writing sink value")
        self._sink_store(spec).set(sink.name, sink.namespace, sink.key, value)

        log.info(
            "HTTP remote content stored in %s (url: %s, name: %s, namespace: %s, key: %s, op: %s)",
            sink.kind,
            spec.url,
            sink.name,
            sink.namespace,
            sink.key,
            operation,
        )
        return SyncResult(
            url=spec.url,
            mime_type=mime_type,
            digest=compute_digest(value),
            size=len(body),
        )

    def _fetch(self, spec: RequestSpec, *, context: PassContext) -> bytes:
        context.check("resolving request values")
        request = build_request(spec, self.stores)
        return self.fetcher(request, context=context)

    def _sink_store(self, spec: RequestSpec) -> KeyedStore:
        try:
            return self.stores[spec.sink.kind]
        except KeyError:
            raise LookupFailedError(f"no {spec.sink.kind} store configured") from None
