"""HTTP transport and content fetcher built on httpx."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, TypedDict

import httpx

from httpsink.config.transport import DEFAULT_TRANSPORT, TransportConfig
from httpsink.domain.context import BACKGROUND, PassContext
from httpsink.domain.errors import PassCancelledError, TransportError, UnexpectedStatusError

if TYPE_CHECKING:
    from types import TracebackType

    from httpx._types import TimeoutTypes

    from httpsink.domain.request import ResolvedRequest

log = getLogger(__name__)

RequestHook = Callable[[httpx.Request], object]
ResponseHook = Callable[[httpx.Response], object]

_REDACTED_HEADERS = frozenset({"authorization", "proxy-authorization", "cookie", "set-cookie"})


class AsyncClientOptions(TypedDict, total=False):
    timeout: TimeoutTypes
    verify: bool
    event_hooks: dict[str, list[RequestHook | ResponseHook]]
    transport: httpx.AsyncBaseTransport


def _format_headers(headers: httpx.Headers) -> str:
    return ", ".join(
        f"{name}: {'<redacted>' if name.lower() in _REDACTED_HEADERS else value}"
        for name, value in headers.items()
    )


async def _log_request(request: httpx.Request) -> None:
    log.info("--> %s %s [%s]", request.method, request.url, _format_headers(request.headers))


async def _log_response(response: httpx.Response) -> None:
    request = response.request
    log.info(
        "<-- %s %s %s [%s]",
        response.status_code,
        request.method,
        request.url,
        _format_headers(response.headers),
    )


class TransportClient:
    """Async HTTP client configured from a ``TransportConfig``."""

    def __init__(
        self,
        config: TransportConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config

        client_kwargs: AsyncClientOptions = {
            "timeout": config.timeout_seconds,
            "verify": config.verify,
        }
        if config.verbose:
            client_kwargs["event_hooks"] = {
                "request": [_log_request],
                "response": [_log_response],
            }
        if transport is not None:
            client_kwargs["transport"] = transport

        self._client = httpx.AsyncClient(**client_kwargs)

    async def __aenter__(self) -> TransportClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def send(self, request: ResolvedRequest) -> httpx.Response:
        return await self._client.request(request.method, request.url, headers=request.headers)


def _default_client_factory(config: TransportConfig) -> TransportClient:
    return TransportClient(config)


@dataclass(slots=True)
class HttpContentFetcher:
    """Execute one resolved request and return its body.

    Statuses outside ``[200, 300)`` raise ``UnexpectedStatusError``; network
    failures raise ``TransportError``. The request is never retried and
    redirects follow httpx defaults (not followed).
    """

    transport: TransportConfig = DEFAULT_TRANSPORT
    client_factory: Callable[[TransportConfig], TransportClient] = field(
        default=_default_client_factory
    )

    def __call__(self, request: ResolvedRequest, *, context: PassContext = BACKGROUND) -> bytes:
        context.check("fetching remote content")
        return asyncio.run(self._fetch_async(request, context=context))

    async def _fetch_async(self, request: ResolvedRequest, *, context: PassContext) -> bytes:
        try:
            async with asyncio.timeout(context.remaining()):
                async with self.client_factory(self.transport) as client:
                    response = await client.send(request)
        except TimeoutError as exc:
            raise PassCancelledError(f"deadline exceeded while fetching {request.url}") from exc
        except httpx.HTTPError as exc:
            raise TransportError(f"cannot fetch {request.url}: {exc}") from exc

        if not httpx.codes.is_success(response.status_code):
            raise UnexpectedStatusError(response.status_code, url=request.url)

        log.debug(
            "Fetched %s %s: status=%s bytes=%d",
            request.method,
            request.url,
            response.status_code,
            len(response.content),
        )
        return response.content
