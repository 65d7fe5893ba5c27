"""Turn a declarative request spec into a fully resolved HTTP request."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Literal

import httpx

from .errors import FormatInvalidError, InvalidURLError, LookupFailedError
from .resolve import resolve_named_value

if TYPE_CHECKING:
    from .model import NamedValue, RequestSpec
    from .resolve import Lookups

log = getLogger(__name__)

SUPPORTED_SCHEMES = frozenset({"http", "https"})


@dataclass(frozen=True, slots=True)
class SkippedValue:
    """A parameter or header left out because its value could not be resolved."""

    location: Literal["param", "header"]
    name: str
    reason: str


@dataclass(frozen=True, slots=True)
class ResolvedRequest:
    url: str
    method: str
    headers: httpx.Headers = field(default_factory=httpx.Headers)
    skipped: tuple[SkippedValue, ...] = ()


def parse_absolute_url(raw: str) -> httpx.URL:
    try:
        url = httpx.URL(raw)
    except httpx.InvalidURL as exc:
        raise InvalidURLError(f"invalid url {raw!r}: {exc}") from exc
    if not url.is_absolute_url or not url.host or url.scheme not in SUPPORTED_SCHEMES:
        raise InvalidURLError(f"url {raw!r} is not an absolute http(s) URI")
    return url


def build_request(spec: RequestSpec, lookups: Lookups) -> ResolvedRequest:
    """Resolve every parameter and header of ``spec``.

    Parameters are appended to any query already present in the URL, keeping
    declared order and repeated names. Headers overwrite earlier headers of the
    same name. Entries whose value cannot be resolved are logged, recorded in
    ``skipped`` and left out; the request is still built.
    """

    url = parse_absolute_url(spec.url)
    skipped: list[SkippedValue] = []

    for entry in spec.params:
        value = _resolve_or_skip(entry, lookups, location="param", skipped=skipped)
        if value is not None:
            url = url.copy_add_param(entry.name, value)

    headers = httpx.Headers()
    for entry in spec.headers:
        value = _resolve_or_skip(entry, lookups, location="header", skipped=skipped)
        if value is not None:
            headers[entry.name] = value

    return ResolvedRequest(
        url=str(url),
        method=spec.effective_method,
        headers=headers,
        skipped=tuple(skipped),
    )


def _resolve_or_skip(
    entry: NamedValue,
    lookups: Lookups,
    *,
    location: Literal["param", "header"],
    skipped: list[SkippedValue],
) -> str | None:
    try:
        return resolve_named_value(entry, lookups)
    except (LookupFailedError, FormatInvalidError) as exc:
        log.warning("Skipping %s %s: %s", location, entry.name, exc)
        skipped.append(SkippedValue(location=location, name=entry.name, reason=str(exc)))
        return None
