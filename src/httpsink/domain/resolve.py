"""Resolution of named values from stores, literals and format templates."""

from __future__ import annotations

import re
from logging import getLogger
from typing import TYPE_CHECKING

from .errors import FormatInvalidError, LookupFailedError
from .model import LiteralSource

if TYPE_CHECKING:
    from collections.abc import Mapping

    from .model import NamedValue, SinkKind, ValueSource
    from .ports.store import ValueLookup

log = getLogger(__name__)

type Lookups = Mapping[SinkKind, ValueLookup]

# printf-style placeholders; "%%" is an escaped percent sign.
_PLACEHOLDER = re.compile(r"%[%sv]")


def apply_format(template: str, value: str) -> str:
    """Substitute ``value`` into the single ``%s``/``%v`` placeholder of ``template``."""

    placeholders = sum(1 for match in _PLACEHOLDER.finditer(template) if match.group() != "%%")
    if placeholders != 1:
        raise FormatInvalidError(
            f"format {template!r} must contain exactly one placeholder, found {placeholders}"
        )
    return _PLACEHOLDER.sub(lambda match: "%" if match.group() == "%%" else value, template)


def resolve_named_value(value: NamedValue, lookups: Lookups) -> str:
    """Resolve ``value`` from its first source that yields a non-empty string.

    Sources are tried ConfigMap first, then Secret, then the literal. Store
    failures do not stop the search; the last one is raised only when no source
    produced a value. The result is stripped and, when ``fmt`` is set, formatted.
    """

    failure: LookupFailedError | None = None
    resolved = ""
    for source in value.sources:
        try:
            candidate = _read_source(source, lookups)
        except LookupFailedError as exc:
            log.debug("Lookup for %s failed: %s", value.name, exc)
            failure = exc
            continue
        if candidate:
            resolved = candidate
            break

    if not resolved:
        if failure is not None:
            raise LookupFailedError(f"cannot resolve value {value.name!r}: {failure}") from failure
        return ""

    resolved = resolved.strip()
    if value.fmt is not None:
        resolved = apply_format(value.fmt, resolved)
    return resolved


def _read_source(source: ValueSource, lookups: Lookups) -> str:
    if isinstance(source, LiteralSource):
        return source.value

    lookup = lookups.get(source.kind)
    if lookup is None:
        raise LookupFailedError(f"no {source.kind} store configured")
    selector = source.selector
    return lookup.get(selector.name, selector.namespace, selector.key) or ""
