"""In-memory keyed store, used by tests and dry runs."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True)
class InMemoryKeyedStore:
    """Keyed store holding ``(namespace, name) -> {key: value}`` entries in a dict."""

    entries: dict[tuple[str, str], dict[str, str]] = field(default_factory=dict)

    def get(self, name: str, namespace: str, key: str) -> str | None:
        entry = self.entries.get((namespace, name))
        if entry is None:
            return None
        return entry.get(key)

    def set(self, name: str, namespace: str, key: str, value: str) -> None:
        self.entries.setdefault((namespace, name), {})[key] = value

    def delete(self, name: str, namespace: str, key: str) -> None:
        entry = self.entries.get((namespace, name))
        if entry is None:
            return
        entry.pop(key, None)
        if not entry:
            del self.entries[(namespace, name)]
