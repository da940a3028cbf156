"""In-memory key-value storage."""

from dataclasses import dataclass, field

from bitesnaps.services.store import KeyValueStorage


@dataclass
class InMemoryStorage(KeyValueStorage):
    """Process-local storage, lost on restart."""

    values: dict[str, str] = field(default_factory=dict)

    def get(self, key: str) -> str | None:
        return self.values.get(key)

    def set(self, key: str, value: str) -> None:
        self.values[key] = value

    def clear(self) -> None:
        self.values.clear()
