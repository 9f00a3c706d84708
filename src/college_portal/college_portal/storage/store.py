from __future__ import annotations

from typing import Any, Optional, Protocol


class KeyValueStore(Protocol):
    """Opaque key-value persistence.

    Values are JSON-serialisable (lists/dicts/str/numbers). A missing key
    reads as ``None``.
    """

    def get(self, key: str) -> Optional[Any]:
        raise NotImplementedError

    def set(self, key: str, value: Any) -> None:
        raise NotImplementedError

    def remove(self, key: str) -> None:
        raise NotImplementedError
