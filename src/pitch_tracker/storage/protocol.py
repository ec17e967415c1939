from __future__ import annotations

from typing import Protocol


class SessionStorage(Protocol):
    def get(self, namespace: str, key: str) -> str | None: ...

    def put(self, namespace: str, key: str, value: str) -> None: ...

    def delete(self, namespace: str, key: str) -> None: ...

    def close(self) -> None: ...
