from collections.abc import Mapping
from typing import Protocol, runtime_checkable


@runtime_checkable
class LoggerPort(Protocol):
    pass

    def info(self, message: str) -> None: ...

    def success(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def debug(self, message: str) -> None: ...

    def verbose(self, message: str) -> None: ...


@runtime_checkable
class TransportPort(Protocol):
    """Delivers a rendered payload to the remote connector endpoint.

    Implementations own authentication, retries and the wire protocol. They
    raise :class:`afas_update.exceptions.TransportError` when the remote side
    cannot be reached or rejects the call.
    """

    def call(
        self,
        connector_type: str,
        function: str,
        arguments: Mapping[str, object],
        body: str | None = None,
    ) -> str: ...
