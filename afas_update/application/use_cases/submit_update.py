from __future__ import annotations

from typing import TYPE_CHECKING

from ...constants import OutputFormats
from ...exceptions import TransportError

if TYPE_CHECKING:
    from ..ports.services import LoggerPort, TransportPort
    from ..update_object import UpdateObject

UPDATE_FUNCTION = "update"


class SubmitUpdateUseCase:
    """Render an :class:`UpdateObject` and hand the payload to a transport.

    Rendering validates the whole tree first, so an :class:`OutputError` is
    raised before the transport is called.
    """

    def __init__(self, transport: TransportPort, logger: LoggerPort) -> None:
        super().__init__()
        self._transport = transport
        self.logger = logger

    def execute(
        self,
        update_object: UpdateObject,
        fmt: str = OutputFormats.JSON,
        **options: object,
    ) -> str:
        body = update_object.output(fmt, **options)  # type: ignore[arg-type]
        self.logger.verbose(
            f"Submitting {len(update_object)} '{update_object.type}' element(s) "
            f"as {fmt.upper()}"
        )
        try:
            response = self._transport.call(
                UPDATE_FUNCTION, update_object.type, {}, body
            )
        except TransportError as e:
            self.logger.error(f"Update of '{update_object.type}' failed: {e}")
            raise
        self.logger.success(f"Updated '{update_object.type}'")
        return response
