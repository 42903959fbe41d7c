class UpdateConnectorError(Exception):
    pass


class SchemaError(UpdateConnectorError, LookupError):
    pass


class InputError(UpdateConnectorError, ValueError):
    pass


class FieldValueError(InputError):
    pass


class OutputError(UpdateConnectorError, ValueError):
    pass


class TransportError(UpdateConnectorError):
    pass


def join_messages(errors: list[str]) -> str:
    return "\n".join(errors)
