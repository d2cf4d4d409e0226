"""Shared error types for the protocol layer."""


class ProtocolError(Exception):
    """Base error for all protocol-layer failures."""


class InvalidToolError(ProtocolError):
    """A tool definition cannot be registered."""

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        super().__init__("Invalid tool" + (f": {detail}" if detail else ""))


class ToolNotFoundError(ProtocolError):
    """Requested tool does not exist in the registry."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Tool not found: {name}")


class ToolExecutionError(ProtocolError):
    """A tool handler raised while executing."""

    def __init__(self, name: str, detail: str = "") -> None:
        self.name = name
        self.detail = detail
        super().__init__(f"Tool execution failed: {name}" + (f" - {detail}" if detail else ""))


class InvalidParamsError(ProtocolError):
    """Tool arguments are present but unusable."""


class MissingParameterError(InvalidParamsError):
    """A required tool argument was not supplied."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Required parameter '{key}' is missing")
