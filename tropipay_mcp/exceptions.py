"""
Errors raised inside the TropiPay MCP server.

None of these reach the MCP host as protocol errors: tool, resource and
prompt handlers turn them into text responses.
"""

from typing import Any, List, Optional, Tuple


class TropiPayError(Exception):
    """Base class for all server errors"""


class ConfigurationError(TropiPayError):
    """Credentials or settings required to reach the API are missing"""


class MissingFieldsError(TropiPayError):
    """One or more required tool arguments are absent or blank"""

    def __init__(self, missing: List[Tuple[str, str]]):
        self.missing = missing
        names = ", ".join(field for field, _ in missing)
        super().__init__(f"Missing required fields: {names}")


class InvalidFieldError(TropiPayError):
    """A tool argument is present but cannot be used"""

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(f"{field}: {message}")


class TropiPayAPIError(TropiPayError):
    """The API call failed, either at transport level or with an error payload"""

    def __init__(self, message: str, status_code: Optional[int] = None, payload: Any = None):
        self.status_code = status_code
        self.payload = payload
        super().__init__(message)
