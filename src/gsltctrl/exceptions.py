from typing import Mapping, Optional


class GsltCtrlError(Exception):
    def __init__(self, message: str, exit_code: int = 1):
        self.message = message
        self.exit_code = exit_code
        super().__init__(self.message)


class ConfigurationError(GsltCtrlError):
    def __init__(self, message: str):
        super().__init__(message, exit_code=1)


class RemoteError(GsltCtrlError):
    """The Web API answered with a non-success status code."""

    def __init__(self, status_code: int, headers: Optional[Mapping[str, str]] = None):
        self.status_code = status_code
        self.headers = dict(headers or {})
        super().__init__(
            f"Request unsuccessful. Error code: {status_code}, headers: {self.headers}",
            exit_code=3,
        )


class DecodeError(GsltCtrlError):
    """A response body could not be parsed into the expected structure."""

    def __init__(self, text: str, error: Exception):
        self.text = text
        self.error = error
        super().__init__(
            f"Failed to parse string {text!r} with error {error}",
            exit_code=4,
        )


class ResponseTextError(GsltCtrlError):
    def __init__(self, message: str):
        super().__init__(message, exit_code=5)


class DomainParseError(GsltCtrlError):
    def __init__(self, message: str):
        super().__init__(message, exit_code=5)


class TransportError(GsltCtrlError):
    def __init__(self, message: str):
        super().__init__(message, exit_code=6)


class EncodeError(GsltCtrlError):
    def __init__(self, message: str):
        super().__init__(message, exit_code=7)
