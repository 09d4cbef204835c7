import codecs
import httpx
from typing import Optional
from gsltctrl.config.logging import get_logger
from gsltctrl.config.settings import DEFAULT_BASE_URL, Settings
from gsltctrl.exceptions import RemoteError, ResponseTextError, TransportError


class WebApiTransport:
    """Signed GET/POST calls against one Steam Web API interface.

    The API key always travels as the ``key`` query parameter and request
    payloads as the ``input_json`` query parameter; the HTTP body stays empty.
    Nothing is retried: every failure surfaces as a typed exception.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self._api_key = api_key
        self.base_url = base_url.rstrip("/")
        self._client = httpx.Client(
            timeout=httpx.Timeout(timeout),
            follow_redirects=True,
            transport=transport,
        )
        self.logger = get_logger("gsltctrl.transport")

    @classmethod
    def from_settings(cls, settings: Settings, transport: Optional[httpx.BaseTransport] = None) -> "WebApiTransport":
        return cls(
            api_key=settings.token,
            base_url=settings.base_url,
            timeout=settings.timeout,
            transport=transport,
        )

    def close(self) -> None:
        if not self._client.is_closed:
            self._client.close()

    def __enter__(self) -> "WebApiTransport":
        return self

    def __exit__(self, *_) -> None:
        self.close()

    def request(self, path: str, method: str = "GET", input_json: Optional[str] = None) -> str:
        """Perform the call and return the response body as text."""
        url = f"{self.base_url}/{path.lstrip('/')}"
        params = {"key": self._api_key}
        if input_json is not None:
            params["input_json"] = input_json

        self.logger.debug("Requesting Web API", method=method.upper(), path=path,
                          has_input_json=input_json is not None)

        try:
            response = self._client.request(method.upper(), url, params=params, content=b"")
        except httpx.DecodingError as e:
            raise ResponseTextError(f"Failed to parse response text: {self._redact(e)}") from e
        except (httpx.RequestError, httpx.InvalidURL) as e:
            raise TransportError(f"Failed to send request: {type(e).__name__}: {self._redact(e)}") from e

        if not response.is_success:
            self.logger.debug("Web API request failed", method=method.upper(), path=path,
                              status_code=response.status_code)
            raise RemoteError(response.status_code, response.headers)

        encoding = response.charset_encoding or "utf-8"
        try:
            if codecs.lookup(encoding).name == "utf-8":
                encoding = "utf-8-sig"
            text = response.content.decode(encoding)
        except (UnicodeDecodeError, LookupError) as e:
            raise ResponseTextError(f"Failed to parse response text: {e}") from e

        self.logger.debug("Web API request completed", path=path,
                          status_code=response.status_code, body_length=len(text))
        return text

    def _redact(self, error: Exception) -> str:
        return str(error).replace(self._api_key, "***")
