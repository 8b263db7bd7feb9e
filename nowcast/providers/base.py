from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

import requests
from requests import Response

from ..errors import NetworkRequestFailed, ParsingFailed, UrlError


@dataclass
class RequestConfig:
    timeout: float = 10.0


class HttpProvider:
    """Base class that adds timeouts and error mapping for HTTP providers.

    Requests are issued once; there is no retry or backoff.
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        request_config: Optional[RequestConfig] = None,
    ) -> None:
        self.request_config = request_config or RequestConfig()
        self.session = session or requests.Session()
        self._log = logging.getLogger(self.__class__.__name__)

    def build_url(self, base_url: str, params: Mapping[str, Any]) -> str:
        prepared = requests.PreparedRequest()
        try:
            prepared.prepare_url(base_url, dict(params))
        except requests.RequestException as exc:
            self._log.error("Cannot build request URL from %r", base_url, exc_info=exc)
            raise UrlError(f"invalid url: {base_url!r}") from exc
        return prepared.url

    def _handle_response(self, response: Response) -> Response:
        if response.status_code != 200:
            self._log.error("Provider returned %s: %s", response.status_code, response.text[:500])
            raise NetworkRequestFailed(f"HTTP {response.status_code}")
        return response

    def _request(self, method: str, url: str, **kwargs) -> Response:
        try:
            response = self.session.request(
                method,
                url,
                timeout=self.request_config.timeout,
                **kwargs,
            )
        except (requests.exceptions.InvalidURL, requests.exceptions.MissingSchema, requests.exceptions.InvalidSchema) as exc:
            self._log.error("Request URL rejected", exc_info=exc)
            raise UrlError("invalid url") from exc
        except requests.Timeout as exc:
            self._log.error("Request timed out", exc_info=exc)
            raise NetworkRequestFailed("timeout") from exc
        except requests.RequestException as exc:
            self._log.error("Request failed", exc_info=exc)
            raise NetworkRequestFailed("request failed") from exc
        return self._handle_response(response)

    def _json(self, response: Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            self._log.error("Failed to decode JSON", exc_info=exc)
            raise ParsingFailed("invalid json") from exc

    def close(self) -> None:
        self.session.close()


__all__ = ["HttpProvider", "RequestConfig"]
