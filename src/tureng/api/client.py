"""HTTP client for the Tureng dictionary.

Two endpoints are used: the autocomplete service, which answers with a JSON
array of suggestions in rank order, and the dictionary API, which answers
with the full translation document. Both are plain GETs through a shared
``httpx.AsyncClient``; transport and HTTP status failures surface as
:class:`NetworkError`, unparsable bodies as :class:`ResponseFormatError`.
No request is ever retried.
"""

from __future__ import annotations

import json
import logging
from typing import Any
from urllib.parse import quote

import httpx

from tureng.api.types import Lang, TranslationDocument, document_from_dict
from tureng.errors import NetworkError, ResponseFormatError

logger = logging.getLogger(__name__)

AUTOCOMPLETE_URL = "https://ac.tureng.co/"
# The dictionary API rejects TLS connections from this client
DICTIONARY_URL = "http://api.tureng.com/v1/dictionary"

_AUTOCOMPLETE_HEADERS = {
    "Accept-Encoding": "gzip",
    "User-Agent": "okhttp/4.11.0",
}

_DICTIONARY_HEADERS = {
    "Accept": "application/json",
    "Accept-Encoding": "gzip",
    "User-Agent": "Dalvik/1.0.0 (Linux)",
    "Connection": "Keep-Alive",
}


class TurengClient:
    """Async client for autocomplete and translation lookups.

    Use as an async context manager, or call :meth:`aclose` when done::

        async with TurengClient() as client:
            words = await client.autocomplete("ca", Lang.ENTR)
    """

    def __init__(
        self,
        *,
        timeout: float = 10.0,
        autocomplete_url: str = AUTOCOMPLETE_URL,
        dictionary_url: str = DICTIONARY_URL,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._autocomplete_url = autocomplete_url
        self._dictionary_url = dictionary_url.rstrip("/")
        self._http = httpx.AsyncClient(timeout=httpx.Timeout(timeout), transport=transport)

    async def __aenter__(self) -> TurengClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def autocomplete(self, query: str, lang: Lang) -> list[str]:
        """Return suggestions for *query*, best first."""
        body = await self._get(
            self._autocomplete_url,
            params={"t": query, "l": lang.value},
            headers=_AUTOCOMPLETE_HEADERS,
        )
        data = _parse_json(body, self._autocomplete_url)
        if not isinstance(data, list) or not all(isinstance(s, str) for s in data):
            raise ResponseFormatError(
                "autocomplete response is not a list of strings",
                url=self._autocomplete_url,
                body=body,
            )
        return data

    async def translate(self, word: str, lang: Lang) -> TranslationDocument:
        """Return the full translation document for *word*."""
        url = f"{self._dictionary_url}/{lang.value}/{quote(word, safe='')}"
        body = await self._get(url, headers=_DICTIONARY_HEADERS)
        data = _parse_json(body, url)
        if not isinstance(data, dict):
            raise ResponseFormatError("translation response is not an object", url=url, body=body)
        try:
            return document_from_dict(data)
        except (KeyError, TypeError) as exc:
            raise ResponseFormatError(
                f"malformed translation response: {exc}", url=url, body=body
            ) from exc

    async def _get(
        self,
        url: str,
        *,
        headers: dict[str, str],
        params: dict[str, str] | None = None,
    ) -> str:
        try:
            response = await self._http.get(url, params=params, headers=headers)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise NetworkError(f"request to {url} failed: {exc}", url=url) from exc
        logger.debug("GET %s -> %d (%d bytes)", response.url, response.status_code, len(response.content))
        return response.text


def _parse_json(body: str, url: str) -> Any:
    try:
        return json.loads(body)
    except json.JSONDecodeError as exc:
        raise ResponseFormatError(f"invalid JSON from {url}: {exc}", url=url, body=body) from exc
