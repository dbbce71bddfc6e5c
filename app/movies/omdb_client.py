import logging
from typing import Any, Dict, Optional

import httpx

from ..core.exceptions import MovieNotFound, ProviderUnavailable

logger = logging.getLogger(__name__)


class OmdbClient:
    """
    Async wrapper around the OMDb API.

    OMDb answers HTTP 200 with ``{"Response": "False", "Error": ...}`` when a
    title or id is unknown; those answers raise ``MovieNotFound``. Transport
    failures and non-200 answers raise ``ProviderUnavailable``.
    """

    def __init__(self, http: httpx.AsyncClient, api_key: str):
        self.http = http
        self.api_key = api_key

    async def _get(self, params: Dict[str, Any]) -> Dict:
        query = {"apikey": self.api_key}
        query.update({k: v for k, v in params.items() if v is not None})
        try:
            response = await self.http.get("", params=query)
        except httpx.HTTPError as e:
            logger.error(f"OMDb request failed: {e!r}")
            raise ProviderUnavailable("Failed to reach the movie database") from e

        if response.status_code != 200:
            logger.error(f"OMDb answered with status {response.status_code}")
            raise ProviderUnavailable("Failed to fetch movies from OMDb")
        return response.json()

    @staticmethod
    def _found(data: Dict) -> Dict:
        if data.get("Response") != "True":
            raise MovieNotFound(data.get("Error"))
        return data

    async def get_by_id(self, imdb_id: str, plot: str = "short") -> Dict:
        return self._found(await self._get({"i": imdb_id, "plot": plot}))

    async def get_by_title(self, title: str, plot: Optional[str] = None) -> Dict:
        return self._found(await self._get({"t": title, "plot": plot}))

    async def search(
        self,
        query: str,
        type: Optional[str] = None,
        year: Optional[int] = None,
        plot: Optional[str] = None,
        page: int = 1
    ) -> Dict:
        """Search titles; the matches are under the ``Search`` key."""
        return self._found(await self._get({
            "s": query,
            "type": type,
            "y": year,
            "plot": plot,
            "page": page
        }))
