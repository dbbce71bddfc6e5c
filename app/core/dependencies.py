"""FastAPI providers wiring the services to their collaborators.

Tests replace the leaves (``get_settings``, ``get_db``, ``get_omdb_client``)
through ``app.dependency_overrides``.
"""
from datetime import timedelta
from typing import Optional

import httpx
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ..lists.service import ListStore
from ..lists.sync import ListSyncService
from ..movies.omdb_client import OmdbClient
from ..movies.service import MovieCache
from ..user.service import CredentialStore
from ..user.tokens import SessionIssuer
from .config import Settings, get_settings
from .exceptions import Unauthorized
from .firebase import get_db


async def get_omdb_client(settings: Settings = Depends(get_settings)):
    async with httpx.AsyncClient(
        base_url=settings.OMDB_BASE_URL,
        timeout=settings.OMDB_TIMEOUT_SECONDS
    ) as http:
        yield OmdbClient(http, api_key=settings.OMDB_API_KEY)


def get_session_issuer(settings: Settings = Depends(get_settings)) -> SessionIssuer:
    return SessionIssuer(
        settings.JWT_SECRET,
        algorithm=settings.JWT_ALGORITHM,
        ttl=timedelta(minutes=settings.TOKEN_TTL_MINUTES)
    )


# missing or non-Bearer headers resolve to None
bearer_scheme = HTTPBearer(scheme_name="bearerAuth", bearerFormat="JWT", auto_error=False)


def require_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    issuer: SessionIssuer = Depends(get_session_issuer)
) -> str:
    """Auth gate: the user id from a valid ``Authorization: Bearer`` token."""
    if credentials is None:
        raise Unauthorized()
    return issuer.verify(credentials.credentials)


def get_credential_store(
    db=Depends(get_db),
    settings: Settings = Depends(get_settings)
) -> CredentialStore:
    return CredentialStore(db, rounds=settings.BCRYPT_ROUNDS)


def get_movie_cache(
    db=Depends(get_db),
    omdb: OmdbClient = Depends(get_omdb_client)
) -> MovieCache:
    return MovieCache(db, omdb)


def get_list_store(db=Depends(get_db)) -> ListStore:
    return ListStore(db)


def get_list_sync(
    lists: ListStore = Depends(get_list_store),
    movies: MovieCache = Depends(get_movie_cache)
) -> ListSyncService:
    return ListSyncService(lists, movies)
