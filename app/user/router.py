from fastapi import APIRouter, Depends

from ..core.dependencies import get_credential_store, get_session_issuer
from .models import Credentials, TokenResponse
from .service import CredentialStore
from .tokens import SessionIssuer

router = APIRouter(tags=["user"])

@router.post("/signup", status_code=201)
async def signup(
    credentials: Credentials,
    store: CredentialStore = Depends(get_credential_store)
):
    await store.create(credentials.username, credentials.password)
    return {"status": "success", "message": "User created"}

@router.post("/signin", response_model=TokenResponse)
async def signin(
    credentials: Credentials,
    store: CredentialStore = Depends(get_credential_store),
    issuer: SessionIssuer = Depends(get_session_issuer)
):
    user = await store.authenticate(credentials.username, credentials.password)
    return TokenResponse(token=issuer.issue(user.id))
