import logging

from fastapi import APIRouter
from pydantic import BaseModel

from clubmanager.auth.jwt_handler import refresh_tokens

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])


class RefreshTokenRequest(BaseModel):
    refresh_token: str


class TokensResponse(BaseModel):
    access_token: str
    refresh_token: str


@router.post("/refresh-token", response_model=TokensResponse)
async def refresh_token(refresh_token_request: RefreshTokenRequest):
    """
    Exchange a valid refresh token for a new token pair.
    Tokens themselves are issued by the club's identity provider.
    """
    access_token, new_refresh_token = refresh_tokens(refresh_token_request.refresh_token)
    return {"access_token": access_token, "refresh_token": new_refresh_token}
