from fastapi import APIRouter, Depends, HTTPException, status

from app.apis.deps import get_authenticator
from app.core.config import settings
from app.core.logging import get_logger
from app.modules.auth import Authenticator
from .schemas import LoginRequest, LoginResponse


router = APIRouter()
logger = get_logger(__name__)


@router.post(
    f"/{settings.app.version}/login",
    response_model=LoginResponse,
    tags=["auth"],
)
async def login(
    request: LoginRequest,
    authenticator: Authenticator = Depends(get_authenticator),
) -> LoginResponse:
    if not request.username.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="username is required"
        )
    username = authenticator.authenticate(request.username, request.password)
    if not username:
        logger.info("Rejected login for %r", request.username)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials"
        )
    return LoginResponse(username=username)
