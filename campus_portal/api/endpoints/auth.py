from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from campus_portal.core.database import get_db
from campus_portal.core.exceptions import InvalidCredentialsError, MissingFieldsError, NotFoundError
from campus_portal.core.logging_config import logger
from campus_portal.core.rate_limiter import login_rate_limit
from campus_portal.core.security import create_access_token, verify_password
from campus_portal.models.user import User
from campus_portal.modules.auth import Principal, get_current_principal
from campus_portal.schemas.auth import LoginResponse, UserLogin, UserResponse

router = APIRouter()


@router.post("/login", response_model=LoginResponse)
@login_rate_limit()
async def login(
    request: Request,
    credentials: UserLogin,
    db: AsyncSession = Depends(get_db)
):
    """Exchange university ID and password for a 24h bearer token"""
    client_ip = request.client.host if request.client else "unknown"

    missing = [
        name for name, value in (("universityId", credentials.university_id), ("password", credentials.password))
        if not value
    ]
    if missing:
        raise MissingFieldsError(missing, "University ID and password are required")

    result = await db.execute(
        select(User).where(User.university_id == credentials.university_id)
    )
    user = result.scalar_one_or_none()

    if not user or not verify_password(credentials.password, user.hashed_password):
        logger.log_auth_event(
            event="login",
            success=False,
            university_id=credentials.university_id,
            reason="Invalid credentials",
            client_ip=client_ip
        )
        raise InvalidCredentialsError()

    token = create_access_token(data={
        "sub": user.id,
        "university_id": user.university_id,
        "role": user.role.value,
        "full_name": user.full_name,
    })

    logger.log_auth_event(
        event="login",
        success=True,
        university_id=user.university_id,
        user_id=user.id,
        client_ip=client_ip
    )

    return LoginResponse(token=token, user=UserResponse.model_validate(user))


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(
    principal: Principal = Depends(get_current_principal),
    db: AsyncSession = Depends(get_db)
):
    """Get the caller's user record"""
    user = await db.get(User, principal.user_id)
    if user is None:
        # Token outlives the account it was issued for
        raise NotFoundError("User", principal.user_id)
    return user
