from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from alumni.core.database import get_db
from alumni.core.exceptions import (
    DuplicateEmailError,
    InvalidCredentialsError,
    PendingApprovalError,
)
from alumni.core.security import verify_password, get_password_hash, create_access_token
from alumni.core.logging_config import logger, set_user_id
from alumni.models.user import User, UserRole
from alumni.schemas.auth import UserSignup, UserLogin, LoginResponse, LoginUser, MessageResponse
from alumni.utils.validators import validate_graduation_year

SIGNUP_MESSAGE = (
    "Signup successful! Your account is pending admin approval. "
    "You will receive an email when approved."
)

router = APIRouter()


@router.post("/signup", response_model=MessageResponse)
async def signup(
    request: Request,
    user_data: UserSignup,
    db: AsyncSession = Depends(get_db)
):
    """Register a new alumni account; it stays pending until an admin approves it"""
    client_ip = request.client.host if request.client else "unknown"

    result = await db.execute(select(User).where(User.email == user_data.email))
    if result.scalar_one_or_none():
        logger.log_auth_event(
            event="signup",
            success=False,
            user_email=user_data.email,
            reason="Email already registered",
            client_ip=client_ip
        )
        raise DuplicateEmailError(user_data.email)

    validate_graduation_year(user_data.graduation_year)

    user = User(
        email=user_data.email,
        hashed_password=get_password_hash(user_data.password),
        name=user_data.name,
        graduation_year=user_data.graduation_year,
        role=UserRole.ALUMNI,
        is_approved=False,
    )
    db.add(user)
    await db.commit()

    logger.log_auth_event(
        event="signup",
        success=True,
        user_email=user.email,
        client_ip=client_ip
    )

    return MessageResponse(msg=SIGNUP_MESSAGE)


@router.post("/login", response_model=LoginResponse)
async def login(
    request: Request,
    credentials: UserLogin,
    db: AsyncSession = Depends(get_db)
):
    """Exchange email + password for a 7-day session token"""
    client_ip = request.client.host if request.client else "unknown"

    result = await db.execute(select(User).where(User.email == credentials.email))
    user = result.scalar_one_or_none()

    # Password before approval: a wrong password never reveals approval state
    if not user or not verify_password(credentials.password, user.hashed_password):
        logger.log_auth_event(
            event="login",
            success=False,
            user_email=credentials.email,
            reason="Invalid credentials",
            client_ip=client_ip
        )
        raise InvalidCredentialsError()

    if not user.is_approved:
        logger.log_auth_event(
            event="login",
            success=False,
            user_email=credentials.email,
            reason="Pending approval",
            client_ip=client_ip
        )
        raise PendingApprovalError()

    set_user_id(str(user.id))

    token = create_access_token({"sub": str(user.id), "email": user.email})

    logger.log_auth_event(
        event="login",
        success=True,
        user_email=user.email,
        client_ip=client_ip,
        user_role=user.role.value
    )

    return LoginResponse(
        token=token,
        user=LoginUser(id=user.id, email=user.email, name=user.name, role=user.role),
    )
