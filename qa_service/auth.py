# qa_service/auth.py

from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import APIRouter, Depends, Request, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from .config import Settings, get_settings
from .database import get_session
from .errors import UnauthorizedError, ValidationError
from .logging_config import get_logger
from .models import User
from .schemas import AuthResponse, Envelope, LoginRequest, UserCreate, UserResponse

logger = get_logger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# auto_error is off so a missing header turns into our own 401 envelope.
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/login", auto_error=False)

auth_router = APIRouter(prefix="/auth", tags=["auth"])


def verify_password(plain_password, hashed_password):
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password):
    return pwd_context.hash(password)


def _settings_for(request: Request) -> Settings:
    return getattr(request.app.state, "settings", None) or get_settings()


async def get_user(session: AsyncSession, user_id: int) -> Optional[User]:
    return await session.get(User, user_id)


async def get_user_by_email(session: AsyncSession, email: str) -> Optional[User]:
    result = await session.execute(select(User).where(User.email == email.lower()))
    return result.scalar_one_or_none()


async def ensure_unique_user(session: AsyncSession, username: str, email: str, exclude_id: Optional[int] = None):
    stmt = select(User).where(or_(User.username == username, User.email == email.lower()))
    if exclude_id is not None:
        stmt = stmt.where(User.id != exclude_id)
    existing = (await session.execute(stmt)).scalars().first()
    if existing is None:
        return
    if existing.username == username:
        raise ValidationError("Username already registered")
    raise ValidationError("Email already registered")


async def create_user(session: AsyncSession, data: UserCreate) -> User:
    await ensure_unique_user(session, data.username, data.email)
    user = User(
        username=data.username,
        email=data.email.lower(),
        hashed_password=get_password_hash(data.password),
    )
    session.add(user)
    await session.commit()
    await session.refresh(user)
    return user


async def authenticate_user(session: AsyncSession, email: str, password: str):
    user = await get_user_by_email(session, email)
    if not user:
        return None
    if not verify_password(password, user.hashed_password):
        return None
    return user


def create_access_token(data: dict, settings: Settings, expires_delta: timedelta | None = None):
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (
        expires_delta if expires_delta else timedelta(minutes=settings.access_token_expire_minutes)
    )
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, settings: Settings) -> int:
    """Return the user id carried by ``token`` or raise UnauthorizedError."""
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
        subject = payload.get("sub")
        if subject is None:
            raise UnauthorizedError("Could not validate credentials")
        return int(subject)
    except (JWTError, ValueError):
        raise UnauthorizedError("Could not validate credentials")


async def get_optional_user(
    request: Request,
    token: Optional[str] = Depends(oauth2_scheme),
    session: AsyncSession = Depends(get_session),
) -> Optional[User]:
    if not token:
        return None
    user_id = decode_access_token(token, _settings_for(request))
    user = await get_user(session, user_id)
    if user is None:
        raise UnauthorizedError("Could not validate credentials")
    return user


async def get_current_user(user: Optional[User] = Depends(get_optional_user)) -> User:
    if user is None:
        raise UnauthorizedError("Not authorized to access this route")
    return user


def _auth_response(request: Request, user: User) -> AuthResponse:
    token = create_access_token({"sub": str(user.id)}, _settings_for(request))
    return AuthResponse(token=token, user=UserResponse.model_validate(user))


@auth_router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(request: Request, payload: UserCreate, session: AsyncSession = Depends(get_session)):
    user = await create_user(session, payload)
    logger.info("Registered user %s (id=%s)", user.username, user.id)
    return _auth_response(request, user)


@auth_router.post("/login", response_model=AuthResponse)
async def login(request: Request, payload: LoginRequest, session: AsyncSession = Depends(get_session)):
    user = await authenticate_user(session, payload.email, payload.password)
    if not user:
        logger.warning("Failed login for %s", payload.email)
        raise UnauthorizedError("Invalid credentials")
    logger.info("User %s logged in", user.username)
    return _auth_response(request, user)


@auth_router.get("/me", response_model=Envelope[UserResponse])
async def me(current_user: User = Depends(get_current_user)):
    return {"success": True, "data": current_user}
