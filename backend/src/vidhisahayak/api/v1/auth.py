import logging
from datetime import datetime, timedelta
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, status, Request
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session
from passlib.context import CryptContext
from jose import JWTError, jwt

from vidhisahayak.core.database import get_db, require_db
from vidhisahayak.core.config import get_config
from vidhisahayak.core.constants import VERIFICATION_PENDING
from vidhisahayak.core.response_utils import create_success_response, create_error_response, ResponseTimer
from vidhisahayak.core.security import PasswordValidator
from vidhisahayak.models.user import User
from vidhisahayak.models.lawyer import LawyerProfile
from vidhisahayak.schemas import UserCreate, UserResponse, Token, LoginRequest, StandardResponse

config = get_config()
logger = logging.getLogger(__name__)

# Security configuration
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login")

# bcrypt only looks at the first 72 bytes
BCRYPT_MAX_BYTES = 72

router = APIRouter()


def _truncate_for_bcrypt(password: str) -> str:
    encoded = password.encode('utf-8')
    if len(encoded) > BCRYPT_MAX_BYTES:
        return encoded[:BCRYPT_MAX_BYTES].decode('utf-8', errors='ignore')
    return password


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    try:
        return pwd_context.verify(_truncate_for_bcrypt(plain_password), hashed_password)
    except Exception as e:
        logger.error(f"Password verification error: {e}")
        return False


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(_truncate_for_bcrypt(password))


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None):
    """Create a JWT access token."""
    to_encode = data.copy()
    expire = datetime.utcnow() + (expires_delta or timedelta(minutes=config.security.access_token_expire_minutes))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, config.security.secret_key, algorithm=config.security.jwt_algorithm)


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    """Get user by email."""
    return db.query(User).filter(User.email == email.lower()).first()


def _user_from_token(token: str, db: Session) -> Optional[User]:
    try:
        payload = jwt.decode(token, config.security.secret_key, algorithms=[config.security.jwt_algorithm])
    except JWTError:
        return None
    email = payload.get("sub")
    if not email:
        return None
    return get_user_by_email(db, email)


def get_current_user(token: str = Depends(oauth2_scheme), db: Session = Depends(require_db)) -> User:
    """Get current authenticated user."""
    user = _user_from_token(token, db)
    if user is None or not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


def get_token_safe(request: Request) -> Optional[str]:
    """Safely extract token from request headers."""
    try:
        authorization: str = request.headers.get("Authorization")
        if not authorization:
            return None

        scheme, token = authorization.split()
        if scheme.lower() != "bearer":
            return None

        return token
    except (ValueError, AttributeError):
        return None


def get_current_user_optional(request: Request, db: Optional[Session] = Depends(get_db)) -> Optional[User]:
    """The signed-in user, or None for anonymous requests and stateless deployments."""
    token = get_token_safe(request)
    if not token or db is None:
        return None
    user = _user_from_token(token, db)
    if user is not None and not user.is_active:
        return None
    return user


def require_admin_role(current_user: User = Depends(get_current_user)) -> User:
    """Require admin role."""
    if not current_user.is_admin():
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required"
        )
    return current_user


def _user_response(user: User) -> UserResponse:
    return UserResponse(
        id=user.id,
        email=user.email,
        full_name=user.full_name,
        role=user.role,
        preferred_language=user.preferred_language,
        is_active=user.is_active,
        created_at=user.created_at,
        lawyer_verification_status=user.lawyer_profile.verification_status if user.lawyer_profile else None,
    )


@router.post("/register", response_model=StandardResponse, status_code=201)
def register(user: UserCreate, db: Session = Depends(require_db)):
    """Register a citizen account, or a lawyer account whose profile awaits verification."""
    with ResponseTimer() as timer:
        try:
            logger.info(f"Registration attempt - Role: {user.role}")

            password_check = PasswordValidator.validate_password(user.password)
            if not password_check['is_valid']:
                return create_error_response(
                    message="Password requirements not met",
                    status_code=400,
                    errors=password_check['errors'],
                    execution_time=timer.get_execution_time()
                )

            if get_user_by_email(db, user.email):
                return create_error_response(
                    message="Email already registered",
                    status_code=400,
                    execution_time=timer.get_execution_time()
                )

            if user.role == "lawyer" and not user.license_number:
                return create_error_response(
                    message="License number is required for lawyer accounts",
                    status_code=400,
                    execution_time=timer.get_execution_time()
                )

            now = datetime.utcnow().isoformat()
            new_user = User(
                email=user.email.lower(),
                full_name=user.full_name,
                hashed_password=get_password_hash(user.password),
                role=user.role,
                preferred_language=user.preferred_language,
                is_active=True,
                created_at=now,
                updated_at=now,
            )

            if user.role == "lawyer":
                new_user.lawyer_profile = LawyerProfile(
                    full_name=user.full_name,
                    practices=list(user.practices),
                    experience_years=user.experience_years,
                    office_location=user.office_location,
                    fee=user.fee,
                    license_number=user.license_number,
                    education=user.education,
                    practicing_court=user.practicing_court,
                    contact_info=user.contact_info,
                    verification_status=VERIFICATION_PENDING,
                    created_at=now,
                    updated_at=now,
                )

            db.add(new_user)
            db.commit()
            db.refresh(new_user)

            logger.info(f"Registered user {new_user.id} with role {new_user.role}")
            return create_success_response(
                data=_user_response(new_user),
                status_code=201,
                execution_time=timer.get_execution_time()
            )

        except Exception as e:
            logger.error(f"Registration error: {str(e)}")
            db.rollback()
            error_message = "Registration failed"
            if "unique" in str(e).lower() or "duplicate key" in str(e).lower():
                error_message = "Email already registered"

            return create_error_response(
                message=error_message,
                status_code=500,
                execution_time=timer.get_execution_time()
            )


@router.post("/login", response_model=StandardResponse)
def login_for_access_token(login_data: LoginRequest, db: Session = Depends(require_db)):
    """Login with email and password."""
    with ResponseTimer() as timer:
        try:
            user = get_user_by_email(db, login_data.email)
            if not user or not verify_password(login_data.password, user.hashed_password):
                return create_error_response(
                    message="Incorrect email or password",
                    status_code=401,
                    execution_time=timer.get_execution_time()
                )

            if not user.is_active:
                return create_error_response(
                    message="Account is deactivated",
                    status_code=401,
                    execution_time=timer.get_execution_time()
                )

            access_token = create_access_token(data={"sub": user.email, "role": user.role})

            return create_success_response(
                data={
                    **Token(access_token=access_token).model_dump(),
                    "user": _user_response(user),
                },
                status_code=200,
                execution_time=timer.get_execution_time()
            )

        except Exception as e:
            logger.error(f"Login error: {str(e)}")
            return create_error_response(
                message="Login failed",
                status_code=500,
                execution_time=timer.get_execution_time()
            )


@router.get("/me", response_model=StandardResponse)
def get_user_profile(current_user: User = Depends(get_current_user)):
    """Get current user's profile information."""
    with ResponseTimer() as timer:
        return create_success_response(
            data=_user_response(current_user),
            status_code=200,
            execution_time=timer.get_execution_time()
        )
