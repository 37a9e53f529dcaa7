import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from skillswap import models
from skillswap.crud import user as user_crud
from skillswap.database import get_db
from skillswap.schemas import AuthResponse, LoginRequest, RegisterRequest, UserResponse, UserWithSkills
from skillswap.utils.security import authenticate_user, create_user_token, get_current_user, get_password_hash

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


def _auth_response(user: models.User) -> AuthResponse:
    return AuthResponse(
        user=UserResponse.model_validate(user),
        token=create_user_token(user),
        token_type="bearer",
    )


# ===== REGISTER ENDPOINT =====

@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(user_data: RegisterRequest, db: Session = Depends(get_db)):
    """Register a new user and return a bearer token"""
    normalized_email = user_data.email.strip().lower()

    if user_crud.get_user_by_email(db, normalized_email):
        raise HTTPException(status_code=400, detail="Email already registered")

    try:
        new_user = user_crud.create_user(
            db,
            email=normalized_email,
            password_hash=get_password_hash(user_data.password),
            first_name=user_data.first_name,
            last_name=user_data.last_name,
            bio=user_data.bio,
            location=user_data.location,
        )
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(new_user)
    logger.info("Registered user_id=%s", new_user.id)
    return _auth_response(new_user)


# ===== LOGIN ENDPOINT =====

@router.post("/login", response_model=AuthResponse)
def login(credentials: LoginRequest, db: Session = Depends(get_db)):
    """Verify credentials and return access token"""
    user = authenticate_user(db, credentials.email, credentials.password)

    if not user:
        logger.warning("Failed login for %s", credentials.email)
        raise HTTPException(status_code=401, detail="Invalid email or password")

    user_crud.touch_last_active(db, user)
    db.commit()
    db.refresh(user)
    return _auth_response(user)


# ===== CURRENT USER =====

@router.get("/user", response_model=UserWithSkills)
def get_auth_user(
    current_user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return user_crud.get_user_with_skills(db, current_user.id)
