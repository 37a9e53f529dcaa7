from pydantic import BaseModel, EmailStr, Field
from typing import Optional

from .user import UserResponse

# ======================
# AUTH REQUEST SCHEMAS
# ======================

class RegisterRequest(BaseModel):
    email: EmailStr
    # Bcrypt limit is 72 bytes; max_length=72 prevents the "password too long" crash
    password: str = Field(..., min_length=6, max_length=72)
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    location: Optional[str] = Field(None, max_length=150)
    bio: Optional[str] = Field(None, max_length=2000)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


# ======================
# TOKEN SCHEMAS
# ======================

class AuthResponse(BaseModel):
    user: UserResponse
    token: str
    token_type: str = "bearer"


class TokenData(BaseModel):
    email: Optional[str] = None
    is_admin: bool = False
