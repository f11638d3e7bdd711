from datetime import datetime
from pydantic import BaseModel, Field


class Token(BaseModel):
    token: str


class TokenClaims(BaseModel):
    user_id: int
    email: str
    issued_at: datetime
    expires_at: datetime


class UserCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=1)


class UserLogin(BaseModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class RegisteredOut(BaseModel):
    message: str = "User registered successfully"
    id: int
