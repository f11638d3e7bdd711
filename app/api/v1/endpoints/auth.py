from fastapi import APIRouter, Depends, status

from app.schemas.auth_schema import UserCreate, UserLogin, Token, RegisteredOut
from app.api.v1.deps import get_auth_service
from app.core.exceptions import translate_store_errors
from app.services.auth_services import AuthService

router = APIRouter(tags=["auth"])


@router.post("/register", response_model=RegisteredOut, status_code=status.HTTP_201_CREATED)
async def register(user_in: UserCreate, auth_svc: AuthService = Depends(get_auth_service)):
    with translate_store_errors("Server error during registration"):
        created = await auth_svc.register_user(user_in.name, user_in.email, user_in.password)
    return RegisteredOut(id=created["id"])


@router.post("/login", response_model=Token)
async def login(credentials: UserLogin, auth_svc: AuthService = Depends(get_auth_service)):
    with translate_store_errors("Server error during login"):
        user = await auth_svc.authenticate(credentials.email, credentials.password)
    return Token(token=auth_svc.create_token_for_user(user))
