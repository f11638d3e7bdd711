import logging
from starlette.concurrency import run_in_threadpool

from app.repositories.user_repo import UserRepository
from app.core.security import PasswordHasher, TokenIssuer
from app.core.exceptions import InvalidCredential, ValidationError


class AuthService:
    def __init__(self, user_repo: UserRepository, hasher: PasswordHasher, tokens: TokenIssuer):
        self.user_repo = user_repo
        self.hasher = hasher
        self.tokens = tokens

    async def register_user(self, name: str, email: str, password: str) -> dict:
        if not name or not email or not password:
            raise ValidationError("Name, email and password are required")

        # bcrypt is deliberately slow; keep it off the event loop
        hashed_password = await run_in_threadpool(self.hasher.hash, password)
        return await self.user_repo.create(name=name, email=email, password_hash=hashed_password)

    async def authenticate(self, email: str, password: str) -> dict:
        if not email or not password:
            raise ValidationError("Email and password are required")

        user = await self.user_repo.get_by_email(email)
        if not user:
            await run_in_threadpool(self.hasher.dummy_verify)
            logging.info("Login failed: unknown account")
            raise InvalidCredential()
        if not await run_in_threadpool(self.hasher.verify, password, user.get("password_hash")):
            logging.info(f"Login failed for user {user['id']}: bad password")
            raise InvalidCredential()
        return user

    def create_token_for_user(self, user: dict) -> str:
        return self.tokens.issue(user_id=user["id"], email=user["email"])
