from fastapi import Depends, Request
from asyncpg import Connection

from app.core.exceptions import Unauthenticated
from app.core.security import PasswordHasher, TokenIssuer
from app.db.session import get_db_connection
from app.repositories.booking_repo import BookingRepository
from app.repositories.car_repo import CarRepository
from app.repositories.user_repo import UserRepository
from app.schemas.auth_schema import TokenClaims
from app.services.auth_services import AuthService
from app.services.booking_service import BookingService


def get_current_claims(request: Request) -> TokenClaims:
    """Identity of the caller, as verified by ``AuthMiddleware``.

    No token → 401; a token that failed verification → 403.
    """
    if not getattr(request.state, "token_present", False):
        raise Unauthenticated()
    if request.state.auth_error is not None:
        raise request.state.auth_error
    return request.state.claims


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.hasher


def get_token_issuer(request: Request) -> TokenIssuer:
    return request.app.state.tokens


def get_user_repo(conn: Connection = Depends(get_db_connection)) -> UserRepository:
    return UserRepository(conn)


def get_car_repo(conn: Connection = Depends(get_db_connection)) -> CarRepository:
    return CarRepository(conn)


def get_booking_repo(conn: Connection = Depends(get_db_connection)) -> BookingRepository:
    return BookingRepository(conn)


def get_auth_service(
        user_repo: UserRepository = Depends(get_user_repo),
        hasher: PasswordHasher = Depends(get_password_hasher),
        tokens: TokenIssuer = Depends(get_token_issuer),
) -> AuthService:
    return AuthService(user_repo, hasher, tokens)


def get_booking_service(
        conn: Connection = Depends(get_db_connection),
        booking_repo: BookingRepository = Depends(get_booking_repo),
        car_repo: CarRepository = Depends(get_car_repo),
) -> BookingService:
    return BookingService(conn, booking_repo, car_repo)
