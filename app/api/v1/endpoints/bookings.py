from fastapi import APIRouter, Depends, status

from app.api.v1.deps import get_current_claims, get_booking_service
from app.core.exceptions import translate_store_errors
from app.schemas.auth_schema import TokenClaims
from app.schemas.booking_schema import (
    BookingIn,
    BookingOut,
    BookingDetailOut,
    BookingList,
    BookingEnvelope,
    BookingCreatedOut,
)
from app.services.booking_service import BookingService

router = APIRouter(prefix="/bookings", tags=["bookings"])


@router.get("", response_model=BookingList)
async def list_my_bookings(
        claims: TokenClaims = Depends(get_current_claims),
        booking_service: BookingService = Depends(get_booking_service),
):
    with translate_store_errors("Error fetching bookings"):
        bookings = await booking_service.list_bookings_for_user(claims.user_id)
    return BookingList(bookings=[BookingOut(**b) for b in bookings])


@router.get("/{booking_id}", response_model=BookingEnvelope)
async def get_my_booking(
        booking_id: int,
        claims: TokenClaims = Depends(get_current_claims),
        booking_service: BookingService = Depends(get_booking_service),
):
    with translate_store_errors("Error fetching booking"):
        booking = await booking_service.get_booking_for_user(claims.user_id, booking_id)
    return BookingEnvelope(booking=BookingDetailOut(**booking))


@router.post("", response_model=BookingCreatedOut, status_code=status.HTTP_201_CREATED)
async def create_booking(
        body: BookingIn,
        claims: TokenClaims = Depends(get_current_claims),
        booking_service: BookingService = Depends(get_booking_service),
):
    with translate_store_errors("Server error during booking"):
        booking = await booking_service.create_booking(
            user_id=claims.user_id,
            car_id=body.car_id,
            travel_date=body.travel_date,
        )
    return BookingCreatedOut(id=booking["id"])
