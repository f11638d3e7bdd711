from datetime import date
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field


class BookingIn(BaseModel):
    # user_id is never accepted from the client; it comes from the token
    car_id: int = Field(..., gt=0)
    travel_date: date


class BookingOut(BaseModel):
    id: int
    travel_date: Optional[date]
    car_name: Optional[str]
    car_details: Optional[str]
    car_price: Optional[Decimal]

    model_config = {
        "from_attributes": True
    }


class BookingDetailOut(BookingOut):
    user_name: Optional[str]
    user_email: Optional[str]


class BookingList(BaseModel):
    bookings: List[BookingOut]


class BookingEnvelope(BaseModel):
    booking: BookingDetailOut


class BookingCreatedOut(BaseModel):
    message: str = "Booking created successfully"
    id: int
