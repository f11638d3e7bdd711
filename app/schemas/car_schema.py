# app/schemas/car_schema.py

from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field, condecimal


NonNegativeDecimal = condecimal(ge=0)


class CarIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    details: str = Field(..., min_length=1)
    price: NonNegativeDecimal = Field(...)


class CarOut(BaseModel):
    id: int
    name: Optional[str]
    details: Optional[str]
    price: Optional[Decimal]

    model_config = {
        "from_attributes": True
    }


class CarEnvelope(BaseModel):
    car: CarOut


class CarList(BaseModel):
    cars: List[CarOut]


class CarCreatedOut(BaseModel):
    message: str = "Car added successfully"
    id: int
