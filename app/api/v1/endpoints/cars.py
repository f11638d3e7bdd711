from fastapi import APIRouter, Depends, status

from app.api.v1.deps import get_car_repo
from app.core.exceptions import NotFound, translate_store_errors
from app.repositories.car_repo import CarRepository
from app.schemas.car_schema import CarIn, CarOut, CarList, CarEnvelope, CarCreatedOut

router = APIRouter(prefix="/cars", tags=["cars"])


@router.get("", response_model=CarList)
async def list_cars(car_repo: CarRepository = Depends(get_car_repo)):
    with translate_store_errors("Error fetching cars"):
        cars = await car_repo.list_all()
    return CarList(cars=[CarOut(**car) for car in cars])


@router.get("/{car_id}", response_model=CarEnvelope)
async def get_car(car_id: int, car_repo: CarRepository = Depends(get_car_repo)):
    with translate_store_errors("Error fetching car"):
        car = await car_repo.get_by_id(car_id)
    if car is None:
        raise NotFound("Car not found")
    return CarEnvelope(car=CarOut(**car))


@router.post("", response_model=CarCreatedOut, status_code=status.HTTP_201_CREATED)
async def add_car(car_in: CarIn, car_repo: CarRepository = Depends(get_car_repo)):
    with translate_store_errors("Error adding car"):
        car = await car_repo.create(car_in.name, car_in.details, car_in.price)
    return CarCreatedOut(id=car["id"])
