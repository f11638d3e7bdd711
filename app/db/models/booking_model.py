from sqlalchemy import Column, Integer, Date, ForeignKey
from sqlalchemy.orm import relationship
from app.db.base import Base


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True)
    # no ON DELETE action: a referenced user or car cannot be removed
    user_id = Column(Integer, ForeignKey("users.id"))
    car_id = Column(Integer, ForeignKey("cars.id"))
    travel_date = Column(Date)

    user = relationship("User", back_populates="bookings")
    car = relationship("Car", back_populates="bookings")
