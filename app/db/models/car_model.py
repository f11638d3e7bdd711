from sqlalchemy import Column, Integer, String, Text, Numeric
from sqlalchemy.orm import relationship
from app.db.base import Base


class Car(Base):
    __tablename__ = "cars"

    id = Column(Integer, primary_key=True)
    name = Column(String(100))
    details = Column(Text)
    price = Column(Numeric)

    bookings = relationship("Booking", back_populates="car")

    def __repr__(self):
        return f"<Car(name={self.name}, price={self.price})>"
