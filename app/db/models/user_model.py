from sqlalchemy import Column, Integer, String, Text
from sqlalchemy.orm import relationship
from app.db.base import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    name = Column(String(100))
    email = Column(String(100), unique=True)
    # legacy column name kept for existing databases
    password_hash = Column("password", Text)

    bookings = relationship("Booking", back_populates="user")
