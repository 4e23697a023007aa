from sqlalchemy import Column, Integer, Text
from sqlalchemy.orm import relationship
from storehours.database import Base


class City(Base):
    __tablename__ = "city"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(Text, nullable=False, index=True)  # extracted from the location address

    # Relationships
    locations = relationship("Location", back_populates="city")
