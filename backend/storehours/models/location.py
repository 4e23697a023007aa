from sqlalchemy import Column, Integer, Text, Boolean, ForeignKey, Index
from sqlalchemy.orm import relationship
from storehours.database import Base


class Location(Base):
    """A physical store of a retail chain."""
    __tablename__ = "location"

    id = Column(Integer, primary_key=True, index=True)

    # Identity: (retail_chain_id, city_id, address) never changes after insert
    retail_chain_id = Column(Integer, ForeignKey("retail_chain.id"), nullable=False, index=True)
    city_id = Column(Integer, ForeignKey("city.id"), nullable=False, index=True)
    address = Column(Text, nullable=False)

    # Overwritten on every sync
    name = Column(Text)
    phone_number = Column(Text)
    description = Column(Text)
    open_this_sunday = Column(Boolean, default=False)

    # Relationships
    retail_chain = relationship("RetailChain", back_populates="locations")
    city = relationship("City", back_populates="locations")
    work_hours = relationship("WorkHour", back_populates="location")

    __table_args__ = (
        Index("ix_location_natural_key", "retail_chain_id", "city_id", "address"),
    )
