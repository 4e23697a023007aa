from sqlalchemy import Column, Integer, Date, Time, ForeignKey, Index, JSON
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.ext.hybrid import hybrid_property
from sqlalchemy.orm import relationship
from storehours.database import Base

NATIVE_LOCALE = "hr_HR"
ENGLISH_LOCALE = "en_US"


class WorkHour(Base):
    """One day of a location's schedule in one locale."""
    __tablename__ = "work_hours"

    id = Column(Integer, primary_key=True, index=True)
    location_id = Column(Integer, ForeignKey("location.id"), nullable=False)

    # {"locale": "hr_HR", "value": "Ponedjeljak"}
    name = Column(JSON().with_variant(JSONB(), "postgresql"), nullable=False)

    # Null when closed or unknown
    from_hour = Column(Time)
    to_hour = Column(Time)

    # Calendar date of the weekday in the week of the scrape
    date = Column(Date, nullable=False)

    # Relationships
    location = relationship("Location", back_populates="work_hours")

    __table_args__ = (
        Index("ix_work_hours_location_date", "location_id", "date"),
    )

    @hybrid_property
    def locale(self):
        return (self.name or {}).get("locale")

    @locale.expression
    def locale(cls):
        return cls.name["locale"].as_string()

    @property
    def day_name(self):
        return (self.name or {}).get("value")
