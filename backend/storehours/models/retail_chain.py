from sqlalchemy import Column, Integer, Text
from sqlalchemy.orm import relationship
from storehours.database import Base


class RetailChain(Base):
    __tablename__ = "retail_chain"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(Text, nullable=False, index=True)  # 'Konzum', 'Kaufland', 'Lidl'

    # Relationships
    locations = relationship("Location", back_populates="retail_chain")
