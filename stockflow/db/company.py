from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from .database import Base


class Company(Base):
    __tablename__ = "companies"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)

    warehouses = relationship("Warehouse", back_populates="company", cascade="all, delete-orphan")
