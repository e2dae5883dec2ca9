from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from .database import Base


class Supplier(Base):
    __tablename__ = "suppliers"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False, index=True)
    # Required by the reorder workflow; alerts surface it as supplier.contact_email.
    contact_email = Column(String, nullable=False)
    phone = Column(String, nullable=True)

    products = relationship("Product", back_populates="supplier")

    @property
    def to_schema(self):
        return {
            "name": self.name,
            "contact_email": self.contact_email,
        }
