from sqlalchemy import BigInteger, Column, String
from sqlalchemy.orm import relationship
from .database import Base


class Organization(Base):
    __tablename__ = "organizations"

    id = Column(BigInteger, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False, unique=True, index=True)

    products = relationship("Product", back_populates="organization", cascade="all, delete-orphan")
