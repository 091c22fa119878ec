from sqlalchemy import Boolean, Column, DateTime, Integer, String
from sqlalchemy.orm import relationship

from .base import Base, now_utc


class User(Base):
    __tablename__ = 'user'
    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(190), nullable=False, unique=True)
    name = Column(String(190), nullable=False)
    role = Column(String(190), nullable=False, default='researcher')
    password_hash = Column(String(255), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created = Column(DateTime(timezone=True), nullable=False, default=now_utc)
    modified = Column(DateTime(timezone=True), nullable=True, onupdate=now_utc)

    items = relationship("Item", back_populates="owner", passive_deletes=True)
    jobs = relationship("Job", back_populates="owner", passive_deletes=True)
