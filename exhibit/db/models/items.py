from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from .base import Base, now_utc


class Item(Base):
    __tablename__ = 'item'
    id = Column(Integer, primary_key=True, autoincrement=True)
    owner_id = Column(Integer, ForeignKey('user.id', ondelete='SET NULL'), nullable=True, index=True)
    resource_class_id = Column(Integer, ForeignKey('resource_class.id', ondelete='SET NULL'), nullable=True, index=True)
    title = Column(String(255), nullable=False)
    is_public = Column(Boolean, nullable=False, default=True)
    created = Column(DateTime(timezone=True), nullable=False, default=now_utc)
    modified = Column(DateTime(timezone=True), nullable=True, onupdate=now_utc)

    owner = relationship("User", back_populates="items")
    resource_class = relationship("ResourceClass")
