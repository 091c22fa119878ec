from sqlalchemy import Column, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from .base import Base


class Vocabulary(Base):
    __tablename__ = 'vocabulary'
    id = Column(Integer, primary_key=True, autoincrement=True)
    owner_id = Column(Integer, ForeignKey('user.id', ondelete='SET NULL'), nullable=True, index=True)
    namespace_uri = Column(String(190), nullable=False, unique=True)
    prefix = Column(String(190), nullable=False, unique=True)
    label = Column(String(255), nullable=False)
    comment = Column(Text, nullable=True)

    owner = relationship("User")
    resource_classes = relationship(
        "ResourceClass",
        back_populates="vocabulary",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class ResourceClass(Base):
    __tablename__ = 'resource_class'
    id = Column(Integer, primary_key=True, autoincrement=True)
    owner_id = Column(Integer, ForeignKey('user.id', ondelete='SET NULL'), nullable=True, index=True)
    vocabulary_id = Column(Integer, ForeignKey('vocabulary.id', ondelete='CASCADE'), nullable=False, index=True)
    local_name = Column(String(190), nullable=False)
    label = Column(String(255), nullable=False)
    comment = Column(Text, nullable=True)

    owner = relationship("User")
    vocabulary = relationship("Vocabulary", back_populates="resource_classes")

    __table_args__ = (
        UniqueConstraint('vocabulary_id', 'local_name', name='uq_resource_class_vocabulary_local_name'),
    )

    @property
    def term(self) -> str:
        return f"{self.vocabulary.prefix}:{self.local_name}"
