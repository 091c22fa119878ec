from sqlalchemy import JSON, Column, DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.orm import relationship

from .base import Base, now_utc

STATUS_STARTING = 'starting'
STATUS_IN_PROGRESS = 'in_progress'
STATUS_COMPLETED = 'completed'
STATUS_STOPPED = 'stopped'
STATUS_ERROR = 'error'

JOB_STATUSES = (
    STATUS_STARTING,
    STATUS_IN_PROGRESS,
    STATUS_COMPLETED,
    STATUS_STOPPED,
    STATUS_ERROR,
)


class Job(Base):
    __tablename__ = 'job'
    id = Column(Integer, primary_key=True, autoincrement=True)
    owner_id = Column(
        Integer,
        ForeignKey('user.id', ondelete='SET NULL', name='FK_FBD8E0F87E3C61F9'),
        nullable=True,
    )
    pid = Column(String(255), nullable=True)
    status = Column(String(255), nullable=True)
    job_class = Column('class', String(255), nullable=False)
    args = Column(JSON, nullable=True)
    started = Column(DateTime, nullable=False, default=now_utc)
    stopped = Column(DateTime, nullable=True)

    owner = relationship("User", back_populates="jobs")

    __table_args__ = (
        Index('IDX_FBD8E0F87E3C61F9', 'owner_id'),
    )
