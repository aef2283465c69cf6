from sqlalchemy import Column, Integer, ForeignKey, Boolean, DateTime, func
from sqlalchemy.orm import relationship
from geomonitor.db.base import Base

class Activity(Base):
    __tablename__ = "activities"

    id = Column(Integer, primary_key=True, index=True)
    access_point_id = Column(Integer, ForeignKey("access_points.id", ondelete="CASCADE"), nullable=False, index=True)
    status = Column(Boolean, nullable=False, comment="Результат проверки доступности")
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    access_point = relationship("AccessPoint", back_populates="activities")
