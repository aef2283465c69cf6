from sqlalchemy import Column, Integer, ForeignKey, Float, DateTime
from sqlalchemy.orm import relationship
from geomonitor.db.base import Base

class ActivityHistory(Base):
    __tablename__ = "activity_histories"

    id = Column(Integer, primary_key=True, index=True)
    access_point_id = Column(Integer, ForeignKey("access_points.id", ondelete="CASCADE"), nullable=False, index=True)
    status = Column(Float, nullable=False, comment="Доля успешных проверок за интервал (0..1)")
    start_time = Column(DateTime(timezone=True), nullable=False)
    last_time = Column(DateTime(timezone=True), nullable=False)

    access_point = relationship("AccessPoint", back_populates="activity_histories")
