from sqlalchemy import Column, Integer, String, DateTime, func
from sqlalchemy.orm import relationship
from geomonitor.db.base import Base

class Wisp(Base):
    __tablename__ = "wisps"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), unique=True, nullable=False)
    # Точка входа owmw (ActiveResource-совместимый REST) для поиска пользователей
    owmw_url = Column(String(255), nullable=True)
    owmw_username = Column(String(255), nullable=True)
    owmw_password = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    access_points = relationship("AccessPoint", back_populates="wisp")
