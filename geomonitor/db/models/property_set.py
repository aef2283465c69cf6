from sqlalchemy import Column, Integer, ForeignKey, Boolean, Text
from sqlalchemy.orm import relationship
from geomonitor.db.base import Base

class PropertySet(Base):
    __tablename__ = "property_sets"

    id = Column(Integer, primary_key=True, index=True)
    access_point_id = Column(
        Integer,
        ForeignKey("access_points.id", ondelete="CASCADE"),
        unique=True,
        nullable=False
    )
    # None: статус ещё не известен (не было ни одной проверки)
    reachable = Column(Boolean, nullable=True, comment="Доступность AP: true/false/неизвестно")
    public = Column(Boolean, nullable=False, default=False, comment="Показывать в georss")
    notes = Column(Text, nullable=True)
    site_description = Column(Text, nullable=True)

    access_point = relationship("AccessPoint", back_populates="property_set")
