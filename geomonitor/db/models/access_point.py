import ipaddress

from sqlalchemy import Column, Integer, String, ForeignKey, Float, BigInteger, DateTime, Index, func
from sqlalchemy.orm import relationship
from geomonitor.db.base import Base
from geomonitor.db.models.property_set import PropertySet

# Числовой статус для сортировки и отображения на карте
STATUS_UNKNOWN = -1
STATUS_DOWN = 0
STATUS_UP = 1


class AccessPoint(Base):
    __tablename__ = "access_points"
    # Для грубого фильтра по прямоугольнику при кластеризации
    __table_args__ = (Index("ix_access_points_lat_lng", "lat", "lng"),)

    id = Column(Integer, primary_key=True, index=True)
    wisp_id = Column(Integer, ForeignKey("wisps.id"), nullable=True, index=True)
    hostname = Column(String(255), nullable=False, index=True)
    mng_ip = Column(BigInteger, nullable=True, comment="Management IPv4, хранится как целое")
    lat = Column(Float, nullable=False)
    lng = Column(Float, nullable=False)
    address = Column(String(255), nullable=True)
    city = Column(String(255), nullable=True)
    activation_date = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    wisp = relationship("Wisp", back_populates="access_points", lazy="selectin")
    property_set = relationship(
        "PropertySet",
        back_populates="access_point",
        uselist=False,
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    activities = relationship("Activity", back_populates="access_point", cascade="all, delete-orphan")
    activity_histories = relationship("ActivityHistory", back_populates="access_point", cascade="all, delete-orphan")

    @property
    def coords(self) -> tuple[float, float]:
        return self.lat, self.lng

    @property
    def ip(self) -> str | None:
        if self.mng_ip is None:
            return None
        return str(ipaddress.IPv4Address(self.mng_ip))

    @ip.setter
    def ip(self, value: str | None) -> None:
        self.mng_ip = None if value is None else int(ipaddress.IPv4Address(value))

    # ——— Делегирование в PropertySet ———

    def _properties(self):
        # Набор свойств создаётся при первой записи
        if self.property_set is None:
            self.property_set = PropertySet(public=False)
        return self.property_set

    @property
    def reachable(self) -> bool | None:
        return self.property_set.reachable if self.property_set is not None else None

    @property
    def notes(self) -> str | None:
        return self.property_set.notes if self.property_set is not None else None

    @notes.setter
    def notes(self, value: str | None) -> None:
        self._properties().notes = value

    @property
    def site_description(self) -> str | None:
        return self.property_set.site_description if self.property_set is not None else None

    @site_description.setter
    def site_description(self, value: str | None) -> None:
        self._properties().site_description = value

    @property
    def public(self) -> bool | None:
        return self.property_set.public if self.property_set is not None else None

    @public.setter
    def public(self, value: bool) -> None:
        self._properties().public = bool(value)

    # ——— Производные статусы ———

    @property
    def up(self) -> bool:
        return self.reachable is True

    @property
    def down(self) -> bool:
        return self.reachable is False

    @property
    def unknown(self) -> bool:
        return self.reachable is None

    @property
    def known(self) -> bool:
        return not self.unknown

    @property
    def status(self) -> int:
        if self.unknown:
            return STATUS_UNKNOWN
        return STATUS_UP if self.up else STATUS_DOWN

    def __repr__(self) -> str:
        return f"<AccessPoint id={self.id} hostname={self.hostname!r}>"
