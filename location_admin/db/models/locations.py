from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Index, CheckConstraint
from sqlalchemy.orm import relationship
from .base import Base, ContentStatus, STATUS_CHECK_SQL, now_utc


class State(Base):
    __tablename__ = 'states'
    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(120), nullable=False)
    abbreviation = Column(String(10), nullable=True)
    order = Column(Integer, nullable=False, default=0)
    status = Column(String(60), nullable=False, default=ContentStatus.PUBLISHED.value)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    cities = relationship("City", back_populates="state", passive_deletes=True)

    __table_args__ = (
        Index('idx_states_name', 'name'),
        CheckConstraint(STATUS_CHECK_SQL, name='ck_states_status'),
    )


class City(Base):
    __tablename__ = 'cities'
    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(120), nullable=False)
    state_id = Column(Integer, ForeignKey('states.id', ondelete='SET NULL'), nullable=True)
    order = Column(Integer, nullable=False, default=0)
    status = Column(String(60), nullable=False, default=ContentStatus.PUBLISHED.value)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    state = relationship("State", back_populates="cities")

    __table_args__ = (
        Index('idx_cities_name', 'name'),
        Index('idx_cities_state_id', 'state_id'),
        Index('idx_cities_status_order_name', 'status', 'order', 'name'),
        CheckConstraint(STATUS_CHECK_SQL, name='ck_cities_status'),
    )

    def __repr__(self):
        return f"<City id={self.id} name={self.name!r}>"
