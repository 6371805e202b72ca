"""DB connection and helpers for the Billed service."""

from collections.abc import Iterator

from sqlalchemy import Column, Date, Integer, String, Text, create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.ext.declarative import declarative_base
from sqlalchemy.orm import Session, sessionmaker

from billed.core.models import Bill

Base = declarative_base()


class BillRecord(Base):
    """A stored expense bill."""

    __tablename__ = "bills"
    id = Column(String, primary_key=True)
    email = Column(String, index=True)
    type = Column(String, nullable=False)
    name = Column(String, nullable=False, default="")
    amount = Column(Integer, nullable=False)
    date = Column(Date, nullable=False)
    vat = Column(Integer, nullable=True)
    pct = Column(Integer, nullable=True)
    commentary = Column(Text, nullable=False, default="")
    file_url = Column(String, nullable=True)
    file_name = Column(String, nullable=True)
    status = Column(String, nullable=False, default="pending")
    created_at = Column(String, nullable=False)

    def to_bill(self) -> Bill:
        """Convert the row to the shared pydantic model."""
        return Bill(
            id=self.id,
            email=self.email,
            type=self.type,
            name=self.name,
            amount=self.amount,
            date=self.date,
            vat=self.vat,
            pct=self.pct,
            commentary=self.commentary,
            file_url=self.file_url,
            file_name=self.file_name,
            status=self.status,
        )


def get_engine(url: str | None = None) -> Engine:
    """Create a SQLAlchemy engine using the configured database URL."""
    from billed.core.settings import get_settings

    url = url or get_settings().database_url
    if url.startswith("sqlite"):
        return create_engine(url, connect_args={"check_same_thread": False})
    return create_engine(url)


SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=get_engine())


def get_db() -> Iterator[Session]:
    """Yield a SQLAlchemy session and close it once the request is done."""
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
