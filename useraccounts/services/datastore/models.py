"""SQLAlchemy models for database integration."""

from datetime import datetime
import uuid

from pytz import UTC
from sqlalchemy import Boolean, Column, DateTime, String
from sqlalchemy.orm import declarative_base

from ... import domain

Base = declarative_base()


def _new_account_id() -> str:
    return uuid.uuid4().hex


def _now() -> datetime:
    return datetime.now(tz=UTC)


class DBAccount(Base):    # type: ignore
    """Persistence for :class:`domain.Account`."""

    __tablename__ = 'accounts'

    account_id = Column(String(32), primary_key=True,
                        default=_new_account_id)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    confirmed = Column(Boolean, nullable=False, default=False)
    created = Column(DateTime(timezone=True), default=_now)

    def to_domain(self) -> domain.Account:
        """Generate a :class:`.domain.Account` from this row."""
        return domain.Account(
            account_id=self.account_id,
            email=self.email,
            password_hash=self.password_hash,
            confirmed=bool(self.confirmed),
            created=self.created
        )
