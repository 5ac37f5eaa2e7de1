"""SQLAlchemy ORM model for the doses table."""

import datetime

from sqlalchemy import Boolean, Date, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin


class DoseModel(Base, TimestampMixin):
    """ORM model for doses table.

    ``date`` is a plain calendar date so no time zone conversion can move a
    dose to the neighbouring day.
    """

    __tablename__ = "doses"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    peptide: Mapped[str] = mapped_column(String(255), nullable=False)
    dose: Mapped[str] = mapped_column(String(64), nullable=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    date: Mapped[datetime.date] = mapped_column(Date, nullable=False)
    group_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    completed: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default="false"
    )

    __table_args__ = (
        Index("ix_doses_user_id_date", "user_id", "date"),
        Index("ix_doses_group_id", "group_id"),
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<DoseModel(id={self.id}, user_id={self.user_id}, date={self.date})>"
