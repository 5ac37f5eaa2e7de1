"""SQLAlchemy ORM model for the calculator_settings table."""

from sqlalchemy import ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin


class CalculatorSettingsModel(Base, TimestampMixin):
    """ORM model for calculator_settings table.

    One row per user; ``user_id`` is the upsert conflict target.
    """

    __tablename__ = "calculator_settings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    syringe_size: Mapped[str] = mapped_column(String(16), nullable=False)
    peptide_amount: Mapped[float] = mapped_column(
        Numeric(12, 4, asdecimal=False), nullable=False
    )
    water_amount: Mapped[float] = mapped_column(
        Numeric(12, 4, asdecimal=False), nullable=False
    )
    desired_dose: Mapped[float] = mapped_column(
        Numeric(12, 4, asdecimal=False), nullable=False
    )
    dose_unit: Mapped[str] = mapped_column(String(8), nullable=False)

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<CalculatorSettingsModel(id={self.id}, user_id={self.user_id})>"
