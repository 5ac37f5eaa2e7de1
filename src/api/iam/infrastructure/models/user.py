"""SQLAlchemy ORM model for the users table.

Users are provisioned from Discourse SSO; the table mirrors the
identity provider's id, username and email.
"""

from sqlalchemy import BigInteger, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin


class UserModel(Base, TimestampMixin):
    """ORM model for users table.

    ``external_id`` carries the unique constraint used as the upsert
    conflict target.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    external_id: Mapped[int] = mapped_column(BigInteger, nullable=False, unique=True)
    username: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str | None] = mapped_column(String(320), nullable=True)

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<UserModel(id={self.id}, external_id={self.external_id}, username={self.username})>"
