"""
Agent profile model.
"""

from sqlalchemy import String, Integer, Numeric
from sqlalchemy.orm import Mapped, mapped_column
from realty.database import Base
from decimal import Decimal


class Agent(Base):
    """Public profile of a real-estate agent."""

    __tablename__ = "agents"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    specialization: Mapped[str] = mapped_column(String(255), nullable=False)

    rating: Mapped[Decimal] = mapped_column(
        Numeric(asdecimal=True),
        nullable=False,
        index=True
    )

    properties_sold: Mapped[int] = mapped_column(Integer, nullable=False)
    image_url: Mapped[str] = mapped_column(String(1024), nullable=False)

    def __repr__(self) -> str:
        return f"<Agent(id={self.id}, name={self.name})>"
