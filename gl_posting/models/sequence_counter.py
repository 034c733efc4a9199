"""
Named sequence counters.

One row per counter. The row is only ever changed by an in-database
increment (see SequenceService), never by read-then-write.
"""

from sqlalchemy import String, BigInteger
from sqlalchemy.orm import Mapped, mapped_column

from gl_posting.models.base import Base


class SequenceCounter(Base):
    __tablename__ = "sequence_counters"

    name: Mapped[str] = mapped_column(String(60), primary_key=True)
    value: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)

    def __repr__(self) -> str:
        return f"<SequenceCounter {self.name}={self.value}>"
