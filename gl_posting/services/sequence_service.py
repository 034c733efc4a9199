"""
Sequence generator.

Mints strictly increasing values per named counter. The increment
is a single UPDATE ... SET value = value + 1 executed in the
caller's transaction, so the row lock it takes serializes concurrent
mints until commit, and a rollback returns the number.
"""

import logging

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from gl_posting.config import get_settings
from gl_posting.models.sequence_counter import SequenceCounter

logger = logging.getLogger(__name__)


class SequenceService:

    def __init__(self, db: Session):
        self.db = db
        self.settings = get_settings()

    def next_value(self, name: str) -> int:
        """
        Atomically increment the counter and return the new value.

        The first mint for a name creates the counter row at 1. If two
        transactions create the same row at once, the loser fails on
        the primary key at flush and its unit of work reports a
        ConflictError.
        """
        result = self.db.execute(
            update(SequenceCounter)
            .where(SequenceCounter.name == name)
            .values(value=SequenceCounter.value + 1)
            .execution_options(synchronize_session=False)
        )

        if result.rowcount == 0:
            self.db.add(SequenceCounter(name=name, value=1))
            self.db.flush()
            return 1

        return self.db.execute(
            select(SequenceCounter.value).where(SequenceCounter.name == name)
        ).scalar_one()

    def next_voucher_no(self) -> str:
        """Mint the next voucher number, e.g. FVCHR_000042."""
        value = self.next_value(self.settings.VOUCHER_COUNTER_NAME)
        width = self.settings.VOUCHER_PAD_WIDTH
        voucher_no = f"{self.settings.VOUCHER_PREFIX}_{value:0{width}d}"
        logger.debug("Minted voucher number %s", voucher_no)
        return voucher_no
