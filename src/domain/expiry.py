"""
Expiry sweep - Moves stale paused registrations to EXPIRED.

run() is the schedulable entry point. It is plain synchronous code so it
can be called directly; the daily trigger lives in the scheduler adapter.
"""

import logging
from dataclasses import dataclass
from datetime import timedelta

from .customer import RequestStatus
from .ports import Clock, CustomerRepository

logger = logging.getLogger(__name__)

EXPIRED_DAYS = 7


@dataclass
class ExpirySweeper:
    """Expires registrations paused for longer than expiry_days."""

    repository: CustomerRepository
    clock: Clock
    expiry_days: int = EXPIRED_DAYS

    def run(self) -> None:
        """
        Expire every PAUSED registration with paused_at before now - expiry_days.

        paused_at is kept on expired records. Each record is expired on its
        own; a failed write is logged and the remaining records still expire.
        A registration resumed or paused again after it was read keeps the
        newer state.
        """
        logger.info("Expire paused account registrations")
        cutoff = self.clock.now() - timedelta(days=self.expiry_days)
        stale = self.repository.find_by_status_and_paused_before(RequestStatus.PAUSED, cutoff)

        expired = failed = 0
        for customer in stale:
            try:
                changed = self.repository.expire_paused_before(customer, cutoff)
            except Exception:
                failed += 1
                logger.exception("Failed to expire registration %s", customer.request_id)
                continue
            if changed:
                customer.expire()
                expired += 1
            else:
                logger.info("Registration %s changed since it was read, left as is", customer.request_id)

        logger.info("Expired %d paused requests (%d failed)", expired, failed)
