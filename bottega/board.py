"""Job board: the accepted job, streak, rank, and florin purse."""
from __future__ import annotations

import logging
from dataclasses import dataclass

from bottega.jobs import Job, JobSession
from bottega.types import JobTier, Material

logger = logging.getLogger(__name__)


@dataclass
class JobBoard:
    """Progression state for one player.

    Attributes:
        tier: Current guild rank. Only ever moves up.
        completed: Total jobs completed.
        streak: Jobs completed since the last abandonment.
        florins: Coin balance.
        session: The accepted job, if any.
        offered: Last job produced by ``generate_new_job``.
        streak_bonus: Florins per streak step added to each reward.
        journeyman_threshold: Completions that promote an apprentice.
        master_threshold: Completions that promote a journeyman.
    """

    tier: JobTier = JobTier.APPRENTICE
    completed: int = 0
    streak: int = 0
    florins: int = 0
    session: JobSession | None = None
    offered: Job | None = None
    streak_bonus: int = 2
    journeyman_threshold: int = 5
    master_threshold: int = 15

    def accept(self, job: Job, raw: dict[Material, int]) -> JobSession:
        self.session = JobSession.start(job, raw)
        return self.session

    def abandon(self) -> Job | None:
        """Drop the accepted job. The streak resets even with nothing accepted."""
        job = self.session.job if self.session is not None else None
        self.session = None
        self.streak = 0
        return job

    def reward_for(self, job: Job) -> int:
        """Base reward plus the bonus for the streak so far (before this job)."""
        return job.reward_florins + self.streak * self.streak_bonus

    def complete(self) -> int:
        """Pay out the accepted job and advance progression. Returns florins paid.

        The caller must check ``session.is_complete()`` first.
        """
        if self.session is None:
            raise ValueError("no job accepted")
        job = self.session.job
        reward = self.reward_for(job)
        self.florins += reward
        self.streak += 1
        self.completed += 1
        self.session = None
        logger.info(
            "job %r complete: %d florins (streak %d, total %d)",
            job.title, reward, self.streak, self.completed,
        )
        return reward

    def promote(self) -> JobTier | None:
        """Move up a rank if the completion count allows. Returns the new tier."""
        if self.tier is JobTier.APPRENTICE and self.completed >= self.journeyman_threshold:
            self.tier = JobTier.JOURNEYMAN
        elif self.tier is JobTier.JOURNEYMAN and self.completed >= self.master_threshold:
            self.tier = JobTier.MASTER
        else:
            return None
        logger.info("promoted to %s after %d jobs", self.tier.value, self.completed)
        return self.tier
