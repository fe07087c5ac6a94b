import logging
import random
from typing import Optional

logger = logging.getLogger("scheduling.conflicts")


class ConflictSimulator:
    """
    Decides whether a booking loses a last-instant race for its slot.

    Stands in for contention from other clients while the engine has no shared
    backing store. Swap in NoConflictSimulator wherever results must be deterministic.
    """

    def should_conflict(self, slot_id: str) -> bool:
        raise NotImplementedError


class RandomConflictSimulator(ConflictSimulator):
    def __init__(self, probability: float = 0.05, rng: Optional[random.Random] = None):
        if not 0.0 <= probability <= 1.0:
            raise ValueError("probability must be between 0 and 1")
        self.probability = probability
        self.rng = rng or random.Random()

    def should_conflict(self, slot_id: str) -> bool:
        if self.rng.random() < self.probability:
            logger.info(f"[Conflict] Simulated concurrent claim on {slot_id}")
            return True
        return False


class NoConflictSimulator(ConflictSimulator):
    def should_conflict(self, slot_id: str) -> bool:
        return False
