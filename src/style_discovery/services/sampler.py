"""Sampling of library images into a discovery session."""

import random
from collections.abc import Iterable
from dataclasses import dataclass, field

from style_discovery.domain.models import LibraryImage


@dataclass
class Sampler:
    """Draws a bounded, order-randomized subset of active images.

    The random source is injected so sessions can be reproduced in tests.
    Every call shuffles afresh; nothing is cached between sessions.
    """

    rng: random.Random = field(default_factory=random.Random)

    @staticmethod
    def eligible(pool: Iterable[LibraryImage]) -> list[LibraryImage]:
        """Return images that are not explicitly deactivated, one per id."""
        seen: set[str] = set()
        active = []
        for image in pool:
            if image.is_active is False or image.id in seen:
                continue
            seen.add(image.id)
            active.append(image)
        return active

    def sample(
        self, pool: Iterable[LibraryImage], target_size: int
    ) -> list[LibraryImage]:
        """Return up to ``target_size`` distinct active images in random order."""
        candidates = self.eligible(pool)
        if target_size <= 0:
            return []
        self.rng.shuffle(candidates)
        return candidates[:target_size]
