"""
The shared garden: planted-flower records and their persistence.

GardenStore owns the authoritative list of PlantedFlower records for a
session. It is loaded once from a blob backend and the whole list is
written back after every mutation:

    plant  - adds a record (with tall-stem sinking and double-submit guard)
    water  - bumps water_count and stamps last_watered
    remove - deletes a record

Lookups of stale ids are expected (a flower removed from another view)
and come back as None / False rather than raising. A missing or corrupt
blob loads as an empty garden.
"""

import logging
import time
from collections.abc import Callable
from dataclasses import replace

import numpy as np
from pydantic import ValidationError

from flora.config import GardenConfig, PlantedFlower, ShapeParameters
from flora.schema import decode_flowers, encode_flowers
from flora.storage import BlobBackend

logger = logging.getLogger(__name__)

Vec3 = tuple[float, float, float]
Clock = Callable[[], int]


def now_ms() -> int:
    """Wall-clock time in milliseconds since the epoch."""
    return time.time_ns() // 1_000_000


def planting_height(stem_height: float, y: float, config: GardenConfig) -> float:
    """
    Vertical placement for a new flower.

    Stems taller than the threshold are sunk into the ground so tall
    flowers do not tower over the field; others keep the given y.
    """
    if stem_height > config.tall_stem_threshold:
        return -max(0.0, (stem_height - config.tall_stem_threshold) * config.tall_stem_sink)
    return y


def random_field_position(
    rng: np.random.Generator, extent: float = GardenConfig.field_extent
) -> Vec3:
    """Pick a ground position uniformly in [-extent, extent) on x and z."""
    x, z = rng.uniform(-extent, extent, size=2)
    return (float(x), 0.0, float(z))


class GardenStore:
    """
    In-memory garden backed by a blob backend.

    Args:
        backend: Persistence backend holding the serialized garden
        config: Store constants (dedup window, tall-stem sinking)
        clock: Millisecond clock; injectable for tests
    """

    def __init__(
        self,
        backend: BlobBackend,
        config: GardenConfig | None = None,
        clock: Clock = now_ms,
    ):
        self.backend = backend
        self.config = config if config is not None else GardenConfig.default()
        self.clock = clock
        self._flowers: list[PlantedFlower] = []
        self._last_id = 0

    def __len__(self) -> int:
        return len(self._flowers)

    # -------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------

    def load(self) -> None:
        """
        Replace the in-memory garden with the backend contents.

        Missing data, unreadable storage, and corrupt or malformed blobs
        all leave the garden empty. Never raises.
        """
        self._flowers = []
        try:
            blob = self.backend.read_blob()
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Failed to read garden: %s. Starting empty.", e)
            return
        if not blob:
            return

        try:
            flowers = decode_flowers(blob)
        except ValidationError as e:
            logger.warning(
                "Failed to parse garden (%d error(s)): %s. Starting empty.",
                e.error_count(),
                e,
            )
            return

        seen: set[str] = set()
        for flower in flowers:
            if flower.id in seen:
                logger.warning("Dropping duplicate flower id %s", flower.id)
                continue
            seen.add(flower.id)
            self._flowers.append(flower)
        logger.info("Loaded %d flower(s)", len(self._flowers))

    def save(self) -> None:
        """
        Write the entire garden to the backend.

        A failed write is logged and the in-memory garden is kept, so the
        next successful save catches storage up.
        """
        try:
            self.backend.write_blob(encode_flowers(self._flowers))
        except OSError as e:
            logger.error("Failed to save garden: %s", e)

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------

    def get_all(self) -> list[PlantedFlower]:
        """Snapshot of every flower, in planting order."""
        return list(self._flowers)

    def get_by_user(self, username: str) -> list[PlantedFlower]:
        """Snapshot of one user's flowers, in planting order."""
        return [f for f in self._flowers if f.username == username]

    def get(self, flower_id: str) -> PlantedFlower | None:
        """Look up a flower by id."""
        index = self._index_of(flower_id)
        return None if index is None else self._flowers[index]

    # -------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------

    def plant(
        self, params: ShapeParameters, username: str, position: Vec3
    ) -> PlantedFlower:
        """
        Plant a flower.

        A repeat of a plant by the same user at (almost) the same spot
        within the dedup window is not stored again; the freshly built
        record is still returned so callers cannot tell the difference.

        Args:
            params: Shape of the flower
            username: Owner
            position: Requested (x, y, z); y is overridden for tall stems

        Returns:
            The planted record
        """
        x, y, z = (float(v) for v in position)
        placed = (x, planting_height(params.stem_height, y, self.config), z)
        now = self.clock()
        flower = PlantedFlower.from_shape(
            params,
            id=self._new_id(),
            username=username,
            position=placed,
            planted_at=now,
        )

        if self._is_duplicate(flower, now):
            logger.debug("Ignoring repeated plant by %s at %s", username, placed)
            return flower

        self._flowers.append(flower)
        self.save()
        return flower

    def water(self, flower_id: str) -> PlantedFlower | None:
        """
        Water a flower.

        Returns:
            The updated record, or None if no flower has this id
        """
        index = self._index_of(flower_id)
        if index is None:
            return None

        flower = self._flowers[index]
        watered = replace(
            flower,
            last_watered=max(self.clock(), flower.planted_at),
            water_count=(flower.water_count or 0) + 1,
        )
        self._flowers[index] = watered
        self.save()
        return watered

    def remove(self, flower_id: str) -> bool:
        """
        Remove a flower.

        Returns:
            True if a flower was removed, False if no flower has this id
        """
        index = self._index_of(flower_id)
        if index is None:
            return False

        del self._flowers[index]
        self.save()
        return True

    # -------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------

    def _index_of(self, flower_id: str) -> int | None:
        for i, flower in enumerate(self._flowers):
            if flower.id == flower_id:
                return i
        return None

    def _is_duplicate(self, flower: PlantedFlower, now: int) -> bool:
        tol = self.config.dedup_tolerance
        x, _, z = flower.position
        return any(
            f.username == flower.username
            and abs(f.position[0] - x) < tol
            and abs(f.position[2] - z) < tol
            and now - f.planted_at < self.config.dedup_window_ms
            for f in self._flowers
        )

    def _new_id(self) -> str:
        # Clock time in nanoseconds, bumped past anything already issued or stored
        candidate = max(self.clock() * 1_000_000, self._last_id + 1)
        taken = {f.id for f in self._flowers}
        while str(candidate) in taken:
            candidate += 1
        self._last_id = candidate
        return str(candidate)
