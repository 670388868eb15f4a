# Wire schema for the persisted garden blob.
# The blob is a JSON array of records using the web client's camelCase keys.

import json

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from flora.config import PlantedFlower

#
# Schemata
#


class PlantedFlowerSchema(BaseModel):
    """One planted flower as stored in the garden blob."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(description="Unique record id")
    username: str = Field(description="Owner of the flower")
    petal_count: int = Field(alias="petalCount", description="Number of petals")
    petal_length: float = Field(alias="petalLength", description="Base petal length")
    petal_width: float = Field(alias="petalWidth", description="Base petal width")
    stem_height: float = Field(alias="stemHeight", description="Stem height")
    petal_color: str = Field(alias="petalColor", description="Petal color (#RRGGBB)")
    center_color: str = Field(alias="centerColor", description="Center color (#RRGGBB)")
    stem_color: str = Field(alias="stemColor", description="Stem color (#RRGGBB)")
    seed: float = Field(description="Shape and wind seed")
    position: tuple[float, float, float] = Field(description="Field position [x, y, z]")
    planted_at: int = Field(alias="plantedAt", description="Planting time (ms since epoch)")
    last_watered: int | None = Field(
        default=None, alias="lastWatered", description="Last watering time (ms since epoch)"
    )
    water_count: int = Field(
        default=0, ge=0, alias="waterCount", description="Times watered"
    )


GardenBlob = TypeAdapter(list[PlantedFlowerSchema])


#
# Conversion
#


def schema_to_flower(s: PlantedFlowerSchema) -> PlantedFlower:
    """Convert a validated schema record to a PlantedFlower."""
    return PlantedFlower(
        id=s.id,
        username=s.username,
        petal_count=s.petal_count,
        petal_length=s.petal_length,
        petal_width=s.petal_width,
        stem_height=s.stem_height,
        petal_color=s.petal_color,
        center_color=s.center_color,
        stem_color=s.stem_color,
        seed=s.seed,
        position=s.position,
        planted_at=s.planted_at,
        last_watered=s.last_watered,
        water_count=s.water_count,
    )


def flower_to_dict(flower: PlantedFlower) -> dict:
    """Convert a PlantedFlower to its wire dict (lastWatered omitted when unset)."""
    schema = PlantedFlowerSchema.model_validate(vars(flower))
    return schema.model_dump(by_alias=True, exclude_none=True)


def decode_flowers(blob: str) -> list[PlantedFlower]:
    """
    Parse a garden blob.

    Raises:
        pydantic.ValidationError: If the blob is not JSON, not an array,
            or any record is malformed
    """
    return [schema_to_flower(s) for s in GardenBlob.validate_json(blob)]


def encode_flowers(flowers: list[PlantedFlower]) -> str:
    """Serialize flowers to a garden blob."""
    return json.dumps([flower_to_dict(f) for f in flowers])
