"""
Flora Garden

A deterministic procedural flower generator and a persisted shared
garden of planted flowers.

Modules:
    config: Shape parameters, records, and configuration constants
    noise: Seeded sine-hash sampling
    geometry: Petal, leaf, and stem layout from shape parameters
    wind: Per-flower wind profile and per-frame sway
    camera: Camera framing for the editor and garden views
    schema: Wire schema for the persisted garden blob
    storage: Blob persistence backends
    garden: Planted-flower store
    droplets: Watering droplet effect
    timeago: Human-readable timestamps
    preview: Matplotlib previews
"""

from flora.camera import CameraFrame, frame_camera
from flora.config import (
    VIEW_GARDEN,
    VIEW_SINGLE,
    CameraConfig,
    GardenConfig,
    PlantedFlower,
    ShapeParameters,
    WindConfig,
)
from flora.droplets import Droplet, DropletState, droplet_frame, make_droplets
from flora.garden import GardenStore, random_field_position
from flora.geometry import (
    CenterGeom,
    FlowerGeometry,
    LeafGeom,
    PetalGeom,
    StemGeom,
    build_flower,
    render,
)
from flora.noise import make_random, seeded_random
from flora.schema import PlantedFlowerSchema, decode_flowers, encode_flowers
from flora.storage import BlobBackend, JsonFileBackend, MemoryBackend
from flora.timeago import format_distance_to_now
from flora.wind import (
    WindFrame,
    WindProfile,
    stack_profiles,
    wind_tick,
    wind_tick_batch,
)

__all__ = [
    # Config
    "CameraConfig",
    "GardenConfig",
    "PlantedFlower",
    "ShapeParameters",
    "VIEW_GARDEN",
    "VIEW_SINGLE",
    "WindConfig",
    # Generator
    "make_random",
    "seeded_random",
    "CenterGeom",
    "FlowerGeometry",
    "LeafGeom",
    "PetalGeom",
    "StemGeom",
    "build_flower",
    "render",
    # Animation
    "WindFrame",
    "WindProfile",
    "stack_profiles",
    "wind_tick",
    "wind_tick_batch",
    "Droplet",
    "DropletState",
    "droplet_frame",
    "make_droplets",
    # Camera
    "CameraFrame",
    "frame_camera",
    # Garden
    "BlobBackend",
    "GardenStore",
    "JsonFileBackend",
    "MemoryBackend",
    "PlantedFlowerSchema",
    "decode_flowers",
    "encode_flowers",
    "random_field_position",
    "format_distance_to_now",
]
