"""
Persistence backends for the garden.

A backend stores one named blob of text. The garden store only needs
two operations:

    read_blob() -> str | None   (None when nothing has been stored yet)
    write_blob(text) -> None

so the same store runs against an in-memory dict in tests, a JSON file
on disk, or anything else that can hold a string under a key.
"""

import logging
import os
import pathlib
from typing import Protocol

logger = logging.getLogger(__name__)

DEFAULT_KEY = "plantedFlowers"


class BlobBackend(Protocol):
    """Minimal get-blob/set-blob persistence interface."""

    def read_blob(self) -> str | None: ...

    def write_blob(self, text: str) -> None: ...


class MemoryBackend:
    """Backend holding blobs in a dict, keyed like browser local storage."""

    def __init__(self, key: str = DEFAULT_KEY, initial: str | None = None):
        self.key = key
        self.items: dict[str, str] = {}
        if initial is not None:
            self.items[key] = initial

    def read_blob(self) -> str | None:
        return self.items.get(self.key)

    def write_blob(self, text: str) -> None:
        self.items[self.key] = text


class JsonFileBackend:
    """
    Backend storing the blob as a UTF-8 file.

    The key names the file inside `directory`: "plantedFlowers" is stored
    as `<directory>/plantedFlowers.json`.
    """

    def __init__(self, directory: str | pathlib.Path, key: str = DEFAULT_KEY):
        self.directory = pathlib.Path(directory)
        self.key = key

    @property
    def path(self) -> pathlib.Path:
        return self.directory / f"{self.key}.json"

    def read_blob(self) -> str | None:
        if not self.path.exists():
            logger.info("No garden file at %s", self.path)
            return None
        with open(self.path, "r", encoding="utf-8") as f:
            return f.read()

    def write_blob(self, text: str) -> None:
        # Write to a sibling file, then swap it over the target
        self.directory.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            f.write(text)
        os.replace(tmp_path, self.path)
