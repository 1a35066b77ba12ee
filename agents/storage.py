"""blob storage

named text blobs for persisted models. the serializer only sees this
interface, so callers choose the medium.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional, Union


class BlobStore(ABC):
    """read and write named text blobs."""

    @abstractmethod
    def read(self, name: str) -> Optional[str]:
        """return the blob stored under ``name`` or None if absent."""

    @abstractmethod
    def write(self, name: str, text: str) -> None:
        """store ``text`` under ``name``, replacing any previous blob."""


class MemoryBlobStore(BlobStore):
    """in-process store, mostly for tests."""

    def __init__(self) -> None:
        self.blobs: Dict[str, str] = {}

    def read(self, name: str) -> Optional[str]:
        return self.blobs.get(name)

    def write(self, name: str, text: str) -> None:
        self.blobs[name] = text


class FileBlobStore(BlobStore):
    """one ``<name>.json`` file per blob inside ``directory``."""

    def __init__(self, directory: Union[str, Path]) -> None:
        self.directory = Path(directory)

    def path(self, name: str) -> Path:
        return self.directory / f"{name}.json"

    def read(self, name: str) -> Optional[str]:
        path = self.path(name)
        if not path.exists():
            return None

        try:
            return path.read_text(encoding="utf-8")
        except OSError as e:
            raise RuntimeError(f"Failed to read {path}: {e}") from e

    def write(self, name: str, text: str) -> None:
        path = self.path(name)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            tmp = path.with_suffix(".json.tmp")
            tmp.write_text(text, encoding="utf-8")
            tmp.replace(path)
        except OSError as e:
            raise RuntimeError(f"Failed to write {path}: {e}") from e
