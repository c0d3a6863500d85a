from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict


class EntryKind(str, Enum):
    FILE = "File"
    DIRECTORY = "Directory"
    UNKNOWN = "Unknown"


class DirectoryEntry(BaseModel):
    """Snapshot of one directory entry, taken when the directory was listed."""
    model_config = ConfigDict(frozen=True)

    name: str
    kind: EntryKind
    path: str
    created_at: datetime
    modified_at: datetime
    size: int

    @property
    def size_kb(self) -> int:
        return self.size // 1024

    @property
    def size_mb(self) -> int:
        return self.size_kb // 1024

    @property
    def is_file(self) -> bool:
        return self.kind == EntryKind.FILE

    @property
    def is_dir(self) -> bool:
        return self.kind == EntryKind.DIRECTORY

    def __repr__(self) -> str:
        return f"DirectoryEntry(name='{self.name}', kind={self.kind.value}, size={self.size})"
