from dataclasses import dataclass


@dataclass(frozen=True)
class SourceAsset:
    """One uploaded input file held in memory."""

    name: str
    mime_type: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)
