from dataclasses import dataclass
from typing import Protocol, runtime_checkable

@dataclass(frozen=True)
class StreamGeometry:
    width: int
    height: int

@runtime_checkable
class MediaProbePort(Protocol):
    """Reads the geometry of the first stream in a local media file."""
    def probe(self, path: str) -> StreamGeometry: ...

@runtime_checkable
class RemuxerPort(Protocol):
    """Rewrites a local MP4 for progressive playback and returns the new file's path."""
    def remux(self, path: str) -> str: ...
