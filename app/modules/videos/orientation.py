import enum
import logging
from app.core.errors import InvalidGeometryError
from app.platform.ports.media_tools import MediaProbePort

log = logging.getLogger("media.inspect")

LANDSCAPE_RATIO = 16 / 9
PORTRAIT_RATIO = 9 / 16
DEFAULT_TOLERANCE = 0.02

class Orientation(str, enum.Enum):
    LANDSCAPE = "landscape"
    PORTRAIT = "portrait"
    OTHER = "other"

def classify(width: int, height: int, tolerance: float = DEFAULT_TOLERANCE) -> Orientation:
    """
    Bucket a frame size by aspect ratio. The tolerance comparison is strict,
    so a ratio exactly `tolerance` away from 16:9 is not landscape.
    """
    if width <= 0 or height <= 0:
        raise InvalidGeometryError(f"Invalid height or width ({width}x{height})")
    ratio = width / height
    if abs(ratio - LANDSCAPE_RATIO) < tolerance:
        return Orientation.LANDSCAPE
    if abs(ratio - PORTRAIT_RATIO) < tolerance:
        return Orientation.PORTRAIT
    return Orientation.OTHER

class MediaInspector:
    def __init__(self, probe: MediaProbePort, tolerance: float = DEFAULT_TOLERANCE):
        self.probe = probe
        self.tolerance = tolerance

    def inspect(self, path: str) -> Orientation:
        geometry = self.probe.probe(path)
        orientation = classify(geometry.width, geometry.height, self.tolerance)
        log.debug(f"{path}: {geometry.width}x{geometry.height} -> {orientation.value}")
        return orientation
