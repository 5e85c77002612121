import logging
import subprocess
from pydantic import BaseModel, ValidationError
from app.platform.ports.media_tools import MediaProbePort, StreamGeometry
from app.core.errors import ProbeFailedError, ProbeDecodeError, NoStreamsError

log = logging.getLogger("media.ffprobe")

class _Stream(BaseModel):
    # audio/data streams have no geometry
    width: int = 0
    height: int = 0

class _ProbeOutput(BaseModel):
    streams: list[_Stream] = []

class FFprobeInspector(MediaProbePort):
    def __init__(self, binary: str = "ffprobe"):
        self.binary = binary

    def _command(self, path: str) -> list[str]:
        return [self.binary, "-v", "error", "-print_format", "json", "-show_streams", path]

    def probe(self, path: str) -> StreamGeometry:
        cmd = self._command(path)
        log.debug(f"running {' '.join(cmd)}")
        try:
            proc = subprocess.run(cmd, capture_output=True, check=False)
        except OSError as e:
            raise ProbeFailedError(f"Unable to launch {self.binary}: {e}") from e
        if proc.returncode != 0:
            diag = proc.stderr.decode("utf-8", errors="replace").strip()
            raise ProbeFailedError(f"{self.binary} exited with status {proc.returncode}: {diag}")

        try:
            output = _ProbeOutput.model_validate_json(proc.stdout)
        except ValidationError as e:
            raise ProbeDecodeError(f"Unable to decode {self.binary} output: {e.errors()[0]['msg']}") from e

        if not output.streams:
            raise NoStreamsError("No streams found for video")

        # Only the first stream counts, whatever comes after it.
        first = output.streams[0]
        return StreamGeometry(width=first.width, height=first.height)
