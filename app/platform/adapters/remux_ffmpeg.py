import logging
import os
import subprocess
from app.platform.ports.media_tools import RemuxerPort
from app.core.errors import ProcessingError

log = logging.getLogger("media.ffmpeg")

class FFmpegFastStartRemuxer(RemuxerPort):
    """
    Moves the MP4 `moov` atom to the front of the file so players can start
    before the whole file has downloaded. Streams are copied, never re-encoded.

    The output lands next to the input as `<input>.processing`; removing it after a
    successful run is the caller's job.
    """

    suffix = ".processing"

    def __init__(self, binary: str = "ffmpeg"):
        self.binary = binary

    def output_path_for(self, path: str) -> str:
        return path + self.suffix

    def remux(self, path: str) -> str:
        out = self.output_path_for(path)
        try:
            return self._run(path, out)
        except ProcessingError:
            # a failed run may leave a partial file behind
            if os.path.exists(out):
                os.remove(out)
            raise

    def _run(self, path: str, out: str) -> str:
        cmd = [self.binary, "-y", "-i", path, "-c", "copy", "-movflags", "faststart", "-f", "mp4", out]
        log.debug(f"running {' '.join(cmd)}")
        try:
            proc = subprocess.run(cmd, capture_output=True, check=False)
        except OSError as e:
            raise ProcessingError(f"Unable to launch {self.binary}: {e}") from e
        diag = proc.stderr.decode("utf-8", errors="replace").strip()
        if proc.returncode != 0:
            raise ProcessingError(f"error processing video: {diag} (exit status {proc.returncode})")

        try:
            size = os.path.getsize(out)
        except OSError as e:
            raise ProcessingError(f"could not stat processed file: {e}; ffmpeg said: {diag}") from e
        if size == 0:
            raise ProcessingError(f"processed file is empty; ffmpeg said: {diag}")
        return out
