import base64
import secrets

FALLBACK_EXT = ".bin"
ID_BYTES = 32

def media_type_ext(media_type: str) -> str:
    """`video/mp4` -> `.mp4`; anything that isn't exactly `type/subtype` gets `.bin`."""
    parts = media_type.split("/")
    if len(parts) != 2 or not parts[1]:
        return FALLBACK_EXT
    return "." + parts[1]

def new_asset_id() -> str:
    # secrets draws from os.urandom; if the OS has no entropy source we let it blow up.
    raw = secrets.token_bytes(ID_BYTES)
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")

def new_asset_filename(media_type: str) -> str:
    return new_asset_id() + media_type_ext(media_type)
