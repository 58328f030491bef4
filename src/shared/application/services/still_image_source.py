"""
Still image source.

Turns an image file into a displayable reference (a data URI) that is
stored on a scene as an opaque string.
"""
import base64
import mimetypes
from pathlib import Path
from typing import Union

from src.utils.message import Log


class StillImageSource:
    """Reads image files and encodes them as data URIs."""

    MAX_BYTES = 5 * 1024 * 1024

    def __init__(self, max_bytes: int = MAX_BYTES):
        self.max_bytes = max_bytes

    def to_data_uri(self, path: Union[str, Path]) -> str:
        """
        Encode an image file as a data URI.

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the file is not an image or is too large
        """
        path = Path(path)
        if not path.is_file():
            raise FileNotFoundError(f"Image file not found: {path}")

        mime_type, _ = mimetypes.guess_type(path.name)
        if not mime_type or not mime_type.startswith("image/"):
            raise ValueError(f"Not an image file: {path.name}")

        data = path.read_bytes()
        if len(data) > self.max_bytes:
            raise ValueError(f"Image {path.name} is {len(data)} bytes, limit is {self.max_bytes}")

        encoded = base64.b64encode(data).decode("ascii")
        Log.debug(f"StillImageSource: Encoded {path.name} ({len(data)} bytes, {mime_type})")
        return f"data:{mime_type};base64,{encoded}"
