"""CDN image formats."""

from __future__ import annotations

import enum

CDN_URL = "https://cdn.discordapp.com"


class ImageType(str, enum.Enum):
    """File extension requested from the CDN.

    ``AUTO`` picks ``.gif`` for animated hashes (``a_`` prefix) and ``.png``
    otherwise.
    """

    AUTO = ""
    JPEG = ".jpeg"
    PNG = ".png"
    WEBP = ".webp"
    GIF = ".gif"

    def filename(self, name: str) -> str:
        """Append this extension to an image name or hash."""
        if self is ImageType.AUTO:
            return name + (".gif" if name.startswith("a_") else ".png")
        return name + self.value
