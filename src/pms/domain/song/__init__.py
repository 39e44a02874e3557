"""Song domain - song records and their tags."""

from .models import Song, get_display_name

__all__ = [
    "Song",
    "get_display_name",
]
