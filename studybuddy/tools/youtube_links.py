"""Extract YouTube video ids from the links returned by web search."""
import logging
import re
from typing import Optional
from urllib.parse import parse_qs, urlparse

logger = logging.getLogger(__name__)

VIDEO_ID_LENGTH = 11

# Catches watch?v=, /v/, /e/, /embed/ and youtu.be forms, with or without a scheme
_VIDEO_ID_PATTERN = re.compile(
    r"(?:youtube\.com/(?:[^/]+/.+/|(?:v|e(?:mbed)?)/|.*[?&]v=)|youtu\.be/)([^\"&?/\s]{11})"
)


def youtube_id_from_url(url) -> Optional[str]:
    """
    Return the 11-character video id of a YouTube link, or None.

    Well-formed ``youtu.be/<id>``, ``youtube.com/embed/<id>`` and
    ``youtube.com/watch?v=<id>`` URLs are read structurally; anything else
    (missing scheme, odd paths) goes through a regex fallback.
    """
    if not url or not isinstance(url, str):
        return None

    video_id = None
    try:
        parsed = urlparse(url)
        host = parsed.hostname or ""
    except ValueError:
        parsed, host = None, ""

    if host == "youtu.be":
        video_id = parsed.path[1:]
    elif "youtube.com" in host:
        if parsed.path.startswith("/embed/"):
            video_id = parsed.path.split("/")[2]
        else:
            values = parse_qs(parsed.query).get("v")
            if values:
                video_id = values[0]

    if not video_id:
        match = _VIDEO_ID_PATTERN.search(url)
        if match:
            video_id = match.group(1)

    if video_id and len(video_id) == VIDEO_ID_LENGTH:
        return video_id
    logger.debug("No video id in %r", url)
    return None
