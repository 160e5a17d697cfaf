"""Video id extraction and player URL construction."""

from urllib.parse import parse_qs, quote, urlparse

SHORT_LINK_HOSTS = frozenset({"youtu.be", "www.youtu.be"})


def extract_video_id(url: str) -> str:
    """
    Extracts the video id from a catalog source URL.

    Recognized shapes:
        - any URL carrying a `v` query parameter (https://www.youtube.com/watch?v=ID&t=1)
        - short links (https://youtu.be/ID), with or without a scheme

    Returns an empty string for anything else.
    """
    if not url:
        return ""
    url = url.strip()
    try:
        parsed = urlparse(url)
        if parsed.hostname is None and not parsed.scheme:
            # Scheme-less links such as "youtu.be/ID" parse as a bare path
            parsed = urlparse(f"//{url}")
    except ValueError:
        return ""

    video_id = parse_qs(parsed.query).get("v", [""])[0]
    if video_id:
        return video_id.strip()

    if parsed.hostname in SHORT_LINK_HOSTS:
        return parsed.path.strip("/").split("/")[0]
    return ""


def embed_url(player_base_url: str, video_id: str) -> str:
    """URL of the XSEN player for a video."""
    return f"{player_base_url.rstrip('/')}?v={quote(video_id, safe='')}"


def thumbnail_url(video_id: str) -> str:
    return f"https://img.youtube.com/vi/{quote(video_id, safe='')}/hqdefault.jpg"
