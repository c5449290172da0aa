from datetime import datetime, timezone
from typing import List, Optional
from urllib.parse import urlparse, parse_qs

YOUTUBE_THUMBNAIL = "https://img.youtube.com/vi/{video_id}/maxresdefault.jpg"

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def newest_first(items: List[dict]) -> List[dict]:
    return sorted(items, key=lambda d: d.get("createdAt") or _EPOCH, reverse=True)


def youtube_video_id(url: str) -> Optional[str]:
    """
    Extrae el id de un vídeo de YouTube de las formas habituales de URL:
    watch?v=, youtu.be/<id>, /embed/<id> y /shorts/<id>.
    """
    try:
        parsed = urlparse(url)
    except ValueError:
        return None
    host = (parsed.hostname or "").lower()
    if host == "youtu.be":
        video_id = parsed.path.lstrip("/").split("/")[0]
        return video_id or None
    if host.endswith("youtube.com"):
        video_id = parse_qs(parsed.query).get("v", [""])[0]
        if video_id:
            return video_id
        parts = [p for p in parsed.path.split("/") if p]
        if len(parts) >= 2 and parts[0] in ("embed", "shorts", "v"):
            return parts[1]
    return None


def youtube_thumbnail(url: str) -> Optional[str]:
    video_id = youtube_video_id(url)
    return YOUTUBE_THUMBNAIL.format(video_id=video_id) if video_id else None
