"""動画URLから動画IDを抽出"""

from urllib.parse import parse_qs, urlparse


def extract_video_id(url: str | None) -> str | None:
    """
    動画URLから動画IDを取り出す

    対応する形式:
        https://youtu.be/{id}
        https://www.youtube.com/watch?v={id}
        https://www.youtube.com/shorts/{id}

    Returns:
        動画ID、該当しない形式の場合は None
    """
    if not url:
        return None
    try:
        parsed = urlparse(url.strip())
    except ValueError:
        return None
    if not parsed.scheme or not parsed.netloc:
        return None

    segments = [s for s in parsed.path.split("/") if s]

    if "youtu.be" in (parsed.hostname or ""):
        return segments[0] if segments else None

    v = parse_qs(parsed.query).get("v")
    if v and v[0]:
        return v[0]

    if "shorts" in segments:
        idx = segments.index("shorts")
        if idx + 1 < len(segments):
            return segments[idx + 1]

    return None
