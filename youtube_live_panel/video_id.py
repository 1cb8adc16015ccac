import re

VIDEO_ID_RE = re.compile(r"[0-9A-Za-z_-]{11}")

# Checked in this order; the first marker yielding a valid id wins.
VIDEO_ID_MARKERS = ("v=", "youtu.be/", "/embed/")
VIDEO_ID_TERMINATORS = re.compile(r"[?&#]")


def is_video_id(text: str) -> bool:
    return bool(VIDEO_ID_RE.fullmatch(text))


def _id_after(text: str, marker: str) -> str:
    pos = text.find(marker)
    if pos < 0:
        return ""
    candidate = VIDEO_ID_TERMINATORS.split(text[pos + len(marker):], maxsplit=1)[0]
    return candidate if is_video_id(candidate) else ""


def extract_video_id(url: str) -> str:
    """Return the 11-character video id found in ``url``, or "" if there is none.

    Accepts a bare id as well as watch, youtu.be and embed links.
    """
    txt = (url or "").strip()
    if not txt:
        return ""
    if is_video_id(txt):
        return txt
    for marker in VIDEO_ID_MARKERS:
        vid = _id_after(txt, marker)
        if vid:
            return vid
    return ""
