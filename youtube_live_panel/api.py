"""
YouTube Data API v3 access for the live panel.

One fetch cycle makes at most two calls: the video's liveStreamingDetails,
then (if the stream has an active chat) the newest chat messages.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import requests

logger = logging.getLogger(__name__)

YOUTUBE_API_BASE = "https://www.googleapis.com/youtube/v3"
REQUEST_TIMEOUT = 20
MAX_COMMENTS = 25

VIEWERS_PREFIX = "Concurrent viewers: "
VIEWERS_PENDING = VIEWERS_PREFIX + "--"
VIEWERS_NOT_REPORTED = VIEWERS_PREFIX + "n/a"
VIEWERS_UNAVAILABLE = VIEWERS_PREFIX + "unavailable"

STREAM_NOT_FOUND = "Live stream not found."
NO_LIVE_DETAILS = "Live stream does not expose live chat data."
CHAT_NOT_ACTIVE = "Live chat is not active for this stream."
NO_CHAT_MESSAGES = "No live chat messages available."


class YouTubeApiError(RuntimeError):
    """The API answered with a non-200 status."""

    def __init__(self, status_code: int, message: str):
        super().__init__(f"HTTP {status_code}: {message}")
        self.status_code = status_code


@dataclass(frozen=True)
class LiveData:
    success: bool = False
    viewers_text: str = ""
    status_text: str = ""
    comments: Tuple[str, ...] = field(default_factory=tuple)


def _error_message(r: requests.Response) -> str:
    try:
        j = r.json()
    except ValueError:
        return r.text
    if isinstance(j, dict):
        err = j.get("error")
        if isinstance(err, dict) and err.get("message"):
            return err["message"]
    return r.text


def _req_get(path: str, params: Dict, api_key: str) -> Dict:
    params = dict(params) | {"key": api_key}
    r = requests.get(f"{YOUTUBE_API_BASE}/{path}", params=params, timeout=REQUEST_TIMEOUT)
    # r.url carries the key, so only the path is logged
    logger.debug("[GET] /%s -> %s", path, r.status_code)
    if r.status_code != 200:
        raise YouTubeApiError(r.status_code, _error_message(r))
    return r.json()


def format_timestamp(now: Optional[float] = None) -> str:
    return time.strftime("%H:%M:%S", time.localtime(now))


def _chat_lines(api_key: str, live_chat_id: str) -> List[str]:
    params = {
        "part": "snippet,authorDetails",
        "maxResults": MAX_COMMENTS,
        "liveChatId": live_chat_id,
    }
    data = _req_get("liveChat/messages", params, api_key)
    lines: List[str] = []
    for msg in data.get("items") or []:
        author = (msg.get("authorDetails") or {}).get("displayName") or "Unknown"
        text = (msg.get("snippet") or {}).get("displayMessage", "")
        if text:
            lines.append(f"{author}: {text}")
        if len(lines) >= MAX_COMMENTS:
            break
    return lines


def download_live_data(api_key: str, video_id: str) -> LiveData:
    """Fetch viewer count and recent chat for one live video.

    Raises on transport errors, non-200 responses and undecodable bodies;
    nothing partial is returned in that case.
    """
    data = _req_get("videos", {"part": "liveStreamingDetails", "id": video_id}, api_key)
    items = data.get("items") or []
    if not items:
        logger.info("Video %s not found", video_id)
        return LiveData(status_text=STREAM_NOT_FOUND)

    details = items[0].get("liveStreamingDetails")
    comments: List[str] = []
    if details is None:
        viewers = VIEWERS_UNAVAILABLE
        comments.append(NO_LIVE_DETAILS)
    else:
        count = details.get("concurrentViewers")
        viewers = f"{VIEWERS_PREFIX}{count}" if count is not None else VIEWERS_NOT_REPORTED
        chat_id = details.get("activeLiveChatId")
        if chat_id:
            comments.extend(_chat_lines(api_key, chat_id))
        else:
            comments.append(CHAT_NOT_ACTIVE)

    if not comments:
        comments.append(NO_CHAT_MESSAGES)

    return LiveData(
        success=True,
        viewers_text=viewers,
        status_text=f"Last update: {format_timestamp()}",
        comments=tuple(comments[:MAX_COMMENTS]),
    )
