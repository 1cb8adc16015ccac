from youtube_live_panel.api import LiveData, YouTubeApiError, download_live_data
from youtube_live_panel.video_id import extract_video_id

__version__ = "0.1.0"

__all__ = ["LiveData", "YouTubeApiError", "download_live_data", "extract_video_id"]
