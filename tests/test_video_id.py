import pytest

from youtube_live_panel.video_id import extract_video_id, is_video_id


@pytest.mark.parametrize(
    "url",
    [
        "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
        "https://www.youtube.com/watch?v=dQw4w9WgXcQ&t=42",
        "https://www.youtube.com/watch?feature=share&v=dQw4w9WgXcQ#chat",
        "https://youtu.be/dQw4w9WgXcQ",
        "https://youtu.be/dQw4w9WgXcQ?t=5",
        "https://www.youtube.com/embed/dQw4w9WgXcQ?autoplay=1",
        "   https://youtu.be/dQw4w9WgXcQ  ",
    ],
)
def test_extracts_id_from_known_url_shapes(url):
    assert extract_video_id(url) == "dQw4w9WgXcQ"


def test_bare_id_returned_unchanged():
    assert extract_video_id("A_b-z_-0_1A") == "A_b-z_-0_1A"
    assert extract_video_id("  dQw4w9WgXcQ\n") == "dQw4w9WgXcQ"


@pytest.mark.parametrize("text", ["dQw4w9WgXc", "dQw4w9WgXcQ1", "dQw4w9WgX@Q", ""])
def test_wrong_length_or_charset_rejected(text):
    assert not is_video_id(text)
    assert extract_video_id(text) == ""


def test_not_a_url():
    assert extract_video_id("not a url") == ""
    assert extract_video_id("   ") == ""
    assert extract_video_id(None) == ""


def test_invalid_candidate_falls_through_to_next_marker():
    # "v=" matches first but its candidate is too short
    url = "https://youtu.be/dQw4w9WgXcQ?v=short"
    assert extract_video_id(url) == "dQw4w9WgXcQ"


def test_marker_priority():
    url = "https://www.youtube.com/embed/AAAAAAAAAAA?v=BBBBBBBBBBB"
    assert extract_video_id(url) == "BBBBBBBBBBB"


def test_trailing_path_is_not_trimmed():
    assert extract_video_id("https://youtu.be/dQw4w9WgXcQ/extra") == ""
