from pathlib import Path
import pytest

from subnav_core.subtitles.data import SubtitleScript

from ass_samples import build_script, dialogue


@pytest.fixture
def scenario_a_text():
    """One 'Hanzi' track with three sentences."""
    return build_script(
        ["Hanzi"],
        [
            dialogue("0:00:01.00", "0:00:05.00", "Hanzi", "第一句"),
            dialogue("0:00:06.00", "0:00:10.00", "Hanzi", "第二句"),
            dialogue("0:00:11.00", "0:00:15.00", "Hanzi", "第三句"),
        ],
    )


@pytest.fixture
def trilingual_text():
    """Hanzi / Pinyin / English sharing the same windows."""
    return build_script(
        ["Hanzi", "Pinyin", "English"],
        [
            dialogue("0:00:01.00", "0:00:05.00", "Hanzi", "你好"),
            dialogue("0:00:01.00", "0:00:05.00", "Pinyin", "nǐ hǎo"),
            dialogue("0:00:01.00", "0:00:05.00", "English", "Hello"),
            dialogue("0:00:06.00", "0:00:09.00", "Hanzi", "谢谢你"),
            dialogue("0:00:06.00", "0:00:09.00", "Pinyin", "xiè xie nǐ"),
            dialogue("0:00:06.00", "0:00:09.00", "English", "Thank you"),
        ],
    )


@pytest.fixture
def make_script():
    """Factory: parse text into a fresh SubtitleScript."""
    def _make(text: str, settings=None) -> SubtitleScript:
        script = SubtitleScript(settings)
        assert script.parse(text)
        return script
    return _make


@pytest.fixture
def script_file(tmp_path: Path, trilingual_text):
    path = tmp_path / "episode.ass"
    path.write_text(trilingual_text, encoding="utf-8")
    return path
