# subnav_core/subtitles/track_kinds.py
"""
Track-kind heuristic for presentation.

Style names are unreliable ("Default", "Top", "Sub1"...), so the kind of a
track is guessed from the text it is currently showing.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence

from ..models.enums import TrackKind
from ..models.subtitles import DialogueEvent

_CJK_RE = re.compile(r"[\u4e00-\u9fff]")
_TONE_MARK_RE = re.compile(r"[āáǎàēéěèīíǐìōóǒòūúǔùǖǘǚǜ]", re.IGNORECASE)
_TONE_NUMBER_RE = re.compile(r"[a-zA-Z]+[1-4]")


def has_cjk(text: str) -> bool:
    return bool(_CJK_RE.search(text))


def has_pinyin_tones(text: str) -> bool:
    return bool(_TONE_MARK_RE.search(text) or _TONE_NUMBER_RE.search(text))


def _track_text(events: Sequence[DialogueEvent]) -> str:
    return " ".join(e.clean_text for e in events).strip()


def classify_tracks(
    groups: Mapping[str, Sequence[DialogueEvent]],
) -> dict[str, TrackKind]:
    """
    Label each active track.

    The first track with CJK text is HANZI, the first non-CJK track with
    tone marks or tone numbers is PINYIN, the first remaining non-CJK track
    is ENGLISH. Everything else, including empty tracks, is OTHER.
    """
    kinds = {name: TrackKind.OTHER for name in groups}
    found: set[TrackKind] = set()

    for name, events in groups.items():
        text = _track_text(events)
        if not text:
            continue
        cjk = has_cjk(text)
        if cjk:
            if TrackKind.HANZI not in found:
                kinds[name] = TrackKind.HANZI
                found.add(TrackKind.HANZI)
            continue
        if TrackKind.PINYIN not in found and has_pinyin_tones(text):
            kinds[name] = TrackKind.PINYIN
            found.add(TrackKind.PINYIN)
            continue
        if TrackKind.ENGLISH not in found:
            kinds[name] = TrackKind.ENGLISH
            found.add(TrackKind.ENGLISH)

    return kinds


def analysis_text(groups: Mapping[str, Sequence[DialogueEvent]]) -> str | None:
    """Text to analyse: the first CJK track, else the first track."""
    first = None
    for events in groups.values():
        text = " ".join(e.clean_text for e in events)
        if first is None:
            first = text
        if has_cjk(text):
            return text
    return first
