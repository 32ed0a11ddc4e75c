# tests/test_navigation.py
# -*- coding: utf-8 -*-
"""Active-event queries and sentence navigation."""
import random

import pytest

from subnav_core.models.settings import NavigationSettings
from subnav_core.models.subtitles import DialogueEvent
from subnav_core.subtitles.data import SubtitleScript
from subnav_core.subtitles.navigation import (
    build_navigable,
    dedup_by_start,
    merge_adjacent,
    next_start,
    prev_start,
    resolve_main_track,
)
from subnav_core.subtitles.playback import prev_sentence_target
from subnav_core.subtitles.query import EventIndex

from ass_samples import build_script, dialogue


def _event(start, end, text="x", style="Hanzi"):
    return DialogueEvent(
        style=style, start="", end="", start_time=start, end_time=end,
        text=text, clean_text=text, display_text=text,
    )


# ---------------------------------------------------------------------------
# Active events
# ---------------------------------------------------------------------------

def test_active_event_inside_first_sentence(make_script, scenario_a_text):
    script = make_script(scenario_a_text)
    assert [e.clean_text for e in script.active_events_at(2.5)] == ["第一句"]


def test_active_by_track_has_one_event_per_track(make_script, trilingual_text):
    grouped = make_script(trilingual_text).active_events_by_track(3.0)
    assert list(grouped) == ["Hanzi", "Pinyin", "English"]
    assert [len(v) for v in grouped.values()] == [1, 1, 1]
    assert grouped["English"][0].clean_text == "Hello"


@pytest.mark.parametrize("t, expected", [
    (0.99, []),
    (1.0, ["第一句"]),       # start is inclusive
    (5.0, ["第一句"]),       # so is end
    (5.5, []),               # gap
    (15.0, ["第三句"]),
    (15.01, []),
])
def test_active_boundaries(make_script, scenario_a_text, t, expected):
    script = make_script(scenario_a_text)
    assert [e.clean_text for e in script.active_events_at(t)] == expected


def test_active_handles_long_overlapping_events(make_script):
    script = make_script(build_script(["Hanzi", "Notes"], [
        dialogue("0:00:00.00", "0:01:00.00", "Notes", "long"),
        dialogue("0:00:10.00", "0:00:11.00", "Hanzi", "short"),
        dialogue("0:00:30.00", "0:00:31.00", "Hanzi", "later"),
    ]))
    assert [e.clean_text for e in script.active_events_at(10.5)] == ["long", "short"]
    assert [e.clean_text for e in script.active_events_at(45.0)] == ["long"]


def test_active_before_parse_or_nan(make_script, scenario_a_text):
    assert SubtitleScript().active_events_at(2.0) == []
    assert SubtitleScript().active_events_by_track(2.0) == {}
    assert make_script(scenario_a_text).active_events_at(float("nan")) == []


def test_index_matches_brute_force():
    rng = random.Random(7)
    events = []
    for _ in range(200):
        start = round(rng.uniform(0, 300), 2)
        events.append(_event(start, round(start + rng.uniform(0.1, 12), 2)))
    events.sort(key=lambda e: e.start_time)
    index = EventIndex(events)

    probes = [rng.uniform(-5, 320) for _ in range(300)]
    probes += [e.start_time for e in events] + [e.end_time for e in events]
    for t in probes:
        expected = [e for e in events if e.start_time <= t <= e.end_time]
        assert index.active(t) == expected


# ---------------------------------------------------------------------------
# Navigable pipeline
# ---------------------------------------------------------------------------

def test_dedup_keeps_first_of_equal_starts_and_is_idempotent():
    events = [_event(1.0, 2.0, "a"), _event(1.0005, 2.0, "b"), _event(3.0, 4.0, "c")]
    once = dedup_by_start(events)
    assert [e.clean_text for e in once] == ["a", "c"]
    assert dedup_by_start(once) == once


def test_split_sentence_fragments_merge():
    events = [_event(2.00, 2.14, "你好"), _event(2.15, 3.00, "你好")]
    merged = merge_adjacent(events)
    assert len(merged) == 1
    assert (merged[0].start_time, merged[0].end_time) == (2.00, 3.00)
    assert merged[0].merged_count == 2


def test_merge_respects_gap_tolerance():
    events = [_event(2.00, 2.14, "你好"), _event(2.40, 3.00, "你好")]
    assert len(merge_adjacent(events)) == 2
    assert len(merge_adjacent(events, gap_tolerance=0.3)) == 1


def test_merge_compares_normalized_text():
    events = [_event(1.0, 2.0, "Hello  world"), _event(2.0, 3.0, " hello world")]
    assert len(merge_adjacent(events)) == 1


def test_different_texts_do_not_merge():
    events = [_event(1.0, 2.0, "你好"), _event(2.0, 3.0, "再见")]
    assert [e.clean_text for e in merge_adjacent(events)] == ["你好", "再见"]


def test_merge_keeps_later_end_for_contained_fragment():
    events = [_event(1.0, 4.0, "同"), _event(1.5, 2.0, "同")]
    merged = merge_adjacent(events)
    assert (merged[0].start_time, merged[0].end_time) == (1.0, 4.0)


def test_merge_skips_zero_length_events():
    assert merge_adjacent([_event(1.0, 1.0, "a"), _event(2.0, 1.5, "b")]) == []


def test_build_navigable_filters_one_track():
    events = [
        _event(1.0, 2.0, "你好", "Hanzi"),
        _event(1.0, 2.0, "Hello", "English"),
        _event(3.0, 4.0, "再见", "Hanzi"),
    ]
    units = build_navigable(events, "Hanzi")
    assert [u.clean_text for u in units] == ["你好", "再见"]
    assert all(u.style == "Hanzi" for u in units)


def test_navigable_units_are_sorted_and_disjoint_after_merge(make_script):
    script = make_script(build_script(["Hanzi"], [
        dialogue("0:00:01.00", "0:00:02.00", "Hanzi", "一"),
        dialogue("0:00:01.00", "0:00:02.00", "Hanzi", "一 dup"),
        dialogue("0:00:02.10", "0:00:03.00", "Hanzi", "一"),
        dialogue("0:00:04.00", "0:00:05.00", "Hanzi", "二"),
    ]))
    units = script.navigable_events()
    assert [(u.start_time, u.end_time) for u in units] == [(1.0, 3.0), (4.0, 5.0)]


# ---------------------------------------------------------------------------
# Next / previous
# ---------------------------------------------------------------------------

def test_next_and_prev_from_inside_first_sentence(make_script, scenario_a_text):
    script = make_script(scenario_a_text)
    assert script.next_event_time(2.5) == 6.0
    assert script.prev_event_time(2.5) is None


@pytest.mark.parametrize("t, nxt, prv", [
    (0.0, 1.0, None),
    (5.5, 6.0, 1.0),
    (7.0, 11.0, 1.0),
    (10.5, 11.0, 6.0),
    (12.0, None, 6.0),
    (20.0, None, 11.0),
])
def test_next_prev_table(make_script, scenario_a_text, t, nxt, prv):
    script = make_script(scenario_a_text)
    assert script.next_event_time(t) == nxt
    assert script.prev_event_time(t) == prv


def test_buffer_keeps_next_from_returning_current_start(make_script, scenario_a_text):
    script = make_script(scenario_a_text)
    # Just after seeking to 6.0 the player reports 6.0 or a hair later
    assert script.next_event_time(6.0) == 11.0
    assert script.next_event_time(5.96) == 11.0
    assert script.next_event_time(5.94) == 6.0


def test_repeated_next_walks_every_sentence(make_script, scenario_a_text):
    script = make_script(scenario_a_text)
    seen = []
    t = script.next_event_time(0.0)
    while t is not None:
        seen.append(t)
        t = script.next_event_time(t)
    assert seen == [1.0, 6.0, 11.0]


def test_prev_reaches_sentence_overlapping_the_current_one(make_script):
    script = make_script(build_script(["Hanzi"], [
        dialogue("0:00:01.00", "0:00:05.20", "Hanzi", "第一句"),
        dialogue("0:00:05.00", "0:00:09.00", "Hanzi", "第二句"),
    ]))
    assert script.prev_event_time(5.01) == 1.0
    assert script.prev_event_time(7.0) == 1.0
    assert prev_sentence_target(script, 5.01) == 1.0


def test_prev_reaches_sentence_ending_where_current_starts(make_script):
    script = make_script(build_script(["Hanzi"], [
        dialogue("0:00:01.00", "0:00:05.00", "Hanzi", "第一句"),
        dialogue("0:00:05.00", "0:00:09.00", "Hanzi", "第二句"),
    ]))
    assert script.prev_event_time(5.0) == 1.0
    assert script.prev_event_time(4.0) is None


def test_prev_inside_long_sentence_after_nested_one_ended():
    units = merge_adjacent([_event(1.0, 10.0, "长"), _event(3.0, 4.0, "短")])
    assert prev_start(units, 3.5) == 1.0
    assert prev_start(units, 4.5) == 3.0


def _random_units(rng, count=80):
    """Overlapping, touching and mergeable fragments on one track."""
    events = []
    start = 0.0
    for _ in range(count):
        start = round(start + rng.choice([0.0005, 0.1, 0.5, 1.0, 2.0, 4.0]), 3)
        end = round(start + rng.choice([0.0, 0.15, 0.5, 2.0, 6.0]), 3)
        events.append(_event(start, end, rng.choice(["一", "二", "三"])))
    return build_navigable(events, "Hanzi")


def _brute_force_prev(units, t, buffer):
    started = [u for u in units if u.start_time <= t]
    cutoff = t
    if started and started[-1].end_time >= t:
        cutoff = started[-1].start_time
    earlier = [u.start_time for u in units if u.start_time < cutoff - buffer]
    return earlier[-1] if earlier else None


@pytest.mark.parametrize("seed", [1, 2, 3, 4, 5])
def test_next_never_moves_backwards(seed):
    rng = random.Random(seed)
    units = _random_units(rng)
    probes = sorted(rng.uniform(-1, units[-1].end_time + 2) for _ in range(400))

    last = None
    exhausted = False
    for t in probes:
        result = next_start(units, t)
        if result is None:
            exhausted = True
            continue
        assert not exhausted
        assert result > t + 0.05
        if last is not None:
            assert result >= last
        last = result
    # once past the final start there is nothing ahead
    assert next_start(units, units[-1].start_time) is None


@pytest.mark.parametrize("seed", [1, 2, 3, 4, 5])
def test_prev_never_moves_backwards(seed):
    rng = random.Random(seed)
    units = _random_units(rng)
    probes = [rng.uniform(-1, units[-1].end_time + 2) for _ in range(400)]
    probes += [u.start_time for u in units] + [u.end_time for u in units]
    probes.sort()

    last = None
    for t in probes:
        result = prev_start(units, t)
        assert result == _brute_force_prev(units, t, 0.05)
        if last is not None:
            assert result is not None and result >= last
        if result is not None:
            last = result


def test_next_prev_on_empty_list():
    assert next_start([], 1.0) is None
    assert prev_start([], 1.0) is None


def test_navigation_on_named_track(make_script, trilingual_text):
    script = make_script(trilingual_text)
    assert script.next_event_time(2.0, track="English") == 6.0
    assert script.next_event_time(2.0, track="Missing") is None


# ---------------------------------------------------------------------------
# Main track and caching
# ---------------------------------------------------------------------------

def test_resolve_main_track_prefers_conventional_names():
    assert resolve_main_track(["English", "chinese", "Pinyin"]) == "chinese"
    assert resolve_main_track(["Top", "Bottom"]) == "Top"
    assert resolve_main_track([]) is None
    assert resolve_main_track(["A", "B"], ["b"]) == "B"


def test_main_track_from_settings(make_script, trilingual_text):
    settings = NavigationSettings(main_track_names=("English",))
    script = make_script(trilingual_text, settings)
    assert script.main_track() == "English"
    assert [u.clean_text for u in script.navigable_events()] == ["Hello", "Thank you"]


def test_navigable_cache_is_dropped_on_reparse(make_script, scenario_a_text):
    script = make_script(scenario_a_text)
    assert len(script.navigable_events()) == 3
    script.parse(build_script(["Hanzi"], [dialogue("0:00:01.00", "0:00:02.00", "Hanzi", "唯一")]))
    assert [u.clean_text for u in script.navigable_events()] == ["唯一"]


def test_navigable_events_returns_a_copy(make_script, scenario_a_text):
    script = make_script(scenario_a_text)
    script.navigable_events().clear()
    assert len(script.navigable_events()) == 3


def test_tolerances_come_from_settings(make_script):
    text = build_script(["Hanzi"], [
        dialogue("0:00:01.00", "0:00:02.00", "Hanzi", "同"),
        dialogue("0:00:02.50", "0:00:03.00", "Hanzi", "同"),
    ])
    assert len(make_script(text).navigable_events()) == 2
    wide = NavigationSettings(merge_gap_s=0.6)
    assert len(make_script(text, wide).navigable_events()) == 1
