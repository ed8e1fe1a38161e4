from functools import partial
from random import Random

import pytest

from flexbar.color import Palette
from flexbar.layout import fit, join, used_width
from flexbar.segments import Sample, Segment, build_segments
from flexbar.width import display_width


def fixed(char, width, priority, align=0):
    return Segment.plain(char * width, priority=priority, align=align)


def elastic(width=0, floor=5, priority=10, align=1):
    w = max(width, floor)
    return Segment(
        text="=" * w,
        width=w,
        priority=priority,
        align=align,
        elastic=True,
        stretch=partial(elastic, floor=floor, priority=priority, align=align),
    )


def test_elastic_takes_leftover():
    result = fit([fixed("a", 4, 1), elastic(), fixed("b", 3, 2, align=2)], 30)
    assert join(result) == "aaaa " + "=" * 21 + " bbb"
    assert used_width(result, 1) == 30


def test_no_elastic_leaves_slack():
    result = fit([fixed("a", 4, 1), fixed("b", 3, 2)], 30)
    assert join(result) == "aaaa bbb"


def test_sorted_by_align():
    result = fit([fixed("a", 2, 5, align=2), fixed("b", 2, 5, align=0), elastic(), fixed("c", 2, 5)], 20)
    assert [seg.text[0] for seg in result] == ["b", "c", "=", "a"]


def test_drops_lowest_priority_first():
    segments = [fixed("a", 10, 5), fixed("b", 10, 1), fixed("c", 10, 3)]
    assert join(fit(segments, 25)) == "a" * 10 + " " + "c" * 10
    assert join(fit(segments, 12)) == "a" * 10


def test_priority_ties_drop_first_encountered():
    segments = [fixed("a", 10, 1), fixed("b", 10, 1)]
    assert join(fit(segments, 15)) == "b" * 10


def test_nothing_fits():
    assert fit([fixed("a", 10, 1)], 5) == []
    assert join(fit([elastic(floor=8)], 5)) == ""


def test_hidden_segments_ignored():
    segments = [fixed("a", 3, 1), Segment.off(), fixed("b", 3, 1)]
    assert join(fit(segments, 7)) == "aaa bbb"


def test_bar_floor_drops_others_first():
    """Auxiliary segments go before the bar shrinks below its floor"""
    segments = [fixed("a", 5, 4), elastic(floor=10, priority=10), fixed("b", 5, 9, align=2)]
    result = fit(segments, 16)
    assert join(result) == "=" * 10 + " bbbbb"
    result = fit(segments, 12)
    assert join(result) == "=" * 12


def test_input_not_modified():
    segments = [fixed("a", 10, 1), elastic(), fixed("b", 10, 2)]
    before = list(segments)
    fit(segments, 12)
    assert segments == before
    assert not any(seg.hidden for seg in segments)


def test_custom_separator():
    result = fit([fixed("a", 2, 1), elastic(), fixed("b", 2, 1, align=2)], 20, separator=" | ")
    line = join(result, " | ")
    assert display_width(line) == 20
    assert line.startswith("aa | =")


def test_random_lineups():
    """Width is never exceeded, drops follow priority, the bar fills exactly"""
    rng = Random(1234)
    for i in range(500):
        segments = [
            fixed(chr(ord("a") + n), rng.randint(1, 12), rng.randint(0, 20), rng.randint(0, 2))
            for n in range(rng.randint(0, 8))
        ]
        floor = rng.randint(3, 10)
        segments.insert(rng.randint(0, len(segments)), elastic(floor=floor, priority=rng.randint(0, 20)))
        width = rng.randint(floor, 120)

        result = fit(segments, width)
        used = used_width(result, 1)
        assert used <= width, f"{i=} {width=}"

        bars = [seg for seg in result if seg.elastic]
        if bars and bars[0].width > floor:
            assert used == width, f"{i=} {width=}"

        kept = {seg.text for seg in result if not seg.elastic}
        dropped = [seg for seg in segments if not seg.elastic and seg.text not in kept]
        if not bars:
            dropped += [seg for seg in segments if seg.elastic]
        survivors = [seg for seg in segments if seg.text in kept]
        if bars:
            survivors += [seg for seg in segments if seg.elastic]
        if dropped and survivors:
            assert max(s.priority for s in dropped) <= min(s.priority for s in survivors), f"{i=}"


@pytest.mark.parametrize("color", [True, False])
def test_real_lineup_fits(color):
    palette = Palette(color)
    samples = [
        Sample(37, 100, label="Downloading 日本", elapsed=75, progress_elapsed=74),
        Sample(100, 100, label="Done", elapsed=5, progress_elapsed=5),
        Sample(1_234_567, 0, label="Streaming", elapsed=3, progress_elapsed=3),
    ]
    for sample in samples:
        for width in range(7, 160):
            line = join(fit(build_segments(sample, palette), width))
            assert display_width(line) <= width, f"{sample=} {width=}"


def test_narrowing_drops_segments():
    sample = Sample(50, 100, label="Work", elapsed=5, progress_elapsed=5)
    wide = fit(build_segments(sample, Palette(False)), 79)
    narrow = fit(build_segments(sample, Palette(False)), 19)
    assert display_width(join(wide)) == 79
    assert display_width(join(narrow)) <= 19
    assert len(narrow) < len(wide)
    # Percentage outranks the throughput and time readouts
    assert join(narrow).startswith(" 50% ▌")
