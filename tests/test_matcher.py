"""Unit tests for containment matching and lane assignment.

WHY: The matcher decides where every clip goes. First-match order,
padding, the stop-at-first-failure rule and lane ordering are all
behaviours editors rely on when they review the resulting tracks.

HOW: Cues are built directly (no parsing) and paired with explicit
speakers, so each rule is tested in isolation:
  - LaneRegistry ordering and deduplication
  - Padding and start clamping
  - Inclusive, first-match containment
  - Stop at the first unmatched cue, with the partial plan attached
"""

import pytest

from srt_splitter.core.errors import MatchError
from srt_splitter.core.ir import CandidateSegment, Cue
from srt_splitter.core.matcher import (
    LaneRegistry,
    adjust_interval,
    build_plan,
    find_segment,
    iter_placements,
    match_cue,
)


def _cue(index, start, end, text="line"):
    return Cue(index=index, start_time=start, end_time=end, text=text)


def _attributed(*entries):
    """(index, start, end, speaker) tuples → (cue, speaker, content) triples."""
    return [
        (_cue(index, start, end), speaker, "text {}".format(index))
        for index, start, end, speaker in entries
    ]


SEGMENTS = [
    CandidateSegment(start=0.0, end=10.0, ref="a"),
    CandidateSegment(start=10.0, end=20.0, ref="b"),
]


class TestLaneRegistry:

    def test_default_lane_exists_first(self):
        registry = LaneRegistry()
        assert len(registry) == 1
        assert registry.default.is_default
        assert registry.default.position == 0
        assert registry.default.name == ""

    def test_speakers_in_first_appearance_order(self):
        registry = LaneRegistry()
        for speaker in ["A", "B", "A", None, "B"]:
            registry.get_or_create(speaker)
        assert registry.speakers == ["A", "B"]
        assert [lane.key for lane in registry.lanes] == [None, "A", "B"]
        assert [lane.position for lane in registry.lanes] == [0, 1, 2]

    def test_same_speaker_same_lane(self):
        registry = LaneRegistry()
        assert registry.get_or_create("A") is registry.get_or_create("A")

    def test_none_and_empty_map_to_default(self):
        registry = LaneRegistry()
        assert registry.get_or_create(None) is registry.default
        assert registry.get_or_create("") is registry.default
        assert len(registry) == 1

    def test_lane_name_is_normalized(self):
        registry = LaneRegistry()
        lane = registry.get_or_create("Al\u200bice")
        assert lane.key == "Al\u200bice"
        assert lane.name == "Alice"

    def test_contains(self):
        registry = LaneRegistry()
        registry.get_or_create("A")
        assert "A" in registry
        assert "B" not in registry


class TestPadding:

    def test_symmetric_padding(self):
        assert adjust_interval(2.0, 4.0, 0.5, 0.5) == (1.5, 4.5)

    def test_start_clamps_at_zero(self):
        assert adjust_interval(0.2, 1.0, 5.0, 0.0) == (0.0, 1.0)

    def test_no_padding(self):
        assert adjust_interval(2.0, 4.0) == (2.0, 4.0)

    def test_padded_cue_placement_bounds(self):
        plan = build_plan(_attributed((1, 2.0, 4.0, None)), SEGMENTS, 0.5, 0.5)
        placement = plan.placements[0]
        assert placement.start == pytest.approx(1.5)
        assert placement.end == pytest.approx(4.5)

    def test_padding_can_push_cue_out_of_segment(self):
        with pytest.raises(MatchError):
            build_plan(_attributed((1, 9.0, 9.8, None)), SEGMENTS, 0.0, 0.5)


class TestContainment:

    def test_first_match_wins(self):
        segments = [
            CandidateSegment(start=0.0, end=10.0, ref="narrow"),
            CandidateSegment(start=0.0, end=100.0, ref="wide"),
        ]
        assert find_segment(5.0, 8.0, segments).ref == "narrow"

    def test_order_not_position_decides(self):
        segments = [
            CandidateSegment(start=0.0, end=100.0, ref="wide"),
            CandidateSegment(start=0.0, end=10.0, ref="narrow"),
        ]
        assert find_segment(5.0, 8.0, segments).ref == "wide"

    def test_selects_first_segment_for_interval_inside_it(self):
        assert find_segment(5.0, 8.0, SEGMENTS).ref == "a"

    def test_bounds_are_inclusive(self):
        assert find_segment(0.0, 10.0, SEGMENTS).ref == "a"
        assert find_segment(10.0, 20.0, SEGMENTS).ref == "b"

    def test_straddling_interval_matches_nothing(self):
        assert find_segment(9.0, 11.0, SEGMENTS) is None

    def test_match_cue_returns_adjusted_bounds(self):
        start, end, segment = match_cue(_cue(1, 12.0, 13.0), SEGMENTS, 1.0, 1.0)
        assert (start, end) == (11.0, 14.0)
        assert segment.ref == "b"

    def test_cue_without_timing_never_matches(self):
        assert match_cue(Cue(index=1, start_time=None, end_time=None), SEGMENTS) is None


class TestPlacements:

    def test_one_placement_per_cue_in_order(self):
        plan = build_plan(
            _attributed((1, 1.0, 2.0, "A"), (2, 11.0, 12.0, "B"), (3, 3.0, 4.0, None)),
            SEGMENTS,
        )
        assert [p.cue_index for p in plan.placements] == [1, 2, 3]
        assert [p.segment.ref for p in plan.placements] == ["a", "b", "a"]
        assert [p.text for p in plan.placements] == ["text 1", "text 2", "text 3"]

    def test_lane_assignment(self):
        plan = build_plan(
            _attributed(
                (1, 1.0, 2.0, "A"),
                (2, 2.0, 3.0, "B"),
                (3, 3.0, 4.0, "A"),
                (4, 4.0, 5.0, None),
                (5, 5.0, 6.0, "B"),
            ),
            SEGMENTS,
        )
        assert plan.speakers == ["A", "B"]
        assert len(plan.lanes) == 3
        assert sum(1 for lane in plan.lanes if lane.is_default) == 1
        keys = [p.lane.key for p in plan.placements]
        assert keys == ["A", "B", "A", None, "B"]

    def test_default_lane_present_without_unlabeled_cues(self):
        plan = build_plan(_attributed((1, 1.0, 2.0, "A")), SEGMENTS)
        assert plan.lanes[0].is_default
        assert plan.placements_for(plan.lanes[0]) == []

    def test_offset_and_length(self):
        plan = build_plan(_attributed((1, 12.5, 14.0, None)), SEGMENTS)
        placement = plan.placements[0]
        assert placement.offset == pytest.approx(2.5)
        assert placement.length == pytest.approx(1.5)

    def test_source_filename_recorded(self):
        plan = build_plan(_attributed((1, 1.0, 2.0, None)), SEGMENTS, source_filename="x.srt")
        assert plan.source_filename == "x.srt"

    def test_empty_cue_list(self):
        plan = build_plan([], SEGMENTS)
        assert plan.placements == []
        assert len(plan.lanes) == 1


class TestMatchFailure:

    def test_stops_at_first_unmatched_cue(self):
        with pytest.raises(MatchError) as excinfo:
            build_plan(
                _attributed(
                    (1, 1.0, 2.0, "A"),
                    (7, 9.5, 10.5, "B"),
                    (8, 11.0, 12.0, "C"),
                ),
                SEGMENTS,
            )
        error = excinfo.value
        assert error.cue_index == 7
        assert [p.cue_index for p in error.placements] == [1]
        assert "7" in str(error)

    def test_partial_plan_attached(self):
        with pytest.raises(MatchError) as excinfo:
            build_plan(
                _attributed((1, 1.0, 2.0, "A"), (2, 30.0, 31.0, "B"), (3, 1.0, 2.0, "C")),
                SEGMENTS,
                source_filename="scene.srt",
            )
        plan = excinfo.value.plan
        assert plan.source_filename == "scene.srt"
        assert [p.cue_index for p in plan.placements] == [1]
        # B's lane was resolved before its cue failed; C was never reached.
        assert plan.speakers == ["A", "B"]

    def test_later_cues_are_not_consumed(self):
        consumed = []

        def attributed():
            for entry in _attributed((1, 1.0, 2.0, None), (2, 50.0, 51.0, None), (3, 1.0, 2.0, None)):
                consumed.append(entry[0].index)
                yield entry

        with pytest.raises(MatchError):
            build_plan(attributed(), SEGMENTS)
        assert consumed == [1, 2]

    def test_unset_timing_fails(self):
        attributed = [(Cue(index=4, start_time=None, end_time=None, text="x"), None, "x")]
        with pytest.raises(MatchError) as excinfo:
            build_plan(attributed, SEGMENTS)
        assert excinfo.value.cue_index == 4

    def test_iter_placements_yields_before_failure(self):
        registry = LaneRegistry()
        gen = iter_placements(_attributed((1, 1.0, 2.0, None), (2, 50.0, 51.0, None)), SEGMENTS, registry)
        first = next(gen)
        assert first.cue_index == 1
        with pytest.raises(MatchError):
            next(gen)
