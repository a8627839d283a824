"""Shared test fixtures for the srt_splitter test suite.

WHY: Most test modules need the same small dialogue scene (a subtitle
file with two bracketed speakers, an unlabeled line and a multi-line cue
) and the source items it was cut from. Centralizing it here keeps every
module testing against the same material.

HOW: Pytest fixtures provide the raw SRT bytes, the matching candidate
segments, and the file paths for tests that go through the filesystem.

RULES:
- SAMPLE_SRT speakers appear in the order Alice, Bob, (unlabeled), Alice
- Every sample cue fits inside SAMPLE_SEGMENTS with the default padding
- All file I/O fixtures use tmp_path for isolation
"""

import json

import pytest

from srt_splitter.core.ir import CandidateSegment


SAMPLE_SRT = (
    "1\r\n"
    "00:00:01,000 --> 00:00:02,500\r\n"
    "（Alice）Hello there.\r\n"
    "\r\n"
    "2\r\n"
    "00:00:03,000 --> 00:00:04,000\r\n"
    "[Bob] Hi, Alice.\r\n"
    "\r\n"
    "3\r\n"
    "00:00:11,000 --> 00:00:12,250\r\n"
    "The door creaks open.\r\n"
    "\r\n"
    "4\r\n"
    "00:00:13,000 --> 00:00:15,000\r\n"
    "（Alice）Who's there?\r\n"
    "Show yourself!\r\n"
).encode("utf-8")

SAMPLE_SEGMENT_DATA = [
    {"start": 0.0, "end": 10.0, "ref": "item-1", "group": "dialogue"},
    {"start": 10.0, "length": 10.0, "ref": "item-2", "group": "dialogue"},
]

SAMPLE_SEGMENTS = [
    CandidateSegment(start=0.0, end=10.0, ref="item-1", group="dialogue"),
    CandidateSegment(start=10.0, end=20.0, ref="item-2", group="dialogue"),
]


@pytest.fixture
def sample_srt_bytes():
    return SAMPLE_SRT


@pytest.fixture
def sample_segment_data():
    return [dict(item) for item in SAMPLE_SEGMENT_DATA]


@pytest.fixture
def sample_segments():
    return list(SAMPLE_SEGMENTS)


@pytest.fixture
def sample_srt_file(tmp_path):
    path = tmp_path / "scene.srt"
    path.write_bytes(SAMPLE_SRT)
    return path


@pytest.fixture
def sample_segments_file(tmp_path):
    path = tmp_path / "segments.json"
    path.write_text(json.dumps(SAMPLE_SEGMENT_DATA), encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch, tmp_path):
    """Keep SRT_SPLITTER_* variables and a stray config.ini out of tests."""
    for key in ("SRT_SPLITTER_NEWLINE_REPLACE", "SRT_SPLITTER_PADDING_START", "SRT_SPLITTER_PADDING_END"):
        monkeypatch.delenv(key, raising=False)
    work = tmp_path / "cwd"
    work.mkdir()
    monkeypatch.chdir(work)
