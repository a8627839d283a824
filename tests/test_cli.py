"""Tests for the command-line interface.

HOW: main() is called with an explicit argv, the way the console script
calls it with sys.argv. Outputs land beside the sample subtitle file in
tmp_path; failures are asserted through SystemExit and stderr.
"""

import json

import pytest

from srt_splitter.cli import _resolve_output_path, build_parser, main


def _argv(srt_file, segments_file, *extra):
    return [str(srt_file), "--segments", str(segments_file), *extra]


class TestParser:

    def test_segments_required(self, capsys):
        with pytest.raises(SystemExit) as excinfo:
            build_parser().parse_args(["scene.srt"])
        assert excinfo.value.code == 2

    def test_padding_flags_are_floats(self):
        args = build_parser().parse_args(
            ["scene.srt", "--segments", "s.json", "--padding-start", "0.5"]
        )
        assert args.padding_start == 0.5
        assert args.padding_end is None


class TestResolveOutputPath:

    def test_no_conflict(self, tmp_path):
        assert _resolve_output_path("scene", "-split.json", tmp_path) == tmp_path / "scene-split.json"

    def test_conflicts_get_counter(self, tmp_path):
        (tmp_path / "scene-split.json").write_text("{}")
        (tmp_path / "scene-split-2.json").write_text("{}")
        assert _resolve_output_path("scene", "-split.json", tmp_path) == tmp_path / "scene-split-3.json"


class TestMain:

    def test_writes_all_formats(self, sample_srt_file, sample_segments_file, capsys):
        main(_argv(sample_srt_file, sample_segments_file))

        folder = sample_srt_file.parent
        assert (folder / "scene-split.json").is_file()
        assert (folder / "scene-split.txt").is_file()
        assert (folder / "scene-00-unlabeled.srt").is_file()
        assert (folder / "scene-01-Alice.srt").is_file()
        assert (folder / "scene-02-Bob.srt").is_file()

        plan = json.loads((folder / "scene-split.json").read_text(encoding="utf-8"))
        assert plan["source"] == "scene.srt"
        assert len(plan["placements"]) == 4

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Done! Saved 5 file(s)" in captured.err

    def test_selected_formats_and_output_dir(self, sample_srt_file, sample_segments_file, tmp_path):
        out = tmp_path / "out"
        out.mkdir()
        main(_argv(
            sample_srt_file, sample_segments_file,
            "--formats", "plain_text", "--output-dir", str(out),
        ))
        assert [p.name for p in out.iterdir()] == ["scene-split.txt"]

    def test_flags_override_config_file(self, sample_srt_file, sample_segments_file, tmp_path):
        config = tmp_path / "custom.ini"
        config.write_text('newline_replace = "|"\npadding_end = 0.5\n', encoding="utf-8")
        main(_argv(
            sample_srt_file, sample_segments_file,
            "--config", str(config), "--padding-end", "0.25", "--formats", "plan_json",
        ))
        plan = json.loads((sample_srt_file.parent / "scene-split.json").read_text(encoding="utf-8"))
        assert plan["placements"][0]["end"] == pytest.approx(2.75)
        assert plan["placements"][3]["text"] == "Who's there?|Show yourself!"

    def test_repeat_run_does_not_overwrite(self, sample_srt_file, sample_segments_file):
        argv = _argv(sample_srt_file, sample_segments_file, "--formats", "plan_json")
        main(argv)
        main(argv)
        assert (sample_srt_file.parent / "scene-split-2.json").is_file()


class TestMainErrors:

    def _assert_fails(self, argv, capsys, message):
        with pytest.raises(SystemExit) as excinfo:
            main(argv)
        assert excinfo.value.code == 1
        assert message in capsys.readouterr().err

    def test_missing_subtitle(self, tmp_path, sample_segments_file, capsys):
        self._assert_fails(
            _argv(tmp_path / "missing.srt", sample_segments_file), capsys, "File not found",
        )

    def test_wrong_extension(self, tmp_path, sample_segments_file, capsys):
        path = tmp_path / "scene.vtt"
        path.write_text("WEBVTT\n")
        self._assert_fails(_argv(path, sample_segments_file), capsys, "Unsupported file type")

    def test_unknown_format(self, sample_srt_file, sample_segments_file, capsys):
        self._assert_fails(
            _argv(sample_srt_file, sample_segments_file, "--formats", "docx"),
            capsys, "Unknown format 'docx'",
        )

    def test_mixed_groups(self, sample_srt_file, tmp_path, capsys):
        segments = tmp_path / "mixed.json"
        segments.write_text(json.dumps([
            {"start": 0, "end": 10, "group": 1},
            {"start": 10, "end": 20, "group": 2},
        ]))
        self._assert_fails(
            _argv(sample_srt_file, segments), capsys, "Selected items span more than one track",
        )

    def test_unmatched_cue(self, sample_srt_file, tmp_path, capsys):
        segments = tmp_path / "short.json"
        segments.write_text(json.dumps([{"start": 0, "end": 10}]))
        self._assert_fails(
            _argv(sample_srt_file, segments), capsys,
            "No source item found at the position of subtitle 3 (2 subtitle(s) placed before it)",
        )
        assert not (sample_srt_file.parent / "scene-split.json").exists()
