"""Command-line interface for the SRT Splitter.

WHY: Editors and batch scripts need to plan a split without a host
editor running: to check a subtitle file against a selection, or to
hand a plan to a host bridge later. The CLI wires together config
resolution, segment loading, the split pipeline and the pluggable
formatters behind a single command.

HOW: Uses argparse to accept the subtitle file, a segments JSON file,
config.ini / override flags, output format selection and output
directory. Runs the pipeline synchronously. Status messages go to
stderr; output files are saved next to the subtitle file (or to
--output-dir).

RULES:
- Positional argument: subtitle file path (.srt)
- --segments is required: JSON list of {start, end|length, ref, group}
- Config precedence: defaults < env < config.ini < flags
- --formats: comma-separated formatter keys (default: all registered)
- Output naming: {stem}{suffix}, numeric suffix for conflicts (-split-2.json)
- Status output goes to stderr (not stdout)
- Any SplitError → "Error: ..." on stderr and exit code 1
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from srt_splitter.config import SUBTITLE_EXTENSIONS, load_config
from srt_splitter.core.errors import MatchError, SplitError
from srt_splitter.formatters import FORMATTERS
from srt_splitter.formatters.base import FormatterOutput
from srt_splitter.pipeline import load_segments, split_subtitles


def _status(msg: str) -> None:
    """Print a status message to stderr.

    WHY: Status output must not pollute stdout so the CLI can be piped.
    """
    print(msg, file=sys.stderr, flush=True)


def _fail(msg: str) -> None:
    print("Error: {}".format(msg), file=sys.stderr)
    sys.exit(1)


def _resolve_output_path(
    stem: str,
    suffix: str,
    output_dir: Path,
) -> Path:
    """Resolve the output file path, adding numeric suffix on conflict.

    WHY: Users may run the splitter repeatedly on the same file while
    adjusting padding. Overwriting earlier output would lose the plan
    they compared against.

    RULES:
    - First attempt: {stem}{suffix} (e.g. episode01-split.json)
    - Conflict: split suffix at last dot, insert counter before extension
      (e.g. episode01-split-2.json)
    - Counter starts at 2 and increments
    """
    base_path = output_dir / "{}{}".format(stem, suffix)
    if not base_path.exists():
        return base_path

    dot_idx = suffix.rfind(".")
    if dot_idx > 0:
        suffix_name = suffix[:dot_idx]
        suffix_ext = suffix[dot_idx:]
    else:
        suffix_name = suffix
        suffix_ext = ""

    counter = 2
    while True:
        candidate = output_dir / "{}{}-{}{}".format(stem, suffix_name, counter, suffix_ext)
        if not candidate.exists():
            return candidate
        counter += 1


def _save_output(
    output: FormatterOutput,
    stem: str,
    output_dir: Path,
) -> Path:
    """Save a single formatter output to disk and return its path.

    String content is written as UTF-8; undecodable bytes carried over
    from the subtitle file are written back unchanged.
    """
    path = _resolve_output_path(stem, output.suffix, output_dir)

    if isinstance(output.content, bytes):
        path.write_bytes(output.content)
    else:
        path.write_bytes(output.content.encode("utf-8", errors="surrogateescape"))

    return path


def _parse_format_keys(formats: Optional[str]) -> List[str]:
    if not formats:
        return list(FORMATTERS.keys())
    keys = [f.strip() for f in formats.split(",") if f.strip()]
    for key in keys:
        if key not in FORMATTERS:
            available = ", ".join(sorted(FORMATTERS.keys()))
            _fail("Unknown format '{}'. Available formats: {}".format(key, available))
    return keys


def run(args: argparse.Namespace) -> List[Path]:
    """Execute the split and save every requested output.

    Returns the saved file paths. Exits the process with code 1 on any
    user-facing error.
    """
    subtitle_path = Path(args.subtitle_file).resolve()

    if not subtitle_path.is_file():
        _fail("File not found: {}".format(subtitle_path))

    ext = subtitle_path.suffix.lower()
    if ext not in SUBTITLE_EXTENSIONS:
        _fail("Unsupported file type '{}'. Supported formats: {}".format(
            ext, ", ".join(sorted(SUBTITLE_EXTENSIONS))
        ))

    output_dir = Path(args.output_dir).resolve() if args.output_dir else subtitle_path.parent
    if not output_dir.is_dir():
        _fail("Output directory does not exist: {}".format(output_dir))

    format_keys = _parse_format_keys(args.formats)

    config = load_config(
        args.config,
        overrides={
            "newline_replace": args.newline_replace,
            "padding_start": args.padding_start,
            "padding_end": args.padding_end,
        },
    )
    _status("Config: newline_replace={!r}, padding_start={}, padding_end={}".format(
        config.newline_replace, config.padding_start, config.padding_end,
    ))

    try:
        segments = load_segments(args.segments)
        _status("Loaded {} source segment(s)".format(len(segments)))
        plan = split_subtitles(subtitle_path, segments, config)
    except MatchError as e:
        _fail("{} ({} subtitle(s) placed before it)".format(e, len(e.placements)))
    except SplitError as e:
        _fail(str(e))

    _status("  {} placement(s), {} speaker lane(s)".format(
        len(plan.placements), len(plan.speakers),
    ))
    for speaker in plan.speakers:
        _status("    {}".format(speaker))

    _status("Formatting output...")
    saved_files: List[Path] = []
    stem = subtitle_path.stem
    for key in format_keys:
        formatter = FORMATTERS[key]()
        _status("  Running {} formatter...".format(formatter.name))
        for output in formatter.format(plan):
            saved_path = _save_output(output, stem, output_dir)
            saved_files.append(saved_path)
            _status("  Saved: {}".format(saved_path.name))

    _status("")
    _status("Done! Saved {} file(s) to {}".format(len(saved_files), output_dir))
    return saved_files


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI.

    WHY: Separating parser construction from main() makes the CLI
    testable, since tests can inspect the parser without running the pipeline.
    """
    parser = argparse.ArgumentParser(
        prog="srt_splitter",
        description="Split timeline audio items by subtitle cues, one lane per speaker.",
    )

    parser.add_argument(
        "subtitle_file",
        help="Path to the .srt subtitle file.",
    )

    parser.add_argument(
        "--segments",
        required=True,
        help="Path to a JSON file listing the selected source items "
             "({start, end|length, ref, group} objects, in timeline order).",
    )

    parser.add_argument(
        "--config",
        default=None,
        help="Path to a config.ini file (default: config.ini in CWD if it exists).",
    )

    parser.add_argument(
        "--newline-replace",
        default=None,
        help="String substituted for line breaks inside a cue (default: a space).",
    )

    parser.add_argument(
        "--padding-start",
        type=float,
        default=None,
        help="Seconds subtracted from every cue start (default: 0).",
    )

    parser.add_argument(
        "--padding-end",
        type=float,
        default=None,
        help="Seconds added to every cue end (default: 0).",
    )

    parser.add_argument(
        "--formats",
        default=None,
        help="Comma-separated list of output formats. "
             "Available: {}. Default: all.".format(", ".join(sorted(FORMATTERS.keys()))),
    )

    parser.add_argument(
        "--output-dir",
        default=None,
        help="Directory to save output files (default: same as subtitle file).",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the CLI.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    run(args)


if __name__ == "__main__":
    main()
