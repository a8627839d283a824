"""Core parsing, attribution and matching modules.

WHY: The core package contains the stable heart of the splitter:
the IR dataclasses and the algorithms that build them. These are
consumed by the pipeline, every formatter and every timeline host.

HOW: ir.py defines the data structures, parser.py turns SRT bytes into
cues, normalizer.py and speaker.py clean and attribute cue text,
matcher.py places cues inside source segments and assigns lanes.
errors.py holds the exception hierarchy shared by all of them.

RULES:
- IR dataclasses are the contract; change with care
- Core modules are pure: no logging, no host calls, no config loading
- The only I/O in the core is read_srt()
"""
