"""Package entry point for ``python -m srt_splitter``.

WHY: Users run the splitter as ``python -m srt_splitter episode.srt
--segments items.json`` for CLI mode, or ``python -m srt_splitter --api``
to serve the HTTP API.

RULES:
- ``--api`` starts the HTTP API with uvicorn
- Without ``--api``, falls through to the CLI
"""

import sys

if __name__ == "__main__":
    if "--api" in sys.argv:
        from srt_splitter.server.app import run_api
        run_api()
    else:
        from srt_splitter.cli import main
        main()
