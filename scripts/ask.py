#!/usr/bin/env python3
"""
Run the search augmentation pipeline (or the full persona chat) for one query
from the command line. Uses the same .env configuration as the API.

Run from project root:

    python scripts/ask.py "北京今天天气怎么样"
    python scripts/ask.py --chat "最近有什么科技新闻"
    python scripts/ask.py --verbose "https://github.com/psf/requests"
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Project root on path so "app" resolves
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from app.agent.graph import run_search_pipeline
from app.services.chat_service import answer_chat


def main() -> None:
    parser = argparse.ArgumentParser(description="Ask the search augmentation pipeline one question.")
    parser.add_argument("query", help="User query, e.g. 北京今天天气怎么样")
    parser.add_argument(
        "--chat",
        action="store_true",
        help="Answer with the chat persona instead of printing the raw augmentation.",
    )
    parser.add_argument("--verbose", action="store_true", help="Log pipeline steps to stderr.")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING)

    if args.chat:
        out = asyncio.run(answer_chat(args.query))
        print(out["answer"])
        return

    try:
        out = asyncio.run(run_search_pipeline(args.query))
    except asyncio.TimeoutError:
        sys.exit("search pipeline timed out")
    service = out["service"].value if out["service"] else "-"
    print(f"service={service} source={out['source'] or '-'} fallback_used={out['fallback_used']}")
    print(out["answer"] or "(no augmentation)")


if __name__ == "__main__":
    main()
