"""
Module: cli

Purpose:
    Command line front end. Composes a paper from a JSONL question bank
    and a JSON request file and prints the result as JSON.

Usage:
    python -m paper_toolkit compose --bank questions.jsonl --request request.json
    python -m paper_toolkit compose ... --seed 7 --document --answer-key
    python -m paper_toolkit layouts

Exit codes:
    0 on success, 1 when the result carries an error, 2 on bad arguments
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional, Sequence

from paper_toolkit import __version__
from paper_toolkit.common.logging_utils import configure_logging, remove_handler
from paper_toolkit.composer import (
    ComposeConfig,
    InMemoryQuestionRepository,
    answer_key_to_dict,
    build_answer_key,
    build_document,
    compose_paper,
    document_to_dict,
)
from paper_toolkit.composer.layout import LAYOUT_ALIASES, LAYOUT_PROFILES
from paper_toolkit.core.errors import ComposeError

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="paper_toolkit",
        description="Compose exam papers from a question bank",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--log-level", default="WARNING", help="Logging level (default: WARNING)"
    )
    sub = parser.add_subparsers(dest="command", required=True)

    compose = sub.add_parser("compose", help="Compose a paper and print it as JSON")
    compose.add_argument("--bank", type=Path, required=True, help="Question bank (JSONL)")
    compose.add_argument("--request", type=Path, required=True, help="Request (JSON)")
    compose.add_argument("--seed", type=int, help="Override the request seed")
    compose.add_argument("--document", action="store_true", help="Include the render model")
    compose.add_argument("--answer-key", action="store_true", help="Include the MCQ answer key")
    compose.add_argument("--sequential", action="store_true", help="Select types one by one")
    compose.add_argument("--no-strict", action="store_true", help="Skip full schema validation")
    compose.add_argument("--indent", type=int, default=2, help="JSON indent")

    sub.add_parser("layouts", help="List layout profiles")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    handler = configure_logging(args.log_level)
    try:
        if args.command == "layouts":
            return _list_layouts()
        return _compose(args)
    finally:
        remove_handler(handler)


def _compose(args: argparse.Namespace) -> int:
    try:
        repository = InMemoryQuestionRepository.from_jsonl(args.bank, strict=not args.no_strict)
        payload = json.loads(args.request.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError, ComposeError) as e:
        logger.error(f"Cannot read input: {e}")
        _emit({"ok": False, "error": {"type": type(e).__name__, "message": str(e)}})
        return 1

    if args.seed is not None:
        payload["seed"] = args.seed

    config = ComposeConfig(parallel=not args.sequential, strict_validation=not args.no_strict)
    result = compose_paper(payload, repository, config=config)
    output: dict[str, Any] = result.to_dict()

    if result.paper is not None:
        ids = [qid for section in result.paper.sections for qid in section.question_ids]
        questions = repository.get_many(ids)
        if args.document:
            output["document"] = document_to_dict(build_document(result.paper, questions))
        if args.answer_key:
            output["answer_key"] = answer_key_to_dict(build_answer_key(result.paper, questions))

    _emit(output, indent=args.indent)
    return 0 if result.ok else 1


def _list_layouts() -> int:
    aliases: dict[str, list[str]] = {}
    for alias, name in LAYOUT_ALIASES.items():
        aliases.setdefault(name, []).append(alias)
    _emit([
        {**profile.to_dict(), "aliases": aliases.get(name, [])}
        for name, profile in LAYOUT_PROFILES.items()
    ])
    return 0


def _emit(data: Any, indent: int = 2) -> None:
    json.dump(data, sys.stdout, indent=indent, ensure_ascii=False)
    sys.stdout.write("\n")
