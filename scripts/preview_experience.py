#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
import json
import random
from pathlib import Path


def _repo_root() -> Path:
    return Path(__file__).resolve().parents[1]


def _bootstrap_pythonpath() -> None:
    import sys

    src = _repo_root() / "src"
    if str(src) not in sys.path:
        sys.path.insert(0, str(src))


_bootstrap_pythonpath()

from experience_x.config import get_settings  # noqa: E402
from experience_x.service.experience import FALLBACK_MODEL, ExperienceDocument, ExperienceOrchestrator  # noqa: E402


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Render an immersive experience for a query.")
    parser.add_argument("query", help="Free-text query.")
    parser.add_argument(
        "--offline",
        action="store_true",
        help="Skip the remote model and render the local fallback document only.",
    )
    parser.add_argument(
        "--tier",
        choices=["simple", "enhanced"],
        default="enhanced",
        help="Fallback tier used with --offline.",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for headers, footers and identifiers.")
    parser.add_argument("--output-json", default="", help="Write the full response payload to this JSON file.")
    return parser.parse_args()


async def render(args: argparse.Namespace) -> ExperienceDocument:
    orchestrator = ExperienceOrchestrator(get_settings(), rng=random.Random(args.seed))
    if args.offline:
        return ExperienceDocument(
            response=orchestrator.compose_fallback(args.query, tier=args.tier),
            query=args.query,
            model=FALLBACK_MODEL,
        )
    return await orchestrator.generate(args.query)


def write_report(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


async def main() -> int:
    args = parse_args()
    query = args.query.strip()
    if not query:
        print("[experience] query is required")
        return 2
    args.query = query

    document = await render(args)
    print(document.response)
    print(f"[experience] model={document.model} degraded={document.degraded}")
    if document.note:
        print(f"[experience] note={document.note}")
    if document.error:
        print(f"[experience] error={document.error}")
    if args.output_json:
        json_path = Path(args.output_json)
        write_report(json_path, json.dumps(document.as_payload(), ensure_ascii=False, indent=2))
        print(f"[experience] json={json_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(asyncio.run(main()))
