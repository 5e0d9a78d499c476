from __future__ import annotations

import argparse
import asyncio
import json
from typing import Any, Optional

from app.core.blob_store import build_blob_store
from app.core.config import settings
from app.modules.conjugation.generator import AgentTextGenerator, TextGenerator
from app.modules.conjugation.models import TenseId
from app.modules.conjugation.repository import QuestionSetRepository
from app.modules.conjugation.service import QuestionSetGenerationService


def _build_repository() -> QuestionSetRepository:
    return QuestionSetRepository(
        build_blob_store(settings.blob),
        prefix=settings.blob.question_set_prefix,
        index_write_retries=settings.blob.index_write_retries,
        index_retry_backoff=settings.blob.index_retry_backoff,
    )


def _parse_tenses(raw: Optional[str]) -> Optional[list[TenseId]]:
    keys = [k.strip() for k in (raw or "").split(",") if k.strip()]
    if not keys:
        return None
    try:
        return [TenseId(k) for k in keys]
    except ValueError as e:
        raise SystemExit(f"Unknown tense id: {e}")


def _dump(obj: Any) -> None:
    print(json.dumps(obj, indent=2, ensure_ascii=False))


async def _run(
    args: argparse.Namespace,
    repository: QuestionSetRepository,
    generator: Optional[TextGenerator] = None,
) -> int:
    if args.cmd == "list":
        index = await repository.get_index(args.username)
        _dump(index.model_dump(mode="json", by_alias=True))
        return 0
    if args.cmd == "show":
        qs = await repository.get_set(args.id, args.username)
        if qs is None:
            print(f"Question set {args.id} not found")
            return 1
        _dump(qs.model_dump(mode="json", by_alias=True))
        return 0
    if args.cmd == "generate":
        svc = QuestionSetGenerationService(
            repository,
            generator or AgentTextGenerator(),
            max_count=settings.generation.max_question_count,
        )
        try:
            result = await svc.generate_question_set(
                title=args.title,
                count=args.count,
                tenses=_parse_tenses(args.tenses),
                owner_username=args.username,
            )
        except ValueError as e:
            raise SystemExit(str(e))
        _dump(result.model_dump(mode="json", by_alias=True))
        return 0 if result.ok else 1
    if args.cmd == "delete":
        if not await repository.delete_set(args.id, args.username):
            print(f"Question set {args.id} not found")
            return 1
        print(f"Deleted {args.id}")
        return 0
    if args.cmd == "check":
        report = await repository.check_consistency()
        _dump(
            {
                "ok": report.ok,
                "orphaned_set_ids": report.orphaned_set_ids,
                "dangling_entries": [
                    e.model_dump(mode="json") for e in report.dangling_entries
                ],
            }
        )
        return 0 if report.ok else 1
    return 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="question-sets", description="Conjugation question set tools"
    )
    sub = parser.add_subparsers(dest="cmd", required=True)

    ls = sub.add_parser("list", help="List index entries")
    ls.add_argument("--username", "-u", help="Only sets owned by this user")

    sh = sub.add_parser("show", help="Print one question set")
    sh.add_argument("id")
    sh.add_argument("--username", "-u")

    g = sub.add_parser("generate", help="Generate and store a new question set")
    g.add_argument("--username", "-u", required=True)
    g.add_argument(
        "--count", "-n", type=int, default=settings.generation.default_question_count
    )
    g.add_argument("--tenses", help="Comma-separated tense ids (default: all)")
    g.add_argument("--title", help="Set title (default: '<count> preguntas')")

    d = sub.add_parser("delete", help="Delete a set owned by the given user")
    d.add_argument("id")
    d.add_argument("--username", "-u", required=True)

    sub.add_parser("check", help="Report orphaned blobs and dangling index entries")
    return parser


def main(
    argv: list[str] | None = None,
    *,
    repository: Optional[QuestionSetRepository] = None,
    generator: Optional[TextGenerator] = None,
) -> int:
    args = build_parser().parse_args(argv)
    return asyncio.run(_run(args, repository or _build_repository(), generator))


if __name__ == "__main__":
    raise SystemExit(main())
