from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path


def _bootstrap_import_path() -> None:
    root = Path(__file__).resolve().parents[1]
    if str(root) not in sys.path:
        sys.path.insert(0, str(root))


_bootstrap_import_path()

from skillgap.config import settings  # noqa: E402
from skillgap.database import SessionLocal  # noqa: E402
from skillgap.services import analysis_service  # noqa: E402
from skillgap.services.errors import SkillGapError  # noqa: E402
from skillgap.services.generator_client import ChatCompletionsGenerator  # noqa: E402


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Recompute (or just print) the stored skill gap analysis for a user/role.")
    parser.add_argument("--user-id", type=int, required=True)
    parser.add_argument("--role-id", required=True)
    parser.add_argument("--read-only", action="store_true", help="Print the latest stored analysis without recomputing.")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s %(message)s")

    with SessionLocal() as db:
        try:
            if args.read_only:
                analysis = analysis_service.get_latest(db, args.user_id, args.role_id)
            else:
                analysis = analysis_service.recompute(db, args.user_id, args.role_id, ChatCompletionsGenerator(settings))
        except SkillGapError as exc:
            print(f"error: {exc}", file=sys.stderr)
            return 1

    if analysis is None:
        print("no analysis stored for this user/role")
        return 1
    print(json.dumps(analysis.model_dump(mode="json"), indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
