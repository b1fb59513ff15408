# postrev/cli.py

"""
Command line entry point: ingest a posts directory, group revisions and
write the JSON report.

    python -m postrev.cli posts/ --threshold 0.9 --diffs --output report.json
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from postrev.app.factory import get_revision_service
from postrev.settings import Settings, settings

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="postrev", description="Group blog post revisions and pick the canonical one."
    )
    ap.add_argument("posts_dir", nargs="?", default=None, help="Directory of posts")
    ap.add_argument("--glob", dest="file_glob", default=None, help="File pattern (default *.md)")
    ap.add_argument("--threshold", type=float, default=None)
    ap.add_argument("--metric", choices=["edit", "token"], default=None)
    ap.add_argument("--candidates", choices=["all", "bm25"], default=None)
    ap.add_argument("--workers", type=int, default=None)
    ap.add_argument("--diffs", action="store_true", help="Include unified diffs")
    ap.add_argument("--output", default=None, help="Report path (default stdout)")
    ap.add_argument("--store-url", default=None, help="Persist revisions to this SQLite URL")
    return ap


def apply_overrides(args: argparse.Namespace) -> Settings:
    """Copy of the global settings with the command line values applied."""
    overrides = {
        "posts_dir": args.posts_dir,
        "file_glob": args.file_glob,
        "similarity_threshold": args.threshold,
        "similarity_metric": args.metric,
        "candidate_mode": args.candidates,
        "max_workers": args.workers,
        "report_path": args.output,
    }
    update = {key: value for key, value in overrides.items() if value is not None}
    if args.diffs:
        update["include_diffs"] = True
    if args.store_url:
        update["store_backend"] = "sql"
        update["sqlite_url"] = args.store_url
    return settings.model_copy(update=update)


def main(argv: Optional[Sequence[str]] = None) -> int:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )
    args = build_parser().parse_args(argv)
    cfg = apply_overrides(args)

    if not 0.0 <= cfg.similarity_threshold <= 1.0:
        logger.error("Threshold must be in [0, 1].")
        return 2
    if cfg.max_workers < 1:
        logger.error("Workers must be >= 1.")
        return 2

    posts_dir = Path(cfg.posts_dir)
    if not posts_dir.is_dir():
        logger.error(f"Posts directory not found: {posts_dir}")
        return 2

    service = get_revision_service(cfg)
    report = service.run(
        posts_dir, pattern=cfg.file_glob, include_diffs=cfg.include_diffs
    )
    payload = report.model_dump_json(indent=2)

    if cfg.report_path:
        out = Path(cfg.report_path)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(payload + "\n", encoding="utf-8")
        logger.info(f"Report written to {out}")
    else:
        sys.stdout.write(payload + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
