#!/usr/bin/env python3
"""Run the scrapbook pipeline end-to-end.

Usage:
    python run_pipeline.py                  # ingest, lay out and render HTML
    python run_pipeline.py --from-stage 2   # start from layout (load journal.json from cache)
    python run_pipeline.py --from-stage 3   # start from render (load page_plan.json from cache)
    python run_pipeline.py --pdf            # also write a PDF (needs WeasyPrint)
"""
import argparse
import json
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent))

from settings import Settings
from models.journal import Journal
from models.page_plan import PagePlan
from pipeline import ingest, layout, render

logger = logging.getLogger("run_pipeline")


def _load_json(path: Path, model):
    data = json.loads(path.read_text(encoding="utf-8"))
    return model.model_validate(data)


def main(argv: list[str] | None = None) -> Path:
    parser = argparse.ArgumentParser()
    parser.add_argument("--from-stage", type=int, default=1, dest="from_stage",
                        help="Start from this stage number (1-3); earlier stages load from cache")
    parser.add_argument("--pdf", action="store_true",
                        help="Also render a PDF next to the HTML output")
    args = parser.parse_args(argv)

    settings = Settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
        datefmt="%H:%M:%S",
    )
    cache = settings.cache_dir  # data/.cache

    if args.from_stage <= 1:
        logger.info("=== Stage 1: Ingest ===")
        journal = ingest.run(settings)
    else:
        logger.info("=== Stage 1: loading from cache ===")
        journal = _load_json(cache / "journal.json", Journal)

    if args.from_stage <= 2:
        logger.info("=== Stage 2: Layout ===")
        plan = layout.run(settings, journal)
    else:
        logger.info("=== Stage 2: loading from cache ===")
        plan = _load_json(cache / "page_plan.json", PagePlan)

    logger.info("=== Stage 3: Render ===")
    output_path = render.run(settings, plan, pdf=args.pdf)

    logger.info("=== Done → %s ===", output_path)
    return output_path


if __name__ == "__main__":
    main()
