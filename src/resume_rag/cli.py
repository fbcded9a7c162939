"""Command-line entry point for the résumé ingestion job.

Run
---
    resume-rag-ingest --input data/resumeData.json
    resume-rag-ingest --dry-run --chunk-size 500 --chunk-overlap 100
"""

from __future__ import annotations

import argparse
import logging
import sys

from pydantic import ValidationError

from resume_rag.config import Settings
from resume_rag.errors import ConfigError, IngestionError

logger = logging.getLogger("resume_rag")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="resume-rag-ingest",
        description="Embed the JSON résumé into the vector store",
    )
    parser.add_argument("--input", help="Path to the résumé JSON (overrides RESUME_PATH)")
    parser.add_argument("--chunk-size", type=int, help="Maximum characters per chunk")
    parser.add_argument("--chunk-overlap", type=int, help="Overlapping characters between chunks")
    parser.add_argument("--delay", type=float, help="Seconds to pause between chunks")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Load and chunk only; do not touch the store",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )
    return parser


def load_settings(args: argparse.Namespace) -> Settings:
    """Build settings from the environment, then apply CLI overrides."""
    overrides = {
        "resume_path": args.input,
        "chunk_size": args.chunk_size,
        "chunk_overlap": args.chunk_overlap,
        "embed_delay_seconds": args.delay,
    }
    try:
        return Settings(**{k: v for k, v in overrides.items() if v is not None})
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc


def main(argv: list[str] | None = None) -> int:
    """Run the ingestion job; return the process exit status."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    from resume_rag.ingestion.pipeline import IngestionPipeline, plan_chunks

    logger.info("=== Starting embeddings generation ===")
    try:
        settings = load_settings(args)
        if args.dry_run:
            chunks = plan_chunks(
                settings.resume_path,
                settings.resume_sections,
                settings.chunk_size,
                settings.chunk_overlap,
            )
            for chunk in chunks:
                logger.info(
                    "%s #%d [%d chars] %r",
                    chunk.metadata.section,
                    chunk.index,
                    len(chunk.text),
                    chunk.preview(),
                )
            logger.info("Dry run: %d chunks would be stored", len(chunks))
            return 0

        report = IngestionPipeline.from_settings(settings).run()
    except IngestionError as exc:
        logger.error("Embeddings generation failed [%s]: %s", exc.category, exc, exc_info=True)
        return 1
    except Exception:
        logger.exception("Embeddings generation failed with an unexpected error")
        return 1

    logger.info(
        "=== Completed: %d chunks from %d documents, %s rows in collection ===",
        report.inserted,
        report.documents,
        "unknown" if report.final_count is None else report.final_count,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
