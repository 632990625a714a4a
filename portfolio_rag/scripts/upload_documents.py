"""
Upload local text and markdown files into the knowledge base.

Run: python -m portfolio_rag.scripts.upload_documents docs/resume.md docs/projects.txt --source resume

Directories are expanded to the .txt and .md files they contain.

Dependencies: portfolio_rag.application.services, portfolio_rag.api.deps
"""

import logging
import mimetypes
import sys
from pathlib import Path

from dotenv import load_dotenv

from portfolio_rag.application.services.document_service import (
    DEFAULT_SOURCE,
    SUPPORTED_EXTENSIONS,
    DocumentService,
)
from portfolio_rag.configs import get_settings
from portfolio_rag.core.exceptions import PortfolioRAGException
from portfolio_rag.observability.logger import configure_logging

logger = logging.getLogger(__name__)

USAGE = "Usage: python -m portfolio_rag.scripts.upload_documents PATH... [--source SOURCE]"


def parse_args(argv: list[str]) -> tuple[list[Path], str]:
    """Split argv into file paths and the --source value."""
    source = DEFAULT_SOURCE
    paths: list[Path] = []
    args = iter(argv)
    for arg in args:
        if arg == "--source":
            source = next(args, "") or DEFAULT_SOURCE
        else:
            paths.append(Path(arg))
    return paths, source


def collect_files(paths: list[Path]) -> list[Path]:
    files: list[Path] = []
    for path in paths:
        if path.is_dir():
            files.extend(
                sorted(p for p in path.rglob("*") if p.is_file() and p.suffix.lower() in SUPPORTED_EXTENSIONS)
            )
        else:
            files.append(path)
    return files


def upload_files(service: DocumentService, files: list[Path], source: str) -> tuple[int, int]:
    """
    Upload files one by one, continuing past failures.

    Returns:
        tuple[int, int]: Number of successful and failed uploads
    """
    succeeded = failed = 0
    for path in files:
        try:
            data = path.read_bytes()
            result = service.upload(path.name, mimetypes.guess_type(path.name)[0], data, source)
        except (OSError, PortfolioRAGException) as e:
            failed += 1
            logger.error(f"FAILED {path}: {e}")
            continue
        succeeded += 1
        logger.info(f"OK {path} ({result.chunks_processed} chunks)")
    return succeeded, failed


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    argv = sys.argv[1:] if argv is None else argv
    paths, source = parse_args(argv)
    if not paths:
        print(USAGE)
        return 1

    load_dotenv()
    settings = get_settings()
    configure_logging(settings.log_level)

    from portfolio_rag.api.deps.dependencies import ServiceContainer

    if settings.vector_store.store_type.lower() == "memory":
        logger.warning("Vector store type is 'memory'; uploads will not outlive this process")

    service = ServiceContainer(settings).document_service
    files = collect_files(paths)
    succeeded, failed = upload_files(service, files, source)
    logger.info(f"Upload summary: {succeeded} succeeded, {failed} failed")
    return 0 if failed == 0 else 1


if __name__ == "__main__":
    sys.exit(main())
