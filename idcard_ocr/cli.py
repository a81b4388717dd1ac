"""Command-line interface for identity document extraction.

Provides subcommands for extracting one Aadhaar/PAN pair to JSON and for
processing a folder of photos of one document kind into a CSV.
"""

import argparse
import csv
import json
import sys
import time
from pathlib import Path

from idcard_ocr.extraction.grammar import DocumentKind
from idcard_ocr.ocr.document_processor import (
    DocumentOutcome,
    IdentityDocumentProcessor,
)
from idcard_ocr.utils.config import load_config
from idcard_ocr.utils.logger import get_logger, setup_logging

logger = get_logger(__name__)

_SUPPORTED_EXTENSIONS = (
    "*.png",
    "*.jpg",
    "*.jpeg",
    "*.tiff",
    "*.tif",
    "*.bmp",
    "*.webp",
)
_CSV_COLUMNS = [
    "filename",
    "status",
    "name",
    "identifier_number",
    "confidence",
    "mode",
    "processing_time_s",
    "error",
]


def _find_documents(input_dir: Path) -> list[Path]:
    """Find all supported image files in a directory.

    Args:
        input_dir: Directory to scan for images.

    Returns:
        Sorted list of image file paths.
    """
    files: list[Path] = []
    for ext in _SUPPORTED_EXTENSIONS:
        files.extend(input_dir.glob(ext))
        files.extend(input_dir.glob(ext.upper()))
    return sorted(set(files))


def processed_artifact_path(processed_dir: Path, source: Path) -> Path:
    """Destination for the preprocessed copy of ``source`` in ``processed_dir``."""
    return processed_dir / f"{source.stem}-processed.png"


def outcome_to_dict(outcome: DocumentOutcome | None) -> dict[str, object] | None:
    """Flatten a document outcome into a JSON-friendly dictionary."""
    if outcome is None:
        return None
    fields = outcome.fields
    return {
        "status": outcome.status.value,
        "name": fields.name if fields else None,
        "identifier_number": fields.identifier_number if fields else None,
        "confidence": round(outcome.confidence, 2),
        "mode": outcome.mode.value if outcome.mode else None,
        "message": outcome.message,
    }


def process_folder(
    input_dir: Path,
    output_csv: Path,
    kind: DocumentKind,
    verbose: bool = False,
    processed_dir: Path | None = None,
) -> dict[str, int]:
    """Process every photo in a folder as one document kind.

    Args:
        input_dir: Directory containing document photos.
        output_csv: Path for the output CSV file.
        kind: Document kind shown in every photo.
        verbose: Whether to print per-file progress.
        processed_dir: Optional directory for preprocessed images.

    Returns:
        Summary dict with total, successful, and failed counts.
    """
    config = load_config()
    processor = IdentityDocumentProcessor(config)

    files = _find_documents(input_dir)
    if not files:
        logger.warning("No documents found in %s", input_dir)
        return {"total": 0, "successful": 0, "failed": 0}

    logger.info("Found %d %s documents to process", len(files), kind.value)

    results: list[dict[str, object]] = []
    successful = 0
    failed = 0

    for i, file_path in enumerate(files, 1):
        if verbose:
            print(f"Processing [{i}/{len(files)}]: {file_path.name}")

        start_time = time.time()
        try:
            outcome = processor.process(
                file_path,
                kind,
                file_path.name,
                processed_artifact_path(processed_dir, file_path)
                if processed_dir
                else None,
            )
        except Exception as exc:
            logger.error("Failed to process %s: %s", file_path.name, exc)
            results.append(
                {"filename": file_path.name, "status": "failed", "error": str(exc)}
            )
            failed += 1
            continue

        row = {"filename": file_path.name, "error": outcome.message}
        row.update(outcome_to_dict(outcome) or {})
        row["processing_time_s"] = round(time.time() - start_time, 2)
        results.append(row)
        successful += 1

    _write_csv(results, output_csv)
    logger.info("Results written to %s", output_csv)

    summary = {"total": len(files), "successful": successful, "failed": failed}
    _print_summary(summary, output_csv)
    return summary


def _write_csv(results: list[dict[str, object]], output_path: Path) -> None:
    """Write extraction results to a CSV file.

    Args:
        results: List of result dictionaries.
        output_path: Path for the output CSV file.
    """
    if not results:
        return

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=_CSV_COLUMNS, extrasaction="ignore")
        writer.writeheader()
        writer.writerows(results)


def _print_summary(summary: dict[str, int], output_csv: Path) -> None:
    """Print batch processing summary to stdout."""
    print(f"\n{'=' * 50}")
    print("Batch Processing Complete")
    print(f"{'=' * 50}")
    print(f"Total:      {summary['total']}")
    print(f"Successful: {summary['successful']}")
    print(f"Failed:     {summary['failed']}")
    print(f"Output:     {output_csv}")


def extract_pair(
    aadhaar: Path | None = None,
    pan: Path | None = None,
    processed_dir: Path | None = None,
) -> dict[str, object]:
    """Process an Aadhaar photo, a PAN photo, or both.

    Args:
        aadhaar: Path to the Aadhaar photo.
        pan: Path to the PAN photo.
        processed_dir: Optional directory for preprocessed images.

    Returns:
        Dictionary keyed by document kind; kinds not given map to ``None``.
    """
    config = load_config()
    processor = IdentityDocumentProcessor(config)
    sources = {DocumentKind.AADHAAR: aadhaar, DocumentKind.PAN: pan}
    processed_paths = None
    if processed_dir is not None:
        processed_paths = {
            kind: processed_artifact_path(processed_dir, path)
            for kind, path in sources.items()
            if path is not None
        }
    outcomes = processor.process_documents(sources, processed_paths=processed_paths)
    return {kind.value: outcome_to_dict(outcome) for kind, outcome in outcomes.items()}


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and dispatch to the appropriate command.

    Args:
        argv: Command-line arguments (defaults to sys.argv).
    """
    parser = argparse.ArgumentParser(
        description="Aadhaar and PAN card field extractor",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    extract_parser = subparsers.add_parser(
        "extract", help="Extract fields from an Aadhaar and/or PAN photo"
    )
    extract_parser.add_argument("--aadhaar", type=Path, help="Aadhaar card photo")
    extract_parser.add_argument("--pan", type=Path, help="PAN card photo")
    extract_parser.add_argument("-o", "--output", type=Path, help="Output JSON file")
    extract_parser.add_argument(
        "--save-processed",
        type=Path,
        metavar="DIR",
        help="Directory to save the preprocessed images in",
    )

    batch_parser = subparsers.add_parser(
        "batch", help="Process a folder of photos of one document kind"
    )
    batch_parser.add_argument("input_dir", type=Path, help="Input directory with photos")
    batch_parser.add_argument(
        "-k",
        "--kind",
        choices=[kind.value for kind in DocumentKind],
        required=True,
        help="Document kind shown in every photo",
    )
    batch_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=Path("results.csv"),
        help="Output CSV file (default: results.csv)",
    )
    batch_parser.add_argument(
        "-v", "--verbose", action="store_true", help="Verbose output"
    )
    batch_parser.add_argument(
        "--save-processed",
        type=Path,
        metavar="DIR",
        help="Directory to save the preprocessed images in",
    )

    args = parser.parse_args(argv)

    setup_logging()

    if args.command == "extract":
        if args.aadhaar is None and args.pan is None:
            print("Error: provide --aadhaar and/or --pan", file=sys.stderr)
            sys.exit(1)
        for path in (args.aadhaar, args.pan):
            if path is not None and not path.exists():
                print(f"Error: {path} does not exist", file=sys.stderr)
                sys.exit(1)
        result = extract_pair(args.aadhaar, args.pan, args.save_processed)
        output_str = json.dumps(result, indent=2)
        if args.output:
            args.output.parent.mkdir(parents=True, exist_ok=True)
            args.output.write_text(output_str)
            print(f"Output written to {args.output}")
        else:
            print(output_str)
    elif args.command == "batch":
        if not args.input_dir.is_dir():
            print(f"Error: {args.input_dir} is not a directory", file=sys.stderr)
            sys.exit(1)
        process_folder(
            args.input_dir,
            args.output,
            DocumentKind(args.kind),
            args.verbose,
            args.save_processed,
        )
    else:
        parser.print_help()
        sys.exit(0)


if __name__ == "__main__":
    main()
