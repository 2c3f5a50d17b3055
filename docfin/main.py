import argparse
import json
import sys
from pathlib import Path

from docfin.config.settings import Settings
from docfin.extraction.document_loader import decode_data_uri, load_file
from docfin.extraction.exceptions import DocumentLoadError, UnsupportedFormatError
from docfin.extraction.models import RawDocument
from docfin.logging.logger import Log
from docfin.processor.processor import build_processor


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="docfin",
        description="Extract transactions and a financial summary from a document.",
    )
    parser.add_argument("source", help="Path to a PDF, CSV or image file, or a data: URI")
    parser.add_argument("--mime-type", help="Override the MIME type guessed from the file name")
    parser.add_argument(
        "--summary",
        action="store_true",
        help="Produce a narrative summary instead of the transaction analysis",
    )
    return parser.parse_args(argv)


def _load(source: str, mime_type: str | None) -> RawDocument:
    if source.startswith("data:"):
        document = decode_data_uri(source)
        if mime_type:
            return RawDocument(content=document.content, declared_mime_type=mime_type)
        return document
    return load_file(Path(source), mime_type)


def main(argv: list[str] | None = None) -> int:
    """Entry point: load settings -> build processor -> analyze one document."""
    args = _parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level)

    try:
        document = _load(args.source, args.mime_type)
    except (FileNotFoundError, DocumentLoadError) as exc:
        Log.error(str(exc))
        return 1

    processor = build_processor(settings)
    try:
        if args.summary:
            payload = processor.summarize(document).to_payload()
        else:
            payload = processor.analyze(document).to_payload()
    except UnsupportedFormatError as exc:
        Log.error(str(exc))
        return 2

    json.dump(payload, sys.stdout, ensure_ascii=False, indent=2)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
