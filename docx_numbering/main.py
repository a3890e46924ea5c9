"""Entry-point for inspecting and extending the numbering of a DOCX file."""
from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional, Sequence

from docx_numbering.model.document_model import NumberingDocument
from docx_numbering.model.numbering_model import StyleKind
from docx_numbering.parser.docx_loader import DocxPackage
from docx_numbering.utils.debug import DebugDumper
from docx_numbering.utils.logger import get_logger, set_level

LOGGER = get_logger(__name__)


def load_document(docx_path: Path) -> tuple[DocxPackage, NumberingDocument]:
    """Open a DOCX package and wrap it in a numbering document."""
    package = DocxPackage.load(docx_path)
    return package, NumberingDocument.from_package(package)


def describe(document: NumberingDocument) -> List[str]:
    """Return one line per numbering instance and per list found in the body."""
    lines = []
    for instance, template in document.catalog.iter_bindings():
        if instance.template_id is None:
            lines.append(f"numId={instance.instance_id} -> (no abstractNumId)")
            continue
        if template is None:
            lines.append(f"numId={instance.instance_id} -> abstractNumId={instance.template_id} (missing)")
            continue
        kind = template.style_kind.value if template.style_kind else "unknown"
        lines.append(f"numId={instance.instance_id} -> abstractNumId={template.template_id} ({kind})")
    for numbered_list in document.lists():
        lines.append(f"list numId={numbered_list.num_id}: {len(numbered_list.items)} paragraph(s)")
    return lines


def main(
    docx_file: str,
    output: Optional[str] = None,
    add_lists: Sequence[str] = (),
    debug_dir: Optional[str] = None,
) -> List[str]:
    """Print the numbering summary, optionally mint new lists and save a copy."""
    docx_path = Path(docx_file).resolve()
    if not docx_path.exists():
        raise FileNotFoundError(f"DOCX file not found: {docx_path}")

    LOGGER.info("Reading numbering of %s", docx_path.name)
    package, document = load_document(docx_path)

    for style in add_lists:
        document.create_list(StyleKind(style))

    lines = describe(document)
    for line in lines:
        print(line)

    if add_lists:
        output_path = Path(output).resolve() if output else docx_path
        document.save()
        package.save(output_path)
        LOGGER.info("Saved %d new list definition(s) into %s", len(add_lists), output_path)

    if debug_dir:
        DebugDumper(Path(debug_dir)).dump(document.catalog)
    return lines


def run(argv: Optional[Sequence[str]] = None) -> None:
    """Console entry point."""
    parser = argparse.ArgumentParser(description="Inspect and extend list numbering definitions in a DOCX file")
    parser.add_argument("docx_file", help="Path to the input .docx file")
    parser.add_argument(
        "--add-list",
        action="append",
        default=[],
        choices=[kind.value for kind in StyleKind],
        help="Mint a new numbering definition of this style (repeatable)",
    )
    parser.add_argument("--output", help="Where to write the modified document (defaults to in-place)")
    parser.add_argument("--debug-dir", help="Directory to dump the numbering catalog as JSON")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")

    args = parser.parse_args(argv)
    if args.verbose:
        set_level(logging.DEBUG)
    main(args.docx_file, output=args.output, add_lists=args.add_list, debug_dir=args.debug_dir)


if __name__ == "__main__":  # pragma: no cover
    run()
