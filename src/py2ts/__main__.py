"""CLI entry point: run `py2ts file.py` or `python -m py2ts file.py`."""

import logging
import sys
from pathlib import Path

logger = logging.getLogger(__name__)


def main(argv=None) -> int:
    import argparse
    from .backend.formatter import PrettierFormatter
    from .compiler.driver import Translator
    from .shared.errors import format_diagnostic
    from .shared.serialization import serialize_ast
    from .utils.config import SOURCE_FILE_EXTENSION
    from .utils.io_utils import default_output_path, read_source_file, write_output_file

    parser = argparse.ArgumentParser(prog="py2ts", description="Translate a Python module to TypeScript.")
    parser.add_argument("file", type=Path, help="Path to .py source file")
    parser.add_argument("-o", "--output", type=Path, help="Write TypeScript here instead of stdout")
    parser.add_argument("-w", "--write", action="store_true", help="Write next to the source as .ts")
    parser.add_argument("--no-format", action="store_true", help="Skip prettier; emit blocks as generated")
    parser.add_argument("--dump-cst", action="store_true", help="Print the concrete syntax tree and exit")
    parser.add_argument("--dump-ast", action="store_true", help="Print the AST as an S-expression and exit")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    path = args.file
    if not path.exists():
        sys.stderr.write(f"py2ts: error: file not found: {path}\n")
        return 1
    if not path.is_file():
        sys.stderr.write(f"py2ts: error: not a file: {path}\n")
        return 1
    if path.suffix != SOURCE_FILE_EXTENSION:
        logger.warning("%s does not look like a Python module", path)

    try:
        source = read_source_file(path)
    except (OSError, UnicodeDecodeError) as e:
        sys.stderr.write(f"py2ts: error: could not read file: {e}\n")
        return 1

    formatter = None if args.no_format or args.dump_cst or args.dump_ast else PrettierFormatter()
    result = Translator(formatter=formatter).translate(source, str(path))

    if args.dump_cst and result.cst is not None:
        sys.stdout.write(result.cst.pretty())
        return 0
    if args.dump_ast and result.program is not None:
        sys.stdout.write(serialize_ast(result.program) + "\n")
        return 0

    if not result.success:
        sys.stderr.write(format_diagnostic(result.error, source, color=sys.stderr.isatty()) + "\n")
        return 1

    output = args.output or (default_output_path(path) if args.write else None)
    if output is not None:
        write_output_file(output, result.text)
        logger.info("wrote %s", output)
    else:
        sys.stdout.write(result.text)
    return 0


if __name__ == "__main__":
    sys.exit(main())
