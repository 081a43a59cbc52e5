"""Command-line interface for structjson.

WHY: Users need a quick way to see how a JSON document is classified,
to normalise it through the codec, or to compare the codec's output with
the native-interop path — without writing Python.

HOW: Uses argparse to accept an input file (or stdin), codec options and
an output mode. The document is decoded with the classifier into a Value
tree, optionally validated against a JSON Schema (jsonschema, applied to
the native form), then written back as codec JSON, native JSON, or an
indented kind tree. Status messages go through logging to stderr.

RULES:
- Positional argument: input file path; ``-`` or omitted reads stdin
- Output modes: codec JSON (default), --native, --describe
- Options default to the STRUCTJSON_* settings in structjson.config
- Exit status: 0 success, 1 conversion/validation/I/O error, 2 usage error
- Errors are reported as one "Error: ..." line on stderr
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

import jsonschema

from structjson import __version__
from structjson.adapters.native import to_native
from structjson.codec.classifier import decode_value, encode_value
from structjson.config import (
    DEFAULT_ENSURE_ASCII,
    DEFAULT_MAX_DEPTH,
    DEFAULT_NONFINITE,
    DEFAULT_SORT_KEYS,
    LOG_LEVEL,
    NONFINITE_POLICIES,
)
from structjson.core.errors import ConversionError
from structjson.core.options import CodecOptions
from structjson.core.value import ListValue, MapValue, Value

logger = logging.getLogger(__name__)


def _status(msg: str) -> None:
    """Print a status message to stderr.

    WHY: Status output must not pollute stdout so the CLI can be piped.
    """
    print(msg, file=sys.stderr, flush=True)


def _read_input(source: Optional[str]) -> bytes:
    if source is None or source == "-":
        stream = getattr(sys.stdin, "buffer", sys.stdin)
        data = stream.read()
        return data.encode("utf-8") if isinstance(data, str) else data
    return Path(source).read_bytes()


def describe(value: Value, options: CodecOptions) -> List[str]:
    """Render a Value tree as indented lines, one per node.

    WHY: Seeing which variant each token became is the quickest way to
    check the classifier's decisions on a real document.

    RULES:
    - Containers show their kind and size; scalars show kind and JSON text
    - Map members are labelled with their JSON-quoted key, list elements
      with ``[index]``
    - Two spaces of indent per nesting level
    """
    lines: List[str] = []
    _describe_node(value, "", 0, lines, options)
    return lines


def _describe_node(
    value: Value,
    label: str,
    level: int,
    lines: List[str],
    options: CodecOptions,
) -> None:
    prefix = "  " * level + label
    if isinstance(value, MapValue):
        count = len(value.fields)
        lines.append("{}map ({} field{})".format(prefix, count, "" if count == 1 else "s"))
        keys = sorted(value.fields) if options.sort_keys else list(value.fields)
        for key in keys:
            key_label = json.dumps(key, ensure_ascii=options.ensure_ascii) + ": "
            _describe_node(value.fields[key], key_label, level + 1, lines, options)
    elif isinstance(value, ListValue):
        count = len(value.values)
        lines.append("{}list ({} item{})".format(prefix, count, "" if count == 1 else "s"))
        for index, item in enumerate(value.values):
            _describe_node(item, "[{}]: ".format(index), level + 1, lines, options)
    else:
        lines.append("{}{} {}".format(prefix, value.kind.value, encode_value(value, options)))


def _render(value: Value, args: argparse.Namespace, options: CodecOptions) -> str:
    if args.describe:
        return "\n".join(describe(value, options))
    if args.native:
        return json.dumps(
            to_native(value, options),
            ensure_ascii=options.ensure_ascii,
            sort_keys=options.sort_keys,
            separators=(",", ":"),
            allow_nan=False,
        )
    return encode_value(value, options)


def _validate(value: Value, schema_path: str, options: CodecOptions) -> None:
    schema = json.loads(Path(schema_path).read_text(encoding="utf-8"))
    jsonschema.validate(instance=to_native(value, options), schema=schema)
    logger.info("Document matches schema %s", schema_path)


def run(args: argparse.Namespace) -> int:
    """Run one conversion described by parsed arguments.

    Returns:
        Process exit status (0 on success, 1 on any handled failure).
    """
    try:
        options = CodecOptions(
            max_depth=args.max_depth,
            nonfinite=args.nonfinite,
            sort_keys=args.sort_keys,
            ensure_ascii=args.ensure_ascii,
        )
        data = _read_input(args.input_file)
        logger.info("Read %d bytes from %s", len(data), args.input_file or "<stdin>")

        value = decode_value(data, options)
        logger.info("Decoded top-level %s", value.kind.value)

        if args.schema:
            _validate(value, args.schema, options)

        text = _render(value, args, options)
        if args.output:
            Path(args.output).write_text(text + "\n", encoding="utf-8")
            logger.info("Saved: %s", args.output)
        else:
            sys.stdout.write(text + "\n")
            sys.stdout.flush()
    except jsonschema.ValidationError as e:
        _status("Error: schema validation failed: {}".format(e.message))
        return 1
    except jsonschema.SchemaError as e:
        _status("Error: invalid schema: {}".format(e.message))
        return 1
    except (ConversionError, ValueError, OSError) as e:
        # ValueError also covers bad option values and a malformed schema file.
        _status("Error: {}".format(e))
        return 1
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI.

    WHY: Separating parser construction from main() makes the CLI
    testable — tests can inspect the parser without running a conversion.
    """
    parser = argparse.ArgumentParser(
        prog="structjson",
        description="Classify a JSON document into generic values and write it "
                    "back as normalised JSON, native JSON, or a kind tree.",
    )

    parser.add_argument(
        "input_file",
        nargs="?",
        default=None,
        help="Path to the JSON document ('-' or omitted: read stdin).",
    )

    parser.add_argument(
        "-o", "--output",
        default=None,
        help="Write the result to this file instead of stdout.",
    )

    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--native",
        action="store_true",
        help="Write json.dumps of the native form instead of the codec encoding.",
    )
    mode.add_argument(
        "--describe",
        action="store_true",
        help="Write an indented tree of value kinds instead of JSON.",
    )

    parser.add_argument(
        "--schema",
        default=None,
        help="Validate the document's native form against this JSON Schema file.",
    )

    parser.add_argument(
        "--sort-keys",
        action=argparse.BooleanOptionalAction,
        default=DEFAULT_SORT_KEYS,
        help="Emit map members in sorted key order (default: %(default)s).",
    )

    parser.add_argument(
        "--ensure-ascii",
        action=argparse.BooleanOptionalAction,
        default=DEFAULT_ENSURE_ASCII,
        help="Escape non-ASCII characters in output (default: %(default)s).",
    )

    parser.add_argument(
        "--nonfinite",
        choices=sorted(NONFINITE_POLICIES),
        default=DEFAULT_NONFINITE,
        help="How NaN/Infinity numbers are written (default: %(default)s).",
    )

    parser.add_argument(
        "--max-depth",
        type=int,
        default=DEFAULT_MAX_DEPTH,
        help="Maximum container nesting depth (default: %(default)s).",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log progress and classifier decisions to stderr.",
    )

    parser.add_argument(
        "--version",
        action="version",
        version="%(prog)s {}".format(__version__),
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the CLI.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    - Returns the exit status; __main__ passes it to sys.exit
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else LOG_LEVEL,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    return run(args)


if __name__ == "__main__":
    sys.exit(main())
