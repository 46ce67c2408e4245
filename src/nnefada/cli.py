"""Command-line drivers.

- nnef2ada: print the Ada sources generated for a model
- nnef-tensor-info: print a tensor file, or compare two tensor files

Unrecognized options are reported on stderr and ignored. Failures are
reported on stderr and mapped to negative exit codes.
"""

__docformat__ = "restructuredtext"
__all__ = [
    "EXIT_GENERATION_ERROR",
    "EXIT_INFERENCE_ERROR",
    "EXIT_LOAD_ERROR",
    "EXIT_USAGE_ERROR",
    "main",
    "tensor_info_main",
]

import argparse
import sys
from collections.abc import Sequence
from pathlib import Path

from nnefada._nnefada import NNEFAda
from nnefada.load import GraphLoadError, ShapeInferenceError

EXIT_USAGE_ERROR = -1
EXIT_LOAD_ERROR = -2
EXIT_INFERENCE_ERROR = -3
EXIT_GENERATION_ERROR = -4


def _error(message: str) -> None:
    print(message, file=sys.stderr)


def _report_unknown(unknown: Sequence[str]) -> None:
    for arg in unknown:
        _error(f"Unrecognized option: {arg}; ignoring")


def _read_stdlib(paths: Sequence[str | None] | None) -> str | None:
    """Read and concatenate standard library override files.

    Missing or unreadable files are reported and skipped.
    """
    if not paths:
        return None
    sources = []
    for path in paths:
        if path is None:
            _error("Stdlib file name must be provided after --stdlib; ignoring option")
            continue
        try:
            sources.append(Path(path).read_text())
        except OSError as error:
            _error(f"file not found: {path} ({error.strerror})")
    return "\n".join(sources) if sources else None


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nnef2ada",
        description="Generate Ada sources from an NNEF or ONNX model.",
    )
    parser.add_argument("path", nargs="?", help="Path to the model (.onnx file or NNEF model)")
    parser.add_argument(
        "--stdlib",
        action="append",
        nargs="?",
        metavar="FILE",
        help="NNEF standard library override (repeatable)",
    )
    parser.add_argument("--output-dir", help="Also write the generated files to this directory")
    parser.add_argument("--verbose", action="store_true", help="Print progress to stderr")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the nnef2ada driver.

    :param argv: Command-line arguments (default: sys.argv[1:])
    :return: Exit code
    """
    args, unknown = _build_parser().parse_known_args(argv)
    _report_unknown(unknown)

    if args.path is None:
        _error("Input file name must be provided")
        return EXIT_USAGE_ERROR

    converter = NNEFAda(verbose=args.verbose)
    stdlib = _read_stdlib(args.stdlib)

    try:
        graph = converter.load(args.path, stdlib=stdlib)
    except ShapeInferenceError as error:
        _error(str(error))
        return EXIT_INFERENCE_ERROR
    except (GraphLoadError, OSError) as error:
        _error(str(error))
        return EXIT_LOAD_ERROR

    try:
        program = converter.generate(graph)
    except (KeyError, TypeError, ValueError) as error:
        _error(str(error))
        return EXIT_GENERATION_ERROR

    if args.output_dir is not None:
        converter.save(program, args.output_dir)

    print(program.render(), end="")
    return 0


def tensor_info_main(argv: Sequence[str] | None = None) -> int:
    """Run the nnef-tensor-info driver.

    One file prints its header and contents; two files print both headers
    and their relative difference.

    :param argv: Command-line arguments (default: sys.argv[1:])
    :return: Exit code
    """
    from nnefada.tensors import format_comparison, format_tensor, read_tensor

    parser = argparse.ArgumentParser(
        prog="nnef-tensor-info",
        description="Print a tensor file, or compare two tensor files.",
    )
    parser.add_argument("files", nargs="*", help="One (info) or two (compare) tensor files")
    args, unknown = parser.parse_known_args(argv)
    _report_unknown(unknown)

    if len(args.files) not in (1, 2):
        _error("Only 1 (info) or 2 (compare) parameters supported")
        return EXIT_USAGE_ERROR

    tensors = []
    for index, path in enumerate(args.files):
        try:
            tensors.append(read_tensor(path))
        except (OSError, ValueError) as error:
            _error(str(error))
            return EXIT_USAGE_ERROR if len(args.files) == 1 else EXIT_LOAD_ERROR - index

    if len(tensors) == 1:
        print(format_tensor(tensors[0]), end="")
    else:
        print(format_comparison(tensors[0], tensors[1]), end="")
    return 0
