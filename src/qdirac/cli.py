"""Line-based driver: evaluate one Dirac notation expression per line.

Usage::

    echo "|0><0| + |1><1|" | qdirac
    qdirac --emit source states.txt
    python -m qdirac.cli --keep-going --verbose states.txt

Each non-blank line is parsed and evaluated. Syntax errors are reported on
stdout and the driver moves on to the next line. Fatal evaluation errors
(shape mismatches, input nested too deeply) are reported on stderr and
stop the run with exit status 1, unless ``--keep-going`` is given.
"""

from __future__ import annotations

import argparse
import fileinput
import logging
import sys
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import TextIO

from qdirac.backend import configure_backend, get_backend_info
from qdirac.codegen import to_source, to_tensor_data
from qdirac.core.errors import DiracSyntaxError, EvaluationError, NestingError
from qdirac.core.tensor import Tensor
from qdirac.notation.parser import dirac

logger = logging.getLogger(__name__)

_EMIT_CHOICES = ("tensor", "data", "source")


@dataclass
class DriverConfig:
    """Options for the line driver.

    Attributes:
        emit:       Output form: ``"tensor"`` (display form), ``"data"``
                    (shape and ``(re, im)`` pairs) or ``"source"`` (literal).
        keep_going: Continue after a fatal evaluation error.
        backend:    JAX backend: cpu | cuda | gpu | tpu | auto.
        verbose:    Log at DEBUG level.
        files:      Input files; empty means stdin.
    """

    emit: str = "tensor"
    keep_going: bool = False
    backend: str = "auto"
    verbose: bool = False
    files: list[str] = field(default_factory=list)


def _parse_args(argv: Sequence[str] | None) -> DriverConfig:
    parser = argparse.ArgumentParser(
        prog="qdirac",
        description="Evaluate Dirac notation, one expression per line",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "files",
        nargs="*",
        help="Files to read expressions from (default: stdin)",
    )
    parser.add_argument(
        "--emit", "-e",
        choices=_EMIT_CHOICES,
        default="tensor",
        help="Output form (default: tensor)",
    )
    parser.add_argument(
        "--keep-going", "-k",
        action="store_true",
        help="Continue after evaluation errors instead of stopping",
    )
    parser.add_argument(
        "--backend", "-b",
        default="auto",
        help="Backend: cpu | cuda | gpu | tpu | auto (default: auto)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log parsed expressions and backend details",
    )
    args = parser.parse_args(argv)
    return DriverConfig(
        emit=args.emit,
        keep_going=args.keep_going,
        backend=args.backend,
        verbose=args.verbose,
        files=list(args.files),
    )


def render(tensor: Tensor, emit: str) -> str:
    if emit == "data":
        return repr(to_tensor_data(tensor))
    if emit == "source":
        return to_source(tensor)
    return str(tensor)


def run(
    lines: Iterable[str],
    config: DriverConfig,
    out: TextIO | None = None,
    err: TextIO | None = None,
) -> int:
    """Evaluate every non-blank line and write the results.

    Args:
        lines:  Input lines, with or without trailing newlines.
        config: Driver options.
        out:    Stream for results and syntax errors (default: stdout).
        err:    Stream for fatal evaluation errors (default: stderr).

    Returns:
        0 if no fatal evaluation error occurred, 1 otherwise.
    """
    out = out if out is not None else sys.stdout
    err = err if err is not None else sys.stderr
    status = 0
    for lineno, raw_line in enumerate(lines, 1):
        line = raw_line.rstrip("\r\n")
        if not line.strip():
            continue
        try:
            tensor = dirac(line)
        except DiracSyntaxError as e:
            print(f"Cannot interpret `{line}` as dirac notation: {e}", file=out)
            continue
        except (EvaluationError, NestingError) as e:
            print(f"Line {lineno}: {e}", file=err)
            status = 1
            if not config.keep_going:
                break
            continue
        print(render(tensor, config.emit), file=out)
    return status


def main(argv: Sequence[str] | None = None) -> int:
    config = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if config.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    configure_backend(config.backend)
    logger.debug("backend info: %s", get_backend_info())

    with fileinput.input(files=config.files or ("-",)) as lines:
        return run(lines, config)


if __name__ == "__main__":
    sys.exit(main())
