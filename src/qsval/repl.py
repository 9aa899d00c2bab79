"""QsvalRepl — interactive encoder/decoder shell.

Also provides the ``qsval-repl`` CLI entry point via ``main()``.
"""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys
from typing import IO

from .config import CodecOptions, DEFAULT_OPTIONS
from .convert import serialize
from .decoder import decode
from .errors import QsvalError
from .values import Value, VBool, VDate, VDict, VList, VNull, VNumber, VText

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# QsvalRepl class (notebook / programmatic use)
# ---------------------------------------------------------------------------

class QsvalRepl:
    """Stateful shell that keeps codec options and the last decoded value.

    Usage::

        repl = QsvalRepl()
        repl.encode_json('{"a": [1, "x"]}')   # → '$a@:1&=x'
        repl.decode("$a@:1&=x")               # → VDict({"a": VList([...])})
        repl.set_strict(True)
        repl.reset()                          # back to default options
    """

    def __init__(self, options: CodecOptions | None = None) -> None:
        self.options = options or DEFAULT_OPTIONS
        self.last_result: Value | None = None

    def encode_json(self, text: str) -> str | None:
        """Encode a JSON document; raises ``json.JSONDecodeError`` on bad JSON."""
        return serialize(json.loads(text), self.options)

    def decode(self, text: str) -> Value:
        self.last_result = decode(text, self.options)
        return self.last_result

    def set_strict(self, strict: bool) -> None:
        self.options = dataclasses.replace(self.options, strict_scalars=strict)

    def set_max_depth(self, depth: int) -> None:
        self.options = dataclasses.replace(self.options, max_depth=depth)

    def reset(self) -> None:
        """Restore default options and forget the last result."""
        self.options = DEFAULT_OPTIONS
        self.last_result = None


# ---------------------------------------------------------------------------
# CLI helpers
# ---------------------------------------------------------------------------

def _fmt_inline(value: Value) -> str:
    """Format a single value for compact one-line display."""
    if isinstance(value, VText):
        return json.dumps(value.value, ensure_ascii=False)
    if isinstance(value, (VNull, VBool, VNumber, VDate)):
        return str(value)
    if isinstance(value, VList):
        return "[" + ", ".join(_fmt_inline(v) for v in value.items) + "]"
    if isinstance(value, VDict):
        return "{" + ", ".join(
            f"{json.dumps(k, ensure_ascii=False)}: {_fmt_inline(v)}"
            for k, v in value.entries.items()
        ) + "}"
    return repr(value)


def _fmt_inspect(value: Value) -> str:
    """Pretty-print a value for inspect() / i()."""
    if isinstance(value, VDict):
        if not value.entries:
            return "VDict {}"
        width = max(len(k) for k in value.entries)
        lines = ["VDict {"]
        for k, v in value.entries.items():
            lines.append(f"  {k:<{width}}: {_fmt_inline(v)}")
        lines.append("}")
        return "\n".join(lines)

    if isinstance(value, VList):
        if not value.items:
            return "VList []"
        lines = ["VList ["]
        for i, v in enumerate(value.items):
            lines.append(f"  {i}: {_fmt_inline(v)}")
        lines.append("]")
        return "\n".join(lines)

    return f"{type(value).__name__} {_fmt_inline(value)}"


def _encode_line(repl: QsvalRepl, text: str, dest: IO[str]) -> None:
    """Encode *text* as JSON and print the wire form to *dest*."""
    res = repl.encode_json(text)
    print("(absent)" if res is None else res, file=dest)


def _decode_expr(repl: QsvalRepl, expr: str, dest: IO[str]) -> None:
    """Decode *expr* and print the value inline to *dest*."""
    print(_fmt_inline(repl.decode(expr)), file=dest)


def _inspect_expr(repl: QsvalRepl, expr: str, dest: IO[str]) -> None:
    """Decode *expr* and pretty-print to *dest*."""
    print(_fmt_inspect(repl.decode(expr)), file=dest)


def _show_options(repl: QsvalRepl, dest: IO[str]) -> None:
    for f in dataclasses.fields(repl.options):
        print(f"  {f.name:<14} : {getattr(repl.options, f.name)}", file=dest)


def _run_file(repl: QsvalRepl, filepath: str, dest: IO[str]) -> None:
    try:
        with open(filepath, encoding="utf-8") as fh:
            for file_line in fh:
                _process_line(repl, file_line.rstrip("\n"), dest)
    except OSError as exc:
        print(f"Error reading '{filepath}': {exc}", file=sys.stderr)


def _dispatch(repl: QsvalRepl, line: str, dest: IO[str]) -> bool:
    # Trailing spaces may be wire data, so only command words are compared trimmed.
    command = line.rstrip()

    # ── Exit ──────────────────────────────────────────────────────────────
    if command in (":q", ":quit"):
        return False

    # ── Control commands ──────────────────────────────────────────────────
    if command == ":options":
        _show_options(repl, dest)
        return True

    if command == ":strict":
        repl.set_strict(True)
        return True

    if command == ":lenient":
        repl.set_strict(False)
        return True

    if command.startswith(":depth "):
        arg = command[len(":depth "):].strip()
        try:
            repl.set_max_depth(int(arg))
        except ValueError:
            print(f"Error: invalid depth {arg!r}", file=sys.stderr)
        return True

    if command == ":reset":
        repl.reset()
        return True

    # ── inspect() / i() ───────────────────────────────────────────────────
    for prefix in ("inspect(", "i("):
        if command.startswith(prefix) and command.endswith(")"):
            _inspect_expr(repl, command[len(prefix):-1].lstrip(), dest)
            return True

    # ── ? wire text ───────────────────────────────────────────────────────
    if line.startswith("? "):
        _decode_expr(repl, line[2:].lstrip(), dest)
        return True

    # ── Batch file ────────────────────────────────────────────────────────
    if command.startswith("?<< "):
        _run_file(repl, command[4:].strip(), dest)
        return True

    # ── Regular JSON input ────────────────────────────────────────────────
    _encode_line(repl, line, dest)
    return True


def _process_line(repl: QsvalRepl, line: str, dest: IO[str]) -> bool:
    """Process one input line.  Returns False when the session should end."""
    line = line.lstrip().rstrip("\r\n")
    if not line.strip():
        return True
    try:
        return _dispatch(repl, line, dest)
    except (QsvalError, json.JSONDecodeError) as exc:
        logger.debug("line %r failed", line, exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        return True


# ---------------------------------------------------------------------------
# Output redirection (?>> filepath  /  ?>>)
# ---------------------------------------------------------------------------

class _Output:
    """Where results go: stdout, or a file opened by ``?>> filepath``."""

    def __init__(self) -> None:
        self._file: IO[str] | None = None

    @property
    def dest(self) -> IO[str]:
        return self._file or sys.stdout

    def handle(self, command: str) -> bool:
        """Apply a ``?>>`` command; False if *command* is not one."""
        if command == "?>>":
            self.close()
            return True
        if not command.startswith("?>> "):
            return False
        filepath = command[4:].strip()
        self.close()
        try:
            self._file = open(filepath, "w", encoding="utf-8")
        except OSError as exc:
            print(f"Error opening '{filepath}': {exc}", file=sys.stderr)
        return True

    def close(self) -> None:
        if self._file:
            self._file.close()
            self._file = None


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> None:
    """Interactive qsval shell (``qsval-repl`` / ``python -m qsval.repl``)."""
    parser = argparse.ArgumentParser(prog="qsval-repl")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="log decoder diagnostics to stderr")
    parser.add_argument("--strict", action="store_true",
                        help="reject unparseable ':' scalars")
    parser.add_argument("--max-depth", type=int, default=DEFAULT_OPTIONS.max_depth)
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG,
                            format="%(levelname)s %(name)s: %(message)s")

    repl = QsvalRepl(CodecOptions(max_depth=args.max_depth,
                                  strict_scalars=args.strict))
    out = _Output()
    print("qsval REPL  (:q to quit  |  :options  :strict  :lenient  :depth N  :reset  "
          "|  <json>  ? <wire>  inspect(<wire>)  |  ?>> file  ?<< file)")

    try:
        while True:
            try:
                line = input("qsval> ")
            except EOFError:
                print()
                break
            except KeyboardInterrupt:
                print()
                continue

            if out.handle(line.strip()):
                continue
            if not _process_line(repl, line, out.dest):
                break
    finally:
        out.close()


if __name__ == "__main__":
    main()
