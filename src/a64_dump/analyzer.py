from __future__ import annotations
import argparse, logging, os, sys
from typing import Dict, List, Optional, Tuple

from .objdump import DumpEntry, ObjdumpListing
from .semantic import interpret
from .writers import render_table, render_comparison, write_markdown
from .diagnostics import error, from_exception
from .errors import DumpError

logger = logging.getLogger(__name__)

LEVELS = ("O0", "O1", "O2")

def analyze_text(text: str, function: str) -> List[Tuple[DumpEntry, Optional[str]]]:
    """Extrae la función y empareja cada entrada con su interpretación
    (None para avisos e instrucciones no clasificadas)."""
    entries = ObjdumpListing(text).extract_function(function)
    return [(e, interpret(e.parsed) if e.parsed is not None else None) for e in entries]

def clean_prefix(prefix: str) -> str:
    """'prog_O2.dump' -> 'prog'; 'prog' se queda igual."""
    p = prefix[:-len(".dump")] if prefix.endswith(".dump") else prefix
    for level in LEVELS:
        if p.endswith(f"_{level}"):
            return p[:-len(level) - 1]
    return p

def dump_paths(prefix: str) -> Dict[str, str]:
    base = clean_prefix(prefix)
    return {level: f"{base}_{level}.dump" for level in LEVELS}

def _out_path(name: str, output_dir: Optional[str]) -> str:
    return os.path.join(output_dir, name) if output_dir else name

def analyze_file(function: str, dump_path: str, output_dir: Optional[str] = None) -> str:
    """Tabla de una función de un único volcado. Devuelve la ruta escrita."""
    logger.info("reading %s", dump_path)
    entries = ObjdumpListing.from_file(dump_path).extract_function(function)
    path = _out_path(f"{function}_analysis.md", output_dir)
    write_markdown(render_table(entries), path)
    return path

def compare_dumps(function: str, prefix: str, output_dir: Optional[str] = None) -> str:
    """Tablas O0/O1/O2 de una función a partir de '<prefijo>_O{0,1,2}.dump'."""
    levels: Dict[str, List[DumpEntry]] = {}
    for level, path in dump_paths(prefix).items():
        logger.info("reading %s", path)
        levels[level] = ObjdumpListing.from_file(path).extract_function(function)
    out = _out_path(f"{function}_comparison.md", output_dir)
    write_markdown(render_comparison(levels), out)
    return out

def main(argv=None) -> int:
    ap = argparse.ArgumentParser(prog="a64-dump",
                                 description="AArch64 objdump listing analyzer")
    ap.add_argument("-v", "--verbose", action="store_true", help="log progress messages")
    sub = ap.add_subparsers(dest="command", required=True)

    p_list = sub.add_parser("list", help="list the functions in a dump file")
    p_list.add_argument("dump", help="objdump -d -S output file")

    p_an = sub.add_parser("analyze", help="explain one function of a single dump")
    p_an.add_argument("function", help="function name (e.g. main)")
    p_an.add_argument("dump", help="objdump -d -S output file")
    p_an.add_argument("-o", "--output", default=None, help="directory for the report")

    p_cmp = sub.add_parser("compare", help="compare one function across O0/O1/O2 dumps")
    p_cmp.add_argument("function", help="function name (e.g. main)")
    p_cmp.add_argument("prefix", help="looks for <PREFIX>_O0.dump, _O1.dump and _O2.dump")
    p_cmp.add_argument("-o", "--output", default=None, help="directory for the report")

    args = ap.parse_args(argv)
    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")

    if args.command == "list":
        try:
            names = ObjdumpListing.from_file(args.dump).list_functions()
        except OSError as ex:
            print(error(f"cannot read {args.dump}: {ex.strerror or ex}", file=args.dump), file=sys.stderr)
            return 2
        if not names:
            print(error("no functions found", file=args.dump), file=sys.stderr)
            return 1
        for name in sorted(set(names)):
            print(name)
        return 0

    source = args.dump if args.command == "analyze" else args.prefix
    try:
        if args.output:
            os.makedirs(args.output, exist_ok=True)
        if args.command == "analyze":
            path = analyze_file(args.function, args.dump, args.output)
        else:
            path = compare_dumps(args.function, args.prefix, args.output)
    except DumpError as ex:
        print(from_exception(ex, file=source), file=sys.stderr)
        return 1
    except FileNotFoundError as ex:
        hint = "compare needs <PREFIX>_O0.dump, _O1.dump and _O2.dump" if args.command == "compare" else None
        print(error(f"cannot read {ex.filename}", file=ex.filename, hint=hint), file=sys.stderr)
        return 2
    except OSError as ex:
        print(error(f"I/O failure: {ex}", file=source), file=sys.stderr)
        return 3

    print(f"OK: {args.function} -> {path}")
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
