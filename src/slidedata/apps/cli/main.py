from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional, Sequence

from slidedata.core.errors import PresentationDataFormatError, SlidedataError
from slidedata.core.extract import describe_slide_trees, extract_presentation
from slidedata.core.model import load_presentation_data, save_presentation_data
from slidedata.core.modify import apply_presentation_data, replace_text
from slidedata.core.package import open_package
from slidedata.core.validate.schema_validate import schema_path, validate_file

LOG_FORMAT = "%(levelname)s:%(name)s:%(message)s"


def _print_problems(problems: list[str], limit: int = 30) -> None:
    for m in problems[:limit]:
        print(f"  - {m}")
    if len(problems) > limit:
        print(f"  ... ({len(problems)} errors)")


def _check_input(in_path: Path) -> bool:
    if not in_path.exists():
        print(f"[NG] input not found: {in_path}")
        return False
    return True


def _write_target(in_path: Path, out: Optional[str]) -> Path:
    """Output path for write commands; the input is edited in place unless --out is given."""
    if not out:
        return in_path
    return Path(out).resolve()


def cmd_extract(args: argparse.Namespace) -> int:
    in_path = Path(args.input).resolve()
    out_path = Path(args.out).resolve()
    if not _check_input(in_path):
        return 2

    try:
        with open_package(in_path) as package:
            data = extract_presentation(package)
    except SlidedataError as e:
        # Do not leave stale output behind.
        if out_path.exists():
            out_path.unlink()
        print("[NG] extract failed")
        print(f"      detail: {e}")
        return 2

    save_presentation_data(data, out_path)
    print(f"[OK] extracted: {out_path} ({len(data.slides)} slides)")
    return 0


def cmd_replace(args: argparse.Namespace) -> int:
    in_path = Path(args.input).resolve()
    if not _check_input(in_path):
        return 2

    try:
        with open_package(in_path, writable=True) as package:
            found = replace_text(package, args.old, args.new)
            if not found:
                print(f"[NG] no slide found containing text {args.old!r}")
                return 2
            target = _write_target(in_path, args.out)
            package.save(target)
    except SlidedataError as e:
        print("[NG] replace failed")
        print(f"      detail: {e}")
        return 2

    print(f"[OK] updated text from {args.old!r} to {args.new!r}: {target}")
    return 0


def cmd_update(args: argparse.Namespace) -> int:
    in_path = Path(args.input).resolve()
    data_path = Path(args.data).resolve()
    if not _check_input(in_path) or not _check_input(data_path):
        return 2

    try:
        data = load_presentation_data(data_path)
    except PresentationDataFormatError as e:
        print(f"[NG] invalid presentation data: {data_path}")
        _print_problems(e.problems or [str(e)])
        return 2

    try:
        with open_package(in_path, writable=True) as package:
            report = apply_presentation_data(package, data)
            target = _write_target(in_path, args.out)
            package.save(target)
    except SlidedataError as e:
        print("[NG] update failed")
        print(f"      detail: {e}")
        return 2

    print(
        f"[OK] updated: {target} "
        f"(slides={len(report.slides_updated)}, skipped={len(report.slides_skipped)}, "
        f"text_nodes={report.text_nodes_replaced})"
    )
    return 0


def cmd_tree(args: argparse.Namespace) -> int:
    in_path = Path(args.input).resolve()
    if not _check_input(in_path):
        return 2
    try:
        with open_package(in_path) as package:
            lines = describe_slide_trees(package)
    except SlidedataError as e:
        print("[NG] tree failed")
        print(f"      detail: {e}")
        return 2
    for line in lines:
        print(line)
    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    instance_path = Path(args.instance).resolve()
    errs = validate_file(instance_path)
    if not errs:
        print(f"[OK] {instance_path} conforms to {schema_path().name}")
        return 0
    if errs[0].startswith("[ERR]"):
        print(errs[0])
        return 2
    print(f"[NG] {instance_path.as_posix()}")
    _print_problems(errs)
    return 2


def _configure_logging(args: argparse.Namespace) -> None:
    level = logging.INFO
    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.WARNING
    logging.basicConfig(level=level, format=LOG_FORMAT)


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(prog="slidedata")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging (includes shape-tree dumps)")
    parser.add_argument("-q", "--quiet", action="store_true", help="only warnings and errors")
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_ext = sub.add_parser("extract", help="extract a .pptx into presentation-data json")
    p_ext.add_argument("input", help="path to input .pptx")
    p_ext.add_argument("--out", required=True, help="output json path")
    p_ext.set_defaults(func=cmd_extract)

    p_rep = sub.add_parser("replace", help="replace every text run equal to --old with --new")
    p_rep.add_argument("input", help="path to .pptx")
    p_rep.add_argument("--old", required=True, help="exact text to find")
    p_rep.add_argument("--new", required=True, help="replacement text")
    p_rep.add_argument("--out", required=False, help="output .pptx path (default: edit input in place)")
    p_rep.set_defaults(func=cmd_replace)

    p_upd = sub.add_parser("update", help="apply an edited presentation-data json to a .pptx")
    p_upd.add_argument("input", help="path to .pptx")
    p_upd.add_argument("--data", required=True, help="presentation-data json (e.g. from `extract`)")
    p_upd.add_argument("--out", required=False, help="output .pptx path (default: edit input in place)")
    p_upd.set_defaults(func=cmd_update)

    p_tree = sub.add_parser("tree", help="print the shape-tree outline of every slide")
    p_tree.add_argument("input", help="path to .pptx")
    p_tree.set_defaults(func=cmd_tree)

    p_val = sub.add_parser("validate", help="validate a presentation-data json against the bundled schema")
    p_val.add_argument("instance", help="json to validate")
    p_val.set_defaults(func=cmd_validate)

    args = parser.parse_args(argv)
    _configure_logging(args)
    raise SystemExit(args.func(args))


if __name__ == "__main__":
    main()
