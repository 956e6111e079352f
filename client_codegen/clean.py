#!/usr/bin/env python3
"""
Remove generated client modules.

Only files carrying the generator's header marker are removed, so
hand-written files living next to the generated client are left alone.
Directories emptied by the removal are deleted as well.
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Iterator, Sequence

GENERATED_MARKER = "// Auto-generated, edits will be overwritten"
GENERATED_SUFFIXES: tuple[str, ...] = (".ts", ".js")
# The marker sits below a reference/module line at most
MARKER_SEARCH_LINES = 3


def is_generated(path: Path) -> bool:
    """Whether ``path`` starts with the generator's header marker."""
    try:
        with path.open(encoding="utf-8") as fh:
            for _, line in zip(range(MARKER_SEARCH_LINES), fh):
                if line.strip() == GENERATED_MARKER:
                    return True
    except (OSError, UnicodeDecodeError):
        return False
    return False


def find_generated_files(root: Path) -> Iterator[Path]:
    """Find all generated files under root."""
    for path in sorted(root.rglob("*")):
        if path.is_file() and path.suffix in GENERATED_SUFFIXES and is_generated(path):
            yield path


def format_size(size_bytes: float) -> str:
    """Format size in human-readable form."""
    for unit in ("B", "KB", "MB", "GB"):
        if size_bytes < 1024:
            return f"{size_bytes:.1f} {unit}"
        size_bytes /= 1024
    return f"{size_bytes:.1f} TB"


def clean_file(path: Path, *, dry_run: bool = False) -> int:
    """Clean a file, returning bytes freed."""
    if not path.exists():
        return 0

    size = path.stat().st_size
    if dry_run:
        print(f"  Would remove: {path} - {format_size(size)}")
    else:
        print(f"  Removing: {path} - {format_size(size)}")
        path.unlink()
    return size


def remove_empty_dirs(root: Path) -> list[Path]:
    """Remove empty directories below root, deepest first."""
    removed: list[Path] = []
    for path in sorted((p for p in root.rglob("*") if p.is_dir()), key=lambda p: len(p.parts), reverse=True):
        if not any(path.iterdir()):
            path.rmdir()
            removed.append(path)
    return removed


def main(argv: Sequence[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        description=__doc__,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "out_dir",
        nargs="?",
        default=Path("generated"),
        type=Path,
        help="Directory holding the generated client",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be cleaned without removing anything",
    )
    args = parser.parse_args(argv)

    if not args.out_dir.is_dir():
        print(f"Nothing to clean: {args.out_dir} does not exist")
        return

    print(f"Cleaning generated client in {args.out_dir}...")
    total_freed = 0
    for path in list(find_generated_files(args.out_dir)):
        total_freed += clean_file(path, dry_run=args.dry_run)

    if not args.dry_run:
        for path in remove_empty_dirs(args.out_dir):
            print(f"  Removed empty directory: {path}")

    action = "Would free" if args.dry_run else "Freed"
    print(f"\n{action}: {format_size(total_freed)}")

    if args.dry_run:
        print("\nRun without --dry-run to actually clean.")


if __name__ == "__main__":
    main()
