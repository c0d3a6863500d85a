# Project: fsprune
# Objective: Measure, list, archive and size-trim directories from the command line
import argparse
import os
import sys

from .setup.config import EvictionScope, get_config
from .setup.logging import logger
from .core.eviction import remove_old_files
from .core.listing import get_dir_info, get_files
from .core.size import get_size
from .utils.archive import archive_dir
from .utils.misc import convert_to_bytes, format_bytes


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fsprune",
        description="Directory utilities: size, listing, archiving and size-bounded eviction.",
        epilog="""
Examples:
  %(prog)s evict /var/cache/app 80M
    Delete the oldest files until /var/cache/app holds at most 80 MiB

  %(prog)s evict /var/cache/app 80M --scope direct --dry-run
    Show which top-level files would be deleted, without deleting

  %(prog)s size /var/cache/app
  %(prog)s ls /var/cache/app
  %(prog)s archive /var/cache/app backup-2026-10
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    evict = subparsers.add_parser("evict", help="Delete oldest files until the directory fits a size budget")
    evict.add_argument("dir", help="Directory to trim")
    evict.add_argument("size", type=convert_to_bytes, help="Size budget, e.g. 1048576, 512K, 80M, 2G")
    evict.add_argument(
        "--scope",
        choices=[scope.value for scope in EvictionScope],
        default=None,
        help="Candidate files: whole tree (recursive) or direct children only (default: from config)"
    )
    evict.add_argument("--dry-run", action="store_true", help="List what would be deleted without deleting")

    size = subparsers.add_parser("size", help="Print the recursive size of a file or directory")
    size.add_argument("path")
    size.add_argument("--human", action="store_true", help="Human-readable output")

    ls = subparsers.add_parser("ls", help="List directory entries with metadata")
    ls.add_argument("dir")

    files = subparsers.add_parser("files", help="List regular files under a directory (symlinks skipped)")
    files.add_argument("dir")
    files.add_argument("--direct", action="store_true", help="Only direct children")

    archive = subparsers.add_parser("archive", help="Compress a directory into NAME.tar.gz")
    archive.add_argument("dir")
    archive.add_argument("name", help="Archive path without the .tar.gz suffix")

    return parser


def _write_path(file_path: str):
    # Paths may carry undecodable bytes; write them raw
    sys.stdout.flush()
    buffer = getattr(sys.stdout, "buffer", None)
    if buffer is None:
        print(os.fsencode(file_path).decode("utf-8", "replace"))
        return
    buffer.write(os.fsencode(file_path) + b"\n")
    buffer.flush()


def _run_evict(args, config) -> int:
    scope = EvictionScope(args.scope) if args.scope else config.eviction.scope
    dry_run = args.dry_run or config.eviction.dry_run

    removed = remove_old_files(args.dir, args.size, scope=scope, dry_run=dry_run)
    for file_path in removed:
        _write_path(file_path)
    return 0


def _run_size(args, config) -> int:
    size = get_size(args.path)
    print(format_bytes(size) if args.human else size)
    return 0


def _run_ls(args, config) -> int:
    for entry in get_dir_info(args.dir):
        print(f"{entry.kind.value:<9} {entry.size:>12} {entry.modified_at:%Y-%m-%d %H:%M:%S} {entry.name}")
    return 0


def _run_files(args, config) -> int:
    for file_path in sorted(get_files(args.dir, recursive=not args.direct)):
        _write_path(file_path)
    return 0


def _run_archive(args, config) -> int:
    print(archive_dir(args.dir, args.name, compresslevel=config.archive.compresslevel))
    return 0


COMMANDS = {
    "evict": _run_evict,
    "size": _run_size,
    "ls": _run_ls,
    "files": _run_files,
    "archive": _run_archive,
}


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = get_config()
        return COMMANDS[args.command](args, config)
    except (OSError, ValueError) as e:
        logger.error(f"{args.command} failed: {e}")
        print(f"fsprune: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
