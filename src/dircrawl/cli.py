#!/usr/bin/env python3
"""
dircrawl CLI: walk directory trees and inventory every file with its fingerprint.
Writes directory, file, error and summary logs into a timestamped run folder.
The scanned filesystem is never modified.
"""
from __future__ import annotations  # Enable postponed evaluation of annotations (PEP 563)
import argparse
import sys
import os
import time
from pathlib import Path
from typing import List, Optional, NoReturn
import logging

logging.basicConfig(
    level=logging.ERROR,
    format="%(levelname)-8s | %(name)-25s | %(message)s"
)

# === EARLY DEPENDENCY VALIDATION ===
_MISSING_DEPS = []
try:
    import xxhash
except ImportError:
    _MISSING_DEPS.append("xxhash")

if _MISSING_DEPS:
    print("❌ Missing required dependencies:", file=sys.stderr)
    print(f"   pip install {' '.join(_MISSING_DEPS)}", file=sys.stderr)
    print("\nOr install the package with its dependencies:", file=sys.stderr)
    print("   pip install .", file=sys.stderr)
    sys.exit(1)

# === NORMAL IMPORTS (after validation) ===
from dircrawl.core.models import CrawlParams, DigestAlgorithm, Metric, RunStatistics
from dircrawl.commands import CrawlCommand
from dircrawl.utils.convert_utils import ConvertUtils
from dircrawl.aliases import ALGORITHM_ALIASES, ALGORITHM_CHOICES, ALGORITHM_HELP_TEXT, EPILOG_TEXT


class CLIApplication:
    """Main CLI application controller."""

    def __init__(self):
        self.start_time: float = time.time()
        self.verbose: bool = False
        self.quiet: bool = False
        self.run_path: Optional[str] = None

        # Fix encoding for Windows consoles to prevent UnicodeEncodeError
        if hasattr(sys.stdout, "reconfigure"):
            sys.stdout.reconfigure(encoding='utf-8')
            sys.stderr.reconfigure(encoding='utf-8')

    @staticmethod
    def parse_args(args=None) -> argparse.Namespace:
        """Parse command-line arguments."""
        parser = argparse.ArgumentParser(
            prog="dircrawl",
            description="dircrawl: walk directory trees and list files with their fingerprints",
            formatter_class=argparse.RawTextHelpFormatter,
            epilog=EPILOG_TEXT
        )

        parser.add_argument(
            "roots",
            nargs="+",
            type=str,
            metavar="ROOT",
            help="Root directories to crawl, in order"
        )

        parser.add_argument(
            "--algorithm", "-a",
            choices=ALGORITHM_CHOICES,
            default="md5",
            type=str,
            help=ALGORITHM_HELP_TEXT
        )
        parser.add_argument(
            "--output-dir", "-o",
            default=".",
            type=str,
            metavar='',
            dest="output_dir",
            help="Base directory for logs; a dircrawl/<yymmdd.HHMMSS>/ folder is created inside. Default: ."
        )
        parser.add_argument(
            "--excluded-dirs", '-e',
            nargs="+",
            default=[],
            type=str,
            metavar='',
            dest="excluded_dirs",
            help="Directories (space separated) never to descend into"
        )

        # Output format
        parser.add_argument(
            "--space-separated",
            action="store_true",
            help="Separate log columns with spaces instead of tabs"
        )
        parser.add_argument(
            "--no-justify",
            action="store_true",
            help="Do not pad log columns to fixed widths"
        )

        # Walk behaviour
        parser.add_argument(
            "--follow-symlinks",
            action="store_true",
            help="Descend into symbolic links to directories (no symlink cycle detection)"
        )
        parser.add_argument(
            "--case-sensitive",
            action="store_true",
            help="Treat paths differing only by case as different directories"
        )

        # Console output
        parser.add_argument(
            "--quiet", "-q",
            action="store_true",
            help="Suppress non-essential output"
        )
        parser.add_argument(
            "--verbose", "-v",
            action="store_true",
            help="Show progress and debug logging"
        )

        return parser.parse_args(args)

    def validate_args(self, args: argparse.Namespace) -> None:
        """Validate command-line arguments before execution. Roots are checked by the crawl itself."""
        if args.quiet and args.verbose:
            self.error_exit("--quiet and --verbose cannot be used together")

        output_path = Path(args.output_dir)
        if output_path.exists() and not output_path.is_dir():
            self.error_exit(f"Output path is not a directory: {args.output_dir}")

        # Validate excluded directories
        for excl_dir in args.excluded_dirs:
            excl_path = Path(excl_dir).resolve()
            if not excl_path.exists():
                self.warning(f"Excluded directory not found: {excl_dir}")
            elif not excl_path.is_dir():
                self.warning(f"Excluded path is not a directory: {excl_dir}")

        if args.algorithm not in ALGORITHM_ALIASES:
            self.error_exit(
                f"Invalid algorithm: '{args.algorithm}'.\n"
                f"Valid options: {', '.join(ALGORITHM_CHOICES)}"
            )

    def create_params(self, args: argparse.Namespace) -> CrawlParams:
        """Create CrawlParams from CLI arguments."""
        try:
            return CrawlParams(
                roots=list(args.roots),
                output_base=args.output_dir,
                algorithm=ALGORITHM_ALIASES.get(args.algorithm, DigestAlgorithm.MD5),
                excluded_dirs=[os.path.abspath(item.strip()) for item in args.excluded_dirs],
                tab_separated=not args.space_separated,
                justify_fields=not args.no_justify,
                follow_symlinks=args.follow_symlinks,
                case_sensitive=args.case_sensitive,
            )
        except ValueError as e:
            self.error_exit(f"Parameter error: {e}")

    def progress_callback(self, stage: str, current: int, total: Optional[int]) -> None:
        """CLI progress callback - shows progress in console."""
        if not self.verbose:
            return
        sys.stderr.write(f"\r  [{stage}] {current} files processed...")
        sys.stderr.flush()

    def echo(self, line: str) -> None:
        if not self.quiet:
            print(line)

    def run_crawl(self, params: CrawlParams) -> RunStatistics:
        """Execute the crawl workflow."""
        command = CrawlCommand()
        if self.verbose:
            print(f"Crawling {len(params.roots)} root(s) (algorithm: {params.algorithm.display_name})...")

        try:
            stats = command.execute(
                params,
                echo=self.echo,
                progress_callback=self.progress_callback if self.verbose else None
            )
        except RuntimeError as e:
            self.error_exit(f"Crawl failed: {e}")

        if self.verbose:
            sys.stderr.write("\n")
        self.run_path = command.run_directory.path
        return stats

    def output_results(self, stats: RunStatistics) -> None:
        """Short closing report; the full summary was already echoed line by line."""
        if self.quiet:
            return
        processed = ConvertUtils.bytes_to_human(stats[Metric.BYTES_PROCESSED])
        print(f"\nCrawled {stats[Metric.DISTINCT_DIRECTORIES]} directories, "
              f"{stats[Metric.DISTINCT_FILES]} files ({processed})")
        if stats.error_count:
            self.warning(f"{stats.error_count} error(s) recorded, see {os.path.join(self.run_path, 'error.log')}")
        print(f"Logs written to: {self.run_path}")

    def warning(self, message: str) -> None:
        """Print a warning message to stderr."""
        if not self.quiet:
            print(f"⚠️  {message}", file=sys.stderr)

    @staticmethod
    def error_exit(message: str, code: int = 1) -> NoReturn:
        """Print error and exit."""
        print(f"❌ Error: {message}", file=sys.stderr)
        sys.exit(code)

    def run(self, args: Optional[List[str]] = None) -> None:
        """Main entry point with conditional output behavior."""
        args = self.parse_args(args)
        self.verbose = args.verbose
        self.quiet = args.quiet
        if self.verbose:
            logging.getLogger().setLevel(logging.DEBUG)

        self.validate_args(args)
        params = self.create_params(args)

        stats = self.run_crawl(params)
        self.output_results(stats)

        elapsed = time.time() - self.start_time
        if self.verbose:
            print(f"\n✅ Completed in {elapsed:.2f} seconds")


def main() -> None:
    """Application entry point."""
    app = CLIApplication()
    try:
        app.run()
    except KeyboardInterrupt:
        print("\n⚠️  Operation cancelled by user (Ctrl+C)")
        sys.exit(130)
    except Exception as e:
        if os.environ.get("DEBUG"):
            raise
        print(f"❌ Unexpected error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
