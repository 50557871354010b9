from dircrawl.core.models import DigestAlgorithm

ALGORITHM_ALIASES = {
    "md5": DigestAlgorithm.MD5,
    "sha256": DigestAlgorithm.SHA256,
    "sha-256": DigestAlgorithm.SHA256,
    "xxh64": DigestAlgorithm.XXH64,
    "xxhash": DigestAlgorithm.XXH64,
}

ALGORITHM_CHOICES = list(ALGORITHM_ALIASES.keys())

ALGORITHM_HELP_TEXT = (
    "Digest used to fingerprint every file:\n"
    "  md5     : 32 hex chars (default)\n"
    "  sha256  : 64 hex chars\n"
    "  xxh64   : 16 hex chars, non-cryptographic, fastest\n"
    "Example : %(prog)s ~/Projects --algorithm sha256\n"
)

EPILOG_TEXT = """
Output:
  Every run writes into <output-dir>/dircrawl/<yymmdd.HHMMSS>/
    dir.log    directory ids, parent ids, levels, times and names
    file.log   file ids, directory ids, times, sizes, fingerprints and names
    error.log  unreadable directories/files and cycle hits
    crawl.log  roots, timing and summary statistics

Examples:
  Crawl one tree, logs under the current directory
  %(prog)s ~/Projects

  Crawl two trees with SHA-256, write logs elsewhere
  %(prog)s ~/Projects /mnt/backup/Projects --algorithm sha256 -o ~/inventories

  Skip build output and caches
  %(prog)s ~/Projects -e ~/Projects/build ~/Projects/.cache

  Fixed-width, space separated columns
  %(prog)s ~/Projects --space-separated
"""
