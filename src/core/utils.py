import os
import sys

_DEBUG_ENABLED = bool(os.getenv("POLYBASE_DEBUG"))


def debug(*args, **kwargs):
    if _DEBUG_ENABLED:
        prefix = "\033[1m[DEBUG]\033[0m"
        print(prefix, *args, file=sys.stderr, **kwargs)


def info(*args, **kwargs):
    prefix = "\033[1;34m[INFO]\033[0m"
    print(prefix, *args, file=sys.stderr, **kwargs)


def warn(*args, **kwargs):
    prefix = "\033[1;33m[WARNING]\033[0m"
    print(prefix, *args, file=sys.stderr, **kwargs)


def error(*args, **kwargs):
    prefix = "\033[1;31m[ERROR]\033[0m"
    print(prefix, *args, file=sys.stderr, **kwargs)


# Path utilities


def normalize_extension(ext: str) -> str:
    """Normalize a file extension to lowercase with a leading dot ('JS' -> '.js')."""
    ext = ext.strip().lower()
    if ext and not ext.startswith("."):
        ext = "." + ext
    return ext


def path_extension(path: str) -> str:
    """Lowercased extension of a path, including the dot ('' if none)."""
    return os.path.splitext(path)[1].lower()
