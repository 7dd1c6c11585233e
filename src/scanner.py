"""
Directory scanning: find source files, parse them, and collect detected features per file.

Nothing here is fatal. Unreadable directories and files are reported and
skipped; unparsable files are reported and recorded with no features.
"""

import fnmatch
import os
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterator, List, Optional, Sequence, Tuple

from core.config import DEFAULT_EXTENSIONS, DEFAULT_IGNORE_PATTERNS
from core.utils import debug, normalize_extension, path_extension, warn
from features.detector import FeatureDetector
from js.parse import ParseError, parse_file_source


@dataclass(frozen=True)
class ScanDiagnostic:
    """Non-fatal problem met while scanning."""

    path: str
    kind: str  # "parse" | "read" | "directory"
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


class ScanResult(Mapping):
    """Immutable mapping of file path -> detected feature set, plus scan diagnostics."""

    def __init__(self, files: Dict[str, FrozenSet[str]], diagnostics: Sequence[ScanDiagnostic] = ()):
        self._files = MappingProxyType({path: frozenset(files[path]) for path in sorted(files)})
        self.diagnostics: Tuple[ScanDiagnostic, ...] = tuple(diagnostics)

    def __getitem__(self, path: str) -> FrozenSet[str]:
        return self._files[path]

    def __iter__(self) -> Iterator[str]:
        return iter(self._files)

    def __len__(self) -> int:
        return len(self._files)

    def __repr__(self) -> str:
        return f"ScanResult({dict(self._files)!r}, diagnostics={len(self.diagnostics)})"

    def parse_failures(self) -> List[str]:
        return [d.path for d in self.diagnostics if d.kind == "parse"]


def read_source(path: str) -> str:
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


class Scanner:
    """Walks a directory tree and runs the feature detector on every matching file."""

    def __init__(
        self,
        detector: FeatureDetector,
        ignore_patterns: Sequence[str] = DEFAULT_IGNORE_PATTERNS,
        include_extensions: Sequence[str] = DEFAULT_EXTENSIONS,
    ):
        self.detector = detector
        self.ignore_patterns = tuple(ignore_patterns)
        self.include_extensions = {normalize_extension(e) for e in include_extensions}

    def is_ignored(self, name: str) -> bool:
        """Hidden entries and names matching an ignore pattern are skipped."""
        if name.startswith("."):
            return True
        return any(fnmatch.fnmatch(name, pattern) for pattern in self.ignore_patterns)

    def is_source_file(self, name: str) -> bool:
        return path_extension(name) in self.include_extensions and not self.is_ignored(name)

    def collect_source_files(self, root: str, diagnostics: Optional[List[ScanDiagnostic]] = None) -> List[str]:
        """Qualifying files under `root`, sorted. Symlinked directories are followed once."""
        if diagnostics is None:
            diagnostics = []

        def on_walk_error(e: OSError) -> None:
            path = e.filename or root
            warn(f"Cannot read directory {path}: {e.strerror or e}")
            diagnostics.append(ScanDiagnostic(str(path), "directory", str(e)))

        files: List[str] = []
        seen_dirs = set()
        for dirpath, dirnames, filenames in os.walk(root, onerror=on_walk_error, followlinks=True):
            real = os.path.realpath(dirpath)
            if real in seen_dirs:
                debug(f"Skipping already visited directory {dirpath} (symlink loop?)")
                dirnames[:] = []
                continue
            seen_dirs.add(real)

            dirnames[:] = sorted(d for d in dirnames if not self.is_ignored(d))
            for name in sorted(filenames):
                if self.is_source_file(name):
                    files.append(os.path.join(dirpath, name))

        return sorted(files)

    def scan_file(self, path: str, diagnostics: List[ScanDiagnostic]) -> Optional[FrozenSet[str]]:
        """
        Detect features in one file.

        Returns None when the file cannot be read (it is left out of the
        result) and an empty set when it cannot be parsed.
        """
        try:
            source_code = read_source(path)
        except (OSError, UnicodeDecodeError) as e:
            warn(f"Failed to read {path}: {e}")
            diagnostics.append(ScanDiagnostic(path, "read", str(e)))
            return None

        try:
            tree = parse_file_source(path, source_code)
        except ParseError as e:
            warn(f"Error parsing {path}: {e}")
            diagnostics.append(ScanDiagnostic(path, "parse", str(e)))
            return frozenset()

        return self.detector.detect(tree)

    def scan(self, root: str) -> ScanResult:
        diagnostics: List[ScanDiagnostic] = []
        files: Dict[str, FrozenSet[str]] = {}

        if os.path.isfile(root):
            paths = [root]
        elif os.path.isdir(root):
            paths = self.collect_source_files(root, diagnostics)
        else:
            warn(f"Path not found: {root}")
            diagnostics.append(ScanDiagnostic(root, "directory", "path not found"))
            paths = []

        debug(f"Scanning {len(paths)} file(s) under {root}")
        for path in paths:
            features = self.scan_file(path, diagnostics)
            if features is not None:
                files[path] = features

        return ScanResult(files, diagnostics)
