"""
Tests for directory scanning: file selection, pruning and per-file failures.
"""
import os

import pytest

from baseline.evaluate import build_report
from baseline.table import build_default_table
from scanner import Scanner
from test_utils import default_detector, write_files


def _scanner(**kwargs):
    return Scanner(default_detector(), **kwargs)


def _p(root, *parts):
    return os.path.join(str(root), *parts)


class TestFileSelection:
    def test_default_extensions(self, tmp_path):
        write_files(
            tmp_path,
            {
                "a.js": "x;",
                "b.jsx": "x;",
                "c.ts": "x;",
                "d.tsx": "x;",
                "README.md": "# readme",
                "style.css": "a {}",
                "e.mjs": "x;",
            },
        )
        files = _scanner().collect_source_files(str(tmp_path))
        assert files == [_p(tmp_path, name) for name in ("a.js", "b.jsx", "c.ts", "d.tsx")]

    def test_custom_extensions_normalized(self, tmp_path):
        write_files(tmp_path, {"a.js": "x;", "b.mjs": "x;"})
        files = _scanner(include_extensions=["MJS"]).collect_source_files(str(tmp_path))
        assert files == [_p(tmp_path, "b.mjs")]

    def test_default_ignored_directories_pruned(self, tmp_path):
        write_files(
            tmp_path,
            {
                "node_modules/lib/index.js": "x;",
                "dist/bundle.js": "x;",
                "build/out.js": "x;",
                ".cache/tmp.js": "x;",
                "src/app.js": "x;",
                "src/components/Button.jsx": "x;",
            },
        )
        files = _scanner().collect_source_files(str(tmp_path))
        assert files == [_p(tmp_path, "src", "app.js"), _p(tmp_path, "src", "components", "Button.jsx")]

    def test_glob_pattern_ignores_files(self, tmp_path):
        write_files(tmp_path, {"src/app.js": "x;", "src/app.test.js": "x;"})
        scanner = _scanner(ignore_patterns=("node_modules", "*.test.js"))
        assert scanner.collect_source_files(str(tmp_path)) == [_p(tmp_path, "src", "app.js")]

    def test_hidden_files_skipped(self, tmp_path):
        write_files(tmp_path, {".eslintrc.js": "x;", "index.js": "x;"})
        assert _scanner().collect_source_files(str(tmp_path)) == [_p(tmp_path, "index.js")]

    def test_symlink_loop_terminates(self, tmp_path):
        write_files(tmp_path, {"src/app.js": "x;"})
        os.symlink(tmp_path / "src", tmp_path / "src" / "loop", target_is_directory=True)
        assert _scanner().collect_source_files(str(tmp_path)) == [_p(tmp_path, "src", "app.js")]

    def test_unreadable_directory_skips_only_its_subtree(self, tmp_path, monkeypatch, capsys):
        write_files(tmp_path, {"src/app.js": "x ?? y;", "locked/secret.js": "x;", "locked/deep/more.js": "x;"})
        locked = _p(tmp_path, "locked")
        real_scandir = os.scandir

        def scandir(path="."):
            if os.fspath(path) == locked:
                raise PermissionError(13, "Permission denied", locked)
            return real_scandir(path)

        monkeypatch.setattr(os, "scandir", scandir)
        result = _scanner().scan(str(tmp_path))

        assert list(result) == [_p(tmp_path, "src", "app.js")]
        assert [(d.path, d.kind) for d in result.diagnostics] == [(locked, "directory")]
        assert "Cannot read directory" in capsys.readouterr().err


class TestScan:
    def test_broken_file_is_counted_with_no_features(self, tmp_path, capsys):
        write_files(
            tmp_path,
            {
                "good.js": "const port = env.PORT ?? 8080;\n",
                "bad.js": "const broken = (;\n",
            },
        )
        result = _scanner().scan(str(tmp_path))

        assert len(result) == 2
        assert result[_p(tmp_path, "good.js")] == {"Nullish coalescing (??)"}
        assert result[_p(tmp_path, "bad.js")] == frozenset()
        assert result.parse_failures() == [_p(tmp_path, "bad.js")]
        assert "Error parsing" in capsys.readouterr().err

        report = build_report(result, build_default_table().get("2023"))
        assert report.summary.files_scanned == 2

    def test_empty_directory(self, tmp_path):
        result = _scanner().scan(str(tmp_path))
        assert len(result) == 0
        assert result.diagnostics == ()
        report = build_report(result, build_default_table().get("2023"))
        assert report.summary.files_scanned == 0
        assert report.summary.coverage == 100.0

    def test_undecodable_file_is_skipped(self, tmp_path, capsys):
        write_files(tmp_path, {"binary.js": b"\xff\xfe\x00\x81 garbage", "ok.js": "x;"})
        result = _scanner().scan(str(tmp_path))
        assert list(result) == [_p(tmp_path, "ok.js")]
        assert [(d.path, d.kind) for d in result.diagnostics] == [(_p(tmp_path, "binary.js"), "read")]
        assert "Failed to read" in capsys.readouterr().err

    def test_single_file_root(self, tmp_path):
        write_files(tmp_path, {"one.js": "const x = a?.b;"})
        path = _p(tmp_path, "one.js")
        result = _scanner().scan(path)
        assert dict(result) == {path: {"Optional chaining (?.)"}}

    def test_missing_root(self, tmp_path, capsys):
        missing = _p(tmp_path, "nope")
        result = _scanner().scan(missing)
        assert len(result) == 0
        assert result.diagnostics[0].kind == "directory"
        assert "Path not found" in capsys.readouterr().err

    def test_dialect_by_extension(self, tmp_path):
        write_files(tmp_path, {"cast.ts": "const n = <number>value;\n", "cast.tsx": "const n = <number>value;\n"})
        result = _scanner().scan(str(tmp_path))
        assert result.parse_failures() == [_p(tmp_path, "cast.tsx")]

    def test_result_sorted_and_read_only(self, tmp_path):
        write_files(tmp_path, {"b.js": "x;", "a.js": "x;", "sub/c.js": "x;"})
        result = _scanner().scan(str(tmp_path))
        assert list(result) == [_p(tmp_path, "a.js"), _p(tmp_path, "b.js"), _p(tmp_path, "sub", "c.js")]
        with pytest.raises(TypeError):
            result["new.js"] = frozenset()
