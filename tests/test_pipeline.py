# tests/test_pipeline.py
"""End-to-end tests of the collector against an in-memory sink."""

import io
import os
import re
import sys
from pathlib import Path

import pytest

from mdcollect.config.settings import CollectorConfig
from mdcollect.core.discovery import walker
from mdcollect.core.pipeline import collect
from mdcollect.exceptions import DiscoveryError, OutputError

SECTION_HEADER = re.compile(rb"^## File: `([^`]+)`$", re.MULTILINE)


class FailingSink(io.BytesIO):
    """BytesIO whose n-th write raises, like a full disk."""

    def __init__(self, fail_on_call: int):
        super().__init__()
        self.fail_on_call = fail_on_call
        self.calls = 0

    def write(self, data):
        self.calls += 1
        if self.calls == self.fail_on_call:
            raise OSError(28, "No space left on device")
        return super().write(data)


def _run(config: CollectorConfig, **kwargs):
    sink = io.BytesIO()
    result = collect(config, sink, **kwargs)
    return result, sink.getvalue()


class TestCollect:
    def test_non_recursive_ignores_subdirectories(self, sample_project: Path):
        result, output = _run(CollectorConfig.from_options(sample_project, ".go,.md"))

        assert result.ok
        assert result.files_written == 3
        assert SECTION_HEADER.findall(output) == [b"a.go", b"b.md", b"zz.go"]
        assert b"package sub" not in output

    def test_recursive_includes_every_match_once(self, sample_project: Path):
        result, output = _run(CollectorConfig.from_options(sample_project, ".go", recursive=True))

        assert result.files_written == 4
        assert SECTION_HEADER.findall(output) == [b"a.go", b"sub/d.go", b"sub/deeper/e.go", b"zz.go"]

    def test_document_layout(self, sample_project: Path):
        _, output = _run(CollectorConfig.from_options(sample_project, ".md,go"))
        assert output == (
            b"## File: `a.go`\n\n```go\npackage a\n\n```\n\n"
            b"## File: `b.md`\n\n```markdown\n# notes\n\n```\n\n"
            b"## File: `zz.go`\n\n```go\npackage zz\n\n```\n\n"
        )

    def test_runs_are_byte_identical(self, sample_project: Path):
        config = CollectorConfig.from_options(sample_project, ".go,.md", recursive=True)
        assert _run(config)[1] == _run(config)[1]

    def test_content_round_trips_exactly(self, tmp_path: Path):
        raw = b"\xef\xbb\xbfline one\r\nline two\x00\xff\xfe no trailing newline"
        (tmp_path / "raw.go").write_bytes(raw)

        _, output = _run(CollectorConfig.from_options(tmp_path, "go"))

        assert output == b"## File: `raw.go`\n\n```go\n" + raw + b"\n```\n\n"

    def test_unknown_extension_uses_stripped_tag(self, tmp_path: Path):
        (tmp_path / "data.xyz").write_text("1,2,3")
        _, output = _run(CollectorConfig.from_options(tmp_path, "xyz"))
        assert b"```xyz\n1,2,3\n```" in output

    def test_extension_match_is_case_sensitive(self, tmp_path: Path):
        (tmp_path / "a.py").write_text("print(1)\n")

        upper_result, upper_output = _run(CollectorConfig.from_options(tmp_path, ".PY"))
        lower_result, lower_output = _run(CollectorConfig.from_options(tmp_path, "py"))

        assert upper_result.files_written == 0 and upper_output == b""
        assert lower_result.files_written == 1
        assert lower_output == _run(CollectorConfig.from_options(tmp_path, ".py"))[1]

    def test_no_matches_is_still_success(self, tmp_path: Path):
        (tmp_path / "notes.txt").write_text("hello")
        (tmp_path / "data.csv").write_text("a,b")

        result, output = _run(CollectorConfig.from_options(tmp_path, ".go,.md"))

        assert result.ok
        assert result.files_written == 0
        assert output == b""

    @pytest.mark.skipif(sys.platform in ("win32", "darwin"), reason="filesystem requires utf-8 names")
    def test_non_utf8_file_name_is_written_as_raw_bytes(self, tmp_path: Path):
        (tmp_path / "a.go").write_text("package a\n")
        with open(os.path.join(os.fsencode(tmp_path), b"caf\xe9.go"), "wb") as f:
            f.write(b"package cafe\n")

        result, output = _run(CollectorConfig.from_options(tmp_path, ".go"))

        assert result.ok
        assert result.files_written == 2
        assert SECTION_HEADER.findall(output) == [b"a.go", b"caf\xe9.go"]
        assert b"## File: `caf\xe9.go`\n\n```go\npackage cafe\n\n```\n\n" in output

    def test_processing_callback_sees_each_selected_file(self, sample_project: Path):
        seen = []
        _run(CollectorConfig.from_options(sample_project, ".go"), on_processing=lambda e: seen.append(e.relative_path))
        assert seen == ["a.go", "zz.go"]


class TestRecoverableErrors:
    def test_unreadable_file_is_skipped_with_warning(self, tmp_path: Path, monkeypatch):
        (tmp_path / "a.go").write_text("package a\n")
        (tmp_path / "b.go").write_text("package b\n")

        original_read_bytes = Path.read_bytes

        def fake_read_bytes(self):
            if self.name == "b.go":
                raise PermissionError(13, "Permission denied", str(self))
            return original_read_bytes(self)

        monkeypatch.setattr(Path, "read_bytes", fake_read_bytes)
        warnings = []

        result, output = _run(
            CollectorConfig.from_options(tmp_path, ".go"),
            on_warning=lambda path, reason: warnings.append((path, reason)),
        )

        assert result.ok
        assert result.files_written == 1
        assert result.warnings == 1
        assert SECTION_HEADER.findall(output) == [b"a.go"]
        assert warnings[0][0] == tmp_path / "b.go"
        assert "Permission denied" in warnings[0][1]

    def test_unreadable_subdirectory_does_not_stop_the_walk(self, sample_project: Path, monkeypatch):
        original = walker._sorted_entries

        def fake_sorted_entries(directory: Path):
            if directory.name == "deeper":
                raise PermissionError(13, "Permission denied", str(directory))
            return original(directory)

        monkeypatch.setattr(walker, "_sorted_entries", fake_sorted_entries)

        result, output = _run(CollectorConfig.from_options(sample_project, ".go", recursive=True))

        assert result.ok
        assert result.warnings == 1
        assert SECTION_HEADER.findall(output) == [b"a.go", b"sub/d.go", b"zz.go"]


class TestFatalErrors:
    def test_sink_failure_on_third_write_aborts(self, sample_project: Path):
        sink = FailingSink(fail_on_call=3)
        processed = []

        result = collect(
            CollectorConfig.from_options(sample_project, ".go,.md"), sink,
            on_processing=lambda e: processed.append(e.relative_path),
        )

        assert not result.ok
        assert isinstance(result.fatal_error, OutputError)
        assert result.fatal_error.stage == "content"
        assert result.fatal_error.relative_path == "a.go"
        assert result.files_written == 0
        assert processed == ["a.go"]
        # the partial section stays, nothing after it is written.
        assert sink.getvalue() == b"## File: `a.go`\n\n```go\n"

    def test_closed_sink_is_fatal(self, sample_project: Path):
        sink = io.BytesIO()
        sink.close()
        result = collect(CollectorConfig.from_options(sample_project, ".go"), sink)
        assert isinstance(result.fatal_error, OutputError)
        assert result.fatal_error.stage == "header"

    def test_root_vanishing_before_walk_is_fatal(self, tmp_path: Path):
        root = tmp_path / "root"
        root.mkdir()
        config = CollectorConfig.from_options(root, ".go")
        root.rmdir()

        result, output = _run(config)

        assert isinstance(result.fatal_error, DiscoveryError)
        assert result.files_written == 0
        assert output == b""

    def test_file_removed_after_selection_is_only_a_warning(self, tmp_path: Path, monkeypatch):
        (tmp_path / "gone.go").write_text("x")
        (tmp_path / "kept.go").write_text("y")
        config = CollectorConfig.from_options(tmp_path, ".go")
        entries = list(walker.walk_selected_files(config))
        (tmp_path / "gone.go").unlink()

        monkeypatch.setattr("mdcollect.core.pipeline.walk_selected_files", lambda cfg, on_warning=None: iter(entries))
        result, output = _run(config)

        assert result.ok
        assert result.warnings == 1
        assert result.files_written == 1
        assert SECTION_HEADER.findall(output) == [b"kept.go"]
