"""Tests for file operations and the File handle lifecycle."""

import errno
import os
from unittest.mock import patch

import pytest

from fs_utils.core.exceptions import (
    AlreadyExistsError,
    PathNotFoundError,
    StorageIOError,
    ValidationError,
)
from fs_utils.filesystem.entities import File, HandleState
from fs_utils.filesystem.files import (
    append_to_file,
    copy_file,
    create_file,
    create_file_with_content,
    get_file,
    is_file_exists,
    print_file,
    read_file,
    read_file_handle,
    read_file_into,
    remove_file,
    remove_file_handle,
    remove_file_handle_with_content,
    rename_file,
)


class TestExistence:
    """Test file existence checks."""

    def test_existing_file(self, sample_tree):
        assert is_file_exists(str(sample_tree / "a.txt")) is True

    def test_missing_file(self, temp_dir):
        assert is_file_exists(str(temp_dir / "non_existing_file.txt")) is False

    def test_directory_is_not_a_file(self, sample_tree):
        assert is_file_exists(str(sample_tree / "sub")) is False

    def test_get_file(self, sample_tree):
        path = str(sample_tree / "a.txt")

        assert get_file(path) == path

    def test_get_file_missing(self, temp_dir):
        with pytest.raises(PathNotFoundError):
            get_file(str(temp_dir / "missing.txt"))


class TestCreateAndRead:
    """Test file creation and line-oriented reads."""

    def test_round_trip(self, temp_dir):
        """Test that written lines read back exactly, in order."""
        path = str(temp_dir / "lines.txt")

        create_file_with_content(path, ["Line 1", "Line 2"])

        assert read_file(path) == ["Line 1", "Line 2"]

    def test_round_trip_keeps_blank_lines(self, temp_dir):
        path = str(temp_dir / "blank.txt")

        create_file_with_content(path, ["", "middle", ""])

        assert read_file(path) == ["", "middle", ""]

    def test_create_file_with_content_handle(self, temp_dir):
        path = str(temp_dir / "lines.txt")

        handle = create_file_with_content(path, ["BY"])

        assert handle.path == path
        assert handle.content == ["BY"]
        assert handle.state is HandleState.bound

    def test_create_file(self, temp_dir):
        """Test that an empty file's handle holds a single empty line."""
        path = str(temp_dir / "empty.txt")

        handle = create_file(path)

        assert is_file_exists(path)
        assert handle.content == [""]
        assert read_file(path) == []

    def test_create_file_already_exists(self, sample_tree):
        """Test that creating over an existing file fails without mutation."""
        path = str(sample_tree / "a.txt")

        with pytest.raises(AlreadyExistsError) as exc_info:
            create_file(path)

        assert exc_info.value.path == path
        assert read_file(path) == ["alpha"]

    def test_create_file_with_content_already_exists(self, sample_tree):
        with pytest.raises(AlreadyExistsError):
            create_file_with_content(str(sample_tree / "b.txt"), ["other"])

        assert read_file(str(sample_tree / "b.txt")) == ["beta"]

    def test_create_file_rejects_embedded_newline(self, temp_dir):
        path = str(temp_dir / "bad.txt")

        with pytest.raises(ValidationError):
            create_file_with_content(path, ["one\ntwo"])

        assert not is_file_exists(path)

    def test_read_drops_crlf(self, temp_dir):
        path = temp_dir / "crlf.txt"
        path.write_bytes(b"one\r\ntwo\r\n")

        assert read_file(str(path)) == ["one", "two"]

    def test_read_without_trailing_newline(self, temp_dir):
        path = temp_dir / "partial.txt"
        path.write_text("one\ntwo")

        assert read_file(str(path)) == ["one", "two"]

    def test_read_missing(self, temp_dir):
        with pytest.raises(PathNotFoundError):
            read_file(str(temp_dir / "missing.txt"))

    def test_read_undecodable_bytes(self, temp_dir):
        """Test that invalid text surfaces as a storage error for the path."""
        path = temp_dir / "binary.dat"
        path.write_bytes(b"\xff\xfe\x00abc\n")

        with pytest.raises(StorageIOError) as exc_info:
            read_file(str(path))

        assert exc_info.value.path == str(path)

    def test_read_file_handle(self, sample_tree):
        handle = read_file_handle(str(sample_tree / "a.txt"))

        assert handle.content == ["alpha"]
        assert handle.state is HandleState.bound

    def test_read_file_into_appends(self, sample_tree):
        handle = File(path=str(sample_tree / "a.txt"), content=["before"])

        read_file_into(handle)

        assert handle.content == ["before", "alpha"]
        assert handle.state is HandleState.bound


class TestPrintFile:
    """Test numbered file output."""

    def test_numbered_lines(self, temp_dir):
        path = str(temp_dir / "lines.txt")
        create_file_with_content(path, ["first", "second"])
        lines = []

        print_file(path, lines.append)

        assert lines == ["1. first", "2. second"]

    def test_missing_file_is_fatal(self, temp_dir):
        with pytest.raises(SystemExit):
            print_file(str(temp_dir / "missing.txt"), lambda line: None)

    @patch("fs_utils.filesystem.files.local_storage.open_for_read")
    def test_read_failure_is_fatal(self, mock_open, sample_tree):
        mock_open.side_effect = StorageIOError("Read failed", "a.txt")

        with pytest.raises(SystemExit) as exc_info:
            print_file(str(sample_tree / "a.txt"), lambda line: None)

        assert "Read failed" in str(exc_info.value.code)

    def test_undecodable_file_is_fatal(self, temp_dir):
        path = temp_dir / "binary.dat"
        path.write_bytes(b"\xff\xfe\x00abc\n")

        with pytest.raises(SystemExit) as exc_info:
            print_file(str(path), lambda line: None)

        assert "cannot decode" in str(exc_info.value.code)


class TestAppend:
    """Test appending lines."""

    def test_append(self, temp_dir):
        path = str(temp_dir / "append.txt")
        create_file(path)

        append_to_file(path, ["Line 1", "Line 2"])

        assert read_file(path) == ["Line 1", "Line 2"]

    def test_append_after_content(self, sample_tree):
        path = str(sample_tree / "a.txt")

        append_to_file(path, ["more"])

        assert read_file(path) == ["alpha", "more"]

    def test_append_missing(self, temp_dir):
        path = str(temp_dir / "missing.txt")

        with pytest.raises(PathNotFoundError):
            append_to_file(path, ["x"])

        assert not is_file_exists(path)


class TestRemoveFile:
    """Test file removal and handle release."""

    def test_remove_file(self, sample_tree):
        path = str(sample_tree / "a.txt")

        remove_file(path)

        assert not is_file_exists(path)

    def test_remove_file_missing(self, temp_dir):
        with pytest.raises(PathNotFoundError):
            remove_file(str(temp_dir / "missing.txt"))

    def test_exists_after_create_not_after_remove(self, temp_dir):
        path = str(temp_dir / "cycle.txt")

        create_file(path)
        assert is_file_exists(path)

        remove_file(path)
        assert not is_file_exists(path)

    def test_remove_file_handle(self, sample_tree):
        handle = read_file_handle(str(sample_tree / "a.txt"))

        remove_file_handle(handle)

        assert not is_file_exists(str(sample_tree / "a.txt"))
        assert handle.path == ""
        assert handle.content == []
        assert handle.state is HandleState.released

    def test_remove_file_handle_with_content(self, sample_tree):
        handle = File(path=str(sample_tree / "b.txt"))

        content = remove_file_handle_with_content(handle)

        assert content == ["beta"]
        assert not is_file_exists(str(sample_tree / "b.txt"))
        assert handle.state is HandleState.released

    def test_remove_file_handle_missing(self, temp_dir):
        handle = File(path=str(temp_dir / "missing.txt"))

        with pytest.raises(PathNotFoundError):
            remove_file_handle(handle)

        assert handle.state is HandleState.unbound


class TestRenameFile:
    """Test file renames."""

    def test_rename(self, sample_tree):
        src = str(sample_tree / "a.txt")
        dst = str(sample_tree / "renamed.txt")

        rename_file(src, dst)

        assert not is_file_exists(src)
        assert read_file(dst) == ["alpha"]

    def test_rename_destination_exists(self, sample_tree):
        """Test that rename never overwrites."""
        with pytest.raises(AlreadyExistsError):
            rename_file(str(sample_tree / "a.txt"), str(sample_tree / "b.txt"))

        assert read_file(str(sample_tree / "b.txt")) == ["beta"]

    def test_rename_missing(self, temp_dir):
        with pytest.raises(PathNotFoundError):
            rename_file(str(temp_dir / "missing.txt"), str(temp_dir / "x.txt"))


class TestCopyFile:
    """Test file copies."""

    def test_copy_is_byte_identical(self, temp_dir):
        src = temp_dir / "source.bin"
        src.write_bytes(bytes(range(256)) * 1024)
        dst = temp_dir / "destination.bin"

        copy_file(str(src), str(dst))

        assert dst.read_bytes() == src.read_bytes()

    def test_copy_is_independent_of_source(self, sample_tree):
        src = str(sample_tree / "a.txt")
        dst = str(sample_tree / "copy.txt")

        copy_file(src, dst)
        append_to_file(src, ["changed"])

        assert read_file(dst) == ["alpha"]

    def test_copy_destination_exists(self, sample_tree):
        with pytest.raises(AlreadyExistsError):
            copy_file(str(sample_tree / "a.txt"), str(sample_tree / "b.txt"))

        assert read_file(str(sample_tree / "b.txt")) == ["beta"]

    @patch("fs_utils.filesystem.files.shutil.copyfileobj")
    def test_failed_copy_removes_destination(self, mock_copy, sample_tree):
        """Test that no partial destination survives a failed copy."""
        mock_copy.side_effect = OSError(errno.EIO, "Input/output error")
        dst = str(sample_tree / "copy.txt")

        with pytest.raises(StorageIOError):
            copy_file(str(sample_tree / "a.txt"), dst)

        assert not os.path.lexists(dst)
        assert read_file(str(sample_tree / "a.txt")) == ["alpha"]

    def test_copy_missing_source(self, temp_dir):
        dst = str(temp_dir / "destination.txt")

        with pytest.raises(PathNotFoundError):
            copy_file(str(temp_dir / "missing.txt"), dst)

        assert not is_file_exists(dst)
