import io
from itertools import islice

import pytest

from fileshare.utils.upload_naming import (
    candidate_names,
    copy_stream,
    create_exclusive,
    split_extension,
)


@pytest.mark.parametrize(
    "name, expected",
    [
        ("report.pdf", ("report", ".pdf")),
        ("archive.tar.gz", ("archive.tar", ".gz")),
        ("README", ("README", "")),
        (".bashrc", ("", ".bashrc")),
    ],
)
def test_split_extension(name, expected):
    assert split_extension(name) == expected


def test_candidates_grow_from_original_name():
    assert list(islice(candidate_names("report.pdf"), 4)) == [
        "report.pdf",
        "report (1).pdf",
        "report (2).pdf",
        "report (3).pdf",
    ]
    assert list(islice(candidate_names("Makefile"), 2)) == ["Makefile", "Makefile (1)"]


def test_create_exclusive_skips_taken_names(tmp_path):
    (tmp_path / "a.txt").write_text("original")
    (tmp_path / "a (1).txt").write_text("first copy")

    path, fh = create_exclusive(str(tmp_path), "a.txt")
    with fh:
        fh.write(b"new")

    assert path == str(tmp_path / "a (2).txt")
    assert (tmp_path / "a.txt").read_text() == "original"
    assert (tmp_path / "a (1).txt").read_text() == "first copy"
    assert (tmp_path / "a (2).txt").read_bytes() == b"new"


def test_create_exclusive_skips_directories_with_the_same_name(tmp_path):
    (tmp_path / "data").mkdir()
    path, fh = create_exclusive(str(tmp_path), "data")
    fh.close()
    assert path == str(tmp_path / "data (1)")


def test_create_exclusive_propagates_other_errors(tmp_path):
    with pytest.raises(OSError):
        create_exclusive(str(tmp_path / "missing-dir"), "a.txt")


def test_copy_stream_counts_bytes():
    src = io.BytesIO(b"x" * 10)
    dst = io.BytesIO()
    assert copy_stream(src, dst, chunk_size=3) == 10
    assert dst.getvalue() == b"x" * 10
