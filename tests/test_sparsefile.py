import pytest

from diskprobe.sparsefile import sparse_file_create, sparse_file_delete, sparse_file_info


def test_create_sparse_file(tmp_path):
    path = tmp_path / "test.img"
    sparse_file_create(path, 1024)
    assert path.stat().st_size == 1024


def test_retry_create_with_same_file(tmp_path):
    path = tmp_path / "test.img"
    sparse_file_create(path, 1024)
    sparse_file_create(path, 1024)
    assert path.stat().st_size == 1024


def test_create_in_missing_subdir_fails(tmp_path):
    with pytest.raises(OSError):
        sparse_file_create(tmp_path / "0" / "test.img", 1024)


def test_delete_twice(tmp_path):
    path = tmp_path / "test.img"
    sparse_file_create(path, 1024)
    sparse_file_delete(path)
    assert not path.exists()
    sparse_file_delete(path)
    assert not path.exists()


def test_info_reports_size(tmp_path):
    path = tmp_path / "test.img"
    sparse_file_create(path, 1024)
    assert sparse_file_info(path).st_size == 1024


def test_info_of_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        sparse_file_info(tmp_path / "invalid")