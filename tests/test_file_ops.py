from __future__ import annotations

import os
from datetime import datetime

import pytest

from fsgate.errors import ErrorKind, IsADirectory, NotFound, StorageIOError
from fsgate.services import file_ops
from fsgate.services.file_ops import STAT_FAILED, FileOps


@pytest.fixture
def ops() -> FileOps:
    return FileOps()


def test_write_then_read_round_trip(tmp_path, ops):
    target = tmp_path / 'notes.txt'
    content = 'hello\r\nwörld\n\tlast line without newline'

    message = ops.write_file(target, 'notes.txt', content)

    assert message == 'File written successfully: notes.txt'
    assert ops.read_file(target, 'notes.txt') == content


def test_write_overwrites_existing_content(tmp_path, ops):
    target = tmp_path / 'notes.txt'
    target.write_text('a much longer original body', encoding='utf-8')

    ops.write_file(target, 'notes.txt', 'short')

    assert target.read_text(encoding='utf-8') == 'short'


def test_write_requires_existing_parent(tmp_path, ops):
    with pytest.raises(NotFound) as exc:
        ops.write_file(tmp_path / 'missing' / 'notes.txt', 'missing/notes.txt', 'x')

    assert 'missing/notes.txt' in exc.value.message
    assert not (tmp_path / 'missing').exists()


def test_write_refuses_to_replace_directory(tmp_path, ops):
    (tmp_path / 'docs').mkdir()

    with pytest.raises(IsADirectory):
        ops.write_file(tmp_path / 'docs', 'docs', 'x')

    assert (tmp_path / 'docs').is_dir()


def test_read_directory_is_rejected(tmp_path, ops):
    (tmp_path / 'docs').mkdir()

    with pytest.raises(IsADirectory) as exc:
        ops.read_file(tmp_path / 'docs', 'docs')

    assert exc.value.kind is ErrorKind.IS_A_DIRECTORY


def test_read_missing_file_is_not_found(tmp_path, ops):
    with pytest.raises(NotFound):
        ops.read_file(tmp_path / 'nope.txt', 'nope.txt')


def test_read_undecodable_file_is_io_error(tmp_path, ops):
    (tmp_path / 'blob.bin').write_bytes(b'\xff\xfe\x00\x81')

    with pytest.raises(StorageIOError):
        ops.read_file(tmp_path / 'blob.bin', 'blob.bin')


def test_create_directory_is_idempotent_and_recursive(tmp_path, ops):
    target = tmp_path / 'a' / 'b' / 'c'

    assert ops.create_directory(target, 'a/b/c') == 'Directory created: a/b/c'
    assert ops.create_directory(target, 'a/b/c') == 'Directory created: a/b/c'
    assert target.is_dir()


def test_create_directory_over_file_fails(tmp_path, ops):
    (tmp_path / 'taken').write_text('x', encoding='utf-8')

    with pytest.raises(StorageIOError):
        ops.create_directory(tmp_path / 'taken', 'taken')


def test_delete_directory_removes_contents(tmp_path, ops):
    (tmp_path / 'docs' / 'nested').mkdir(parents=True)
    (tmp_path / 'docs' / 'a.txt').write_text('a', encoding='utf-8')
    (tmp_path / 'docs' / 'nested' / 'b.txt').write_text('b', encoding='utf-8')

    assert ops.delete_item(tmp_path / 'docs', 'docs') == 'Deleted: docs'

    assert not (tmp_path / 'docs').exists()
    with pytest.raises(NotFound):
        ops.get_file_info(tmp_path / 'docs', 'docs')


def test_delete_file_removes_only_that_file(tmp_path, ops):
    (tmp_path / 'keep.txt').write_text('keep', encoding='utf-8')
    (tmp_path / 'drop.txt').write_text('drop', encoding='utf-8')

    ops.delete_item(tmp_path / 'drop.txt', 'drop.txt')

    assert not (tmp_path / 'drop.txt').exists()
    assert (tmp_path / 'keep.txt').exists()


def test_delete_missing_is_not_found(tmp_path, ops):
    with pytest.raises(NotFound):
        ops.delete_item(tmp_path / 'ghost', 'ghost')


def test_list_directory_reports_entries(tmp_path, ops):
    (tmp_path / 'sub').mkdir()
    (tmp_path / 'b.txt').write_text('12345', encoding='utf-8')

    listing = ops.list_directory(tmp_path, '.')

    assert listing.path == '.'
    assert [entry.name for entry in listing.contents] == ['b.txt', 'sub']
    file_entry, dir_entry = listing.contents
    assert file_entry.kind == 'file'
    assert file_entry.size == 5
    assert file_entry.error is None
    assert datetime.fromisoformat(file_entry.modified_timestamp).tzinfo is not None
    assert dir_entry.kind == 'directory'


def test_list_directory_degrades_per_entry_on_stat_failure(tmp_path, ops, monkeypatch):
    (tmp_path / 'ok.txt').write_text('ok', encoding='utf-8')
    (tmp_path / 'racy.txt').write_text('gone soon', encoding='utf-8')
    real_stat = os.stat

    def _flaky_stat(path, *args, **kwargs):
        if os.fspath(path).endswith('racy.txt'):
            raise FileNotFoundError(2, 'No such file or directory')
        return real_stat(path, *args, **kwargs)

    monkeypatch.setattr(file_ops.os, 'stat', _flaky_stat)

    listing = ops.list_directory(tmp_path, 'here')

    entries = {entry.name: entry for entry in listing.contents}
    assert entries['racy.txt'].error == STAT_FAILED
    assert entries['racy.txt'].size is None
    assert entries['ok.txt'].error is None
    assert entries['ok.txt'].size == 2


def test_list_missing_directory_is_not_found(tmp_path, ops):
    with pytest.raises(NotFound):
        ops.list_directory(tmp_path / 'ghost', 'ghost')


def test_list_file_is_io_error(tmp_path, ops):
    (tmp_path / 'plain.txt').write_text('x', encoding='utf-8')

    with pytest.raises(StorageIOError):
        ops.list_directory(tmp_path / 'plain.txt', 'plain.txt')


def test_get_file_info_for_file(tmp_path, ops):
    target = tmp_path / 'notes.txt'
    target.write_text('hello', encoding='utf-8')
    os.chmod(target, 0o640)

    info = ops.get_file_info(target, 'notes.txt')

    assert info.path == 'notes.txt'
    assert info.kind == 'file'
    assert info.size == 5
    assert info.permission_bits == '640'
    for value in (info.created_timestamp, info.modified_timestamp, info.accessed_timestamp):
        assert datetime.fromisoformat(value).tzinfo is not None


def test_get_file_info_for_directory_keeps_caller_path(tmp_path, ops):
    info = ops.get_file_info(tmp_path, '.')

    assert info.kind == 'directory'
    assert info.path == '.'
    assert str(tmp_path) not in info.model_dump_json()
