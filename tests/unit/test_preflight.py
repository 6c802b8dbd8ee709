import os
import stat
from pathlib import Path

import pytest

from hostsmith.exceptions import HostsNotFoundError, HostsTooLargeError
from hostsmith.preflight import PreflightGuard, is_read_only, set_read_only

pytestmark = pytest.mark.unit

posix_only = pytest.mark.skipif(os.name == "nt", reason="POSIX permission bits")


def _hosts(tmp_path: Path, content: str = "127.0.0.1 localhost\n") -> Path:
    path = tmp_path / "hosts"
    path.write_text(content, encoding="utf-8")
    return path


def test_check_missing_file(tmp_path: Path):
    with pytest.raises(HostsNotFoundError) as excinfo:
        PreflightGuard(tmp_path / "nope").check()
    assert excinfo.value.details["path"].endswith("nope")


def test_check_directory_is_not_a_hosts_file(tmp_path: Path):
    with pytest.raises(HostsNotFoundError):
        PreflightGuard(tmp_path).check()


def test_check_size_ceiling(tmp_path: Path):
    path = _hosts(tmp_path, "x" * 100)
    guard = PreflightGuard(path, max_size=99)

    with pytest.raises(HostsTooLargeError) as excinfo:
        guard.check()
    assert excinfo.value.details["size"] == 100

    assert guard.check(check_size=False) == 100
    assert PreflightGuard(path, max_size=100).check() == 100


@posix_only
def test_set_read_only_round_trip(tmp_path: Path):
    path = _hosts(tmp_path)
    set_read_only(path, True)
    assert is_read_only(path)
    set_read_only(path, False)
    assert not is_read_only(path)


@posix_only
def test_acquire_clears_and_restores(tmp_path: Path):
    path = _hosts(tmp_path)
    os.chmod(path, stat.S_IRUSR)
    guard = PreflightGuard(path)

    with guard.acquire(clear_read_only=True) as cleared:
        assert cleared is True
        assert not is_read_only(path)

    assert is_read_only(path)


@posix_only
def test_acquire_restores_exact_permission_bits(tmp_path: Path):
    path = _hosts(tmp_path)
    os.chmod(path, 0o464)

    with PreflightGuard(path).acquire(clear_read_only=True) as cleared:
        assert cleared is True
        assert stat.S_IMODE(os.stat(path).st_mode) == 0o664

    assert stat.S_IMODE(os.stat(path).st_mode) == 0o464


@posix_only
def test_acquire_restores_on_error(tmp_path: Path):
    path = _hosts(tmp_path)
    os.chmod(path, stat.S_IRUSR)

    with pytest.raises(RuntimeError):
        with PreflightGuard(path).acquire(clear_read_only=True):
            raise RuntimeError("boom")

    assert is_read_only(path)


def test_acquire_leaves_writable_file_alone(tmp_path: Path, monkeypatch):
    path = _hosts(tmp_path)
    calls = []
    monkeypatch.setattr("hostsmith.preflight.set_read_only", lambda *args: calls.append(args))

    with PreflightGuard(path).acquire(clear_read_only=True) as cleared:
        assert cleared is False

    assert calls == []


def test_acquire_without_clearing(tmp_path: Path, monkeypatch):
    path = _hosts(tmp_path)
    monkeypatch.setattr("hostsmith.preflight.is_read_only", lambda _path: True)

    with PreflightGuard(path).acquire(clear_read_only=False) as cleared:
        assert cleared is False


def test_report_missing_file(tmp_path: Path):
    report = PreflightGuard(tmp_path / "hosts").report()

    assert report.ok is False
    assert any("not found" in e for e in report.errors)
    assert "Errors:" in report.pretty()


def test_report_too_large_file(tmp_path: Path, monkeypatch):
    path = _hosts(tmp_path, "x" * 10)
    monkeypatch.setattr("hostsmith.preflight.os.access", lambda *_: True)

    report = PreflightGuard(path, max_size=5).report()

    assert report.ok is False
    assert report.size == 10
    assert any("--no-size-check" in s for s in report.suggestions)


def test_report_honours_disabled_size_check(tmp_path: Path, monkeypatch):
    path = _hosts(tmp_path, "x" * 10)
    monkeypatch.setattr("hostsmith.preflight.os.access", lambda *_: True)
    monkeypatch.setattr("hostsmith.preflight.is_read_only", lambda _path: False)

    report = PreflightGuard(path, max_size=5).report(check_size=False)

    assert report.ok is True
    assert report.size == 10
    assert report.errors == []


def test_report_happy_path(tmp_path: Path, monkeypatch):
    path = _hosts(tmp_path)
    monkeypatch.setattr("hostsmith.preflight.os.access", lambda *_: True)
    monkeypatch.setattr("hostsmith.preflight.is_read_only", lambda _path: False)

    report = PreflightGuard(path).report()

    assert report.ok is True
    assert report.pretty() == "All preflight checks passed."


def test_report_read_only_warning(tmp_path: Path, monkeypatch):
    path = _hosts(tmp_path)
    monkeypatch.setattr("hostsmith.preflight.os.access", lambda *_: True)
    monkeypatch.setattr("hostsmith.preflight.is_read_only", lambda _path: True)

    report = PreflightGuard(path).report()

    assert report.ok is True
    assert report.read_only is True
    assert any("read-only" in w for w in report.warnings)
