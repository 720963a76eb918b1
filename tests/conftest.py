import subprocess

import pytest


class FakeStdin:
    def __init__(self):
        self.chunks = []
        self.closed = False

    def write(self, data):
        self.chunks.append(data)
        return len(data)

    def close(self):
        self.closed = True


class FakePopen:
    """Stands in for ``subprocess.Popen``; records every spawned argv."""

    def __init__(self, registry, returncode):
        self._registry = registry
        self._returncode = returncode

    def __call__(self, argv, stdin=None, **kwargs):
        self.argv = argv
        self.kwargs = kwargs
        self.stdin = FakeStdin() if stdin is subprocess.PIPE else None
        self.waited = False
        self._registry.append(self)
        return self

    def wait(self):
        self.waited = True
        return self._returncode


@pytest.fixture
def spawned(monkeypatch):
    """List of fake processes; set ``spawned.returncode`` before spawning."""

    class Registry(list):
        returncode = 0

    registry = Registry()

    def popen(argv, stdin=None, **kwargs):
        return FakePopen(registry, registry.returncode)(argv, stdin=stdin, **kwargs)

    monkeypatch.setattr("sshman.sshlib.subprocess.Popen", popen)
    return registry


@pytest.fixture
def app(tmp_path):
    from sshman.core import AppService

    return AppService(str(tmp_path / ".ssh_manager"))
