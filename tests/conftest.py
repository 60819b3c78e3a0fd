"""Shared test fixtures."""

import os
from concurrent.futures import Future

import pytest


@pytest.fixture
def mock_process(monkeypatch):
    """Mock process.run for tests. Queue a Result or an exception per call in responses."""
    from execa import process
    from execa.result import Result

    calls = []
    responses = []

    def fake_run(path, arguments=(), **kwargs):
        calls.append(("run", path, list(arguments), kwargs))
        future = Future()
        response = responses.pop(0) if responses else None
        if response is None:
            response = Result(cmd=process.joined_command(path, list(arguments)), code=0)
        if isinstance(response, BaseException):
            future.set_exception(response)
        else:
            future.set_result(response)
        return future

    monkeypatch.setattr(process, "run", fake_run)

    return type("MockProcess", (), {"calls": calls, "responses": responses})()


_SCRIPTS = {
    # echoes its first argument
    "noop": '#!/bin/sh\necho "$1"\n',
    # exits with its first argument
    "exit": '#!/bin/sh\nexit "$1"\n',
    "error-message": "#!/bin/sh\necho stdout\necho stderr >&2\nexit 1\n",
}


@pytest.fixture
def fixtures(tmp_path):
    """Directory of small executable shell scripts."""
    for name, body in _SCRIPTS.items():
        script = tmp_path / name
        script.write_text(body)
        os.chmod(script, 0o755)
    return tmp_path
