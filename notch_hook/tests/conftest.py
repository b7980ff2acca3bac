"""
Pytest configuration for notch hook tests.

Adds the repository root to sys.path so tests can import notch_hook, and
provides a HookConfig over tmp_path plus a throwaway Unix socket listener.
"""
import json
import shutil
import socket
import sys
import tempfile
import threading
from pathlib import Path

import pytest

# Add repository root to path for imports
repo_root = Path(__file__).parent.parent.parent
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from notch_hook.config import HookConfig  # noqa: E402


class SocketRecorder:
    """Accepts connections on a Unix socket and records decoded messages."""

    def __init__(self, path: Path, reply: bytes = b'{"success":true}'):
        self.path = path
        self.reply = reply
        self.messages: list[dict] = []
        self._received = threading.Event()
        self._stop = threading.Event()
        self._server = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        self._server.bind(str(path))
        self._server.listen(5)
        self._server.settimeout(0.2)
        self._thread = threading.Thread(target=self._serve, daemon=True)
        self._thread.start()

    def _serve(self):
        while not self._stop.is_set():
            try:
                conn, _ = self._server.accept()
            except socket.timeout:
                continue
            except OSError:
                return
            with conn:
                conn.settimeout(2.0)
                buffer = b""
                while True:
                    try:
                        chunk = conn.recv(65536)
                    except OSError:
                        break
                    if not chunk:
                        break
                    buffer += chunk
                    try:
                        message = json.loads(buffer.decode("utf-8"))
                    except ValueError:
                        continue
                    self.messages.append(message)
                    if self.reply:
                        conn.sendall(self.reply)
                    self._received.set()
                    break

    def wait(self, timeout: float = 2.0) -> bool:
        return self._received.wait(timeout)

    def close(self):
        self._stop.set()
        self._server.close()
        self._thread.join(timeout=2.0)


@pytest.fixture
def project_dir(tmp_path):
    """Empty project root named 'demo'."""
    path = tmp_path / "demo"
    path.mkdir()
    return path


@pytest.fixture
def short_tmp():
    """Short temp dir; AF_UNIX paths are limited to ~100 bytes."""
    path = Path(tempfile.mkdtemp(prefix="nh", dir="/tmp"))
    yield path
    shutil.rmtree(path, ignore_errors=True)


@pytest.fixture
def hook_config(project_dir, tmp_path, short_tmp):
    """Config whose socket has no listener."""
    return HookConfig.for_project(
        project_dir,
        diff_dir=tmp_path / "diffs",
        socket_path=short_tmp / "absent.sock",
        socket_timeout=1.0,
        data_dir=tmp_path / "data",
    )


@pytest.fixture
def socket_recorder(short_tmp):
    """Listening Unix socket that records every received message."""
    recorder = SocketRecorder(short_tmp / "notch.sock")
    yield recorder
    recorder.close()


@pytest.fixture
def silent_recorder(short_tmp):
    """Listening Unix socket that never replies."""
    recorder = SocketRecorder(short_tmp / "silent.sock", reply=b"")
    yield recorder
    recorder.close()


@pytest.fixture
def live_config(hook_config, socket_recorder):
    """Config pointing at the recording socket."""
    hook_config.socket_path = socket_recorder.path
    return hook_config
