"""Tests for server startup error scenarios.

Config validation runs before uvicorn starts, so a bad value exits the
process with a non-zero status instead of serving requests.
"""

from __future__ import annotations

import subprocess
import sys


def _run_and_wait(env: dict[str, str], timeout: int = 20) -> subprocess.CompletedProcess[str]:
    return subprocess.run(
        [sys.executable, "-m", "socialmeta.server"],
        stdin=subprocess.DEVNULL,
        capture_output=True,
        text=True,
        timeout=timeout,
        env=env,
    )


class TestBadConfig:
    def test_crashes_on_wrong_port_type(self, subprocess_env: dict[str, str]) -> None:
        env = {**subprocess_env, "SOCIALMETA__SERVER__PORT": "not-a-number"}
        result = _run_and_wait(env)
        assert result.returncode != 0
        assert "port" in result.stderr

    def test_crashes_on_unknown_cache_scope(self, subprocess_env: dict[str, str]) -> None:
        env = {**subprocess_env, "SOCIALMETA__CACHE__SCOPE": "site"}
        result = _run_and_wait(env)
        assert result.returncode != 0

    def test_crashes_on_bad_ttl(self, subprocess_env: dict[str, str]) -> None:
        env = {**subprocess_env, "SOCIALMETA__CACHE__TTL_SECONDS": "three minutes"}
        result = _run_and_wait(env)
        assert result.returncode != 0
