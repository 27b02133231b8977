"""Executable locator — find an installed Chrome/Chromium.

Used only when Playwright's bundled Chromium cannot be launched.  The
search is a pure function of (platform, probe, env): the probe answers
"which", "is this a file" and "may I execute it", so tests can describe a
fake filesystem instead of touching the real one.

Search order
------------
Windows: well-known install paths only (Chrome, Chrome x86, per-user
Chrome, per-user Chromium, Chromium, Chromium x86).

POSIX: resolve POSIX_COMMANDS on PATH in order, then fall back to the
well-known macOS app bundles and Linux binary paths.
"""

from __future__ import annotations

import os
import shutil
from typing import Mapping, Protocol

POSIX_COMMANDS: tuple[str, ...] = (
    "google-chrome-stable",
    "google-chrome",
    "chromium",
    "chromium-browser",
    "chrome",
)

POSIX_PATHS: tuple[str, ...] = (
    "/Applications/Google Chrome.app/Contents/MacOS/Google Chrome",
    "/Applications/Chromium.app/Contents/MacOS/Chromium",
    "/usr/bin/google-chrome",
    "/usr/bin/chromium-browser",
    "/usr/bin/chromium",
)


class ExecutableProbe(Protocol):
    """Filesystem / PATH capability the locator depends on."""

    def which(self, command: str) -> str | None: ...
    def is_file(self, path: str) -> bool: ...
    def is_executable(self, path: str) -> bool: ...


class SystemProbe:
    """ExecutableProbe backed by the real host."""

    def which(self, command: str) -> str | None:
        return shutil.which(command)

    def is_file(self, path: str) -> bool:
        return os.path.isfile(path)

    def is_executable(self, path: str) -> bool:
        return os.access(path, os.X_OK)


def is_windows(platform: str) -> bool:
    return platform.startswith("win")


def windows_paths(env: Mapping[str, str]) -> list[str]:
    """Well-known Windows install locations, per-user ones only with USERNAME."""
    paths = [
        r"C:\Program Files\Google\Chrome\Application\chrome.exe",
        r"C:\Program Files (x86)\Google\Chrome\Application\chrome.exe",
    ]
    username = env.get("USERNAME", "")
    if username:
        paths += [
            rf"C:\Users\{username}\AppData\Local\Google\Chrome\Application\chrome.exe",
            rf"C:\Users\{username}\AppData\Local\Chromium\Application\chrome.exe",
        ]
    paths += [
        r"C:\Program Files\Chromium\Application\chrome.exe",
        r"C:\Program Files (x86)\Chromium\Application\chrome.exe",
    ]
    return paths


def candidate_paths(platform: str, env: Mapping[str, str] | None = None) -> list[str]:
    """Ordered absolute paths probed for the given platform."""
    if is_windows(platform):
        return windows_paths(env if env is not None else os.environ)
    return list(POSIX_PATHS)


def _usable(probe: ExecutableProbe, path: str) -> bool:
    return probe.is_file(path) and probe.is_executable(path)


def locate_executable(
    platform: str,
    probe: ExecutableProbe,
    env: Mapping[str, str] | None = None,
) -> str | None:
    """Return the first usable browser executable, or None."""
    if not is_windows(platform):
        for command in POSIX_COMMANDS:
            resolved = probe.which(command)
            if resolved:
                return resolved

    for path in candidate_paths(platform, env):
        if _usable(probe, path):
            return path
    return None


def rejected_candidates(
    platform: str,
    probe: ExecutableProbe,
    env: Mapping[str, str] | None = None,
) -> list[str]:
    """Candidate paths that exist on disk but are not executable."""
    return [
        path
        for path in candidate_paths(platform, env)
        if probe.is_file(path) and not probe.is_executable(path)
    ]
