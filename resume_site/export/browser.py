"""Browser acquirer — launch a headless Chromium for one export.

Strategy:
1. Playwright's bundled Chromium (``driver.chromium.launch``).
2. On any failure: RESUME_BROWSER_PATH if set, otherwise the executable
   locator; then launch that binary with HARDENED_ARGS.

``acquire_browser`` is an async context manager: the browser it yields is
closed exactly once when the block exits, whether it exits normally or with
an exception.
"""

from __future__ import annotations

import logging
import os
import sys
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any, AsyncIterator, Literal, Mapping

from resume_site import config
from resume_site.export.errors import BrowserNotExecutable, BrowserNotFound
from resume_site.export.locator import (
    ExecutableProbe,
    SystemProbe,
    locate_executable,
    rejected_candidates,
)

logger = logging.getLogger("resume.export.browser")

# Flags for containers and serverless hosts: no sandbox, no GPU, no
# /dev/shm, no display compositor.
HARDENED_ARGS: tuple[str, ...] = (
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-gpu",
    "--disable-web-security",
    "--disable-features=VizDisplayCompositor",
)

INSTALL_HINT = "Please install Google Chrome or Chromium."

LaunchStrategy = Literal["bundled", "system"]


@dataclass
class LaunchedBrowser:
    browser: Any
    executable_path: str
    strategy: LaunchStrategy


def find_system_browser(
    probe: ExecutableProbe | None = None,
    platform: str | None = None,
    env: Mapping[str, str] | None = None,
) -> str:
    """Return a system browser path or raise BrowserNotFound."""
    override = config.get_browser_path()
    if override:
        logger.info("Using browser from RESUME_BROWSER_PATH: %s", override)
        return override

    probe = probe or SystemProbe()
    platform = platform or sys.platform
    env = env if env is not None else os.environ

    path = locate_executable(platform, probe, env)
    if path:
        return path

    rejected = rejected_candidates(platform, probe, env)
    if rejected:
        raise BrowserNotExecutable(
            f"Chrome executable found but not executable: {', '.join(rejected)}. "
            "Check file permissions."
        )
    raise BrowserNotFound(f"Chrome executable not found. {INSTALL_HINT}")


async def launch_browser(
    driver: Any,
    *,
    probe: ExecutableProbe | None = None,
    platform: str | None = None,
    env: Mapping[str, str] | None = None,
) -> LaunchedBrowser:
    """Launch the bundled Chromium, falling back to a system browser."""
    try:
        browser = await driver.chromium.launch(headless=True)
    except Exception as exc:
        logger.info("Bundled Chromium failed, falling back to system browser: %s", exc)
    else:
        path = driver.chromium.executable_path
        logger.info("Using bundled Chromium at %s", path)
        return LaunchedBrowser(browser=browser, executable_path=path, strategy="bundled")

    path = find_system_browser(probe, platform, env)
    try:
        browser = await driver.chromium.launch(
            executable_path=path,
            headless=True,
            args=list(HARDENED_ARGS),
        )
    except Exception as exc:
        raise BrowserNotFound(f"Browser at {path} failed to launch: {exc}") from exc
    logger.info("Using system browser at %s", path)
    return LaunchedBrowser(browser=browser, executable_path=path, strategy="system")


@asynccontextmanager
async def acquire_browser(
    driver: Any,
    *,
    probe: ExecutableProbe | None = None,
    platform: str | None = None,
    env: Mapping[str, str] | None = None,
) -> AsyncIterator[LaunchedBrowser]:
    """Yield a launched browser and close it on every exit path."""
    launched = await launch_browser(driver, probe=probe, platform=platform, env=env)
    try:
        yield launched
    finally:
        try:
            await launched.browser.close()
            logger.info("Browser closed (%s)", launched.strategy)
        except Exception:
            # Never let a failing close mask the error that ended the export.
            logger.warning("Browser close failed", exc_info=True)
