"""Shared fixtures for résumé site tests.

Browser doubles mirror the slice of the Playwright async API the export
pipeline uses: ``driver.chromium.launch/executable_path``,
``browser.new_page/close``, ``page.goto/evaluate/pdf``.
"""

from __future__ import annotations

from contextlib import asynccontextmanager

import pytest

from resume_site.content import ContentFetchError
from resume_site.models import ResumeData


# ---------------------------------------------------------------------------
# Content Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def resume_bundle() -> dict:
    """Raw collection bundle mixing visible and hidden records."""
    return {
        "personal_info": {
            "name": "Jane Doe",
            "position": "Backend Engineer",
            "email": "jane@example.com",
            "phone": "010-1234-5678",
            "website": "https://jane.example.com",
            "github": "https://github.com/janedoe",
            "introduction": "Builds APIs.",
        },
        "skills": [
            {"title": "Languages", "skills": ["Python", "Go"], "show": "show"},
            {"title": "Secret", "skills": ["COBOL"], "show": "hide"},
        ],
        "core_competencies": [
            {"title": "API design", "description": "REST and gRPC", "show": "show"},
        ],
        "work_summary": [
            {"company": "Acme", "position": "Engineer", "period": "2021 ~", "description": "Payments", "show": "show"},
            {"company": "Hidden Corp", "position": "Intern", "period": "2019", "show": "hide"},
        ],
        "work_achievements": [
            {"company": "Acme", "title": "Faster settlement", "details": "- 4h to 20m", "show": "show"},
            {"company": "Acme", "title": "Secret launch", "details": "", "show": "hide"},
        ],
        "projects": [
            {"title": "resume-site", "skills": ["FastAPI"], "github": "https://github.com/janedoe/resume-site", "show": "show"},
            {"title": "Abandoned idea", "show": "hide"},
        ],
        "awards": [{"title": "Hidden award", "show": "hide"}],
        "other_tools": [
            {"category": "Design", "title": "Figma", "show": "show"},
            {"title": "Notion", "description": "Docs", "show": "show"},
        ],
        "education": [{"school": "State University", "major": "CS", "show": "show"}],
        "military_service": {"title": "Army", "period": "2016 ~ 2018"},
    }


@pytest.fixture
def resume_data(resume_bundle: dict) -> ResumeData:
    return ResumeData.model_validate(resume_bundle)


class StaticContentSource:
    """ContentSource returning a fixed ResumeData (or raising)."""

    def __init__(self, data: ResumeData | None = None, error: str | None = None) -> None:
        self.data = data
        self.error = error
        self.calls = 0

    async def fetch(self) -> ResumeData:
        self.calls += 1
        if self.error is not None:
            raise ContentFetchError(self.error)
        return self.data or ResumeData()


@pytest.fixture
def static_source(resume_data: ResumeData) -> StaticContentSource:
    return StaticContentSource(resume_data)


@pytest.fixture
def failing_source() -> StaticContentSource:
    return StaticContentSource(error="Notion API returned 401 while fetching personal_info")


# ---------------------------------------------------------------------------
# Browser doubles
# ---------------------------------------------------------------------------


class FakeResponse:
    def __init__(self, status: int = 200) -> None:
        self.status = status

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


class FakePage:
    def __init__(
        self,
        *,
        goto_error: Exception | None = None,
        evaluate_error: Exception | None = None,
        pdf_error: Exception | None = None,
        status: int = 200,
        pdf_bytes: bytes = b"%PDF-1.7 fake document",
    ) -> None:
        self.goto_error = goto_error
        self.evaluate_error = evaluate_error
        self.pdf_error = pdf_error
        self.status = status
        self.pdf_bytes = pdf_bytes
        self.goto_calls: list[tuple[str, dict]] = []
        self.scripts: list[str] = []
        self.pdf_kwargs: dict | None = None

    async def goto(self, url: str, **kwargs) -> FakeResponse:
        self.goto_calls.append((url, kwargs))
        if self.goto_error is not None:
            raise self.goto_error
        return FakeResponse(self.status)

    async def evaluate(self, script: str) -> None:
        self.scripts.append(script)
        if self.evaluate_error is not None:
            raise self.evaluate_error

    async def pdf(self, **kwargs) -> bytes:
        self.pdf_kwargs = kwargs
        if self.pdf_error is not None:
            raise self.pdf_error
        return self.pdf_bytes


class FakeBrowser:
    def __init__(self, page: FakePage | None = None) -> None:
        self.page = page or FakePage()
        self.close_calls = 0
        self.new_page_kwargs: dict | None = None

    async def new_page(self, **kwargs) -> FakePage:
        self.new_page_kwargs = kwargs
        return self.page

    async def close(self) -> None:
        self.close_calls += 1


class FakeChromium:
    """``launch()`` without executable_path is the bundled attempt."""

    def __init__(
        self,
        browser: FakeBrowser,
        *,
        bundled_error: Exception | None = None,
        system_error: Exception | None = None,
        executable_path: str = "/opt/playwright/chromium/chrome",
    ) -> None:
        self.browser = browser
        self.bundled_error = bundled_error
        self.system_error = system_error
        self.executable_path = executable_path
        self.launch_calls: list[dict] = []

    async def launch(self, **kwargs) -> FakeBrowser:
        self.launch_calls.append(kwargs)
        if "executable_path" not in kwargs:
            if self.bundled_error is not None:
                raise self.bundled_error
        elif self.system_error is not None:
            raise self.system_error
        return self.browser


class FakeDriver:
    def __init__(self, chromium: FakeChromium) -> None:
        self.chromium = chromium


class FakeProbe:
    """ExecutableProbe over an in-memory description of the host."""

    def __init__(
        self,
        which: dict[str, str] | None = None,
        files: set[str] | None = None,
        non_executable: set[str] | None = None,
    ) -> None:
        self.which_map = which or {}
        self.files = files or set()
        self.non_executable = non_executable or set()
        self.which_calls: list[str] = []

    def which(self, command: str) -> str | None:
        self.which_calls.append(command)
        return self.which_map.get(command)

    def is_file(self, path: str) -> bool:
        return path in self.files

    def is_executable(self, path: str) -> bool:
        return path in self.files and path not in self.non_executable


@pytest.fixture
def fake_page() -> FakePage:
    return FakePage()


@pytest.fixture
def fake_browser(fake_page: FakePage) -> FakeBrowser:
    return FakeBrowser(fake_page)


@pytest.fixture
def make_driver(fake_browser: FakeBrowser):
    """Build a FakeDriver around the shared fake browser."""

    def _make(**chromium_kwargs) -> FakeDriver:
        return FakeDriver(FakeChromium(fake_browser, **chromium_kwargs))

    return _make


@pytest.fixture
def driver_factory_for():
    """Wrap a FakeDriver in an ``async_playwright()``-shaped factory."""

    def _factory(driver: FakeDriver):
        @asynccontextmanager
        async def _cm():
            yield driver

        return _cm

    return _factory


@pytest.fixture
def make_probe():
    return FakeProbe


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Start every test from a known environment."""
    for name in (
        "RESUME_ENV",
        "RESUME_PUBLIC_HOST",
        "RESUME_STATIC_EXPORT",
        "RESUME_PDF_URL",
        "RESUME_BROWSER_PATH",
        "RESUME_CONTENT_SOURCE",
        "RESUME_CONTENT_FILE",
        "NOTION_API_KEY",
        "PORT",
    ):
        monkeypatch.delenv(name, raising=False)
