"""Tests for environment-driven configuration getters."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from resume_site import config


class TestResumeEnv:
    def test_default_is_production(self) -> None:
        assert config.get_resume_env() == "production"
        assert config.is_development() is False

    @pytest.mark.parametrize("raw", ["development", "DEVELOPMENT", " development "])
    def test_development(self, monkeypatch, raw: str) -> None:
        monkeypatch.setenv("RESUME_ENV", raw)
        assert config.is_development() is True

    def test_unknown_value_falls_back_with_warning(self, monkeypatch, caplog) -> None:
        monkeypatch.setenv("RESUME_ENV", "staging")
        with caplog.at_level(logging.WARNING, logger="resume"):
            assert config.get_resume_env() == "production"
        assert "staging" in caplog.text

    def test_read_at_call_time(self, monkeypatch) -> None:
        assert config.get_resume_env() == "production"
        monkeypatch.setenv("RESUME_ENV", "development")
        assert config.get_resume_env() == "development"


class TestPort:
    def test_default(self) -> None:
        assert config.get_port() == 3000

    def test_from_env(self, monkeypatch) -> None:
        monkeypatch.setenv("PORT", "8080")
        assert config.get_port() == 8080

    def test_invalid_falls_back(self, monkeypatch) -> None:
        monkeypatch.setenv("PORT", "eighty")
        assert config.get_port() == 3000


class TestDeploymentSettings:
    def test_public_host_blank_is_none(self, monkeypatch) -> None:
        monkeypatch.setenv("RESUME_PUBLIC_HOST", "  ")
        assert config.get_public_host() is None

    @pytest.mark.parametrize("raw, expected", [("true", True), ("1", True), ("YES", True), ("false", False), ("", False)])
    def test_static_export_flag(self, monkeypatch, raw: str, expected: bool) -> None:
        monkeypatch.setenv("RESUME_STATIC_EXPORT", raw)
        assert config.is_static_export() is expected

    def test_pdf_url(self, monkeypatch) -> None:
        assert config.get_pdf_url() is None
        monkeypatch.setenv("RESUME_PDF_URL", "https://cdn.example.com/resume.pdf")
        assert config.get_pdf_url() == "https://cdn.example.com/resume.pdf"

    def test_browser_path(self, monkeypatch) -> None:
        assert config.get_browser_path() is None
        monkeypatch.setenv("RESUME_BROWSER_PATH", "/opt/chrome/chrome")
        assert config.get_browser_path() == "/opt/chrome/chrome"


class TestContentSettings:
    def test_source_defaults_to_notion(self) -> None:
        assert config.get_content_source_kind() == "notion"

    def test_unknown_source_falls_back(self, monkeypatch) -> None:
        monkeypatch.setenv("RESUME_CONTENT_SOURCE", "airtable")
        assert config.get_content_source_kind() == "notion"

    def test_content_file_default(self) -> None:
        assert config.get_content_file() == Path("content/resume.json")

    def test_notion_database_id(self, monkeypatch) -> None:
        monkeypatch.setenv("NOTION_WORK_ACHIEVEMENTS_DB", "abc123")
        assert config.get_notion_database_id("work_achievements") == "abc123"
        assert config.get_notion_database_id("awards") is None
