"""
Pytest configuration for FormQuill
"""

import logging
from datetime import date

import pytest
from PIL import Image

from formquill.config import GenerationOptions
from formquill.models import ParsedFormSchema


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an end-to-end backend test")


def pytest_collection_modifyitems(config, items):
    for item in items:
        if "integration" not in item.keywords and "unit" not in item.keywords:
            item.add_marker(pytest.mark.unit)


@pytest.fixture(autouse=True)
def configure_logging():
    """Keep test output quiet: only warnings and errors reach the console."""
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(logging.WARNING)

    yield

    root_logger.handlers.clear()


@pytest.fixture
def fixed_today():
    return date(2024, 3, 5)


@pytest.fixture
def options(tmp_path, fixed_today):
    """Generation options rooted in a temporary directory with a fixed date."""
    return GenerationOptions(base_path=tmp_path, today=fixed_today, icon_dir=tmp_path / "icons")


@pytest.fixture
def png_factory(tmp_path):
    """Create small PNG files inside ``tmp_path``."""

    def make(name: str = "image.png", size=(40, 20), color=(200, 30, 30)):
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        Image.new("RGB", size, color).save(path, format="PNG")
        return path

    return make


@pytest.fixture
def basic_schema_dict():
    """Two-page form with one field of every supported type."""
    return {
        "form": {
            "title": "Employee Intake",
            "version": "2.0",
            "author": "HR Team",
            "pages": 2,
        },
        "fields": [
            {"name": "full_name", "type": "text", "label": "Full name", "required": True,
             "position": {"x": 50, "y": -40}},
            {"name": "notes", "type": "textarea", "label": "Notes", "position": {"x": 50, "y": -140}},
            {"name": "agree", "type": "checkbox", "label": "I agree", "position": {"x": 50, "y": -170}},
            {"name": "shift", "type": "radio", "label": "Shift", "page": 2,
             "options": ["Day", "Night"], "default": "Night", "position": {"x": 60, "y": 600}},
            {"name": "department", "type": "dropdown", "label": "Department", "page": 2,
             "options": ["Sales", "Support"], "position": {"x": 200, "y": 500}},
            {"name": "signature", "type": "signature", "label": "Signature", "page": 2,
             "includeDate": True, "position": {"x": 60, "y": 300}},
        ],
    }


@pytest.fixture
def basic_schema(basic_schema_dict):
    return ParsedFormSchema.from_dict(basic_schema_dict)


@pytest.fixture
def content_schema_dict():
    """Form with static content blocks and a cover page."""
    return {
        "form": {
            "title": "Safety Checklist",
            "version": "1.1",
            "author": "Ops",
            "pages": 1,
            "coverPage": {
                "subtitle": "Quarterly inspection",
                "organization": "ACME Corp",
                "documentNumber": "SC-042",
                "revisionHistory": [
                    {"version": "1.0", "date": "2024-01-01", "author": "Ops", "description": "Initial"},
                ],
                "copyright": "(c) ACME Corp",
                "watermark": "DRAFT",
            },
            "footer": {
                "left": "{{title}}",
                "right": "Page {{page}} of {{pages}}",
                "separator": {"enabled": True, "color": "#aaaaaa", "thickness": 1},
                "socialLinks": {"github": "https://github.com/acme", "website": "https://acme.example"},
            },
        },
        "content": [
            {"type": "heading", "text": "Before you start", "level": 1},
            {"type": "paragraph", "text": "Walk the site and record every finding below."},
            {"type": "list", "items": ["Exits clear", "Extinguishers charged"], "ordered": True},
            {"type": "table", "headers": ["Area", "Owner"], "rows": [["Dock", "Sam"], ["Lab", "Ana"]]},
            {"type": "divider"},
        ],
        "fields": [
            {"name": "inspector", "type": "text", "label": "Inspector", "position": {"x": 50, "y": -30}},
            {"name": "passed", "type": "checkbox", "label": "Passed", "position": {"x": 50, "y": -60}},
        ],
    }


@pytest.fixture
def content_schema(content_schema_dict):
    return ParsedFormSchema.from_dict(content_schema_dict)
