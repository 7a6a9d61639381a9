"""Pytest configuration and fixtures."""

import os
import pytest

from flurry_ui import TreeCompiler, get_settings
from flurry_ui.core.config import Settings


# ============================================================================
# Pytest Hooks
# ============================================================================

def pytest_configure(config):
    """Configure pytest with environment variables."""
    os.environ['FLURRY_LOG_LEVEL'] = 'DEBUG'
    os.environ['FLURRY_STRICT_ATTRIBUTES'] = 'false'


# ============================================================================
# Handlers
# ============================================================================

def submit(*args):
    return "submitted"


def on_change(*args):
    return args


@pytest.fixture
def handlers():
    """Handlers referenced by name from descriptions."""
    return {"submit": submit, "on_change": on_change}


# ============================================================================
# Core Fixtures
# ============================================================================

@pytest.fixture
def settings():
    """Test settings."""
    return get_settings()


@pytest.fixture
def compiler(handlers):
    """Compiler with handlers bound and a fresh parse cache."""
    return TreeCompiler(handlers=handlers, settings=Settings(enable_cache=True, cache_size=8))


# ============================================================================
# Data Fixtures
# ============================================================================

@pytest.fixture
def login_source():
    """Login form description."""
    return """
        column(padding = 16, gap = 8) {
            text("Login")
            button(on_click = submit) {
                text("Sign In")
            }
        }
    """


@pytest.fixture
def login_blueprint():
    """Login form as blueprint JSON."""
    return """{
  "ui": {
    "components": [
      {
        "column": {
          "padding": 16,
          "gap": 8,
          "children": [
            "Login",
            {
              "button": {
                "@click": "submit",
                "children": [{"type": "text", "props": {"content": "Sign In"}}]
              }
            }
          ]
        }
      }
    ]
  }
}"""
