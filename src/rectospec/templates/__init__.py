"""
Templates module - Static files written next to generated tests.
"""

from rectospec.templates.playwright_config import (
    ConfigGenerationResult,
    generate_config_file,
    generate_playwright_config,
)

__all__ = [
    "ConfigGenerationResult",
    "generate_config_file",
    "generate_playwright_config",
]
