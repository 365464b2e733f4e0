"""
Playwright Config Template - ``playwright.config.{ts,js}`` for generated tests.

``generate_config_file`` never overwrites: if either a TypeScript or a
JavaScript config already exists in the project root, it reports the file
as skipped.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from rectospec.utils.file_system import file_exists

TS_CONFIG_NAME = "playwright.config.ts"
JS_CONFIG_NAME = "playwright.config.js"


@dataclass
class ConfigGenerationResult:
    """
    Attributes:
        filename: Config file name (playwright.config.ts or .js)
        path: Absolute path of the config file
        content: File content (empty when skipped)
        skipped: True if a config file already existed
    """
    filename: str
    path: Path
    content: str
    skipped: bool


def generate_playwright_config(
    test_dir: str,
    base_url: Optional[str] = None,
    typescript: bool = True,
) -> str:
    """
    Render a Playwright config file.

    Args:
        test_dir: testDir value, relative to the config file
        base_url: Optional baseURL for ``use``
        typescript: ES module TypeScript (True) or CommonJS (False)

    Returns:
        Config file content
    """
    if typescript:
        header = "import { defineConfig, devices } from '@playwright/test';"
        export = "export default defineConfig({"
    else:
        header = "// @ts-check\nconst { defineConfig, devices } = require('@playwright/test');"
        export = "module.exports = defineConfig({"

    base_url_line = f"    baseURL: '{base_url}',\n" if base_url else ""

    return f"""{header}

/**
 * Playwright configuration generated by rectospec.
 * See https://playwright.dev/docs/test-configuration
 */
{export}
  testDir: '{test_dir}',
  fullyParallel: true,
  forbidOnly: !!process.env.CI,
  retries: process.env.CI ? 2 : 0,
  workers: process.env.CI ? 1 : undefined,
  reporter: 'html',
  use: {{
{base_url_line}    trace: 'on-first-retry',
    screenshot: 'only-on-failure',
  }},
  projects: [
    {{
      name: 'chromium',
      use: {{ ...devices['Desktop Chrome'] }},
    }},
    {{
      name: 'firefox',
      use: {{ ...devices['Desktop Firefox'] }},
    }},
    {{
      name: 'webkit',
      use: {{ ...devices['Desktop Safari'] }},
    }},
  ],
}});
"""


def relative_test_dir(config_dir: Path, output_dir: Path) -> str:
    """testDir as a POSIX path relative to the config directory."""
    test_dir = Path(os.path.relpath(output_dir, config_dir)).as_posix()
    if test_dir == ".":
        return "./"
    if not test_dir.startswith(("./", "../")):
        test_dir = "./" + test_dir
    return test_dir


def generate_config_file(
    output_dir: Union[str, Path],
    base_url: Optional[str] = None,
    typescript: bool = True,
    config_dir: Optional[Union[str, Path]] = None,
) -> ConfigGenerationResult:
    """
    Prepare a Playwright config for a test directory.

    Args:
        output_dir: Directory holding the generated tests
        base_url: Optional baseURL
        typescript: Generate playwright.config.ts (True) or .js (False)
        config_dir: Project root (default: current working directory)

    Returns:
        Result describing the file; nothing is written here
    """
    config_dir = Path(config_dir).resolve() if config_dir else Path.cwd()
    output_dir = Path(output_dir).resolve()

    filename = TS_CONFIG_NAME if typescript else JS_CONFIG_NAME
    config_path = config_dir / filename

    if file_exists(config_dir / TS_CONFIG_NAME) or file_exists(config_dir / JS_CONFIG_NAME):
        return ConfigGenerationResult(filename=filename, path=config_path, content="", skipped=True)

    content = generate_playwright_config(
        test_dir=relative_test_dir(config_dir, output_dir),
        base_url=base_url,
        typescript=typescript,
    )
    return ConfigGenerationResult(filename=filename, path=config_path, content=content, skipped=False)
