"""
Integration tests for the CLI commands.

Generation commands run against httpx.MockTransport through the real
gateway; configuration lives in the per-test project and home directories.
"""

import json
import stat

import httpx
import pytest
from typer.testing import CliRunner

from rectospec.llm import GenerationGateway
from rectospec.main import app

GOOGLE_KEY = "AIza-cli-secret"

GENERATED_CODE = {
    "pageObject": {"filename": "pages/LoginPage.ts", "code": "export class LoginPage {}\n"},
    "testSpec": {"filename": "specs/login.spec.ts", "code": "import { test } from '@playwright/test';\n"},
    "testData": {"filename": "fixtures/login-data.ts", "code": "export const users = [];\n"},
}


@pytest.fixture
def runner():
    """Create a CLI runner."""
    return CliRunner()


@pytest.fixture
def use_transport(monkeypatch):
    """Route CLI generation through a mock transport."""
    def install(transport):
        monkeypatch.setattr(
            "rectospec.main.build_gateway",
            lambda store: GenerationGateway(store, transport=transport.mock),
        )
        return transport
    return install


@pytest.fixture
def google_key(monkeypatch):
    monkeypatch.setenv("GOOGLE_GENERATIVE_AI_API_KEY", GOOGLE_KEY)


class TestCLIHelp:
    """Test help and version output."""

    def test_help_lists_commands(self, runner):
        """Test every command is listed."""
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        for command in ["init", "generate", "compile", "suggest", "init-config", "config-show", "version"]:
            assert command in result.output

    def test_generate_help(self, runner):
        """Test generate options."""
        result = runner.invoke(app, ["generate", "--help"])
        assert result.exit_code == 0
        assert "--no-edge-cases" in result.output
        assert "--lang" in result.output

    def test_version(self, runner):
        """Test the version command."""
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output


class TestCLIInit:
    """Test the 'init' command."""

    def test_init_local(self, runner, project_dir):
        """Test interactive setup writes the project config."""
        result = runner.invoke(app, ["init"], input="google\nAIza-typed-key\nen\nn\n")

        assert result.exit_code == 0, result.output
        path = project_dir / ".rectospec" / "config.json"
        document = json.loads(path.read_text(encoding="utf-8"))
        assert document["llm"] == {"provider": "google", "apiKeys": {"google": "AIza-typed-key"}}
        assert document["language"] == "en"
        assert document["generation"] == {"includeEdgeCases": False}
        assert stat.S_IMODE(path.stat().st_mode) == 0o600
        assert "AIza-typed-key" not in result.output

    def test_init_global(self, runner, tmp_path, project_dir):
        """Test --global writes the user config."""
        result = runner.invoke(app, ["init", "--global"], input="anthropic\nsk-ant-typed\nja\ny\n")

        assert result.exit_code == 0, result.output
        document = json.loads((tmp_path / "home" / ".rectospec" / "config.json").read_text(encoding="utf-8"))
        assert document["llm"]["provider"] == "anthropic"
        assert document["llm"]["apiKeys"] == {"anthropic": "sk-ant-typed"}
        assert not (project_dir / ".rectospec").exists()

    def test_init_reprompts_invalid_choice(self, runner, project_dir):
        """Test an unsupported provider is asked again."""
        result = runner.invoke(app, ["init"], input="openai\ngoogle\nkey\nja\ny\n")

        assert result.exit_code == 0, result.output
        assert "Please choose one of" in result.output

    def test_init_existing_cancelled(self, runner, project_dir):
        """Test declining the overwrite keeps the existing file."""
        runner.invoke(app, ["init"], input="google\nfirst\nja\ny\n")

        result = runner.invoke(app, ["init"], input="n\n")

        assert result.exit_code == 0
        assert "Setup cancelled" in result.output
        document = json.loads((project_dir / ".rectospec" / "config.json").read_text(encoding="utf-8"))
        assert document["llm"]["apiKeys"] == {"google": "first"}

    def test_init_force(self, runner, project_dir):
        """Test --force overwrites without asking."""
        runner.invoke(app, ["init"], input="google\nfirst\nja\ny\n")

        result = runner.invoke(app, ["init", "--force"], input="google\nsecond\nen\ny\n")

        assert result.exit_code == 0, result.output
        document = json.loads((project_dir / ".rectospec" / "config.json").read_text(encoding="utf-8"))
        assert document["llm"]["apiKeys"] == {"google": "second"}
        assert document["language"] == "en"


class TestCLIGenerate:
    """Test the 'generate' command."""

    def test_generate_writes_feature(
        self, runner, project_dir, recording_file, google_key, use_transport, gemini_text_transport
    ):
        """Test a .feature file is written beside the recording."""
        transport = use_transport(gemini_text_transport("```gherkin\nFeature: Login\n```"))

        result = runner.invoke(app, ["generate", str(recording_file)])

        assert result.exit_code == 0, result.output
        assert (project_dir / "login.feature").read_text(encoding="utf-8") == "Feature: Login"
        prompt = transport.json_bodies()[0]["contents"][0]["parts"][0]["text"]
        # Japanese and edge cases are the defaults
        assert "# Language: ja" in prompt
        assert "エッジケース" in prompt

    def test_generate_options(
        self, runner, project_dir, recording_file, google_key, use_transport, gemini_text_transport
    ):
        """Test output path, language and edge-case flags."""
        transport = use_transport(gemini_text_transport("Feature: Custom"))

        result = runner.invoke(app, [
            "generate", str(recording_file),
            "-o", "out/custom.feature",
            "--lang", "en",
            "--no-edge-cases",
            "-m", "gemini-1.5-pro",
        ])

        assert result.exit_code == 0, result.output
        assert (project_dir / "out" / "custom.feature").read_text(encoding="utf-8") == "Feature: Custom"
        request = transport.requests[0]
        assert request.url.path.endswith("/gemini-1.5-pro:generateContent")
        prompt = transport.json_bodies()[0]["contents"][0]["parts"][0]["text"]
        assert "# Language: en" in prompt
        assert "edge case" not in prompt.lower()

    def test_generate_defaults_from_config(
        self, runner, project_dir, recording_file, google_key, use_transport, gemini_text_transport
    ):
        """Test language and edge cases come from the configuration."""
        (project_dir / ".rectospec").mkdir()
        (project_dir / ".rectospec" / "config.json").write_text(
            json.dumps({"language": "en", "generation": {"includeEdgeCases": False}}), encoding="utf-8"
        )
        transport = use_transport(gemini_text_transport())

        result = runner.invoke(app, ["generate", str(recording_file)])

        assert result.exit_code == 0, result.output
        prompt = transport.json_bodies()[0]["contents"][0]["parts"][0]["text"]
        assert "# Language: en" in prompt
        assert "edge case" not in prompt.lower()

    def test_generate_missing_file(self, runner, project_dir):
        """Test a missing recording exits with status 1."""
        result = runner.invoke(app, ["generate", "missing.json"])

        assert result.exit_code == 1
        assert "File not found" in result.output

    def test_generate_loads_with_normalize_file(
        self, runner, project_dir, recording_file, google_key, use_transport, gemini_text_transport, monkeypatch
    ):
        """Test the recording is read and normalized in one step."""
        from rectospec.recording import normalize_file

        calls = []

        def tracking_normalize_file(path):
            calls.append(path)
            return normalize_file(path)

        monkeypatch.setattr("rectospec.main.normalize_file", tracking_normalize_file)
        use_transport(gemini_text_transport("```gherkin\nFeature: Login\n```"))

        result = runner.invoke(app, ["generate", str(recording_file)])

        assert result.exit_code == 0, result.output
        assert calls == [recording_file.resolve()]

    def test_generate_invalid_recording(self, runner, project_dir):
        """Test an invalid recording exits with status 1."""
        (project_dir / "bad.json").write_text(json.dumps({"steps": []}), encoding="utf-8")

        result = runner.invoke(app, ["generate", "bad.json"])

        assert result.exit_code == 1
        assert "Invalid Chrome Recorder JSON" in result.output

    def test_generate_without_key(self, runner, project_dir, recording_file, make_transport, use_transport):
        """Test a missing API key exits with status 1 before any request."""
        transport = use_transport(make_transport(lambda request: httpx.Response(500)))

        result = runner.invoke(app, ["generate", str(recording_file)])

        assert result.exit_code == 1
        assert "API key not found" in result.output
        assert transport.requests == []
        assert not (project_dir / "login.feature").exists()

    def test_generate_rate_limited(self, runner, project_dir, recording_file, google_key, make_transport, use_transport):
        """Test a provider failure exits with status 1 without leaking the key."""
        use_transport(make_transport(lambda request: httpx.Response(429, json={})))

        result = runner.invoke(app, ["generate", str(recording_file)])

        assert result.exit_code == 1
        assert "rate limit" in result.output
        assert GOOGLE_KEY not in result.output

    def test_generate_loads_dotenv(
        self, runner, project_dir, recording_file, use_transport, gemini_text_transport
    ):
        """Test a key from .env is picked up."""
        (project_dir / ".env").write_text("GOOGLE_GENERATIVE_AI_API_KEY=AIza-from-dotenv\n", encoding="utf-8")
        transport = use_transport(gemini_text_transport())

        result = runner.invoke(app, ["generate", str(recording_file)])

        assert result.exit_code == 0, result.output
        assert transport.requests[0].headers["x-goog-api-key"] == "AIza-from-dotenv"


class TestCLICompile:
    """Test the 'compile' command."""

    @pytest.fixture
    def feature_file(self, project_dir):
        path = project_dir / "login.feature"
        path.write_text("Feature: Login\n  Scenario: Success\n", encoding="utf-8")
        return path

    @pytest.fixture
    def code_transport(self, make_transport, gemini_body, use_transport):
        return use_transport(make_transport(
            lambda request: httpx.Response(200, json=gemini_body(json.dumps(GENERATED_CODE)))
        ))

    def test_compile_writes_files(self, runner, project_dir, feature_file, google_key, code_transport):
        """Test the three files and a Playwright config are written."""
        result = runner.invoke(app, ["compile", str(feature_file)])

        assert result.exit_code == 0, result.output
        tests_dir = project_dir / "tests"
        assert (tests_dir / "pages" / "LoginPage.ts").read_text(encoding="utf-8") == "export class LoginPage {}\n"
        assert (tests_dir / "specs" / "login.spec.ts").exists()
        assert (tests_dir / "fixtures" / "login-data.ts").exists()
        config = (project_dir / "playwright.config.ts").read_text(encoding="utf-8")
        assert "testDir: './tests'," in config

        prompt = code_transport.json_bodies()[0]["contents"][0]["parts"][0]["text"]
        assert "Feature: Login" in prompt
        assert "Generate TypeScript code" in prompt

    def test_compile_keeps_existing_config(self, runner, project_dir, feature_file, google_key, code_transport):
        """Test an existing Playwright config is never overwritten."""
        (project_dir / "playwright.config.js").write_text("// custom", encoding="utf-8")

        result = runner.invoke(app, ["compile", str(feature_file), "-o", "e2e", "--no-typescript"])

        assert result.exit_code == 0, result.output
        assert (project_dir / "e2e" / "pages" / "LoginPage.ts").exists()
        assert (project_dir / "playwright.config.js").read_text(encoding="utf-8") == "// custom"
        assert not (project_dir / "playwright.config.ts").exists()
        prompt = code_transport.json_bodies()[0]["contents"][0]["parts"][0]["text"]
        assert "Generate JavaScript code" in prompt

    def test_compile_rejects_escaping_filename(
        self, runner, project_dir, feature_file, google_key, make_transport, gemini_body, use_transport
    ):
        """Test a generated filename outside the output directory writes nothing."""
        payload = dict(GENERATED_CODE, testData={"filename": "../../escaped.ts", "code": "x"})
        use_transport(make_transport(
            lambda request: httpx.Response(200, json=gemini_body(json.dumps(payload)))
        ))

        result = runner.invoke(app, ["compile", str(feature_file)])

        assert result.exit_code == 1
        assert "Refusing to write outside" in result.output
        assert not (project_dir.parent / "escaped.ts").exists()
        assert not (project_dir / "tests").exists()
        assert not (project_dir / "playwright.config.ts").exists()

    def test_compile_missing_feature(self, runner, project_dir):
        """Test a missing feature file exits with status 1."""
        result = runner.invoke(app, ["compile", "missing.feature"])

        assert result.exit_code == 1
        assert "File not found" in result.output


class TestCLISuggest:
    """Test the 'suggest' command."""

    @pytest.fixture
    def feature_file(self, project_dir):
        path = project_dir / "login.feature"
        path.write_text("Feature: Login\n", encoding="utf-8")
        return path

    def test_suggest_prints(self, runner, feature_file, google_key, use_transport, gemini_text_transport):
        """Test the suggestion is printed."""
        transport = use_transport(gemini_text_transport("```gherkin\nFeature: Login [better]\n```"))

        result = runner.invoke(app, ["suggest", str(feature_file), "--focus", "clarity", "--lang", "en"])

        assert result.exit_code == 0, result.output
        assert "Feature: Login [better]" in result.output
        prompt = transport.json_bodies()[0]["contents"][0]["parts"][0]["text"]
        assert "clarity improvements" in prompt

    def test_suggest_to_file(self, runner, project_dir, feature_file, google_key, use_transport, gemini_text_transport):
        """Test -o writes the suggestion to a file."""
        use_transport(gemini_text_transport("```gherkin\nFeature: Better\n```"))

        result = runner.invoke(app, ["suggest", str(feature_file), "-o", "better.feature"])

        assert result.exit_code == 0, result.output
        assert (project_dir / "better.feature").read_text(encoding="utf-8") == "Feature: Better"

    def test_suggest_invalid_focus(self, runner, feature_file, google_key):
        """Test an unknown focus area exits with status 1."""
        result = runner.invoke(app, ["suggest", str(feature_file), "--focus", "speed"])

        assert result.exit_code == 1
        assert "focus_area" in result.output


class TestCLIInitConfig:
    """Test the 'init-config' command."""

    def test_creates_typescript_config(self, runner, project_dir):
        """Test the default TypeScript config."""
        result = runner.invoke(app, ["init-config", "--base-url", "https://example.com"])

        assert result.exit_code == 0, result.output
        content = (project_dir / "playwright.config.ts").read_text(encoding="utf-8")
        assert "baseURL: 'https://example.com'," in content
        assert "testDir: './tests'," in content

    def test_creates_javascript_config(self, runner, project_dir):
        """Test --no-typescript writes the CommonJS config."""
        result = runner.invoke(app, ["init-config", "--no-typescript", "-o", "e2e"])

        assert result.exit_code == 0, result.output
        content = (project_dir / "playwright.config.js").read_text(encoding="utf-8")
        assert "module.exports = defineConfig({" in content
        assert "testDir: './e2e'," in content

    def test_skips_existing(self, runner, project_dir):
        """Test an existing config is kept."""
        (project_dir / "playwright.config.ts").write_text("// mine", encoding="utf-8")

        result = runner.invoke(app, ["init-config"])

        assert result.exit_code == 0
        assert "already exists" in result.output
        assert (project_dir / "playwright.config.ts").read_text(encoding="utf-8") == "// mine"


class TestCLIConfigShow:
    """Test the 'config-show' command."""

    def test_masks_keys(self, runner, project_dir):
        """Test stored keys are never printed."""
        runner.invoke(app, ["init"], input="google\nAIza-never-print\nja\ny\n")

        result = runner.invoke(app, ["config-show"])

        assert result.exit_code == 0, result.output
        assert "AIza-never-print" not in result.output
        assert "********" in result.output

    def test_defaults(self, runner, project_dir):
        """Test the built-in defaults are shown without a file."""
        result = runner.invoke(app, ["config-show"])

        assert result.exit_code == 0, result.output
        assert "built-in defaults" in result.output
        assert "missing" in result.output

    def test_invalid_config(self, runner, project_dir):
        """Test a broken config file exits with status 1."""
        (project_dir / ".rectospec").mkdir()
        (project_dir / ".rectospec" / "config.json").write_text("{", encoding="utf-8")

        result = runner.invoke(app, ["config-show"])

        assert result.exit_code == 1
        assert "invalid JSON" in result.output
