"""
Tests for settings resolution, .env parsing and logging setup.
"""
import logging

import pytest

from blog_harness.config import HarnessSettings
from blog_harness.config_defaults import _parse_env_file, get_default, reload_defaults
from blog_harness.errors import ERRORS_BY_CODE, Conflict, NotFound, ValidationError
from blog_harness.logging_setup import CONSOLE_HANDLER_NAME, configure_logging


class TestEnvFileParsing:

    def test_parses_keys_comments_and_quotes(self, tmp_path):
        env_file = tmp_path / '.env'
        env_file.write_text(
            "# comment\n"
            "\n"
            "BLOG_API_BASE_URL=http://api:3003\n"
            "BLOG_FIXTURE_PASSWORD='secret value'\n"
            'LOG_LEVEL="debug"\n'
            "not a pair\n",
            encoding='utf-8',
        )

        parsed = _parse_env_file(env_file)

        assert parsed == {
            'BLOG_API_BASE_URL': 'http://api:3003',
            'BLOG_FIXTURE_PASSWORD': 'secret value',
            'LOG_LEVEL': 'debug',
        }

    def test_export_prefix_is_stripped(self, tmp_path):
        env_file = tmp_path / '.env'
        env_file.write_text("export BLOG_API_TIMEOUT=7\n", encoding='utf-8')

        assert _parse_env_file(env_file) == {'BLOG_API_TIMEOUT': '7'}


class TestDefaultsLookup:
    """.env overlays .env.defaults; the environment overlays both."""

    @pytest.fixture
    def env_dir(self, tmp_path, monkeypatch):
        (tmp_path / '.env.defaults').write_text(
            "BLOG_UI_BASE_URL=http://ui.defaults\nBLOG_FIXTURE_USERNAME=from-defaults\n"
            "BLOG_OTHER_USERNAME=other-from-defaults\nPLAYWRIGHT_TIMEOUT_MS=2500\n",
            encoding='utf-8',
        )
        (tmp_path / '.env').write_text("BLOG_FIXTURE_USERNAME=from-dotenv\n", encoding='utf-8')
        monkeypatch.setenv('BLOG_HARNESS_ENV_DIR', str(tmp_path))
        monkeypatch.delenv('BLOG_UI_BASE_URL', raising=False)
        monkeypatch.delenv('BLOG_FIXTURE_USERNAME', raising=False)
        for key in ('BLOG_OTHER_USERNAME', 'BLOG_OTHER_PASSWORD', 'PLAYWRIGHT_TIMEOUT_MS'):
            monkeypatch.delenv(key, raising=False)
        reload_defaults()
        yield tmp_path
        monkeypatch.delenv('BLOG_HARNESS_ENV_DIR')
        reload_defaults()

    def test_dotenv_overrides_defaults_file(self, env_dir):
        assert get_default('BLOG_FIXTURE_USERNAME') == 'from-dotenv'
        assert get_default('BLOG_UI_BASE_URL') == 'http://ui.defaults'
        assert get_default('MISSING_KEY', 'fallback') == 'fallback'

    def test_environment_overrides_files(self, env_dir, monkeypatch):
        monkeypatch.setenv('BLOG_FIXTURE_USERNAME', 'from-env')

        settings = HarnessSettings.from_env()

        assert settings.fixture_username == 'from-env'
        assert settings.ui_base_url == 'http://ui.defaults'

    def test_browser_suite_settings_come_from_files(self, env_dir, monkeypatch):
        """The second actor and the UI timeout follow the same lookup chain."""
        monkeypatch.setenv('BLOG_OTHER_PASSWORD', 'other-from-env')

        settings = HarnessSettings.from_env()

        assert settings.other_username == 'other-from-defaults'
        assert settings.other_password == 'other-from-env'
        assert settings.ui_timeout_ms == 2500

    def test_bad_ui_timeout_raises(self, env_dir, monkeypatch):
        monkeypatch.setenv('PLAYWRIGHT_TIMEOUT_MS', 'soon')

        with pytest.raises(RuntimeError):
            HarnessSettings.from_env()


class TestHarnessSettings:

    def test_environment_overrides_defaults(self, monkeypatch):
        monkeypatch.setenv('BLOG_API_BASE_URL', 'http://api.example:8080/')
        monkeypatch.setenv('BLOG_API_TIMEOUT', '2.5')
        monkeypatch.setenv('PLAYWRIGHT_HEADLESS', 'false')
        monkeypatch.setenv('LOG_LEVEL', 'debug')

        settings = HarnessSettings.from_env()

        assert settings.api_base_url == 'http://api.example:8080'
        assert settings.timeout == 2.5
        assert settings.playwright_headless is False
        assert settings.log_level == 'DEBUG'

    def test_fixture_user_defaults(self, monkeypatch):
        monkeypatch.delenv('BLOG_FIXTURE_USERNAME', raising=False)
        for key in ('BLOG_OTHER_USERNAME', 'BLOG_OTHER_PASSWORD', 'PLAYWRIGHT_TIMEOUT_MS'):
            monkeypatch.delenv(key, raising=False)
        monkeypatch.delenv('BLOG_FIXTURE_PASSWORD', raising=False)

        settings = HarnessSettings.from_env()

        assert settings.fixture_username == 'testuser'
        assert settings.fixture_password == 'testpassword'

    @pytest.mark.parametrize('value', ['abc', '0', '-1'])
    def test_bad_timeout_raises(self, monkeypatch, value):
        monkeypatch.setenv('BLOG_API_TIMEOUT', value)

        with pytest.raises(RuntimeError):
            HarnessSettings.from_env()

    def test_url_helpers(self):
        settings = HarnessSettings(api_base_url='http://api', ui_base_url='http://ui')

        assert settings.api_url('/api/blogs') == 'http://api/api/blogs'
        assert settings.ui_url() == 'http://ui/'


class TestErrorTaxonomy:

    def test_codes_round_trip_through_registry(self):
        for code, cls in ERRORS_BY_CODE.items():
            assert cls.code == code

    def test_expected_errors_are_flagged(self):
        assert NotFound().expected is True
        assert ValidationError().expected is False

    def test_conflict_is_validation_error_with_field(self):
        error = Conflict("Username 'alice' already exists", field='username')

        assert isinstance(error, ValidationError)
        assert error.to_dict() == {
            'error': 'conflict',
            'message': "Username 'alice' already exists",
            'field': 'username',
        }


class TestConfigureLogging:

    @pytest.fixture(autouse=True)
    def restore_root_logger(self):
        root = logging.getLogger()
        handlers, level = list(root.handlers), root.level
        yield
        for handler in root.handlers:
            if handler not in handlers:
                handler.close()
        root.handlers = handlers
        root.setLevel(level)

    def test_sets_level_and_stream_handler(self):
        configure_logging('warning')

        root = logging.getLogger()
        assert root.level == logging.WARNING
        assert any(isinstance(h, logging.StreamHandler) for h in root.handlers)

    def test_writes_to_log_file(self, tmp_path):
        log_file = tmp_path / 'harness.log'

        configure_logging('INFO', str(log_file))
        logging.getLogger('blog_harness.test').info('hello from test')
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert 'hello from test' in log_file.read_text(encoding='utf-8')

    def test_repeated_calls_do_not_duplicate_handlers(self, tmp_path):
        log_file = str(tmp_path / 'harness.log')

        configure_logging('INFO', log_file)
        configure_logging('DEBUG', log_file)

        names = [h.get_name() for h in logging.getLogger().handlers]
        assert names.count(CONSOLE_HANDLER_NAME) == 1
        assert len([n for n in names if n and n.startswith('blog_harness.file:')]) == 1
        console = next(h for h in logging.getLogger().handlers if h.get_name() == CONSOLE_HANDLER_NAME)
        assert console.level == logging.DEBUG
