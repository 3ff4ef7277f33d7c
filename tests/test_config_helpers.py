"""
Unit tests for configuration management and shared helpers.
"""

import os
import tempfile
import unittest
from datetime import datetime
from pathlib import Path
from unittest.mock import patch

from todoist_blocks.config import DEFAULT_PROJECT_PLACEHOLDER, ConfigManager
from todoist_blocks.helpers import format_page_date, get_id_from_string, get_name_from_string, ordinal
from todoist_blocks.models import MetadataOption, QueryConfig
from todoist_blocks.retrieve.preferences import resolve_render_preferences


class TestConfigManager(unittest.TestCase):
    """Test configuration management functionality."""

    def setUp(self):
        """Set up test fixtures."""
        self.temp_dir = tempfile.mkdtemp()
        self.config_path = Path(self.temp_dir) / "test_config.yaml"

    def tearDown(self):
        """Clean up test fixtures."""
        if self.config_path.exists():
            self.config_path.unlink()
        os.rmdir(self.temp_dir)

    def test_config_creation_with_defaults(self):
        """Test config manager falls back to defaults when file missing."""
        config = ConfigManager(str(self.config_path))

        self.assertEqual(config.base_url, "https://api.todoist.com/api/v1")
        self.assertEqual(config.default_project, DEFAULT_PROJECT_PLACEHOLDER)
        self.assertFalse(config.clear_tasks)
        self.assertEqual(config.preferred_date_format, "MMM do, yyyy")

    def test_config_loading_from_file(self):
        """Test config manager loads values from YAML file."""
        self.config_path.write_text(
            "todoist:\n"
            "  api_token: from-file\n"
            "  timeout: 5\n"
            "retrieve:\n"
            "  default_project: Inbox (2203306141)\n"
            "  clear_tasks: true\n",
            encoding="utf-8",
        )
        config = ConfigManager(str(self.config_path))

        self.assertEqual(config.api_token, "from-file")
        self.assertEqual(config.timeout, 5)
        self.assertEqual(config.default_project, "Inbox (2203306141)")
        self.assertTrue(config.clear_tasks)

    def test_dot_notation_access(self):
        """Test dot notation configuration access."""
        config = ConfigManager(str(self.config_path))

        self.assertEqual(config.get("logging.level"), "INFO")
        self.assertEqual(config.get("nonexistent.key", "default"), "default")
        self.assertEqual(config.get_section("missing"), {})

    def test_section_access(self):
        self.config_path.write_text(
            "logging:\n  level: DEBUG\n  file: run.log\n",
            encoding="utf-8",
        )
        config = ConfigManager(str(self.config_path))

        self.assertEqual(config.get_section("logging"), {"level": "DEBUG", "file": "run.log"})
        self.assertEqual(config.get_section("todoist"), {})

    def test_reload_picks_up_changes(self):
        self.config_path.write_text("retrieve:\n  clear_tasks: false\n", encoding="utf-8")
        config = ConfigManager(str(self.config_path))
        self.assertFalse(config.clear_tasks)

        self.config_path.write_text("retrieve:\n  clear_tasks: true\n", encoding="utf-8")
        config.reload()

        self.assertTrue(config.clear_tasks)

    def test_token_environment_fallback(self):
        self.config_path.write_text("todoist:\n  api_token: ''\n", encoding="utf-8")
        with patch.dict(os.environ, {"TODOIST_API_TOKEN": "from-env"}):
            config = ConfigManager(str(self.config_path))
            self.assertEqual(config.api_token, "from-env")

    def test_read_flag_only_falls_back_when_unset(self):
        self.config_path.write_text(
            "retrieve:\n  append_todo: false\n  append_labels: null\n",
            encoding="utf-8",
        )
        config = ConfigManager(str(self.config_path))

        self.assertFalse(config.read_flag("retrieve.append_todo", True))
        self.assertTrue(config.read_flag("retrieve.append_labels", True))
        self.assertTrue(config.read_flag("retrieve.missing", True))

    def test_invalid_yaml_falls_back(self):
        self.config_path.write_text("todoist: [unclosed\n", encoding="utf-8")
        config = ConfigManager(str(self.config_path))

        self.assertEqual(config.base_url, "https://api.todoist.com/api/v1")


class TestRenderPreferences(unittest.TestCase):

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        self.config_path = Path(self.temp_dir) / "config.yaml"

    def tearDown(self):
        if self.config_path.exists():
            self.config_path.unlink()
        os.rmdir(self.temp_dir)

    def test_settings_without_query(self):
        self.config_path.write_text(
            "retrieve:\n  append_labels: true\n  append_url: true\n  append_todo: false\n",
            encoding="utf-8",
        )
        preferences = resolve_render_preferences(None, ConfigManager(str(self.config_path)))

        self.assertFalse(preferences.prepend_todo_keyword)
        self.assertTrue(preferences.embed_labels_inline)
        self.assertTrue(preferences.append_todoist_id_property)
        self.assertEqual(preferences.show_metadata,
                         {MetadataOption.DUE, MetadataOption.LABELS, MetadataOption.URL})

    def test_query_show_overrides_settings(self):
        self.config_path.write_text("retrieve:\n  append_labels: true\n", encoding="utf-8")
        query = QueryConfig(filter="today", show={MetadataOption.PROJECT})
        preferences = resolve_render_preferences(query, ConfigManager(str(self.config_path)))

        self.assertFalse(preferences.embed_labels_inline)
        self.assertEqual(preferences.show_metadata, {MetadataOption.PROJECT})


class TestUtilityFunctions(unittest.TestCase):
    """Test selector and date helpers."""

    def test_selector_parts(self):
        self.assertEqual(get_id_from_string("Inbox (2203306141)"), "2203306141")
        self.assertEqual(get_name_from_string("Inbox (2203306141)"), "Inbox")
        self.assertEqual(get_id_from_string("Inbox"), "")
        self.assertEqual(get_name_from_string("Inbox"), "")
        self.assertEqual(get_id_from_string(DEFAULT_PROJECT_PLACEHOLDER), "")

    def test_ordinal(self):
        self.assertEqual([ordinal(d) for d in (1, 2, 3, 4, 11, 12, 13, 21, 22, 23)],
                         ["1st", "2nd", "3rd", "4th", "11th", "12th", "13th", "21st", "22nd", "23rd"])

    def test_page_date_formats(self):
        value = datetime(2025, 3, 2)
        self.assertEqual(format_page_date(value, "MMM do, yyyy"), "[[Mar 2nd, 2025]]")
        self.assertEqual(format_page_date(value, "yyyy-MM-dd"), "[[2025-03-02]]")
        self.assertEqual(format_page_date(value, "EEEE, MMMM d"), "[[Sunday, March 2]]")
        self.assertEqual(format_page_date(value, "E dd/MM/yy"), "[[Sun 02/03/25]]")


if __name__ == "__main__":
    unittest.main()
