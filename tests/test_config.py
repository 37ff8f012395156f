import unittest
import uuid
from pathlib import Path

from challongeclient.config import load_config


class LoadConfigTests(unittest.TestCase):
    def _write(self, text: str) -> Path:
        path = Path(f".test_config_{uuid.uuid4().hex}.yaml")
        self.addCleanup(lambda: path.unlink(missing_ok=True))
        path.write_text(text, encoding="utf-8")
        return path

    def test_full_config(self) -> None:
        path = self._write(
            "challonge:\n"
            "  user: alice\n"
            "  api_key: secret\n"
            "  base_url: http://localhost:8080/\n"
            "  api_version: v1\n"
            "  timeout: 30\n"
            "logging:\n"
            "  level: debug\n"
            "  file: null\n"
        )
        config = load_config(path)
        self.assertEqual(config.challonge.user, "alice")
        self.assertEqual(config.challonge.api_key, "secret")
        self.assertEqual(config.challonge.base_url, "http://localhost:8080")
        self.assertEqual(config.challonge.timeout, 30.0)
        self.assertEqual(config.logging.level, "DEBUG")
        self.assertIsNone(config.logging.file_path)

    def test_defaults(self) -> None:
        path = self._write("challonge:\n  user: alice\n  api_key: secret\n")
        config = load_config(path)
        self.assertEqual(config.challonge.base_url, "https://api.challonge.com")
        self.assertEqual(config.challonge.api_version, "v1")
        self.assertEqual(config.challonge.timeout, 15.0)
        self.assertEqual(config.logging.level, "INFO")
        self.assertEqual(config.logging.file_path, Path("./logs/challongeclient.log"))

    def test_missing_file(self) -> None:
        with self.assertRaises(FileNotFoundError):
            load_config(Path(f".missing_{uuid.uuid4().hex}.yaml"))

    def test_missing_api_key(self) -> None:
        path = self._write("challonge:\n  user: alice\n")
        with self.assertRaises(ValueError):
            load_config(path)

    def test_bad_log_level(self) -> None:
        path = self._write("challonge:\n  user: a\n  api_key: b\nlogging:\n  level: LOUD\n")
        with self.assertRaises(ValueError):
            load_config(path)

    def test_bad_structure(self) -> None:
        path = self._write("challonge:\n  - user\n  - api_key\n")
        with self.assertRaises(ValueError):
            load_config(path)

    def test_non_positive_timeout(self) -> None:
        path = self._write("challonge:\n  user: a\n  api_key: b\n  timeout: 0\n")
        with self.assertRaises(ValueError):
            load_config(path)
