import sys
import tempfile
import types
import unittest
from pathlib import Path

from app_config_schema import UIServerSettings

# Import server.config without executing src/server/__init__.py.
_SERVER_DIR = Path(__file__).resolve().parents[2] / "src" / "server"
if "server" not in sys.modules:
    _pkg = types.ModuleType("server")
    _pkg.__path__ = [str(_SERVER_DIR)]  # type: ignore[attr-defined]
    sys.modules["server"] = _pkg

from server.config import ServerConfigurationError, UIServerConfig


class UIServerConfigTests(unittest.TestCase):
    def test_from_settings_without_index_file(self) -> None:
        config = UIServerConfig.from_settings(UIServerSettings())

        self.assertEqual("127.0.0.1", config.host)
        self.assertEqual(8765, config.port)
        self.assertEqual("/ws", config.websocket_path)
        self.assertFalse(config.serves_index)

    def test_from_settings_keeps_explicit_index_file(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            custom = Path(temp_dir) / "index.html"
            custom.write_text("<html></html>", encoding="utf-8")

            config = UIServerConfig.from_settings(
                UIServerSettings(index_file=f"  {custom}  ")
            )

            self.assertEqual(str(custom), config.index_file)
            self.assertTrue(config.serves_index)

    def test_missing_index_file_is_rejected(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            with self.assertRaises(ServerConfigurationError):
                UIServerConfig(index_file=str(Path(temp_dir) / "missing.html"))

    def test_index_directory_is_rejected(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            with self.assertRaises(ServerConfigurationError):
                UIServerConfig(index_file=temp_dir)

    def test_disabled_server_skips_index_validation(self) -> None:
        config = UIServerConfig(enabled=False, index_file="/does/not/exist.html")
        self.assertFalse(config.enabled)

    def test_invalid_host_and_port_are_rejected(self) -> None:
        with self.assertRaises(ServerConfigurationError):
            UIServerConfig(host="  ")
        with self.assertRaises(ServerConfigurationError):
            UIServerConfig(port=0)
        with self.assertRaises(ServerConfigurationError):
            UIServerConfig(port=70000)


if __name__ == "__main__":
    unittest.main()
