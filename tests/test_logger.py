import logging
import tempfile
import unittest
from logging.handlers import RotatingFileHandler
from pathlib import Path

from utils.logger import setup_logging


class TestSetupLogging(unittest.TestCase):
    def setUp(self):
        self.root = logging.getLogger()
        self.saved_handlers = list(self.root.handlers)
        self.saved_level = self.root.level

    def tearDown(self):
        for handler in list(self.root.handlers):
            if handler not in self.saved_handlers:
                self.root.removeHandler(handler)
                handler.close()
        self.root.setLevel(self.saved_level)

    def _ours(self):
        return [h for h in self.root.handlers if h not in self.saved_handlers]

    def test_console_only_by_default(self):
        setup_logging("DEBUG")
        self.assertEqual(self.root.level, logging.DEBUG)
        self.assertEqual(len(self._ours()), 1)

    def test_repeated_calls_do_not_stack_handlers(self):
        setup_logging("INFO")
        setup_logging("INFO")
        setup_logging("WARNING")
        self.assertEqual(len(self._ours()), 1)
        self.assertEqual(self.root.level, logging.WARNING)

    def test_file_log_when_dir_given(self):
        with tempfile.TemporaryDirectory() as tmp:
            setup_logging("INFO", log_dir=str(Path(tmp) / "logs"))
            file_handlers = [h for h in self._ours() if isinstance(h, RotatingFileHandler)]
            self.assertEqual(len(file_handlers), 1)

            logging.getLogger("services.edit_session").info("Order 1 updated")
            file_handlers[0].flush()

            text = (Path(tmp) / "logs" / "orders_admin.log").read_text(encoding="utf-8")
            self.assertIn("[INFO] [services.edit_session] Order 1 updated", text)
            # release the file before the temp dir is removed
            setup_logging("INFO")

    def test_unknown_level_falls_back_to_info(self):
        setup_logging("chatty")
        self.assertEqual(self.root.level, logging.INFO)
