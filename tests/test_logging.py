import logging
import unittest
from unittest.mock import patch

from blog_api.core.logging import LOG_FORMAT, configure_logging


class TestConfigureLogging(unittest.TestCase):

    def tearDown(self):
        logging.getLogger("uvicorn.access").setLevel(logging.NOTSET)

    def test_root_config_uses_requested_level(self):
        with patch("blog_api.core.logging.logging.basicConfig") as basic_config:
            configure_logging("debug")

        kwargs = basic_config.call_args.kwargs
        self.assertEqual(kwargs["level"], "DEBUG")
        self.assertEqual(kwargs["format"], LOG_FORMAT)

    def test_server_access_log_is_silenced(self):
        logging.getLogger("uvicorn.access").setLevel(logging.INFO)

        with patch("blog_api.core.logging.logging.basicConfig"):
            configure_logging("INFO")

        self.assertEqual(logging.getLogger("uvicorn.access").level, logging.WARNING)


if __name__ == "__main__":
    unittest.main()
