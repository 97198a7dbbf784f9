import logging
import unittest

import structlog

from holdermap.config.log_setup import configure_logging


class ConfigureLoggingTests(unittest.TestCase):
    def tearDown(self) -> None:
        structlog.reset_defaults()

    def _wrapper(self):
        return structlog.get_config()["wrapper_class"]

    def test_named_level_is_applied(self) -> None:
        configure_logging("warning", json_output=True)

        self.assertIs(self._wrapper(), structlog.make_filtering_bound_logger(logging.WARNING))

    def test_unknown_level_falls_back_to_info(self) -> None:
        for name in ("chatty", "BASIC_FORMAT"):
            configure_logging(name, json_output=False)

            self.assertIs(self._wrapper(), structlog.make_filtering_bound_logger(logging.INFO), name)


if __name__ == "__main__":
    unittest.main()
