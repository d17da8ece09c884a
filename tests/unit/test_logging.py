import json
import logging

from infragraph.utils import logging as infragraph_logging
from infragraph.utils.logging import StructuredLogger, configure_logging, get_logger


class TestStructuredLogger:
    def test_library_default_installs_no_handlers(self):
        lib_logger = logging.getLogger("infragraph")
        assert isinstance(get_logger(), StructuredLogger)
        assert lib_logger.handlers == []

    def test_configure_replaces_global(self):
        configured = configure_logging(structured=True, level="DEBUG")
        assert get_logger() is configured
        assert infragraph_logging.logger is configured
        assert logging.getLogger("infragraph").propagate is False

    def test_human_format_with_context(self, caplog):
        log = StructuredLogger(level="DEBUG", configure=False)
        with caplog.at_level(logging.DEBUG, logger="infragraph"):
            log.warning("Cycle detected", nodes=3)
            log.debug("Validation complete", errors=0)

        messages = [record.getMessage() for record in caplog.records]
        assert "[WARN] Cycle detected (nodes=3)" in messages
        assert "[DEBUG] Validation complete (errors=0)" in messages

    def test_level_filtering(self, caplog):
        log = StructuredLogger(level="WARNING", configure=False)
        with caplog.at_level(logging.DEBUG, logger="infragraph"):
            log.info("hidden")
            log.error("shown")
        assert [record.getMessage() for record in caplog.records] == ["[ERROR] shown"]

    def test_structured_output(self, capsys):
        log = StructuredLogger(structured=True, level="INFO")
        log.info("Wrote generated files", count=3, directory="infra")

        entry = json.loads(capsys.readouterr().out.strip())
        assert entry["level"] == "INFO"
        assert entry["message"] == "Wrote generated files"
        assert entry["count"] == 3
        assert entry["directory"] == "infra"
        assert "timestamp" in entry
