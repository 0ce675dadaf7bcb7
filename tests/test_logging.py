import logging

import pytest
from tqdm import tqdm

from jokertag.utils.logging import TqdmLoggingHandler, setup_logging


@pytest.fixture
def logger_name():
    name = "jokertag.testlog"
    yield name
    logger = logging.getLogger(name)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()


def test_console_handler_writes_through_tqdm(logger_name, capsys):
    logger = setup_logging(name=logger_name)
    assert [type(h) for h in logger.handlers] == [TqdmLoggingHandler]

    logger.info("scoring started")
    assert "scoring started" in capsys.readouterr().out


def test_repeated_setup_does_not_stack_handlers(logger_name):
    setup_logging(name=logger_name)
    logger = setup_logging(name=logger_name, level="WARNING")
    assert len(logger.handlers) == 1
    assert logger.level == logging.WARNING


def test_log_lines_stay_off_the_progress_bar_stream(logger_name, capsys):
    logger = setup_logging(name=logger_name)
    for _ in tqdm(range(3), desc="Scoring pairs"):
        logger.info("inside loop")
    captured = capsys.readouterr()
    assert captured.out.count("inside loop") == 3
    assert "inside loop" not in captured.err
    assert "Scoring pairs" in captured.err


def test_log_file_receives_debug(logger_name, tmp_path):
    log_file = tmp_path / "logs" / "run.log"
    logger = setup_logging(name=logger_name, level="WARNING", log_file=log_file)
    logger.debug("rule detail")
    for handler in logger.handlers:
        handler.flush()
    assert "rule detail" in log_file.read_text(encoding="utf-8")
