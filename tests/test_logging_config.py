import logging
from logging.handlers import RotatingFileHandler

from stormrank.logging_config import LOG_FILE, setup_logger


def _file_handlers(logger):
    return [h for h in logger.handlers if isinstance(h, RotatingFileHandler)]


def test_new_log_dir_gets_its_own_file(tmp_path):
    name = "stormrank.tests.new_dir"
    first = setup_logger(name, log_dir=tmp_path / "a")
    second = setup_logger(name, log_dir=tmp_path / "b")
    assert first is second
    second.info("hello")
    for h in second.handlers:
        h.flush()
    assert (tmp_path / "b" / LOG_FILE).read_text(encoding="utf-8").strip().endswith("hello")
    assert len(_file_handlers(second)) == 2
    for h in _file_handlers(second):
        h.close()
        second.removeHandler(h)


def test_repeat_calls_do_not_duplicate_handlers(tmp_path):
    name = "stormrank.tests.repeat"
    setup_logger(name, log_dir=tmp_path)
    logger = setup_logger(name, log_dir=tmp_path)
    assert len(_file_handlers(logger)) == 1
    assert sum(1 for h in logger.handlers if type(h) is logging.StreamHandler) == 1
    for h in _file_handlers(logger):
        h.close()
        logger.removeHandler(h)
