from loguru import logger

from search_autotest.common import ensure_directory, init_logger


def test_init_logger_writes_file(tmp_path):
    log_file = tmp_path / "logs" / "ui_tests.log"

    init_logger(level="DEBUG", log_file=str(log_file), force=True)
    logger.info("harness ready")
    logger.complete()

    assert "harness ready" in log_file.read_text(encoding="utf-8")
    init_logger(force=True)


def test_init_logger_is_idempotent(tmp_path):
    log_file = tmp_path / "second.log"
    init_logger(force=True)

    init_logger(log_file=str(log_file))
    logger.info("not written")

    assert not log_file.exists()


def test_ensure_directory(tmp_path):
    target = tmp_path / "a" / "b"

    assert ensure_directory(str(target)) == str(target)
    assert target.is_dir()
    assert ensure_directory("") == ""
