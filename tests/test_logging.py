import logging

import pytest

from minivc import CommitLog
from minivc import config as mvc_config


@pytest.fixture(autouse=True)
def restore_level(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("MINIVC_LOG_LEVEL", raising=False)
    yield
    monkeypatch.delenv("MINIVC_LOG_LEVEL", raising=False)
    mvc_config.reset_runtime_config()
    mvc_config.runtime_config()


def test_runtime_level_applies_to_package_logger(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("MINIVC_LOG_LEVEL", "DEBUG")
    mvc_config.reset_runtime_config()
    mvc_config.runtime_config()

    assert logging.getLogger("minivc").level == logging.DEBUG
    assert logging.getLogger("minivc.history").getEffectiveLevel() == logging.DEBUG
    assert logging.getLogger("minivc.repo").getEffectiveLevel() == logging.DEBUG


def test_default_level_is_warning():
    mvc_config.reset_runtime_config()
    mvc_config.runtime_config()
    assert logging.getLogger("minivc").level == logging.WARNING


def test_module_loggers_are_named_after_modules():
    from minivc import history, repo

    assert history.logger.name == "minivc.history"
    assert repo.logger.name == "minivc.repo"


def test_commit_is_logged(caplog: pytest.LogCaptureFixture):
    with caplog.at_level(logging.DEBUG, logger="minivc.history"):
        CommitLog().commit("notes.txt")
    assert "Committed version 1 (notes.txt)" in caplog.text
