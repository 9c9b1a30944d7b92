import sys

from loguru import logger

from cosmosgate.cli.shared import logging_utils


def test_ensure_rotating_log_file_adds_sink_once(tmp_path, monkeypatch):
    monkeypatch.setattr(logging_utils, "get_log_dir", lambda: tmp_path / "logs")
    monkeypatch.setattr(logging_utils, "_SINK_IDS", {})

    first = logging_utils.ensure_rotating_log_file("serve")
    second = logging_utils.ensure_rotating_log_file("serve")

    assert first == second == tmp_path / "logs" / "serve.log"
    assert first.parent.is_dir()
    assert list(logging_utils._SINK_IDS) == ["serve"]
    logger.remove(logging_utils._SINK_IDS["serve"])


def test_configure_stderr_keeps_file_sinks(tmp_path, monkeypatch):
    monkeypatch.setattr(logging_utils, "get_log_dir", lambda: tmp_path)
    monkeypatch.setattr(logging_utils, "_SINK_IDS", {})

    path = logging_utils.ensure_rotating_log_file("cli", level="DEBUG")
    logging_utils.configure_stderr(verbose=True)
    logging_utils.configure_stderr(verbose=False)
    logger.info("still written to file")
    logger.complete()

    assert "still written to file" in path.read_text(encoding="utf-8")
    for sink_id in logging_utils._SINK_IDS.values():
        logger.remove(sink_id)
    logger.add(sys.stderr)
