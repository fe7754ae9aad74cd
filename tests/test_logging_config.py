import logging
from pathlib import Path

from chbtc import logging_config


def test_setup_is_idempotent(tmp_path: Path, monkeypatch):
    root = logging.getLogger()
    monkeypatch.setattr(root, "handlers", [])
    monkeypatch.setattr(root, "level", root.level)
    monkeypatch.setattr(root, "_chbtc_logging_installed", False, raising=False)

    logging_config.setup(log_dir=str(tmp_path / "logs"))
    logging_config.setup(log_dir=str(tmp_path / "logs"))

    assert len(root.handlers) == 2
    assert (tmp_path / "logs" / "chbtc.log").exists()
    assert logging.getLogger("urllib3").level == logging.WARNING
    for h in root.handlers:
        h.close()
