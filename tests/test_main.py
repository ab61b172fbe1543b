import logging
from unittest.mock import MagicMock

import uvicorn

from quizserver import main


def test_run_logs_environment_and_starts_uvicorn(monkeypatch, caplog):
    serve = MagicMock()
    monkeypatch.setattr(uvicorn, "run", serve)
    caplog.set_level(logging.INFO, logger="quizserver.main")

    main.run()

    assert f"env: {main.settings.APP_ENV}" in caplog.text
    assert f"storage: {main.settings.STORAGE_BACKEND}" in caplog.text
    serve.assert_called_once()
    assert serve.call_args.kwargs["port"] == main.settings.BACKEND_PORT
