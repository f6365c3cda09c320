"""
Unit tests for the API server entry point (api/app.py).
"""

from unittest.mock import patch

import pytest

from formdata_formatter.api import app as app_module


class TestMain:
    """Tests for main()."""

    @pytest.mark.unit
    def test_runs_uvicorn_with_configured_address(self, monkeypatch):
        monkeypatch.setattr(app_module.settings, "api_host", "127.0.0.1")
        monkeypatch.setattr(app_module.settings, "api_port", 9123)

        with patch("uvicorn.run") as run:
            app_module.main()

        run.assert_called_once()
        args, kwargs = run.call_args
        assert args == ("formdata_formatter.api.app:app",)
        assert kwargs["host"] == "127.0.0.1"
        assert kwargs["port"] == 9123
