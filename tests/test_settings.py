import os

from retailbill.settings import Settings


def _clear_env(monkeypatch):
    for key in list(os.environ):
        if key.startswith("RETAILBILL_"):
            monkeypatch.delenv(key, raising=False)


class TestSettings:
    def test_defaults(self, monkeypatch):
        _clear_env(monkeypatch)
        s = Settings(_env_file=None)
        assert (s.rows_single, s.rows_first, s.rows_middle, s.rows_last) == (18, 30, 32, 24)
        assert s.trash_retention_hours == 24
        assert s.default_unit == "pcs"
        assert s.log_level == "INFO"
        assert s.log_json is False

    def test_env_override(self, monkeypatch):
        _clear_env(monkeypatch)
        monkeypatch.setenv("RETAILBILL_ROWS_FIRST", "28")
        monkeypatch.setenv("RETAILBILL_LOG_JSON", "true")
        s = Settings(_env_file=None)
        assert s.rows_first == 28
        assert s.log_json is True
