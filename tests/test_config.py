import pytest
from pydantic import ValidationError

from vhsa.core.config import Environment, Settings, settings
from vhsa.crud.student import school_code
from vhsa.utils.text import to_title_case
from vhsa.utils.timezone import now_local


class TestSettings:
    def test_postgres_uri_derived(self):
        s = Settings(
            SQLALCHEMY_DATABASE_URI=None,
            POSTGRES_USER="vhsa",
            POSTGRES_PASSWORD="p@ss word",
            POSTGRES_SERVER="db",
            POSTGRES_DB="screening",
        )
        assert s.SQLALCHEMY_DATABASE_URI == "postgresql://vhsa:p%40ss+word@db:5432/screening"

    def test_cors_origins_from_comma_separated_string(self):
        s = Settings(CORS_ORIGINS="http://a.example, http://b.example")
        assert s.CORS_ORIGINS == ["http://a.example", "http://b.example"]

    def test_log_level_normalized(self):
        assert Settings(LOG_LEVEL="debug").LOG_LEVEL == "DEBUG"

    def test_sqlite_rejected_in_production(self):
        with pytest.raises(ValidationError):
            Settings(ENVIRONMENT=Environment.PRODUCTION, SQLALCHEMY_DATABASE_URI="sqlite://")


class TestNormalization:
    @pytest.mark.parametrize("raw, expected", [
        ("mary ann", "Mary Ann"),
        ("  JOSE  ", "Jose"),
        ("o'brien", "O'brien"),
        ("", ""),
        (None, ""),
    ])
    def test_to_title_case(self, raw, expected):
        assert to_title_case(raw) == expected

    @pytest.mark.parametrize("school, expected", [
        ("Roosevelt Elementary", "ro"),
        ("St. Mary's Academy", "st"),
        ("  lamar middle", "la"),
        ("", ""),
    ])
    def test_school_code(self, school, expected):
        assert school_code(school) == expected


class TestTimezone:
    def test_now_local_is_timezone_aware(self):
        assert now_local().tzinfo is not None

    def test_unknown_zone_falls_back_to_utc(self, monkeypatch):
        monkeypatch.setattr(settings, "DEFAULT_TIMEZONE", "Not/AZone")
        assert now_local().utcoffset().total_seconds() == 0
