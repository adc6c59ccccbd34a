import pytest
from pydantic import ValidationError

from finengine.core import config
from finengine.core.config import DevSettings, ProdSettings, get_settings


def test_tests_run_against_in_memory_database():
    assert get_settings().ENV == "test"
    assert get_settings().DATABASE_URL == "sqlite:///:memory:"


def test_defaults():
    s = config.TestSettings()
    assert s.CURRENCY_SYMBOL == "Q"
    assert s.RECONCILIATION_THRESHOLD == 100
    assert s.DEFAULT_TAX_REGIME == "simplificado"
    assert s.PAYROLL_PAYMENT_DAY == 28


def test_regime_is_normalized():
    assert config.TestSettings(DEFAULT_TAX_REGIME=" Utilidades ").DEFAULT_TAX_REGIME == "utilidades"


def test_unknown_default_regime_rejected():
    with pytest.raises(ValidationError):
        DevSettings(DEFAULT_TAX_REGIME="mixto")


@pytest.mark.parametrize("day", [0, 29, 31])
def test_payment_day_must_exist_in_every_month(day):
    with pytest.raises(ValidationError):
        config.TestSettings(PAYROLL_PAYMENT_DAY=day)


def test_negative_threshold_rejected():
    with pytest.raises(ValidationError):
        config.TestSettings(RECONCILIATION_THRESHOLD=-1)


def test_prod_requires_database_url(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    with pytest.raises(ValidationError):
        ProdSettings()
    assert ProdSettings(DATABASE_URL="postgresql://db/fin").LOG_FORMAT == "json"
