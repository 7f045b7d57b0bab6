"""Общие fixtures: изоляция настроек floco между тестами."""

import pytest

from floco.config import reset_settings


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    """Каждый тест видит настройки, прочитанные из собственного окружения."""
    for name in (
        "FLOCO_DEFAULT_FLOAT_FORMAT",
        "FLOCO_VERIFY_DEFAULTS",
        "FLOCO_VERIFY_PREDICATE_PURITY",
    ):
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield
    reset_settings()
