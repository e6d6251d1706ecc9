"""
Settings 테스트
"""

import pytest

from ..config import Settings


class TestSettings:

    def test_defaults(self, monkeypatch):
        for name in ("CLMM_FEE_TIER", "CLMM_TOKEN0_DECIMALS", "CLMM_TOKEN1_DECIMALS",
                     "CLMM_RECIPIENT", "CLMM_LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings()
        assert settings.FEE_TIER == 3000
        assert settings.tick_spacing == 60
        assert settings.TOKEN0_DECIMALS == 18
        assert settings.TOKEN1_DECIMALS == 18
        assert settings.RECIPIENT == Settings.DEFAULT_RECIPIENT
        assert settings.LOG_LEVEL == "WARNING"

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("CLMM_FEE_TIER", "500")
        monkeypatch.setenv("CLMM_TOKEN0_DECIMALS", "6")
        monkeypatch.setenv("CLMM_RECIPIENT", "0xabc")
        monkeypatch.setenv("CLMM_LOG_LEVEL", "debug")

        settings = Settings()
        assert settings.FEE_TIER == 500
        assert settings.tick_spacing == 10
        assert settings.TOKEN0_DECIMALS == 6
        assert settings.RECIPIENT == "0xabc"
        assert settings.LOG_LEVEL == "DEBUG"

    @pytest.mark.parametrize("value", ["1234", "0.3%"])
    def test_invalid_fee_tier_falls_back(self, monkeypatch, capsys, value):
        """지원하지 않는 수수료 티어는 경고 후 기본값"""
        monkeypatch.setenv("CLMM_FEE_TIER", value)

        settings = Settings()
        assert settings.FEE_TIER == Settings.DEFAULT_FEE_TIER
        assert settings.tick_spacing == 60
        assert "WARNING" in capsys.readouterr().out
