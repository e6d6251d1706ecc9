"""
Configuration settings for the CLMM position builder

Loads environment variables and provides default pool/position parameters.
"""
import os
from dotenv import load_dotenv

from .constants import TICK_SPACINGS

# Load environment variables from .env file
load_dotenv()


class Settings:
    """Builder settings

    환경 변수는 인스턴스 생성 시점에 읽습니다.
    """

    DEFAULT_FEE_TIER: int = 3000
    DEFAULT_RECIPIENT: str = "0x0000000000000000000000000000000000000001"

    def __init__(self):
        # Pool defaults
        self.FEE_TIER: int = self._read_fee_tier()
        self.TOKEN0_DECIMALS: int = int(os.getenv("CLMM_TOKEN0_DECIMALS", 18))
        self.TOKEN1_DECIMALS: int = int(os.getenv("CLMM_TOKEN1_DECIMALS", 18))

        # Position defaults
        self.RECIPIENT: str = os.getenv("CLMM_RECIPIENT", self.DEFAULT_RECIPIENT)

        # Logging
        self.LOG_LEVEL: str = os.getenv("CLMM_LOG_LEVEL", "WARNING").upper()

    def _read_fee_tier(self) -> int:
        """CLMM_FEE_TIER 읽기. 잘못된 값이면 경고 후 기본값"""
        raw = os.getenv("CLMM_FEE_TIER", str(self.DEFAULT_FEE_TIER))
        try:
            fee_tier = int(raw)
        except ValueError:
            fee_tier = None
        if fee_tier not in TICK_SPACINGS:
            print(f"⚠️  WARNING: CLMM_FEE_TIER={raw} 은 지원하지 않는 값입니다!")
            print(f"   지원: {sorted(TICK_SPACINGS)}, 기본값 {self.DEFAULT_FEE_TIER} 사용")
            return self.DEFAULT_FEE_TIER
        return fee_tier

    @property
    def tick_spacing(self) -> int:
        """FEE_TIER 에 해당하는 틱 간격"""
        return TICK_SPACINGS[self.FEE_TIER]


# Create global settings instance
settings = Settings()
