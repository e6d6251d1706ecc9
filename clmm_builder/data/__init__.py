"""
Data layer

- types: 포지션 요청/결과 값 타입
- pool: 풀 collaborator 인터페이스와 인메모리 구현
"""

from .types import Slot0, PositionRequest, PositionResult, Position
from .pool import PoolLike, SimulatedPool
