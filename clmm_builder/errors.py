"""
에러 정의

모든 연산은 실패 시 즉시 예외를 던집니다 (재시도 없음).
기존 코드와의 호환을 위해 각 예외는 대응되는 built-in 예외도 상속합니다
(예: InvalidWidth 는 ValueError).
"""


class PositionBuilderError(Exception):
    """clmm_builder 예외의 공통 부모"""


class InvalidWidth(PositionBuilderError, ValueError):
    """width >= N (또는 음수)"""


class EmptyDeposit(PositionBuilderError, ValueError):
    """amount0 = amount1 = 0"""


class InfeasibleRange(PositionBuilderError, ValueError):
    """요청한 width/비율을 만족하는 가격 범위가 없음"""


class PriceOutOfRange(PositionBuilderError, ValueError):
    """sqrt price 또는 틱이 표현 가능 범위를 벗어남"""


class Overflow(PositionBuilderError, ArithmeticError):
    """중간 곱 또는 결과가 정수 폭을 초과"""


class DivisionByZero(PositionBuilderError, ZeroDivisionError):
    """분모 0 (예: sqrtPu = sqrtPl)"""


class InsufficientAmount(PositionBuilderError, ValueError):
    """라운딩된 범위에서 민트 가능한 유동성이 0"""


class SlippageCheckFailed(PositionBuilderError):
    """풀이 요청한 예산보다 많은 토큰을 요구함"""


class PoolError(PositionBuilderError):
    """Pool collaborator 에러"""


class PoolAlreadyInitialized(PoolError):
    pass


class PoolNotInitialized(PoolError):
    pass


class InvalidTickRange(PoolError, ValueError):
    pass


class InsufficientBalance(PoolError):
    pass
