"""
range_lp 오류 정의

틱 범위 계산과 유동성 공급 과정에서 발생하는 오류들.
"""


class RangeLiquidityError(Exception):
    """range_lp 기본 오류"""
    pass


class InvalidWidthError(RangeLiquidityError, ValueError):
    """width 가 1 ~ 9999 bps 범위를 벗어난 경우"""
    pass


class InvalidTickSpacingError(RangeLiquidityError, ValueError):
    """틱 간격이 양의 정수가 아닌 경우"""
    pass


class PriceOutOfBoundsError(RangeLiquidityError, ValueError):
    """sqrt ratio 또는 틱이 전역 틱 범위를 벗어난 경우"""
    pass


class ArithmeticOverflowError(RangeLiquidityError, OverflowError):
    """고정 폭 정수 범위를 넘는 연산"""
    pass


class TokenMismatchError(RangeLiquidityError, ValueError):
    """요청 토큰이 풀의 토큰 쌍과 다른 경우"""
    pass


class InsufficientBalanceError(RangeLiquidityError):
    """잔고 부족"""
    pass


class InsufficientAllowanceError(RangeLiquidityError):
    """사전 승인(allowance) 부족"""
    pass


class SlippageCheckError(RangeLiquidityError):
    """민트 결과가 최소 수량 미만"""
    pass


class DeadlineExpiredError(RangeLiquidityError):
    """deadline 이 지난 요청"""
    pass


class PositionManagerError(RangeLiquidityError):
    """포지션 매니저가 약속을 어긴 경우 (예: desired 보다 많이 사용)"""
    pass


class PoolNotFoundError(RangeLiquidityError):
    """풀을 찾을 수 없음"""
    pass
