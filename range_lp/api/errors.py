"""
Library error → HTTP error mapping
"""
from fastapi import HTTPException

from range_lp.data.graph_client import GraphClientError
from range_lp.errors import PoolNotFoundError, RangeLiquidityError


def to_http_exception(error: RangeLiquidityError) -> HTTPException:
    """range_lp 오류를 HTTP 상태 코드로 변환

    - PoolNotFoundError: 404
    - GraphClientError: 502 (업스트림 오류)
    - 그 외 입력/검증 오류: 400
    """
    if isinstance(error, PoolNotFoundError):
        return HTTPException(status_code=404, detail=str(error))
    if isinstance(error, GraphClientError):
        return HTTPException(status_code=502, detail=str(error))
    return HTTPException(status_code=400, detail=str(error))
