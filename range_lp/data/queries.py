"""
GraphQL 쿼리 정의

틱 범위 계산에 필요한 풀 상태(sqrtPrice, tick, feeTier, 토큰 쌍)만 조회합니다.
"""

# Pool 정보 쿼리 (Global State)
POOL_QUERY = """
query Pool($id: ID!) {
  pool(id: $id) {
    id
    feeTier
    tick
    sqrtPrice
    liquidity
    token0 {
      id
      symbol
      name
      decimals
    }
    token1 {
      id
      symbol
      name
      decimals
    }
  }
}
"""

# 토큰 쌍 + 수수료 티어로 풀 조회
POOL_BY_TOKENS_QUERY = """
query PoolByTokens($token0: String!, $token1: String!, $feeTier: BigInt!) {
  pools(where: {token0: $token0, token1: $token1, feeTier: $feeTier}, first: 1) {
    id
    feeTier
    tick
    sqrtPrice
    liquidity
    token0 {
      id
      symbol
      name
      decimals
    }
    token1 {
      id
      symbol
      name
      decimals
    }
  }
}
"""
