"""HTTP API for range_lp"""
