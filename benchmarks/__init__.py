"""
Benchmark suite for jsonhex rewriting performance.

Puts the single-pass rewrite next to plain decoding with:
- Python standard library json
- orjson (C-optimized)
- ujson (ultra-fast JSON)

Decoders build Python objects rather than rewrite, so the numbers are a
yardstick for the cost of one pass over the same bytes, not a like-for-like
race. Measures speed and memory across different document shapes.
"""
