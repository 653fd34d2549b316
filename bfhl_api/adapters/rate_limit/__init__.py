"""Rate limiting adapters.

A small abstraction layer so the service can start with an in-memory limiter
and later migrate to Redis or another shared store without changing the HTTP
layer.
"""
