"""
Middleware package for request processing
"""
from .cors import CORSPolicy, CORSPolicyMiddleware

__all__ = [
    "CORSPolicy",
    "CORSPolicyMiddleware"
]
