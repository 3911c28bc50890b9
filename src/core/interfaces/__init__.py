"""Core interfaces/abstractions.

Why:
- Defines the contracts (Protocol) that concrete adapters implement.
- The publish pipeline depends on these abstractions, never on httpx.
"""
