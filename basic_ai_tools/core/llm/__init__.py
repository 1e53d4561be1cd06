"""LLM integration layer.

This package is intentionally small:
- No prompt/output logging; failures are logged with operation metadata only.
- Configurable via environment variables.
- Each call is stateless; retries are bounded and never shared between calls.
"""
