"""LLM integration layer.

Small and stateless:
- No prompt/output logging.
- Configured from `Settings`; callers receive a ready client or None.
"""
