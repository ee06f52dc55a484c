"""
API test package for the webhook verifier.

Tests use the Flask test client and cover:
- Every verification outcome and its HTTP status
- Legacy route and field names
- The function-key gate and request size limit
- JSON error handlers
"""
