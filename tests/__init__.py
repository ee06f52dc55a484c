"""
Test suite for the webhook verifier.

This package contains:
- unit/: Codec, DER, token, signature, body and orchestrator tests
- integration/: HTTP tests through the Flask test client
- contracts/: Response payloads checked against contracts/openapi.yaml
- security/: Tampering, algorithm confusion and disclosure tests
- smoke/: Checks against a running deployment (skipped when none is up)
"""
