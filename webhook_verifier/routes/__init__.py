"""
Routes package for the webhook verifier.

This package contains route blueprints:
- api: JSON endpoints for verification and health probes
"""
