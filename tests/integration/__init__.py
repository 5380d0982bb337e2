"""
Integration tests for the full file pipeline.

These tests:
- Write real image files to a temporary directory
- Pack them through the public API
- Read the atlas and metadata back the way a runtime loader would

Run with:
    pytest tests/integration/ -v
"""
