"""
ytdlmeta Test Suite

Test Categories:
- unit/: Fast, isolated unit tests
- integration/: Tests through the HTTP API
- fixtures/: Shared test helpers
"""
