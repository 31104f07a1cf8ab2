"""
typed-jsonb — integration test package

File: tests/integration/__init__.py

Purpose
- Test package marker for tests that open real ``sqlite3`` connections.

Non-functional requirements
- No network access; databases live in memory or under ``tmp_path``.
"""
