"""Shared utilities — filesystem locations and logging setup.

Rules
-----
* No business logic.
* Importable by any layer.
"""
