"""CLI layer — argument parsing, menus, prompts and the error boundary.

This package is the outermost layer of the application.  It may import
from ``core``, ``infra``, ``i18n`` and ``utils``, but no other layer may
import from ``cli``.
"""
