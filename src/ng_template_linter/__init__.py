"""
Angular template deprecation linter.

Scans inline and external Angular templates for deprecated Angular Material
selectors, inputs and outputs, and reports each usage at its exact position in
the enclosing source file.
"""

from __future__ import annotations

__version__ = "0.1.0"
