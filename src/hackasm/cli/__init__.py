"""
hackasm Command-Line Interface
==============================

- **hackasm**: Hack assembler

Implemented as a Click application with help text and consistent
exit codes.
"""

__all__ = ["hackasm"]
