"""
Generator Module - Black Box Interface

Purpose: Materialize the walkthrough files onto local disk
Interface: get_templates(), write_templates()
Hidden: Template contents, file modes

Files are written verbatim, overwriting whatever is already there.
"""

from .generator import get_templates, write_templates
from .templates import TEMPLATES

__all__ = ["TEMPLATES", "get_templates", "write_templates"]
