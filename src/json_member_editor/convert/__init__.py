"""Conversion layer between canonical JSON values and editable documents.

- to_editable / EditableBuilder: canonical JSON -> ordered member lists
- to_canonical: editable document + top-level type -> canonical JSON
"""

from json_member_editor.convert.builder import EditableBuilder, to_editable
from json_member_editor.convert.canonical import to_canonical

__all__ = ["EditableBuilder", "to_canonical", "to_editable"]
