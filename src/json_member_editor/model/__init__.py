"""Value model subpackage: JSON type tags, classification and editable members.

Re-exports:
- JsonType: StrEnum of the six JSON type tags
- classify / is_json_value / is_json_map: validation and classification
- zero_value / scalar_matches: per-type defaults and shape checks
- Member: frozen (key, value, type) triple of the editable representation
"""

from json_member_editor.model.nodes import (
    CanonicalValue,
    EditableNode,
    Member,
    Path,
    Scalar,
)
from json_member_editor.model.types import (
    JsonType,
    classify,
    is_json_map,
    is_json_value,
    scalar_matches,
    tag_of,
    zero_value,
)

__all__ = [
    "CanonicalValue",
    "EditableNode",
    "JsonType",
    "Member",
    "Path",
    "Scalar",
    "classify",
    "is_json_map",
    "is_json_value",
    "scalar_matches",
    "tag_of",
    "zero_value",
]
