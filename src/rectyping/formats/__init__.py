"""Text encodings of the tagged-dict interchange.

Only JSON is supported; `rectyping.codecs` does the tree conversion.
"""

from rectyping.formats.json import from_json, term_from_json, to_json, type_from_json

__all__ = ["from_json", "term_from_json", "to_json", "type_from_json"]
