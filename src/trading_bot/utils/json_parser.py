"""JSON parsing utilities.

Numbers with a fractional part are parsed as ``Decimal`` so exchange
prices never pass through binary floating point.
"""

import json
from decimal import Decimal


def dumps(obj, **kwargs) -> str:
    """Serialize obj to a compact JSON formatted str."""
    kwargs.setdefault("separators", (",", ":"))
    return json.dumps(obj, **kwargs)


def loads(s, **kwargs):
    """Deserialize s (a str, bytes or bytearray instance containing a JSON document) to a Python object."""
    kwargs.setdefault("parse_float", Decimal)
    return json.loads(s, **kwargs)
