"""Money Type — Decimal in Python, JSON number on the wire."""

from decimal import Decimal
from typing import Annotated

from pydantic import PlainSerializer

Money = Annotated[
    Decimal, PlainSerializer(float, return_type=float, when_used="json"),
]
