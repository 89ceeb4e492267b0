"""Shared field types for external payloads."""

from decimal import Decimal
from typing import Annotated
from pydantic import PlainSerializer


# Kept exact in memory, written as a JSON number on the wire
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]
