# propvest/schemas/base.py
import math
import re
from decimal import Decimal

from pydantic import BaseModel, condecimal
from pydantic.alias_generators import to_camel

DIGITS = re.compile(r"^[0-9]+$")

# wallet amounts: whole cents, no float rounding
Money = condecimal(max_digits=18, decimal_places=2)


class CamelModel(BaseModel):
    """Snake-case attributes, camelCase JSON; input accepts either spelling."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


def positive_amount(value: Decimal) -> Decimal:
    if value is None or not math.isfinite(value) or value <= 0:
        raise ValueError("Amount must be a positive number")
    return value


def digits(value: str, label: str, min_len: int, max_len: int) -> str:
    if not DIGITS.match(value or ""):
        raise ValueError(f"{label} must contain only digits")
    if not min_len <= len(value) <= max_len:
        if min_len == max_len:
            raise ValueError(f"{label} must be {min_len} digits")
        raise ValueError(f"{label} must be {min_len} to {max_len} digits")
    return value


def text_length(value: str, label: str, min_len: int, max_len: int) -> str:
    value = (value or "").strip()
    if len(value) < min_len:
        raise ValueError(f"{label} must be at least {min_len} characters")
    if len(value) > max_len:
        raise ValueError(f"{label} cannot exceed {max_len} characters")
    return value
