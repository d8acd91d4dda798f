# MIT License
#
# Copyright (c) 2018 Evgeny Medvedev, evge.medvedev@gmail.com
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in all
# copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.
#
# Modified by: Cuong CT, 6/12/2025
# Change Description: using eth_utils library for implement some formatter utilities

import re
from typing import Optional

from eth_utils import to_int

from utils.exceptions import MalformedNumericError

HEX_PREFIX = "0x"
HEX_DIGITS_RE = re.compile(r"[0-9a-fA-F]+")


def is_hex_prefixed(value: str) -> bool:
    return value[:2].lower() == HEX_PREFIX


def wire_number_to_int(value: Optional[str], field_name: str = "number") -> int:
    """
    Converts a wire numeric (0x-prefixed hex or plain decimal string) to an int.

    Raises:
        MalformedNumericError: If the value is missing or is neither hex nor decimal.
    """
    if isinstance(value, int) and not isinstance(value, bool):
        if value < 0:
            raise MalformedNumericError(field_name, str(value))
        return value
    if not isinstance(value, str) or not value:
        raise MalformedNumericError(field_name, value)

    if is_hex_prefixed(value):
        # int(x, 16) would also accept underscores and surrounding whitespace
        if not HEX_DIGITS_RE.fullmatch(value[2:]):
            raise MalformedNumericError(field_name, value)
        return to_int(hexstr=value)

    if value.isascii() and value.isdigit():
        return int(value)

    raise MalformedNumericError(field_name, value)


def wire_number_to_decimal_string(value: Optional[str], field_name: str = "number") -> str:
    """
    Normalizes a wire numeric to its canonical decimal string, e.g. "0x10" -> "16".
    """
    return str(wire_number_to_int(value, field_name))


def to_normalized_address(address: Optional[str]) -> Optional[str]:
    """
    Convert address to lowercase for case-insensitive comparison.
    Safe-guards against None or invalid types.
    """
    if address is None or not isinstance(address, str):
        return None
    return address.strip().lower()
