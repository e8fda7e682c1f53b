from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from messaging.errors import InvalidArgumentError


def _normalize_idd(code: Optional[Union[str, int]]) -> Optional[str]:
    if code is None:
        return None
    s = str(code).strip()
    if s.startswith("+"):
        s = s[1:]
    elif s.startswith("00"):
        s = s[2:]
    return s or None


@dataclass(frozen=True)
class PhoneNumber:
    number: str
    idd_code: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "number", str(self.number).strip())
        object.__setattr__(self, "idd_code", _normalize_idd(self.idd_code))

    @classmethod
    def coerce(cls, value: Union["PhoneNumber", str, int], idd_code: Optional[Union[str, int]] = None) -> "PhoneNumber":
        if isinstance(value, PhoneNumber):
            return value
        if isinstance(value, (str, int)) and not isinstance(value, bool):
            return cls(str(value), idd_code)
        raise InvalidArgumentError(f"unsupported phone number type: {type(value).__name__}")

    @property
    def universal_number(self) -> str:
        if not self.idd_code:
            return self.number
        return f"+{self.idd_code}{self.number}"

    @property
    def zero_prefixed_number(self) -> str:
        if not self.idd_code:
            return self.number
        return f"00{self.idd_code}{self.number}"

    def in_china_mainland(self) -> bool:
        return not self.idd_code or self.idd_code == "86"

    def __str__(self) -> str:
        return self.universal_number
