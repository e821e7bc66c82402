from __future__ import annotations
from pydantic import BaseModel, StrictStr
from typing import Callable, Dict, Union

PrimaryType = Union[str, int, float, bytes, bool]


class Env(BaseModel):
    LOCALDOMAIN: StrictStr | None = None
    RES_OPTIONS: StrictStr | None = None
    SystemRoot: StrictStr | None = None
    DNSCONF_LOG_LEVEL: StrictStr | None = None
    DNSCONF_LOG_OUTPUT: StrictStr | None = None
    DNSCONF_LOGS_DIRECTORY: StrictStr | None = None

    @classmethod
    def types_map(cls) -> Dict[str, Callable[[str], PrimaryType]]:
        return {
            "LOCALDOMAIN": str,
            "RES_OPTIONS": str,
            "SystemRoot": str,
            "DNSCONF_LOG_LEVEL": str.lower,
            "DNSCONF_LOG_OUTPUT": str.lower,
            "DNSCONF_LOGS_DIRECTORY": str,
        }
