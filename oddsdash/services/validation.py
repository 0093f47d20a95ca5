# oddsdash/services/validation.py
from __future__ import annotations

from typing import Optional

from fastapi import HTTPException

from ..core.config import SUPPORTED, Sport


def validate_sport(sport: Optional[str], default: Sport = "NCAAF") -> Sport:
    """
    Upper-cases the sport and checks it against the supported set.
    Missing -> default. Unknown -> 422 with the accepted values.
    """
    if sport is None or not sport.strip():
        return default
    value = sport.strip().upper()
    if value not in SUPPORTED:
        raise HTTPException(
            status_code=422,
            detail={"message": "Invalid sport", "input": sport, "expected": sorted(SUPPORTED)},
        )
    return value  # type: ignore[return-value]
