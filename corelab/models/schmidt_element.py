"""
Rebound (Schmidt) hammer data model per EN 12504-2.

Contains the anvil calibration readings shared by a test session and the
rebound readings taken on each tested element.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

MIN_ELEMENT_READINGS = 9
MAX_ELEMENT_READINGS = 15
MIN_ANVIL_READINGS = 5


@dataclass(frozen=True)
class AnvilCalibration:
    """
    Calibration anvil readings taken before and after the session.

    Parameters
    ----------
    readings_before : tuple of int
        Anvil rebound numbers before testing (at least 5)
    readings_after : tuple of int
        Anvil rebound numbers after testing (at least 5)
    """
    readings_before: Tuple[int, ...]
    readings_after: Tuple[int, ...]


@dataclass(frozen=True)
class SchmidtElementMeasurement:
    """
    Rebound readings on one structural element.

    Parameters
    ----------
    readings : tuple of float
        Raw rebound numbers (9 to 15)
    element_name : str, optional
        Element description
    element_code : str, optional
        Element code on the drawings
    hammer_direction : str, optional
        Impact direction (e.g. horizontal, downwards)
    notes : str, optional
        Free text remarks
    """
    readings: Tuple[float, ...]
    element_name: Optional[str] = None
    element_code: Optional[str] = None
    hammer_direction: Optional[str] = None
    notes: Optional[str] = None
