"""
Pull-off (tensile adhesion) specimen data model per BS 1881-207.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class PullOffSpecimenMeasurement:
    """
    A single pull-off dolly test.

    Parameters
    ----------
    diameter : float
        Dolly / cut diameter (mm)
    failure_load : float
        Load at failure (kN)
    specimen_number : str, optional
        Running number on the test sheet
    specimen_code : str, optional
        Laboratory specimen code
    tested_item : str, optional
        Structural element or coating tested
    failure_mode : str, optional
        Observed failure plane
    """
    diameter: float
    failure_load: float
    specimen_number: Optional[str] = None
    specimen_code: Optional[str] = None
    tested_item: Optional[str] = None
    failure_mode: Optional[str] = None

