"""Wooden blind cut-list derivation.

Turns the customer's finished size (inches) and the slat base size into the
measurements the production floor cuts to. Every value is computed from the
inputs alone; nothing here reads or writes state.

    slat pitch        35mm -> 1.27, 50mm -> 1.81
    slats             ceil(height / pitch) + 1
    tilt cord         height * 2 + 10
    cord              height * 4 + (width - 10)
    ladder tape       height + 5
    MS rod            width - 5
    channel uching    (width - 12) / 4, also reported in cm

The extra slat is a fixed manufacturing margin and is added even when the
height divides evenly by the pitch. Non-positive sizes must be rejected
before calling in here; narrow widths legitimately produce a negative
channel uching and it is returned unchanged.
"""

import math
from enum import Enum

from protean.fields import Float, Integer

from workroom.domain import workroom

CM_PER_INCH = 2.54


class BaseSize(Enum):
    MM_35 = "35mm"
    MM_50 = "50mm"


_SLAT_PITCH = {
    BaseSize.MM_35: 1.27,
    BaseSize.MM_50: 1.81,
}


@workroom.value_object(part_of="Order")
class WoodenSpec:
    """Derived cut-list for one wooden blind."""

    number_of_slats = Integer()
    tilt_cord_length = Float()
    cord_length = Float()
    ladder_tape_size = Float()
    ms_road = Float()
    channel_uching = Float()
    channel_uching_cm = Float()


def slat_pitch(base_size: BaseSize | str) -> float:
    """Vertical distance covered by one slat, in inches."""
    return _SLAT_PITCH[BaseSize(base_size)]


def derive_wooden_spec(width: float, height: float, base_size: BaseSize | str) -> WoodenSpec:
    """Compute the wooden blind cut-list for a finished width and height."""
    channel_uching = (width - 12) / 4
    return WoodenSpec(
        number_of_slats=math.ceil(height / slat_pitch(base_size)) + 1,
        tilt_cord_length=height * 2 + 10,
        cord_length=height * 4 + (width - 10),
        ladder_tape_size=height + 5,
        ms_road=width - 5,
        channel_uching=channel_uching,
        channel_uching_cm=channel_uching * CM_PER_INCH,
    )
