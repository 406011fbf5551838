"""Photo categories captured at vehicle check-in."""

from enum import Enum


class PhotoType(str, Enum):
    """Vehicle photo category."""

    FRONT = "front"
    REAR = "rear"
    LEFT_SIDE = "left_side"
    RIGHT_SIDE = "right_side"
    DAMAGE_FRONT = "damage_front"
    DAMAGE_REAR = "damage_rear"
    DAMAGE_LEFT = "damage_left"
    DAMAGE_RIGHT = "damage_right"
    DAMAGE_OTHER = "damage_other"
