"""Checkpoints at which protocol requirements are evaluated."""

from enum import Enum


class ProtocolStage(str, Enum):
    """Visit stage a protocol belongs to."""

    CHECK_IN = "check_in"
    """Vehicle reception. Mandatory protocols gate visit confirmation."""

    CHECK_OUT = "check_out"
    """Vehicle hand-back."""
