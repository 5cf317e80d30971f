from enum import Enum


class CycleState(Enum):
    IDLE = "idle"
    LAUNCHING = "launching"
    AWAITING_READY = "awaiting_ready"
    SETTLING = "settling"
    SAMPLING = "sampling"
    TERMINATING = "terminating"
    DONE = "done"
    FAILED = "failed"
