"""Route protection"""

from .access_gate_use_case import FAIL_CLOSED, FAIL_OPEN, AccessGateUseCase
from .live_session_use_case import LiveSessionUseCase

__all__ = ["AccessGateUseCase", "LiveSessionUseCase", "FAIL_OPEN", "FAIL_CLOSED"]
