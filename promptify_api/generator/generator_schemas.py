"""Generator attempt/result models"""
from enum import Enum
from pydantic import BaseModel
from typing import Dict, List, Optional


class ControllerState(str, Enum):
    """Retry controller states

    ATTEMPTING → PASSED
              ↘ EXHAUSTED
    """
    ATTEMPTING = "attempting"
    PASSED = "passed"
    EXHAUSTED = "exhausted"


class GenerationAttempt(BaseModel):
    """One build → call → sanitize → gate cycle"""
    index: int  # 1-based
    messages: List[Dict[str, str]]
    raw_output: str = ""
    candidate: str = ""
    passed: bool = False
    check: Optional[str] = None
    reason: Optional[str] = None


class ControllerOutcome(BaseModel):
    """Terminal state of the retry loop plus its attempt history"""
    state: ControllerState
    attempts: List[GenerationAttempt] = []
    candidate: Optional[str] = None  # set only when PASSED

    @property
    def last_reason(self) -> Optional[str]:
        return self.attempts[-1].reason if self.attempts else None


class GenerationResult(BaseModel):
    """Final pipeline output"""
    html: str
    source: str  # "ai" or "fallback"
    state: ControllerState
    attempts: List[GenerationAttempt] = []
    forced_fallback: bool = False  # post-injection structural check failed
