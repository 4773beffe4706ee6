"""Exit outcome model and the codes it maps to."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

EXIT_OK = 0
EXIT_FAILURE = 1


class OutcomeSource(str, Enum):
    """Where an exit request came from."""

    CALL = "call"
    NOTIFICATION = "notification"
    TRANSPORT = "transport"


class ExitOutcome(BaseModel):
    """The single value produced per process lifetime."""

    model_config = ConfigDict(frozen=True)

    ok: bool = Field(..., description="Whether the requested action succeeded")
    code: int = Field(..., ge=0, le=255, description="Process exit code")

    @classmethod
    def success(cls) -> "ExitOutcome":
        return cls(ok=True, code=EXIT_OK)

    @classmethod
    def failure(cls, code: int = EXIT_FAILURE) -> "ExitOutcome":
        return cls(ok=False, code=code)
