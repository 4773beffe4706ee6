"""Validated option set resolved from the command line."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_PAYLOAD_URI = "http://127.0.0.1:8080/payload"


class OptionSet(BaseModel):
    """Immutable record of the action flags for one invocation.

    ``suspend``, ``resume`` and ``cancel`` are independent single actions;
    ``update`` and ``follow`` are the only meaningful combination.
    """

    model_config = ConfigDict(frozen=True)

    suspend: bool = Field(False, description="Suspend an ongoing update and exit")
    resume: bool = Field(False, description="Resume a suspended update")
    cancel: bool = Field(False, description="Cancel the ongoing update and exit")
    update: bool = Field(False, description="Start a new update")
    follow: bool = Field(
        False, description="Follow status updates until a final state is reached"
    )
    payload_uri: str = Field(
        DEFAULT_PAYLOAD_URI, description="URI of the update payload"
    )
    headers: tuple[str, ...] = Field(
        (), description="key: value header lines passed with the payload"
    )
    positional: tuple[str, ...] = Field(
        (), description="Stray positional arguments (always a usage error)"
    )

    @field_validator("headers", mode="before")
    @classmethod
    def split_header_lines(cls, v):
        """Split a raw multi-line value on newlines, dropping empty lines.

        Whitespace inside a line is kept as-is.
        """
        if v is None:
            return ()
        if isinstance(v, str):
            return tuple(line for line in v.split("\n") if line)
        return v

    @property
    def has_action(self) -> bool:
        """True if at least one action flag is set."""
        return any((self.suspend, self.resume, self.cancel, self.update, self.follow))
