"""Options bag accepted by ``spawn_exec``."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..errors import OptionsError


class SpawnOptions(BaseModel):
    """Spawn options.

    Keys use the call-site spelling (``usePath``, ``stdout``); the Python
    field names are accepted as well. Unknown keys are ignored.
    """

    model_config = ConfigDict(
        populate_by_name=True, extra="ignore", arbitrary_types_allowed=True
    )

    block: bool = True
    use_path: bool = Field(default=True, alias="usePath")
    stdout_fd: Optional[int] = Field(default=None, alias="stdout")
    file: Optional[Any] = None
    env: Optional[Any] = None

    @field_validator("stdout_fd", mode="before")
    @classmethod
    def descriptor_from_stream(cls, v: Any) -> Any:
        """Accept file objects by taking their descriptor."""

        if v is None or isinstance(v, int):
            return v
        fileno = getattr(v, "fileno", None)
        if fileno is None:
            raise ValueError("stdout must be a file descriptor or have fileno()")
        return fileno()

    @classmethod
    def parse(cls, options: Any) -> "SpawnOptions":
        """Build options from None, a mapping, or an existing model.

        Raises:
            OptionsError: If options is not a mapping or a field is invalid
        """
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        if not isinstance(options, Mapping):
            raise OptionsError(
                f"options must be a mapping, not {type(options).__name__}"
            )
        try:
            return cls.model_validate(dict(options))
        except ValidationError as err:
            raise OptionsError(f"invalid options: {err}") from err
