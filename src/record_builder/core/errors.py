"""Custom exception hierarchy for record builders."""


class RecordBuilderError(Exception):
    """Base exception for all record builder errors."""


# --- Configuration ---
class ConfigError(RecordBuilderError):
    """Invalid or missing configuration."""


# --- Shapes ---
class UnsupportedShapeError(RecordBuilderError):
    """Class cannot be used as a record shape."""


# --- Construction ---
class UnknownFieldError(RecordBuilderError):
    """Override names a field the shape does not declare."""

    def __init__(self, shape: str, name: str):
        self.shape = shape
        self.name = name
        super().__init__(f"{shape} has no field named {name!r}")


class IncompatibleRecordError(RecordBuilderError):
    """Builder seeded from an instance of a different shape."""


class InvalidStateError(RecordBuilderError):
    """Mandatory fields were left unset at build time."""

    def __init__(self, shape: str, missing: tuple[str, ...]):
        self.shape = shape
        self.missing = missing
        super().__init__(
            f"{shape}: mandatory field(s) not set: {', '.join(missing)}"
        )
