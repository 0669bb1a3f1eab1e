# grocery_prices/storage/errors.py

"""Fatal input errors raised while loading the price table."""


class InputNotFoundError(FileNotFoundError):
    """The price CSV does not exist at the given path."""


class MalformedInputError(ValueError):
    """The price CSV cannot be read as a price table.

    Either required columns are missing from the header (listed in
    ``missing``) or the file itself could not be parsed (``reason``).
    """

    def __init__(
        self,
        path: str,
        missing: list[str] | None = None,
        reason: str | None = None,
    ) -> None:
        self.path = path
        self.missing = list(missing or [])
        self.reason = reason
        if reason is None:
            message = (
                f"{path} is missing required column(s): {', '.join(self.missing)}"
            )
        else:
            message = f"{path} could not be parsed: {reason}"
        super().__init__(message)
