class InvalidDataError(ValueError):
    """A payload handed to the parser does not have the expected shape."""

    def __init__(self, message="[[error:invalid-data]]"):
        super().__init__(message)
