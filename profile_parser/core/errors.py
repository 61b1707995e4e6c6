class EmptyInputError(ValueError):
    """
    Raised when the text handed to the parser is empty or whitespace-only.

    This is the only condition that crosses the core boundary: it means the
    upstream text extraction produced nothing, and the caller should react
    (e.g. ask for the file again) instead of showing an all-empty profile.
    """


class ProfileSchemaError(ValueError):
    """A payload could not be coerced into a StructuredProfile."""
