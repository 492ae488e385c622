"""Exceptions raised while turning a graph description into GraphQL text."""


class EncodeError(TypeError):
    """Raised when a graph node or argument value has no textual form.

    This is a caller error: the graph was built with a shape the encoder
    does not understand. The library never catches it.
    """

    def __init__(self, message: str, value=None):
        self.message = message
        self.value = value
        super().__init__(message)


class MalformedOperationError(EncodeError, ValueError):
    """Raised when ``query``/``mutation`` receive an unsupported call shape."""
