"""Domain exceptions."""


class WikiChatError(Exception):
    """Base exception for WikiChat."""

    pass


class ValidationError(WikiChatError):
    """Validation failed for input data."""

    pass


class InvalidParameters(ValidationError):
    """Chunk size or overlap out of range."""

    pass


class InvalidQuery(ValidationError):
    """Query embedding is missing or empty."""

    pass


class InvalidTopK(ValidationError):
    """Requested result count is not positive."""

    pass


class UnsupportedContentType(ValidationError):
    """Uploaded content type is not in the allow-list."""

    pass


class GatewayError(WikiChatError):
    """Embedding or generation provider call failed."""

    pass


class EmptyInput(GatewayError):
    """Blank text submitted to a provider."""

    def __init__(self, message: str, index: int | None = None) -> None:
        super().__init__(message)
        self.index = index


class UpstreamFailure(GatewayError):
    """Provider transport or API error."""

    pass


class MalformedResponse(GatewayError):
    """Provider returned an empty or unusable payload."""

    pass


class DimensionMismatch(MalformedResponse):
    """Embedding length differs from the configured dimension."""

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(f"Expected embedding dimension {expected}, got {actual}")
        self.expected = expected
        self.actual = actual


class CountMismatch(GatewayError):
    """Provider returned a different number of vectors than requested."""

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(f"Expected {expected} embeddings but got {actual}")
        self.expected = expected
        self.actual = actual


class RetrievalFailure(WikiChatError):
    """Vector store query failed."""

    pass


class PipelineStageFailure(WikiChatError):
    """A stage of the query pipeline failed; no answer was produced."""

    stage = "pipeline"


class EmbeddingStageFailure(PipelineStageFailure):
    """Query embedding could not be produced."""

    stage = "embedding"


class RetrievalStageFailure(PipelineStageFailure):
    """Relevant chunks could not be retrieved."""

    stage = "retrieval"


class GenerationStageFailure(PipelineStageFailure):
    """Answer generation failed."""

    stage = "generation"


class NotFound(WikiChatError):
    """Requested resource was not found."""

    pass


class ConversationNotFound(NotFound):
    """No conversation exists for the session id."""

    pass


class DocumentNotFound(NotFound):
    """No document exists for the id."""

    pass


class DocumentParsingError(WikiChatError):
    """Document bytes could not be turned into text."""

    pass
