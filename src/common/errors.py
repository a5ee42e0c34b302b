"""Error types shared by the pipelines."""


class PipelineError(Exception):
    """Base class for pipeline errors."""


class IntegrationError(PipelineError):
    """An upstream service (news API, S3, Pinecone, Bedrock, SES...) failed."""

    def __init__(self, service: str, details: str) -> None:
        self.service = service
        self.details = details
        super().__init__(f"{service}: {details}")


class ValidationError(PipelineError):
    """Input that cannot succeed on retry (bad payload, bad batch, bad vector)."""


class BlobNotFoundError(PipelineError):
    """Requested blob key does not exist."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Blob not found: {key}")


class GenerationParseError(PipelineError):
    """Model output did not follow the SUBJECT/BODY format."""

    def __init__(self, message: str, raw_output: str) -> None:
        self.raw_output = raw_output
        super().__init__(message)


class NoArticlesProcessedError(PipelineError):
    """Every document in an embedding batch failed."""
