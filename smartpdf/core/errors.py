"""Error taxonomy for the compression workflow.

Every error carries the HTTP status it maps to and a short public message.
The exception's own text (``str(exc)``) holds the operator-facing detail and
is only ever written to the log.
"""

from fastapi import status


class CompressorError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    public_message: str = "PDF compression failed"

    def __init__(self, detail: str | None = None) -> None:
        super().__init__(detail or self.public_message)
        self.detail = detail or self.public_message


class ValidationError(CompressorError):
    status_code = status.HTTP_400_BAD_REQUEST
    public_message = "Invalid request"


class UnsupportedFileError(ValidationError):
    public_message = "Only PDF files up to 100 MB are supported"


class MissingFileError(ValidationError):
    public_message = "No PDF file was provided"


class InvalidParameterError(ValidationError):
    public_message = "Invalid compression level"


class CredentialError(CompressorError):
    public_message = "Compression service credentials error"


class RemoteServiceError(CompressorError):
    public_message = "Compression service error"


class RemoteJobError(CompressorError):
    public_message = "Compression job failed"


class UnexpectedCompressionError(CompressorError):
    public_message = "PDF compression failed"


class StreamError(CompressorError):
    public_message = "Failed to send the compressed file"
