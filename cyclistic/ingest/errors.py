# cyclistic/ingest/errors.py


class IngestionError(ValueError):
    """Raised when the trip directory or one of its files cannot be read."""


class SchemaMismatchError(IngestionError):
    """Raised when a trip file's columns differ from the expected trip schema."""
