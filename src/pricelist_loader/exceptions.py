"""Exceptions raised while loading the price lists.

Fatal errors propagate to the CLI that stops the run, while record and
region level errors are logged and skipped by the pipeline."""


class LoaderError(Exception):
    """Base class of all price list loader errors."""


class FetchError(LoaderError):
    """A document could not be downloaded."""


class DocumentError(LoaderError):
    """A downloaded document could not be used."""


class DocumentReadError(DocumentError):
    """A staged document could not be opened or read."""


class DocumentDecodeError(DocumentError):
    """A document is not valid JSON or misses its top-level structure."""


class StoreError(LoaderError):
    """A record could not be written to or looked up in the database."""
