from __future__ import annotations

"""
Domain Exceptions.

Defines the error hierarchy raised by the document index, the argument
validator and the compilation engine. Index errors signal caller ordering
bugs and are fatal to a run; argument and template errors are reported to
the user by the interface layer.
"""


class CompendiumError(Exception):
    """Base class for every error raised by this package."""


# -----------------------------------------------------------------------------
# DOCUMENT INDEX LIFECYCLE
# -----------------------------------------------------------------------------

class DocumentIndexError(CompendiumError):
    """Base class for document index lifecycle violations."""


class IndexSealedError(DocumentIndexError):
    """Raised when the index is mutated after it has been finalized."""


class IndexNotSealedError(DocumentIndexError):
    """Raised when a sealed-only query is issued against an open index."""


class DuplicateRootError(DocumentIndexError):
    """Raised when a second root unit is registered."""


class UnknownParentError(DocumentIndexError):
    """Raised when a unit's physical parent was never registered."""


# -----------------------------------------------------------------------------
# INPUT VALIDATION
# -----------------------------------------------------------------------------

class ArgumentsError(CompendiumError):
    """Raised when the <source>, <target> or <options file> arguments are invalid."""


class OptionsError(ArgumentsError):
    """Raised when the options file cannot be read or parsed."""


class TemplateError(CompendiumError):
    """Raised when a custom HTML template is missing or empty."""
