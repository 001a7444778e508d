"""Error kinds raised by locale commands."""


class LocaleCommandError(Exception):
    """Base class for failures reported to the command caller."""


class OptionConflictError(LocaleCommandError):
    """Export options are missing or mutually exclusive."""


class InvalidFilterError(LocaleCommandError):
    """A requested string type does not map to a known status."""


class UnknownLanguageError(LocaleCommandError):
    """The language code is not configured on the site."""


class LanguageNotTranslatableError(LocaleCommandError):
    """The language is locked, or is English while English translation is disabled."""


class ExportWriteError(LocaleCommandError):
    """Writing the exported document failed."""


class PoImportError(LocaleCommandError):
    """A PO file could not be read for import."""


class BatchStepError(LocaleCommandError):
    """A batch step failed; the batch can be resumed."""

    def __init__(self, step: str, message: str):
        super().__init__(f"Step '{step}' failed: {message}")
        self.step = step
