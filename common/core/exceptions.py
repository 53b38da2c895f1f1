class AppException(Exception):
    """Base application exception."""

    pass


class NotFoundError(AppException):
    """Resource not found exception."""

    pass


class ValidationError(AppException):
    """Validation error exception."""

    pass


class QuestionCopyError(AppException):
    """Raised when a question copy has to be rolled back."""

    def __init__(self, message: str, failed_saves: int = 0):
        super().__init__(message)
        self.failed_saves = failed_saves


class SurveyImportError(AppException):
    """Survey fixture file could not be found or imported."""

    pass
