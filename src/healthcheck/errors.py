from __future__ import annotations

GENERIC_FAILURE_MESSAGE = "Impossibile generare il report al momento. Riprova."
MISSING_API_KEY_MESSAGE = "API Key mancante. Verifica la configurazione dell'ambiente."
UNEXPECTED_FAILURE_MESSAGE = "Si è verificato un errore durante la generazione del report."
BUSY_MESSAGE = "Analisi già in corso. Attendi il completamento del report."


class HealthCheckError(Exception):
    """Base class for every error raised by the health check package."""


class RequestError(HealthCheckError):
    """Report generation failed; ``user_message`` is safe to show to the end user."""

    def __init__(self, user_message: str = GENERIC_FAILURE_MESSAGE):
        super().__init__(user_message)
        self.user_message = user_message


class ConfigurationError(RequestError):
    def __init__(self, user_message: str = MISSING_API_KEY_MESSAGE):
        super().__init__(user_message)


class FieldError(HealthCheckError, ValueError):
    def __init__(self, name: str, message: str):
        super().__init__(message)
        self.name = name


class UnknownFieldError(FieldError):
    def __init__(self, name: str):
        super().__init__(name, f"Unknown input field: {name!r}")


class InvalidFieldValueError(FieldError):
    def __init__(self, name: str, value, reason: str = ""):
        msg = f"Invalid value for {name!r}: {value!r}"
        if reason:
            msg = f"{msg} ({reason})"
        super().__init__(name, msg)
        self.value = value


class ControllerBusyError(HealthCheckError):
    """A report generation is already in flight for this controller."""

    def __init__(self, message: str = BUSY_MESSAGE):
        super().__init__(message)
