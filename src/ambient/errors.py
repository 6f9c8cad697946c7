class AmbientError(Exception):
    """Base exception for ambient sound synthesis."""


class AmbientConfigurationError(AmbientError):
    """Raised when ambient audio configuration is invalid."""


class AmbientDeviceError(AmbientError):
    """Raised when the audio output device cannot be opened, resumed, or used."""
