"""Exception hierarchy for MaestroWarmup."""


class WarmupError(Exception):
    """Base class for all MaestroWarmup errors."""


class AttachmentReadError(WarmupError):
    """An uploaded file could not be read."""


class GenerationError(WarmupError):
    """The warm-up could not be generated."""


class MissingListeningScriptError(GenerationError):
    """A listening warm-up came back without a listening script."""


class SpeechError(WarmupError):
    """Speech synthesis or audio decoding failed."""


class NoAudioDataError(SpeechError):
    """The speech response carried no audio payload."""


class AudioDecodeError(SpeechError):
    """The audio payload could not be decoded into PCM samples."""
