"""TiltScroll exceptions."""


class TiltScrollError(Exception):
    """Base class for every error raised by the engine."""


class UnknownTrackerError(TiltScrollError, ValueError):
    def __init__(self, kind):
        super().__init__(f"Unknown tracker kind: {kind!r}")
        self.kind = kind


class UnknownSourceError(TiltScrollError, ValueError):
    def __init__(self, name):
        super().__init__(f"Unknown sample source: {name!r}")
        self.name = name
