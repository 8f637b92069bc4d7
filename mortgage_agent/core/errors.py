class ResolutionError(RuntimeError):
    """An instruction could not be matched to any element on the page."""


class ActionExecutionError(RuntimeError):
    """A resolved action could not be performed against the live page."""


class WaitTimeoutError(RuntimeError):
    """A bounded wait elapsed before its condition was met."""

    def __init__(self, what: str, timeout_ms: int):
        super().__init__(f"Timed out after {timeout_ms}ms waiting for {what}")
        self.what = what
        self.timeout_ms = timeout_ms
