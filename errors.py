class MintError(Exception):
    pass

class ConfigError(MintError):
    pass

class ConfigResolutionFailure(MintError):
    """Every known getConfig layout failed on this contract."""

    def __init__(self, attempts):
        self.attempts = list(attempts)  # [(variant, reason), ...]
        tried = ", ".join(f"{v}: {r}" for v, r in self.attempts) or "no variants"
        super().__init__(f"Unable to read mint config ({tried})")

class InvalidManualInput(MintError, ValueError):
    pass

class FeePreconditionFailure(MintError):
    pass

class ScheduleError(MintError):
    pass

class ExecutionFailure(MintError):
    def __init__(self, message, tx_hash=None):
        self.tx_hash = tx_hash
        super().__init__(message)

class MintCancelled(MintError):
    pass
