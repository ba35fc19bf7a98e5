"""Custom exceptions for the LC-3 simulator."""

from dataclasses import dataclass


@dataclass
class ErrorInfo:
    """Structured error information for API responses."""
    type: str
    message: str
    step: int
    addr: int

    def to_dict(self) -> dict:
        return {
            "type": self.type,
            "message": self.message,
            "step": self.step,
            "addr": self.addr,
        }


class LC3Error(Exception):
    """Base exception for all simulator errors."""

    def __init__(self, message: str, step: int = 0, addr: int = 0):
        super().__init__(message)
        self.message = message
        self.step = step
        self.addr = addr

    def to_error_info(self) -> ErrorInfo:
        return ErrorInfo(
            type=self.__class__.__name__,
            message=self.message,
            step=self.step,
            addr=self.addr,
        )


class ImageFormatError(LC3Error):
    """Malformed program image."""
    pass


class LC3RuntimeError(LC3Error):
    """Error during program execution."""
    pass


class UnimplementedTrap(LC3RuntimeError):
    """TRAP vector with no service routine."""

    def __init__(self, vector: int, step: int = 0, addr: int = 0):
        super().__init__(f"Unimplemented trap vector: x{vector:02X}", step=step, addr=addr)
        self.vector = vector


class StepLimitExceeded(LC3RuntimeError):
    """Maximum step count exceeded."""
    pass
