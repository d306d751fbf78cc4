import logging
from dataclasses import dataclass, field

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Toast:
    level: str  # "success" | "error"
    message: str


@dataclass
class Toaster:
    toasts: list[Toast] = field(default_factory=list)

    def success(self, message: str) -> None:
        self._push(Toast("success", message))

    def error(self, message: str) -> None:
        self._push(Toast("error", message))

    def _push(self, toast: Toast) -> None:
        log.info("toast[%s] %s", toast.level, toast.message)
        self.toasts.append(toast)

    @property
    def last(self) -> Toast | None:
        return self.toasts[-1] if self.toasts else None
