from typing import Callable, Generic, ParamSpec

_P = ParamSpec("_P")


class Event(Generic[_P]):
    """Ordered list of callbacks fired with the same arguments."""

    def __init__(self):
        self._callbacks: list[Callable[_P, None]] = []

    def __len__(self) -> int:
        return len(self._callbacks)

    def register(self, callback: Callable[_P, None]) -> Callable[_P, None]:
        self._callbacks.append(callback)
        return callback

    def deregister(self, callback: Callable[_P, None]) -> None:
        self._callbacks.remove(callback)

    def clear(self) -> None:
        self._callbacks.clear()

    def invoke(self, *args: _P.args, **kwargs: _P.kwargs) -> None:
        for callback in list(self._callbacks):
            callback(*args, **kwargs)
