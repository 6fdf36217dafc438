"""
Request labels: advisory flags for in-flight requests
"""

from typing import Callable, Dict, List

LABELS = ("fetching", "saving", "deleting")

LabelListener = Callable[[str, bool], None]


class RequestLabelTracker:
    """Holds the fetching/saving/deleting flags of one model"""

    def __init__(self):
        self._state: Dict[str, bool] = {label: False for label in LABELS}
        self._listeners: List[LabelListener] = []

    def get(self, name: str) -> bool:
        return self._state[name]

    def set_label(self, name: str, state: bool = False) -> None:
        if name not in self._state:
            raise ValueError(f"Unknown request label: {name}")
        self._state[name] = bool(state)
        for listener in list(self._listeners):
            listener(name, self._state[name])

    def subscribe(self, listener: LabelListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def to_dict(self) -> Dict[str, bool]:
        return dict(self._state)

    def __repr__(self):
        return f"RequestLabelTracker({self._state})"
