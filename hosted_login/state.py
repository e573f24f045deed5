"""Observable hosted-login flow state"""

import logging
from typing import Callable, List

logger = logging.getLogger(__name__)

StateListener = Callable[["AuthFlowState"], None]


class AuthFlowState:
    """Loading and external-link flags for one authentication session

    Mutated only by the navigation policy engine on its event stream.
    Listeners are notified only when a flag actually changes.
    """

    def __init__(self):
        self._is_loading = False
        self._is_external_link = False
        self._listeners: List[StateListener] = []

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    @property
    def is_external_link(self) -> bool:
        return self._is_external_link

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register a change listener

        Returns:
            Callable that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def set_loading(self, value: bool) -> None:
        if self._is_loading == value:
            return
        self._is_loading = value
        logger.debug(f"isLoading = {value}")
        self._notify()

    def set_external_link(self, value: bool) -> None:
        if self._is_external_link == value:
            return
        self._is_external_link = value
        logger.debug(f"isExternalLink = {value}")
        self._notify()

    def snapshot(self) -> dict:
        return {"is_loading": self._is_loading, "is_external_link": self._is_external_link}

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)
