# Area: Presenter
# PRD: docs/prd-turnflow.md
"""
turnflow.presenter — The UI side of the alert queue
===================================================

The core never touches presentation internals. It only asks a Presenter
to present a notification or to dismiss the alert of a category; the
presenter reports back through the session once the screen changed:

    session.post(AlertPresented(notification))
    session.post(AlertDismissed(notification))

A presenter shows at most one alert at a time.
"""

from abc import ABC, abstractmethod

from ._alerts.categories import AlertCategory
from ._alerts.notification import Notification


class Presenter(ABC):
    """
    Abstract base class for the UI that shows queued alerts.

    Subclass this and implement both methods. Acknowledgements must be
    posted to the session, never applied to the queue directly from a
    UI callback.
    """

    @abstractmethod
    def present(self, notification: Notification) -> None:
        """
        Show ``notification`` modally.

        Called only when no other alert is on screen. Post
        ``AlertPresented(notification)`` once it is visible.
        """
        ...

    @abstractmethod
    def dismiss(self, category: AlertCategory) -> None:
        """
        Remove the visible alert of ``category`` from the screen.

        Post ``AlertDismissed(notification)`` once it is gone. The same
        acknowledgement is posted when the user closes the alert through
        one of its actions.
        """
        ...
