from abc import ABC, abstractmethod
from typing import Any


class BrowserPage(ABC):
    """
    Narrow capability interface over a single browser page.

    Services only talk to the page through these methods, so the DOM matching
    logic can run against a real browser or a test double.

    Selectors are CSS unless prefixed with ``xpath=``.
    """

    XPATH_PREFIX = "xpath="

    @property
    @abstractmethod
    def current_url(self) -> str:
        pass

    @abstractmethod
    def goto(self, url: str, timeout: float | None = None) -> None:
        """
        Navigate to a URL and wait for the document to load.

        Args:
            url: The page to open.
            timeout: Page load bound in seconds; None uses the page default.
        """
        pass

    @abstractmethod
    def query_all(self, selector: str) -> list[Any]:
        """Return every element matching the selector, in document order."""
        pass

    @abstractmethod
    def text_of(self, element: Any) -> str:
        pass

    @abstractmethod
    def value_of(self, element: Any) -> str:
        """Return the current value of an input element."""
        pass

    @abstractmethod
    def clear(self, element: Any) -> None:
        pass

    @abstractmethod
    def type_text(self, element: Any, text: str) -> None:
        pass

    @abstractmethod
    def press_enter(self, element: Any) -> None:
        pass

    @abstractmethod
    def click(self, element: Any) -> None:
        pass

    @abstractmethod
    def is_attached(self, element: Any) -> bool:
        """Whether a previously queried element is still part of the document."""
        pass

    @abstractmethod
    def body_text(self) -> str:
        """Return the visible text of the whole document body."""
        pass

    @abstractmethod
    def text_in_container(
        self, element: Any, container_selector: str, child_selector: str
    ) -> str | None:
        """
        Read text from a node sharing a layout container with ``element``.

        Args:
            element: The element to start from.
            container_selector: Selector for the closest ancestor to search within.
            child_selector: Selector for the text node inside that ancestor.

        Returns:
            The child's text content, or None if either the container or the child is missing.
        """
        pass

    @abstractmethod
    def screenshot(self, path: str) -> None:
        pass

    @abstractmethod
    def close(self) -> None:
        pass
