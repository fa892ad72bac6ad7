"""
In-memory stand-ins for the browser driver and the wall clock.

FakeDriver serves elements from a mutable `dom` mapping keyed by locator
pattern, and records every lookup so tests can assert what was (and was
not) resolved.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from uiready.framework.exceptions import ElementNotFound, TimedOut
from uiready.framework.locator import Locator

HOST = "https://app.example.com"


class FakeElement:
    def __init__(
        self,
        text: str = "",
        displayed: bool = True,
        enabled: bool = True,
        selected: bool = False,
        attributes: Optional[Dict[str, str]] = None,
        css: Optional[Dict[str, str]] = None,
        tag: str = "div",
        location: Optional[Dict[str, float]] = None,
        size: Optional[Dict[str, float]] = None,
    ):
        self.text = text
        self.displayed = displayed
        self.enabled = enabled
        self.selected = selected
        self.attributes = dict(attributes or {})
        self.css = dict(css or {})
        self.tag = tag
        self.location = location or {"x": 0, "y": 0}
        self.size = size or {"width": 10, "height": 10}
        self.actions: List[tuple] = []

    def is_displayed(self) -> bool:
        return self.displayed

    def is_enabled(self) -> bool:
        return self.enabled

    def is_selected(self) -> bool:
        return self.selected

    def get_attribute(self, name: str) -> Optional[str]:
        return self.attributes.get(name)

    def get_css_value(self, property_name: str) -> str:
        return self.css.get(property_name, "")

    def get_tag_name(self) -> str:
        return self.tag

    def get_text(self) -> str:
        return self.text.strip()

    def get_location(self) -> Dict[str, float]:
        return dict(self.location)

    def get_size(self) -> Dict[str, float]:
        return dict(self.size)

    def click(self) -> None:
        self.actions.append(("click",))

    def clear(self) -> None:
        self.actions.append(("clear",))

    def send_keys(self, *chars: str) -> None:
        self.actions.append(("send_keys", "".join(chars)))

    def submit(self) -> None:
        self.actions.append(("submit",))


class FakeDriver:
    def __init__(self, dom: Optional[Dict[str, List[FakeElement]]] = None):
        self.dom: Dict[str, List[FakeElement]] = dom if dom is not None else {}
        self.lookups: List[str] = []
        self.visited: List[str] = []
        self.scripts: List[tuple] = []
        self.async_scripts: List[tuple] = []
        self.script_result: Any = None
        self.navigation_error: Optional[Exception] = None
        self.quit_count = 0

    def lookup_count(self, pattern: str) -> int:
        return self.lookups.count(pattern)

    def find_all(self, locator: Locator) -> List[FakeElement]:
        self.lookups.append(locator.pattern)
        return list(self.dom.get(locator.pattern, []))

    def find_one(self, locator: Locator) -> FakeElement:
        matches = self.find_all(locator)
        if not matches:
            raise ElementNotFound(locator)
        return matches[0]

    def navigate(self, url: str) -> None:
        if self.navigation_error is not None:
            raise self.navigation_error
        self.visited.append(url)

    def refresh(self) -> None:
        self.visited.append("<refresh>")

    def back(self) -> None:
        self.visited.append("<back>")

    def forward(self) -> None:
        self.visited.append("<forward>")

    def execute_script(self, script: str, *args: Any) -> Any:
        self.scripts.append((script, args))
        return self.script_result

    def execute_async_script(self, script: str, *args: Any) -> Any:
        self.async_scripts.append((script, args))
        return self.script_result

    def wait_for(self, locator: Locator, condition, timeout: int) -> None:
        if not condition(self.dom.get(locator.pattern, []), timeout):
            raise TimedOut(f"Timed out after {timeout} milliseconds waiting for {locator}")

    def quit(self) -> None:
        self.quit_count += 1


class FakeClock:
    """Monotonic clock whose sleep advances time instantly."""

    def __init__(self, start: float = 1000.0):
        self.start = start
        self.current = start
        self.sleeps: List[float] = []

    def now(self) -> float:
        return self.current

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.current += seconds

    @property
    def elapsed_ms(self) -> float:
        return (self.current - self.start) * 1000.0
