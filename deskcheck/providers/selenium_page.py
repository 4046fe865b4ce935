import logging
import os
import time as time_module

from selenium import webdriver
from selenium.common.exceptions import StaleElementReferenceException
from selenium.webdriver.chrome.options import Options
from selenium.webdriver.chrome.service import Service
from selenium.webdriver.common.by import By
from selenium.webdriver.common.keys import Keys
from selenium.webdriver.remote.webelement import WebElement
from webdriver_manager.chrome import ChromeDriverManager

from deskcheck.config import Settings
from deskcheck.providers.base import BrowserPage

logger = logging.getLogger(__name__)

WINDOW_WIDTH = 1280
WINDOW_HEIGHT = 800
# Assumes the second display sits to the right of the main one
DEFAULT_SECOND_DISPLAY_POSITION = (2000, 100)

_TEXT_IN_CONTAINER_SCRIPT = """
const container = arguments[0].closest(arguments[1]);
if (!container) return null;
const node = container.querySelector(arguments[2]);
return node ? node.textContent : null;
"""


class SeleniumPage(BrowserPage):
    """
    BrowserPage backed by a Chrome WebDriver.

    Args:
        driver: The WebDriver instance; owned by this page and quit on close().
        slow_mo: Milliseconds to pause after every interaction, for watching headed runs.
        page_load_timeout: Seconds allowed for a navigation when goto() is given no bound.
    """

    def __init__(
        self, driver: webdriver.Chrome, slow_mo: int = 0, page_load_timeout: float = 30.0
    ) -> None:
        self.driver = driver
        self.slow_mo = slow_mo
        self.page_load_timeout = page_load_timeout

    def _pause(self) -> None:
        if self.slow_mo > 0:
            time_module.sleep(self.slow_mo / 1000)

    @staticmethod
    def _locator(selector: str) -> tuple[str, str]:
        if selector.startswith(BrowserPage.XPATH_PREFIX):
            return By.XPATH, selector[len(BrowserPage.XPATH_PREFIX) :]
        return By.CSS_SELECTOR, selector

    @property
    def current_url(self) -> str:
        return self.driver.current_url

    def goto(self, url: str, timeout: float | None = None) -> None:
        bound = timeout if timeout is not None else self.page_load_timeout
        self.driver.set_page_load_timeout(bound)
        self.driver.get(url)
        self._pause()

    def query_all(self, selector: str) -> list[WebElement]:
        by, value = self._locator(selector)
        return self.driver.find_elements(by, value)

    def text_of(self, element: WebElement) -> str:
        return element.get_attribute("textContent") or ""

    def value_of(self, element: WebElement) -> str:
        return element.get_attribute("value") or ""

    def clear(self, element: WebElement) -> None:
        # Angular date controls ignore WebElement.clear() when the field is not focused
        self.driver.execute_script("arguments[0].value = '';", element)
        self._pause()

    def type_text(self, element: WebElement, text: str) -> None:
        element.send_keys(text)
        self._pause()

    def press_enter(self, element: WebElement) -> None:
        element.send_keys(Keys.ENTER)
        self._pause()

    def click(self, element: WebElement) -> None:
        element.click()
        self._pause()

    def is_attached(self, element: WebElement) -> bool:
        # Same probe as expected_conditions.staleness_of
        try:
            element.is_enabled()
            return True
        except StaleElementReferenceException:
            return False

    def body_text(self) -> str:
        return self.driver.find_element(By.TAG_NAME, "body").text

    def text_in_container(
        self, element: WebElement, container_selector: str, child_selector: str
    ) -> str | None:
        return self.driver.execute_script(
            _TEXT_IN_CONTAINER_SCRIPT, element, container_selector, child_selector
        )

    def screenshot(self, path: str) -> None:
        self.driver.save_screenshot(path)

    def close(self) -> None:
        self.driver.quit()


def _window_position(settings: Settings) -> tuple[int, int] | None:
    if not settings.use_second_display:
        return None
    if settings.window_position is not None:
        return settings.window_position.x, settings.window_position.y
    return DEFAULT_SECOND_DISPLAY_POSITION


def build_chrome_options(settings: Settings) -> Options:
    """Chrome options for the configured display mode."""
    options = Options()
    if settings.headless:
        options.add_argument("--headless=new")
    options.add_argument("--no-sandbox")
    options.add_argument("--disable-dev-shm-usage")
    options.add_argument("--disable-gpu")
    options.add_argument(f"--window-size={WINDOW_WIDTH},{WINDOW_HEIGHT}")
    options.add_argument("--disable-blink-features=AutomationControlled")
    options.add_experimental_option("excludeSwitches", ["enable-automation"])
    options.add_experimental_option("useAutomationExtension", False)

    position = _window_position(settings)
    if position is not None:
        x, y = position
        options.add_argument(f"--window-position={x},{y}")
        logger.info(f"Placing browser window on second display at x:{x}, y:{y}")

    return options


def create_page(settings: Settings) -> SeleniumPage:
    """Launch Chrome and wrap it in a SeleniumPage."""
    options = build_chrome_options(settings)

    # Check for ChromeDriver path from environment variable first,
    # then fall back to ChromeDriverManager for automatic version management
    chromedriver_path = os.environ.get("CHROMEDRIVER_PATH")
    if chromedriver_path and os.path.exists(chromedriver_path):
        service = Service(chromedriver_path)
    else:
        service = Service(ChromeDriverManager().install())
    driver = webdriver.Chrome(service=service, options=options)

    driver.execute_cdp_cmd(
        "Page.addScriptToEvaluateOnNewDocument",
        {
            "source": """
            Object.defineProperty(navigator, 'webdriver', {
                get: () => undefined
            })
        """
        },
    )
    logger.info(f"Launched Chrome (headless={settings.headless})")
    return SeleniumPage(
        driver, slow_mo=settings.slow_mo, page_load_timeout=settings.default_timeout / 1000
    )
