import re
import logging
from playwright.sync_api import Error, TimeoutError, Page, Locator
from passkey_crawler.modules.browser.browser import PlaywrightHelper
from passkey_crawler.modules.errors import InteractionFailure


logger = logging.getLogger(__name__)


class FormInteractor:
    """ Enters a test email into the first credential field of the login page and submits it,
        which reveals identifier-first login screens that only show passkey options afterwards.
    """


    INPUT_SELECTORS = [
        "input[type='email']",
        "input[name*='email' i]",
        "input[placeholder*='email' i]",
        "input[id*='email' i]",
        "input[name*='username' i]",
        "input[placeholder*='username' i]",
        "input[id*='username' i]"
    ]

    SUBMIT_PATTERNS = ["next", "continue", "submit", "proceed"]

    SUBMIT_SELECTOR = "button[type='submit'], input[type='submit']"


    def __init__(self, config: dict = {}):
        self.browser_config = config.get("browser_config", {})
        detection_config = config.get("detection_config", {})
        self.test_email = detection_config.get("test_email", "test@example.com")
        self.sleep_after_fill = detection_config.get("sleep_after_fill", 1)


    def interact(self, page: Page) -> bool:
        """ Returns whether an input was filled, regardless of what the submit did """
        if not self.fill_credential_field(page):
            logger.info("No credential field could be filled")
            return False
        PlaywrightHelper.sleep(page, self.sleep_after_fill)
        self.submit(page)
        return True


    def fill_credential_field(self, page: Page) -> bool:
        for selector in self.INPUT_SELECTORS:
            try:
                self.fill(page.locator(selector).first, selector)
                logger.info(f"Filled test email into: {selector}")
                return True
            except InteractionFailure as e:
                logger.info(f"Credential field not usable: {e}")
        return False


    def fill(self, locator: Locator, selector: str):
        try:
            if not locator.is_visible():
                raise InteractionFailure(f"no visible input for {selector}")
            locator.fill(self.test_email)
        except (TimeoutError, Error) as e:
            raise InteractionFailure(f"could not fill {selector}: {e}") from e


    def submit(self, page: Page) -> bool:
        for pattern in self.SUBMIT_PATTERNS:
            locator = page.get_by_role("button", name=re.compile(re.escape(pattern), re.IGNORECASE)).first
            try:
                self.click(locator, pattern)
                logger.info(f"Clicked submit button: {pattern}")
                PlaywrightHelper.wait_for_page_load(page, self.browser_config)
                return True
            except InteractionFailure as e:
                logger.info(f"Submit button not usable: {e}")
        try:
            self.click(page.locator(self.SUBMIT_SELECTOR).first, self.SUBMIT_SELECTOR)
            logger.info("Clicked generic submit control")
            PlaywrightHelper.wait_for_page_load(page, self.browser_config)
            return True
        except InteractionFailure as e:
            logger.info(f"Generic submit control not usable: {e}")
        return False


    @staticmethod
    def click(locator: Locator, name: str):
        try:
            if not locator.is_visible():
                raise InteractionFailure(f"no visible control for {name}")
            locator.click()
        except (TimeoutError, Error) as e:
            raise InteractionFailure(f"could not click {name}: {e}") from e
