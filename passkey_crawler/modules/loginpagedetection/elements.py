import re
import logging
from typing import List
from playwright.sync_api import Error, TimeoutError, Page, Locator
from passkey_crawler.modules.browser.browser import PlaywrightHelper
from passkey_crawler.modules.helper.url import URLHelper
from passkey_crawler.modules.errors import NavigationFailure


logger = logging.getLogger(__name__)


ANCHOR_HREFS_JS = """
() => Array.from(document.querySelectorAll("a[href]")).map(a => a.href)
"""


class ElementNavigation:
    """ Login page strategies working on the elements of the current page """


    LOGIN_PATTERNS = ["sign in", "log in", "login", "get started", "account"]
    LOGIN_HREF_PATTERNS = ["login", "signin"]
    MAX_MATCHES_PER_PATTERN = 5


    def __init__(self, config: dict = {}):
        self.browser_config = config.get("browser_config", {})


    @staticmethod
    def name_regex(pattern: str) -> re.Pattern:
        return re.compile(re.escape(pattern), re.IGNORECASE)


    def click_link_by_name(self, page: Page, url: str) -> bool:
        return self.click_role_by_name(page, "link")


    def click_button_by_name(self, page: Page, url: str) -> bool:
        return self.click_role_by_name(page, "button")


    def click_role_by_name(self, page: Page, role: str) -> bool:
        for pattern in self.LOGIN_PATTERNS:
            logger.info(f"Searching visible {role} with name: {pattern}")
            locator = page.get_by_role(role, name=self.name_regex(pattern))
            match = self.first_visible(locator)
            if match is not None:
                logger.info(f"Clicking visible {role} with name: {pattern}")
                self.click(page, match)
                return True
        logger.info(f"No visible {role} matches the login patterns")
        return False


    def click_login_anchor(self, page: Page, url: str) -> bool:
        hrefs = page.evaluate(ANCHOR_HREFS_JS)
        if type(hrefs) != list:
            return False
        candidates = self.login_hrefs([h for h in hrefs if type(h) == str], url)
        if not candidates:
            logger.info("No anchor links to a login url")
            return False
        logger.info(f"Navigating to login anchor: {candidates[0]}")
        try:
            PlaywrightHelper.navigate(page, candidates[0], self.browser_config)
        except (TimeoutError, Error) as e:
            raise NavigationFailure(f"Could not navigate to login anchor {candidates[0]}: {e}") from e
        return True


    def login_hrefs(self, hrefs: List[str], url: str) -> List[str]:
        """ Returns hrefs containing a login keyword, same-site hrefs first, in document order """
        matches = []
        for h in hrefs:
            if not URLHelper.is_absolute(h) or h in matches:
                continue
            if any(p in h.lower() for p in self.LOGIN_HREF_PATTERNS):
                matches.append(h)
        same_site = [h for h in matches if URLHelper.is_same_tld(h, url)]
        return same_site + [h for h in matches if h not in same_site]


    def first_visible(self, locator: Locator):
        try:
            count = locator.count()
        except Error as e:
            logger.debug(e)
            return None
        for i in range(min(count, self.MAX_MATCHES_PER_PATTERN)):
            candidate = locator.nth(i)
            try:
                if candidate.is_visible():
                    return candidate
            except Error as e:
                logger.debug(e)
        return None


    def click(self, page: Page, locator: Locator):
        try:
            locator.click()
        except (TimeoutError, Error) as e:
            raise NavigationFailure(f"Click on login element failed: {e}") from e
        PlaywrightHelper.wait_for_page_load(page, self.browser_config)
