import logging
from typing import List
from playwright.sync_api import Error, TimeoutError, Page
from passkey_crawler.modules.browser.browser import PlaywrightHelper


logger = logging.getLogger(__name__)


class Paths:


    PATHS = [
        "/login",
        "/signin",
        "/sign-in",
        "/auth/login",
        "/account/login",
        "/accounts/login",
        "/user/login",
        "/auth/signin",
        "/authentication/login"
    ]


    def __init__(self, config: dict = {}, paths: List[str] = None):
        self.browser_config = config.get("browser_config", {})
        self.paths = paths if paths is not None else self.PATHS


    def probe(self, page: Page, url: str) -> bool:
        base_url = PlaywrightHelper.origin(url)
        timeout_navigation = self.browser_config.get("timeout_navigation", 30)
        logger.info(f"Probing {len(self.paths)} login paths on: {base_url}")

        for path in self.paths:
            try:
                r = page.goto(f"{base_url}{path}", wait_until="domcontentloaded", timeout=timeout_navigation*1000)
                s = r.status if r else None
                if s and s < 400:
                    logger.info(f"Path on '{base_url}' returned status code {s}: {path}")
                    PlaywrightHelper.wait_for_page_load(page, self.browser_config)
                    return True
                else:
                    logger.info(f"Path on '{base_url}' returned status code {s}: {path}")
            except TimeoutError as e:
                logger.info(f"Timeout while checking path: {base_url}{path}")
                logger.debug(e)
            except Error as e:
                logger.info(f"Error while checking path: {base_url}{path}")
                logger.debug(e)

        return False
