import logging
from typing import Tuple, Set, Optional
from urllib.parse import urlparse
from playwright.sync_api import sync_playwright, Error, TimeoutError, Page, Browser, BrowserContext, Request, Response
from playwright.sync_api._generated import Playwright
from passkey_crawler.modules.errors import AcquisitionFailure


logger = logging.getLogger(__name__)


class PlaywrightHelper:


    @staticmethod
    def navigate(page: Page, url: str, browser_config: dict = {}) -> Optional[Response]:
        """ Loads url with a hard navigation timeout, then waits for the page to settle.
            Raises playwright TimeoutError or Error if the navigation itself fails.
        """
        timeout_navigation = browser_config.get("timeout_navigation", 30)
        logger.info(f"Page loads url: {url}")
        response = page.goto(url, wait_until="domcontentloaded", timeout=timeout_navigation*1000)
        PlaywrightHelper.wait_for_page_load(page, browser_config)
        return response


    @staticmethod
    def sleep(page: Page, seconds: float):
        logger.info(f"Sleeping {seconds} seconds")
        page.wait_for_timeout(seconds*1000)


    @staticmethod
    def wait_for_page_load(page: Page, browser_config: dict = {}):
        wait_for_networkidle = browser_config.get("wait_for_networkidle", True)
        timeout_networkidle = browser_config.get("timeout_networkidle", 8)
        sleep_after_navigation = browser_config.get("sleep_after_navigation", 5)
        logger.info("Waiting for page to load")
        if wait_for_networkidle:
            try:
                logger.info(f"Waiting {timeout_networkidle}s for networkidle")
                page.wait_for_load_state("networkidle", timeout=timeout_networkidle*1000)
                logger.info("Page is on networkidle")
            except TimeoutError:
                logger.info(f"Timeout after {timeout_networkidle}s while waiting for networkidle")
            except Error as e:
                logger.info("Error while waiting for networkidle")
                logger.debug(e)
        logger.info(f"Sleeping {sleep_after_navigation}s after navigation")
        page.wait_for_timeout(sleep_after_navigation*1000)
        logger.info("Page loaded")


    @staticmethod
    def origin(url: str) -> str:
        u = urlparse(url)
        return f"{u.scheme}://{u.netloc}"


    @staticmethod
    def title(page: Page) -> str:
        try:
            t = page.title()
            return t if type(t) == str else ""
        except Error as e:
            logger.info("Could not read page title")
            logger.debug(e)
            return ""


    @staticmethod
    def current_url(page: Page, fallback: str = "") -> str:
        try:
            return page.url or fallback
        except Error:
            return fallback


class PlaywrightBrowser:


    @staticmethod
    def instance(playwright: Playwright, browser_config: dict) -> Tuple[Browser, BrowserContext, Page]:
        return PlaywrightBrowser.browser(
            playwright,
            browser_name=browser_config.get("name", "CHROMIUM"),
            user_agent=browser_config.get("user_agent", ""),
            locale=browser_config.get("locale", "en-US"),
            headless=browser_config.get("headless", True),
            viewport_width=browser_config.get("width", 1920),
            viewport_height=browser_config.get("height", 1080),
            timeout_default=browser_config.get("timeout_default", 10),
            timeout_navigation=browser_config.get("timeout_navigation", 30)
        )


    @staticmethod
    def browser(
        playwright: Playwright,
        browser_name: str = "CHROMIUM",
        user_agent: str = "",
        locale: str = "en-US",
        headless: bool = True,
        viewport_width: int = 1920,
        viewport_height: int = 1080,
        timeout_default: float = 10.0,
        timeout_navigation: float = 30.0
    ) -> Tuple[Browser, BrowserContext, Page]:
        logger.info(f"Setup playwright for browser: {browser_name} (headless={headless})")

        # browser
        if browser_name == "CHROMIUM":
            browser_type = playwright.chromium
        elif browser_name == "FIREFOX":
            browser_type = playwright.firefox
        elif browser_name == "WEBKIT":
            browser_type = playwright.webkit
        else:
            raise ValueError(f"Browser {browser_name} is not supported")

        # launch (browser-dependent)
        largs = {"headless": headless}
        if browser_name == "CHROMIUM":
            largs["args"] = ["--disable-blink-features=AutomationControlled"]
        browser = browser_type.launch(**largs)

        # context (browser-independent)
        kwargs = {}
        kwargs["accept_downloads"] = False
        kwargs["ignore_https_errors"] = True
        kwargs["locale"] = locale
        kwargs["viewport"] = {"width": viewport_width, "height": viewport_height}
        if user_agent:
            kwargs["user_agent"] = user_agent
        try:
            context = browser.new_context(**kwargs)
        except Error:
            browser.close()
            raise

        # timeouts
        context.set_default_timeout(timeout_default*1000)
        context.set_default_navigation_timeout(timeout_navigation*1000)

        # api overwrites
        context.add_init_script(script="""
            window.alert = ()=>{};
            window.confirm = ()=>{};
            window.prompt = ()=>{};
            window.print = ()=>{};
        """)

        page = context.new_page()

        return (browser, context, page)


class PlaywrightSession:
    """ Browser, context and page owned by the detection run of exactly one candidate url.
        Every request the context issues is recorded in observed_requests.
    """


    def __init__(self, playwright: Playwright, browser: Browser, context: BrowserContext, page: Page):
        self.playwright = playwright
        self.browser = browser
        self.context = context
        self.page = page
        self.observed_requests: Set[str] = set()
        self.closed = False
        self.context.on("request", self.on_request)


    @staticmethod
    def open(browser_config: dict) -> "PlaywrightSession":
        logger.info("Acquiring browser session")
        try:
            pw = sync_playwright().start()
        except Error as e:
            raise AcquisitionFailure(f"Playwright could not be started: {e}") from e
        try:
            browser, context, page = PlaywrightBrowser.instance(pw, browser_config)
        except (Error, ValueError) as e:
            pw.stop()
            raise AcquisitionFailure(f"Browser could not be launched: {e}") from e
        return PlaywrightSession(pw, browser, context, page)


    def on_request(self, request: Request):
        self.observed_requests.add(request.url)


    def close(self):
        if self.closed:
            return
        self.closed = True
        logger.info("Releasing browser session")
        for name, release in [
            ("context", self.context.close),
            ("browser", self.browser.close),
            ("playwright", self.playwright.stop)
        ]:
            try:
                release()
            except Error as e:
                logger.info(f"Error while closing {name}")
                logger.debug(e)
        logger.info("Browser session released")
