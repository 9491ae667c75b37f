import logging
from typing import Callable, List, Tuple, Optional
from playwright.sync_api import Error, TimeoutError, Page
from passkey_crawler.modules.errors import NavigationFailure, InteractionFailure
from passkey_crawler.modules.loginpagedetection.elements import ElementNavigation
from passkey_crawler.modules.loginpagedetection.paths import Paths


logger = logging.getLogger(__name__)


Strategy = Callable[[Page, str], bool]


class LoginPageNavigator:
    """ Tries the login page strategies in order and stops at the first one that navigates.
        Whether the destination really is a login page is left to the signal checks.
    """


    def __init__(self, config: dict = {}, strategies: Optional[List[Tuple[str, Strategy]]] = None):
        if strategies is None:
            elements = ElementNavigation(config)
            strategies = [
                ("LINK", elements.click_link_by_name),
                ("BUTTON", elements.click_button_by_name),
                ("ANCHOR", elements.click_login_anchor),
                ("PATHS", Paths(config).probe)
            ]
        self.strategies = strategies


    def navigate(self, page: Page, url: str) -> Optional[str]:
        """ Returns the name of the successful strategy or None if all strategies failed """
        for name, strategy in self.strategies:
            logger.info(f"Trying login page strategy: {name}")
            try:
                if strategy(page, url):
                    logger.info(f"Login page strategy {name} navigated to: {page.url}")
                    return name
                logger.info(f"Login page strategy {name} not applicable")
            except (NavigationFailure, InteractionFailure) as e:
                logger.info(f"Login page strategy {name} failed: {e}")
            except TimeoutError as e:
                logger.info(f"Timeout in login page strategy: {name}")
                logger.debug(e)
            except Error as e:
                logger.info(f"Error in login page strategy: {name}")
                logger.debug(e)
        logger.info("All login page strategies failed")
        return None
