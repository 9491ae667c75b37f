import time
import logging
import traceback
from copy import deepcopy
from typing import Callable, List, Optional
from playwright.sync_api import Error, TimeoutError, Page
from passkey_crawler.config.defaults import DEFAULT_CONFIG
from passkey_crawler.modules.models import Stage, StageResult, Verdict
from passkey_crawler.modules.errors import CrawlerError, AcquisitionFailure
from passkey_crawler.modules.browser.browser import PlaywrightHelper, PlaywrightSession
from passkey_crawler.modules.detectors import PasskeyDetector, RequestDetector
from passkey_crawler.modules.loginpagedetection import LoginPageNavigator
from passkey_crawler.modules.interaction.form import FormInteractor
from passkey_crawler.modules.analyzers.verdict import VerdictAggregator


logger = logging.getLogger(__name__)


class PasskeyAnalyzer:
    """ Detection engine for a single site url.

        main page -> [login page] -> [post email entry] -> network requests

        Every stage runs only if all previous stages were negative. One browser session is
        acquired per call of detect() and released on every return path. detect() never raises.
    """


    def __init__(
        self,
        config: Optional[dict] = None,
        session_factory: Optional[Callable[[dict], PlaywrightSession]] = None,
        navigator: Optional[LoginPageNavigator] = None,
        interactor: Optional[FormInteractor] = None,
        detector: Optional[PasskeyDetector] = None
    ):
        self.config = config if config is not None else deepcopy(DEFAULT_CONFIG)
        self.browser_config = self.config.get("browser_config", {})
        self.session_factory = session_factory or PlaywrightSession.open
        self.navigator = navigator or LoginPageNavigator(self.config)
        self.interactor = interactor or FormInteractor(self.config)
        self.detector = detector or PasskeyDetector(self.config)


    def detect(self, url: str) -> Verdict:
        logger.info(f"Starting passkey detection for: {url}")
        t = time.time()
        try:
            verdict = self.analyze(url)
        except Exception as e:
            logger.error(f"Unexpected error while analyzing {url}: {e}")
            logger.debug(traceback.format_exc())
            verdict = Verdict.failed(url, f"Unexpected error: {e}")
        logger.info(f"Finished passkey detection for {url} in {time.time() - t:.1f}s (passkey={verdict.has_passkey})")
        return verdict


    def analyze(self, url: str) -> Verdict:
        try:
            session = self.session_factory(self.browser_config)
        except AcquisitionFailure as e:
            logger.warning(f"Could not acquire browser session for {url}: {e}")
            return Verdict.failed(url, str(e))

        try:
            return self.run_stages(session, url)
        except AcquisitionFailure as e:
            logger.warning(f"Could not load main page {url}: {e}")
            return Verdict.failed(url, str(e))
        finally:
            session.close()


    def run_stages(self, session: PlaywrightSession, url: str) -> Verdict:
        page = session.page
        self.load_main_page(page, url)

        stages: List[StageResult] = [self.check_stage(Stage.MAIN_PAGE, page, url)]

        if not stages[-1].positive and self.reach_login_page(page, url):
            stages.append(self.check_stage(Stage.LOGIN_PAGE, page, url))

            if not stages[-1].positive and self.enter_email(page):
                stages.append(self.check_stage(Stage.POST_EMAIL, page, url))

        network = None
        if not any(sr.positive for sr in stages):
            network = RequestDetector.detect(session.observed_requests)

        return VerdictAggregator.aggregate(url, stages, network)


    def load_main_page(self, page: Page, url: str):
        try:
            PlaywrightHelper.navigate(page, url, self.browser_config)
        except TimeoutError as e:
            raise AcquisitionFailure(f"Timeout while loading {url}: {e}") from e
        except Error as e:
            raise AcquisitionFailure(f"Error while loading {url}: {e}") from e


    def check_stage(self, stage: Stage, page: Page, url: str) -> StageResult:
        logger.info(f"Collecting passkey signals on {stage.label}")
        try:
            signal = self.detector.collect(page)
        except Error as e:
            logger.info(f"Signal collection on {stage.label} failed")
            logger.debug(e)
            signal = None
        return StageResult(
            stage=stage,
            signal=signal,
            url=PlaywrightHelper.current_url(page, url),
            title=PlaywrightHelper.title(page)
        )


    def reach_login_page(self, page: Page, url: str) -> bool:
        try:
            return self.navigator.navigate(page, url) is not None
        except (CrawlerError, Error) as e:
            logger.info("Login page navigation failed")
            logger.debug(e)
            return False


    def enter_email(self, page: Page) -> bool:
        try:
            return self.interactor.interact(page)
        except (CrawlerError, Error) as e:
            logger.info("Email entry failed")
            logger.debug(e)
            return False
