"""End-to-end tests of the detection engine against fake browser sessions."""

from playwright.sync_api import Error
from passkey_crawler.modules.errors import AcquisitionFailure
from passkey_crawler.modules.analyzers import PasskeyAnalyzer
from passkey_crawler.modules.loginpagedetection import LoginPageNavigator
from tests.fakes import FakePage, FakeContent, FakeElement, FakeSession, ui_element


URL = "https://www.example.com"
LOGIN_URL = f"{URL}/login"


class StubNavigator:

    def __init__(self, destination):
        self.destination = destination
        self.calls = 0

    def navigate(self, page, url):
        self.calls += 1
        if self.destination is None:
            return None
        page.url = self.destination
        return "LINK"


class StubInteractor:

    def __init__(self, destination=None):
        self.destination = destination
        self.calls = 0

    def interact(self, page):
        self.calls += 1
        if self.destination is None:
            return False
        page.url = self.destination
        return True


class BrokenDetector:

    def collect(self, page):
        raise RuntimeError("detector exploded")


def analyzer_for(config, session, **kwargs):
    return PasskeyAnalyzer(config, session_factory=lambda browser_config: session, **kwargs)


class TestPasskeyAnalyzer:

    def test_keywords_on_main_page(self, fast_config):
        page = FakePage(contents={URL: FakeContent(title="Example", text="Sign in with a passkey")})
        session = FakeSession(page)
        verdict = analyzer_for(fast_config, session).detect(URL)
        assert verdict.has_passkey
        assert verdict.method == "passkey keywords"
        assert verdict.title == "Example"
        assert verdict.found_at_url == URL
        assert verdict.error is None
        assert session.close_calls == 1

    def test_api_exposed_but_not_invoked_is_negative(self, fast_config):
        page = FakePage(contents={URL: FakeContent(title="Plain", text="Welcome", api=True)})
        session = FakeSession(page)
        verdict = analyzer_for(fast_config, session, navigator=LoginPageNavigator(strategies=[])).detect(URL)
        assert not verdict.has_passkey
        assert verdict.method is None
        assert verdict.error is None
        assert verdict.title == "Plain"
        assert session.close_calls == 1

    def test_api_usage_on_login_page(self, fast_config):
        page = FakePage(
            contents={
                URL: FakeContent(title="Example", text="Welcome"),
                LOGIN_URL: FakeContent(title="Sign in", scripts=["navigator.credentials.get({publicKey: o})"])
            },
            roles={"link": [FakeElement("Sign in", navigates_to=LOGIN_URL)]}
        )
        session = FakeSession(page)
        verdict = analyzer_for(fast_config, session).detect(URL)
        assert verdict.has_passkey
        assert verdict.method == "WebAuthn API usage on login page"
        assert verdict.found_at_url == LOGIN_URL
        assert verdict.title == "Sign in"
        assert [s.stage.name for s in verdict.stages] == ["MAIN_PAGE", "LOGIN_PAGE"]

    def test_ui_element_after_email_entry(self, fast_config):
        password_url = f"{LOGIN_URL}/password"
        page = FakePage(contents={
            URL: FakeContent(text="Welcome"),
            LOGIN_URL: FakeContent(text="Email address"),
            password_url: FakeContent(title="Password", elements=[ui_element(aria_label="Use a security key")])
        })
        interactor = StubInteractor(password_url)
        verdict = analyzer_for(
            fast_config, FakeSession(page), navigator=StubNavigator(LOGIN_URL), interactor=interactor
        ).detect(URL)
        assert verdict.has_passkey
        assert verdict.method == "passkey UI elements after email entry"
        assert verdict.found_at_url == password_url
        assert interactor.calls == 1

    def test_positive_main_page_skips_later_stages(self, fast_config):
        page = FakePage(contents={URL: FakeContent(text="passwordless")})
        navigator = StubNavigator(LOGIN_URL)
        interactor = StubInteractor(LOGIN_URL)
        session = FakeSession(page, observed_requests=[f"{URL}/webauthn/options"])
        verdict = analyzer_for(fast_config, session, navigator=navigator, interactor=interactor).detect(URL)
        assert verdict.method == "passkey keywords"
        assert navigator.calls == 0
        assert interactor.calls == 0

    def test_no_email_entry_without_login_page(self, fast_config):
        page = FakePage(contents={URL: FakeContent(text="Welcome")})
        interactor = StubInteractor(LOGIN_URL)
        analyzer_for(
            fast_config, FakeSession(page), navigator=StubNavigator(None), interactor=interactor
        ).detect(URL)
        assert interactor.calls == 0

    def test_network_requests_are_consulted_last(self, fast_config):
        page = FakePage(contents={URL: FakeContent(title="Example", text="Welcome")})
        session = FakeSession(page, observed_requests=[f"{URL}/static/app.js", f"{URL}/api/FIDO/assertion"])
        verdict = analyzer_for(fast_config, session, navigator=StubNavigator(None)).detect(URL)
        assert verdict.has_passkey
        assert verdict.method == "WebAuthn network requests"
        assert verdict.detail == f"{URL}/api/FIDO/assertion"

    def test_acquisition_failure(self, fast_config):
        def fail(browser_config):
            raise AcquisitionFailure("Browser could not be launched")
        verdict = PasskeyAnalyzer(fast_config, session_factory=fail).detect(URL)
        assert not verdict.has_passkey
        assert verdict.error == "Browser could not be launched"
        assert verdict.description == "Site could not be analyzed"

    def test_main_page_navigation_error(self, fast_config):
        page = FakePage(responses={URL: Error("net::ERR_NAME_NOT_RESOLVED")})
        session = FakeSession(page)
        verdict = analyzer_for(fast_config, session).detect(URL)
        assert not verdict.has_passkey
        assert "ERR_NAME_NOT_RESOLVED" in verdict.error
        assert session.close_calls == 1

    def test_unexpected_error_never_escapes(self, fast_config):
        page = FakePage(contents={URL: FakeContent(text="Welcome")})
        session = FakeSession(page)
        verdict = analyzer_for(fast_config, session, detector=BrokenDetector()).detect(URL)
        assert not verdict.has_passkey
        assert verdict.error == "Unexpected error: detector exploded"
        assert session.close_calls == 1
