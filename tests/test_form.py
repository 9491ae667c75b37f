"""Tests for the email entry form interaction."""

from passkey_crawler.modules.interaction.form import FormInteractor
from tests.fakes import FakePage, FakeElement


class TestFormInteractor:

    def test_fills_email_and_submits(self, fast_config):
        field = FakeElement("email")
        page = FakePage(
            selectors={"input[type='email']": [field]},
            roles={"button": [FakeElement("Continue")]}
        )
        assert FormInteractor(fast_config).interact(page)
        assert field.value == "test@example.com"
        assert page.actions == [("fill", "email"), ("click", "Continue")]

    def test_configured_test_email(self, fast_config):
        fast_config["detection_config"]["test_email"] = "probe@example.org"
        field = FakeElement("email")
        page = FakePage(selectors={"input[type='email']": [field]})
        FormInteractor(fast_config).interact(page)
        assert field.value == "probe@example.org"

    def test_falls_through_invisible_and_broken_fields(self, fast_config):
        page = FakePage(selectors={
            "input[type='email']": [FakeElement("hidden", visible=False)],
            "input[name*='email' i]": [FakeElement("readonly", fails=True)],
            "input[name*='username' i]": [FakeElement("username")]
        })
        assert FormInteractor(fast_config).fill_credential_field(page)
        assert page.actions == [("fill", "username")]

    def test_no_credential_field(self, fast_config):
        page = FakePage(roles={"button": [FakeElement("Next")]})
        assert not FormInteractor(fast_config).interact(page)
        assert page.actions == []

    def test_submit_patterns_in_order(self, fast_config):
        page = FakePage(roles={"button": [FakeElement("Submit"), FakeElement("Next")]})
        assert FormInteractor(fast_config).submit(page)
        assert page.actions == [("click", "Next")]

    def test_generic_submit_fallback(self, fast_config):
        page = FakePage(
            roles={"button": [FakeElement("Cancel")]},
            selectors={FormInteractor.SUBMIT_SELECTOR: [FakeElement("go")]}
        )
        assert FormInteractor(fast_config).submit(page)
        assert page.actions == [("click", "go")]

    def test_filled_without_submit_control(self, fast_config):
        page = FakePage(selectors={"input[id*='email' i]": [FakeElement("email")]})
        assert FormInteractor(fast_config).interact(page)
        assert page.actions == [("fill", "email")]
