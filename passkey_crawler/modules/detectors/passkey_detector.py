"""
PasskeyDetector - page-level passkey signals, checked in fixed priority order:

1. API_USAGE: the WebAuthn API is exposed *and* inline script text invokes
   navigator.credentials.create/get. Scripts loaded from external bundles are
   not inspected, so sites that only call the API from bundled code are a
   known source of false negatives.
2. KEYWORDS: passkey vocabulary in the rendered text or the raw markup.
3. UI_ELEMENTS: buttons, links and role="button" elements whose text,
   aria-label or title mention passkeys.

Each check evaluates its own script in the page. A check that throws (e.g.
because a page script breaks the evaluation) resolves negative.
"""

import re
import logging
from typing import Optional, List, Tuple, Callable, Any
from playwright.sync_api import Page, Error
from passkey_crawler.modules.models import Signal, SignalMethod
from passkey_crawler.modules.errors import EvaluationFailure
from passkey_crawler.modules.browser.browser import PlaywrightHelper


logger = logging.getLogger(__name__)


API_USAGE_JS = """
() => {
    const available = !!(window.PublicKeyCredential && navigator.credentials);
    const scripts = Array.from(document.querySelectorAll("script:not([src])"))
        .map(s => s.textContent || "");
    return {available: available, scripts: scripts};
}
"""

KEYWORDS_JS = """
() => ({
    text: document.body ? (document.body.innerText || "") : "",
    html: document.documentElement ? (document.documentElement.innerHTML || "") : ""
})
"""

UI_ELEMENTS_JS = """
() => Array.from(document.querySelectorAll("button, a, [role='button']")).map(e => ({
    text: (e.innerText || e.textContent || "").trim(),
    aria_label: e.getAttribute("aria-label") || "",
    title: e.getAttribute("title") || ""
}))
"""


class PasskeyDetector:


    API_USAGE_REGEX = re.compile(r"navigator\s*\.\s*credentials\s*\.\s*(create|get)\s*\(")

    KEYWORDS = [
        "passkey",
        "passwordless",
        "webauthn",
        "fido",
        "biometric",
        "face id",
        "touch id",
        "windows hello",
        "security key",
        "authenticator",
        "use your passkey",
        "sign in with passkey",
        "create a passkey"
    ]

    UI_KEYWORDS = [
        "passkey",
        "passwordless",
        "security key",
        "biometric",
        "webauthn"
    ]


    def __init__(self, config: dict = {}):
        self.detection_config = config.get("detection_config", {})
        self.sleep_before_collect = self.detection_config.get("sleep_before_collect", 2)
        self.checks: List[Tuple[SignalMethod, Callable[[Page], Signal]]] = [
            (SignalMethod.API_USAGE, self.detect_api_usage),
            (SignalMethod.KEYWORDS, self.detect_keywords),
            (SignalMethod.UI_ELEMENTS, self.detect_ui_elements)
        ]


    def collect(self, page: Page) -> Optional[Signal]:
        """ Returns the first positive signal in priority order or None """
        PlaywrightHelper.sleep(page, self.sleep_before_collect)
        for method, check in self.checks:
            signal = self.run_check(method, check, page)
            if signal.found:
                logger.info(f"Passkey signal {method.name} found: {signal.detail}")
                return signal
        logger.info("No page-level passkey signal found")
        return None


    @staticmethod
    def run_check(method: SignalMethod, check: Callable[[Page], Signal], page: Page) -> Signal:
        try:
            return check(page)
        except (EvaluationFailure, Error) as e:
            logger.info(f"Check {method.name} failed, treating it as negative")
            logger.debug(e)
            return Signal(method=method, found=False, detail=f"check failed: {e}")


    @staticmethod
    def evaluate(page: Page, script: str) -> Any:
        try:
            return page.evaluate(script)
        except Error as e:
            raise EvaluationFailure(str(e)) from e


    def detect_api_usage(self, page: Page) -> Signal:
        logger.info("Checking for WebAuthn API usage in inline scripts")
        r = self.evaluate(page, API_USAGE_JS)
        if type(r) != dict or not r.get("available"):
            return Signal(method=SignalMethod.API_USAGE, found=False, detail="WebAuthn API not available")
        scripts = r.get("scripts")
        if type(scripts) != list:
            scripts = []
        for script in scripts:
            if type(script) != str:
                continue
            m = self.API_USAGE_REGEX.search(script)
            if m:
                return Signal(
                    method=SignalMethod.API_USAGE, found=True,
                    detail=f"navigator.credentials.{m.group(1)}"
                )
        return Signal(method=SignalMethod.API_USAGE, found=False, detail="WebAuthn API available but not invoked")


    def detect_keywords(self, page: Page) -> Signal:
        logger.info("Checking for passkey keywords in text and markup")
        r = self.evaluate(page, KEYWORDS_JS)
        if type(r) != dict:
            return Signal(method=SignalMethod.KEYWORDS, found=False)
        text = r.get("text") if type(r.get("text")) == str else ""
        html = r.get("html") if type(r.get("html")) == str else ""
        content = f"{text}\n{html}".lower()
        found = [kw for kw in self.KEYWORDS if kw in content]
        if found:
            return Signal(method=SignalMethod.KEYWORDS, found=True, detail=", ".join(found))
        return Signal(method=SignalMethod.KEYWORDS, found=False)


    def detect_ui_elements(self, page: Page) -> Signal:
        logger.info("Checking interactive elements for passkey labels")
        elements = self.evaluate(page, UI_ELEMENTS_JS)
        if type(elements) != list:
            return Signal(method=SignalMethod.UI_ELEMENTS, found=False)
        for e in elements:
            if type(e) != dict:
                continue
            for attr in ["text", "aria_label", "title"]:
                value = e.get(attr)
                if type(value) != str:
                    continue
                lowered = value.lower()
                for kw in self.UI_KEYWORDS:
                    if kw in lowered:
                        return Signal(
                            method=SignalMethod.UI_ELEMENTS, found=True,
                            detail=f"{attr}: {value.strip()[:80]}"
                        )
        return Signal(method=SignalMethod.UI_ELEMENTS, found=False)
