import logging
from typing import Iterable
from passkey_crawler.modules.models import Signal, SignalMethod


logger = logging.getLogger(__name__)


class RequestDetector:
    """ Cumulative network signal over every request observed since the session started.
        Only consulted after all page-level checks of all stages were negative.
    """


    URL_PATTERNS = ["webauthn", "fido", "attestation", "assertion", "passkey"]


    @staticmethod
    def detect(observed_requests: Iterable[str]) -> Signal:
        requests = sorted(observed_requests)
        logger.info(f"Checking {len(requests)} observed requests for passkey endpoints")
        for url in requests:
            lowered = url.lower()
            for pattern in RequestDetector.URL_PATTERNS:
                if pattern in lowered:
                    logger.info(f"Matched passkey request ({pattern}): {url}")
                    return Signal(method=SignalMethod.NETWORK, found=True, detail=url)
        return Signal(method=SignalMethod.NETWORK, found=False)
