from passkey_crawler.modules.detectors.passkey_detector import PasskeyDetector
from passkey_crawler.modules.detectors.request import RequestDetector

__all__ = ["PasskeyDetector", "RequestDetector"]
