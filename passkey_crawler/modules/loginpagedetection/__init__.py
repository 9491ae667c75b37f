from passkey_crawler.modules.loginpagedetection.navigator import LoginPageNavigator
from passkey_crawler.modules.loginpagedetection.elements import ElementNavigation
from passkey_crawler.modules.loginpagedetection.paths import Paths

__all__ = ["LoginPageNavigator", "ElementNavigation", "Paths"]
