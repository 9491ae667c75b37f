from passkey_crawler.modules.analyzers.passkey_analyzer import PasskeyAnalyzer
from passkey_crawler.modules.analyzers.verdict import VerdictAggregator

__all__ = ["PasskeyAnalyzer", "VerdictAggregator"]
