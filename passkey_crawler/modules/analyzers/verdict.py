import logging
from typing import List, Optional
from passkey_crawler.modules.models import Signal, SignalMethod, Stage, StageResult, Verdict


logger = logging.getLogger(__name__)


class VerdictAggregator:
    """ Combines the stage results in temporal order: main page, login page, post email entry
        and finally the cumulative network check. The first positive stage wins.
    """


    @staticmethod
    def method_string(stage: Stage, method: SignalMethod) -> str:
        if method == SignalMethod.NETWORK or stage == Stage.MAIN_PAGE:
            return method.label
        elif stage == Stage.LOGIN_PAGE:
            return f"{method.label} on login page"
        else:
            return f"{method.label} after email entry"


    @staticmethod
    def aggregate(url: str, stages: List[StageResult], network: Optional[Signal] = None) -> Verdict:
        for sr in stages:
            if sr.positive:
                method = VerdictAggregator.method_string(sr.stage, sr.signal.method)
                logger.info(f"Passkey support found on {url}: {method}")
                return Verdict(
                    url=url,
                    has_passkey=True,
                    method=method,
                    title=sr.title,
                    description=VerdictAggregator.describe(sr.title, url, method),
                    found_at_url=sr.url or url,
                    detail=sr.signal.detail,
                    stages=tuple(stages)
                )

        last = stages[-1] if stages else None
        title = last.title if last else ""

        if network is not None and network.found:
            method = VerdictAggregator.method_string(last.stage if last else Stage.MAIN_PAGE, network.method)
            logger.info(f"Passkey support found on {url}: {method}")
            return Verdict(
                url=url,
                has_passkey=True,
                method=method,
                title=title,
                description=VerdictAggregator.describe(title, url, method),
                found_at_url=(last.url if last and last.url else url),
                detail=network.detail,
                stages=tuple(stages)
            )

        logger.info(f"No passkey support found on {url}")
        return Verdict(
            url=url,
            has_passkey=False,
            title=title,
            description=f"No passkey support detected on {title or url}",
            stages=tuple(stages)
        )


    @staticmethod
    def describe(title: str, url: str, method: str) -> str:
        return f"{title or url} supports passkey sign-in (detected by {method})"
