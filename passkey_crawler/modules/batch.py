import logging
from typing import Iterable, List, Optional
from passkey_crawler.modules.models import BatchReport, Verdict
from passkey_crawler.modules.errors import SinkError
from passkey_crawler.modules.helper.candidates import CandidateResolver
from passkey_crawler.modules.analyzers import PasskeyAnalyzer
from passkey_crawler.modules.sinks import LinkSink, build_link_record


logger = logging.getLogger(__name__)


class BatchOrchestrator:
    """ Evaluates queries one after another. Candidates are never evaluated in parallel so
        that every target site sees at most one browser session at a time.
    """


    def __init__(self, analyzer: PasskeyAnalyzer, resolver: CandidateResolver, sink: Optional[LinkSink] = None):
        self.analyzer = analyzer
        self.resolver = resolver
        self.sink = sink


    def run(self, queries: Iterable[str]) -> BatchReport:
        queries = [q.strip() for q in queries if q.strip()]
        logger.info(f"Starting batch passkey detection for {len(queries)} sites")
        report = BatchReport()
        for i, query in enumerate(queries):
            logger.info(f"[{i+1}/{len(queries)}] Testing: {query}")
            for verdict in self.evaluate(query):
                report.add(verdict, query)
        logger.info(
            f"Batch finished: {report.tested} sites ({report.urls_tested} urls) tested, {report.with_passkey} with passkey, "
            f"{report.without_passkey} without passkey"
        )
        return report


    def evaluate(self, query: str) -> List[Verdict]:
        """ Returns one verdict per candidate url tried, stopping at the first positive one """
        candidate = self.resolver.resolve(query)
        if not candidate.urls:
            return [Verdict.failed(query, "No candidate url could be derived from query")]

        verdicts = []
        for url in candidate.urls:
            verdict = self.analyzer.detect(url)
            verdicts.append(verdict)
            if verdict.has_passkey:
                self.persist(verdict, query)
                break
        return verdicts


    def persist(self, verdict: Verdict, query: str):
        if self.sink is None:
            return
        try:
            self.sink.upsert(verdict, query)
        except SinkError as e:
            logger.warning(f"Could not persist verdict for {verdict.url}: {e}")


def crawl_web(query: str, orchestrator: BatchOrchestrator) -> List[dict]:
    """ Returns link records of all passkey-enabled candidates of query """
    logger.info(f"Crawling web for: {query}")
    return [
        build_link_record(v, query)
        for v in orchestrator.evaluate(query)
        if v.has_passkey
    ]
