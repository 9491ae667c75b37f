from passkey_crawler.config.defaults import load_config
from passkey_crawler.modules.analyzers import PasskeyAnalyzer
from passkey_crawler.modules.helper.candidates import CandidateResolver
from passkey_crawler.modules.batch import BatchOrchestrator


def config_crawler(app):
    crawler_config = load_config(app.config["CRAWLER_CONFIG"] or None)
    app.config["CRAWLER"] = crawler_config

    def orchestrator_factory(multiple: bool) -> BatchOrchestrator:
        resolver = CandidateResolver.from_config(crawler_config)
        resolver.multiple_variants = multiple or resolver.multiple_variants
        return BatchOrchestrator(PasskeyAnalyzer(crawler_config), resolver, app.extensions["links"])

    app.extensions["orchestrator_factory"] = orchestrator_factory
